"""End-to-end publish run: manifest -> metadata -> publisher -> results."""

import json
from pathlib import Path
from typing import Optional
import logging

from cgw_publisher.config import Settings
from cgw_publisher.errors import PublisherError
from cgw_publisher.models.metadata import MetadataDefaults, PublishResult
from cgw_publisher.services.generator import MetadataGenerator
from cgw_publisher.services.manifest_reader import load_manifest
from cgw_publisher.services.publisher import PublisherInvoker, write_metadata_document

METADATA_FILE_NAME = "cgw_metadata.yaml"
RESULT_FILE_NAME = "results.json"


class PublishPipeline:
    """Single-pass publish of a content directory to content gateway.

    Output files are written next to the data file:
    - cgw_metadata.yaml: metadata document for the publisher
    - results.json: result record (written only after the publisher step)
    """

    def __init__(
        self,
        settings: Settings,
        defaults: Optional[MetadataDefaults] = None,
        dry_run: bool = False,
    ):
        """Initialize pipeline.

        Args:
            settings: Hostname, credentials and publisher options
            defaults: Metadata defaults (MetadataDefaults() if None)
            dry_run: Generate files without invoking the publisher
        """
        self.logger = logging.getLogger("cgw_publisher.pipeline")
        self.settings = settings
        self.defaults = defaults or MetadataDefaults()
        self.dry_run = dry_run

    def run(
        self,
        data_path: Path,
        content_dir: Path,
        result_path_file: Optional[Path] = None,
    ) -> PublishResult:
        """Publish content_dir using the manifest in data_path.

        Args:
            data_path: JSON data file with the contentGateway section
            content_dir: Directory with the files to publish
            result_path_file: Where to write the path of results.json

        Returns:
            PublishResult that was written to results.json

        Raises:
            ConfigError: If credentials are missing (not in dry run)
            ManifestError: If the data file is invalid
            IOError: If a content file can't be hashed
            PublisherInvocationError: If the publisher can't be launched
            PublisherError: If the publisher fails and fail_on_publish_error is set
        """
        invoker = None
        if not self.dry_run:
            username, token = self.settings.require_credentials()
            invoker = PublisherInvoker(
                hostname=self.settings.hostname,
                username=username,
                token=token,
                command=self.settings.publisher_command,
            )

        workspace_dir = data_path.parent
        metadata_path = workspace_dir / METADATA_FILE_NAME
        result_path = workspace_dir / RESULT_FILE_NAME

        manifest = load_manifest(data_path)
        workspace_dir.mkdir(parents=True, exist_ok=True)

        generator = MetadataGenerator(manifest, self.defaults)
        records = generator.generate(content_dir)
        self.logger.info(f"{len(records)} files will be published to CGW")

        write_metadata_document(records, metadata_path)

        command_result = None
        if invoker is None:
            self.logger.info("Dry run: skipping publisher invocation")
        else:
            command_result = invoker.publish(metadata_path)

        result = PublishResult(
            no_of_files_processed=len(records),
            metadata_file_path=str(metadata_path),
            command_output=command_result.output if command_result else "",
        )
        self._write_result(result, result_path, result_path_file)

        if (
            command_result is not None
            and not command_result.succeeded
            and self.settings.fail_on_publish_error
        ):
            raise PublisherError(command_result.return_code, command_result.output)

        return result

    def _write_result(
        self,
        result: PublishResult,
        result_path: Path,
        result_path_file: Optional[Path],
    ) -> None:
        with open(result_path, "w", encoding="utf-8") as f:
            json.dump(result.model_dump(mode="json"), f, indent=2)
        self.logger.info(f"Result data written to {result_path}")

        if result_path_file is not None:
            result_path_file.parent.mkdir(parents=True, exist_ok=True)
            result_path_file.write_text(str(result_path), encoding="utf-8")
