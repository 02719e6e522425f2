"""Serialize metadata and hand it to the push-cgw-metadata command."""

import subprocess
from pathlib import Path
import logging

import yaml

from cgw_publisher.config import DEFAULT_PUBLISHER_COMMAND
from cgw_publisher.errors import PublisherInvocationError
from cgw_publisher.models.metadata import CommandResult, MetadataRecord


def write_metadata_document(records: list[MetadataRecord], path: Path) -> None:
    """Dump records to a YAML list, preserving key order.

    Args:
        records: Metadata records in publish order
        path: Target YAML file (parent created if needed)
    """
    logger = logging.getLogger("cgw_publisher.publisher")
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            [record.model_dump(mode="json") for record in records],
            f,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info(f"YAML content dumped to {path}")


class PublisherInvoker:
    """Runs the external publisher against a metadata document."""

    def __init__(
        self,
        hostname: str,
        username: str,
        token: str,
        command: str = DEFAULT_PUBLISHER_COMMAND,
    ):
        """Initialize invoker.

        Args:
            hostname: Content gateway admin endpoint
            username: Content gateway username
            token: Content gateway token (passed only on the command line)
            command: Publisher executable name or path
        """
        self.logger = logging.getLogger("cgw_publisher.publisher")
        self.hostname = hostname
        self.username = username
        self._token = token
        self.command = command

    def build_command(self, metadata_path: Path, redact: bool = False) -> list[str]:
        """Build the publisher argument vector.

        Args:
            metadata_path: Metadata YAML to publish
            redact: Replace the token with *** (for logging)
        """
        return [
            self.command,
            "--CGW_hostname", self.hostname,
            "--CGW_username", self.username,
            "--CGW_password", "***" if redact else self._token,
            "--CGW_filepath", str(metadata_path),
        ]

    def publish(self, metadata_path: Path) -> CommandResult:
        """Run the publisher and capture its output.

        A non-zero exit status is logged and returned, not raised.

        Args:
            metadata_path: Metadata YAML to publish

        Returns:
            CommandResult with exit status and captured output

        Raises:
            PublisherInvocationError: If the command can't be launched
        """
        self.logger.info(
            f"Running: {' '.join(self.build_command(metadata_path, redact=True))}"
        )

        try:
            completed = subprocess.run(
                self.build_command(metadata_path),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            self.logger.error(f"Failed to launch {self.command}: {e}")
            raise PublisherInvocationError(
                f"PUBLISHER_LAUNCH_FAILED: {self.command}: {e}"
            ) from e

        result = CommandResult(
            return_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if result.succeeded:
            self.logger.info(f"Command succeeded with {result.output}")
        else:
            self.logger.error(
                f"Command failed with return code {result.return_code}: {result.output}"
            )

        return result
