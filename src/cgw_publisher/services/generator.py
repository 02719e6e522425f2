"""Match content files to components and generate publisher metadata."""

from pathlib import Path
from typing import Any, Callable, Mapping, Optional
import logging

from cgw_publisher.models.manifest import ComponentSpec, ReleaseManifest
from cgw_publisher.models.metadata import MetadataDefaults, MetadataRecord
from cgw_publisher.utils.checksum import (
    build_download_url,
    build_short_url,
    compute_sha256,
)


def fill_defaults(
    defaults: Mapping[str, Any], attributes: Mapping[str, Any]
) -> dict[str, Any]:
    """Merge attributes over defaults.

    A default is used only when attributes has no key of the same name.
    Keys keep default order first, then the remaining attribute keys in
    their own order. Neither input is modified.
    """
    merged = dict(defaults)
    merged.update(attributes)
    return merged


def list_content(content_dir: Path) -> list[str]:
    """List regular file names in content_dir, sorted by name.

    Raises:
        FileNotFoundError: If content_dir doesn't exist
    """
    logger = logging.getLogger("cgw_publisher.generator")
    names = []
    for entry in sorted(content_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            logger.info(f"Skipping {entry.name}: not a regular file")
            continue
        names.append(entry.name)
    return names


class MetadataGenerator:
    """Builds metadata records for files in a content directory."""

    def __init__(
        self,
        manifest: ReleaseManifest,
        defaults: Optional[MetadataDefaults] = None,
        hasher: Optional[Callable[[Path], str]] = None,
    ):
        """Initialize generator.

        Args:
            manifest: Release manifest with product identity and components
            defaults: Default metadata values (MetadataDefaults() if None)
            hasher: Function returning the SHA-256 hex digest of a file
                (compute_sha256 if None)
        """
        self.logger = logging.getLogger("cgw_publisher.generator")
        self.manifest = manifest
        self.defaults = defaults or MetadataDefaults()
        self.hasher = hasher or compute_sha256

    def generate(
        self, content_dir: Path, file_names: Optional[list[str]] = None
    ) -> list[MetadataRecord]:
        """Generate metadata records for content files.

        Every component whose name prefixes a file yields its own record.
        Files matching no component are published as checksum files when
        they carry the checksum prefix, and skipped otherwise.

        Args:
            content_dir: Directory holding the content files
            file_names: Files to process in order (list_content(content_dir) if None)

        Returns:
            Records ordered by file, then by component declaration order

        Raises:
            FileNotFoundError: If a listed file doesn't exist
            IOError: If a file can't be read for hashing
        """
        if file_names is None:
            file_names = list_content(content_dir)

        records: list[MetadataRecord] = []
        for file_name in file_names:
            matching = [c for c in self.manifest.components if c.matches(file_name)]

            if matching:
                self.logger.info(
                    f"Processing file: {file_name} "
                    f"(components: {', '.join(c.name for c in matching)})"
                )
                computed = self._computed_fields(content_dir, file_name)
                for component in matching:
                    records.append(self._component_record(component, computed))
            elif self.defaults.is_checksum_file(file_name):
                self.logger.info(f"Processing checksum file: {file_name}")
                computed = self._computed_fields(content_dir, file_name)
                records.append(self._checksum_record(file_name, computed))
            else:
                self.logger.info(
                    f"Skipping file: {file_name} as it does not start with "
                    f"any component name"
                )

        return records

    def _computed_fields(self, content_dir: Path, file_name: str) -> dict[str, Any]:
        """Product fields plus URLs derived from file content."""
        try:
            checksum = self.hasher(content_dir / file_name)
        except OSError as e:
            self.logger.error(f"Cannot hash {file_name}, aborting run: {e}")
            raise
        fields = self.manifest.product_fields()
        fields["downloadURL"] = build_download_url(checksum, file_name)
        fields["shortURL"] = build_short_url(self.manifest.productCode, file_name)
        fields["label"] = file_name
        return fields

    def _component_record(
        self, component: ComponentSpec, computed: dict[str, Any]
    ) -> MetadataRecord:
        attributes = component.attributes()
        attributes.update(computed)
        return MetadataRecord(
            metadata=fill_defaults(self.defaults.as_dict(), attributes)
        )

    def _checksum_record(
        self, file_name: str, computed: dict[str, Any]
    ) -> MetadataRecord:
        label = self.defaults.checksum_label(file_name)
        if label is None:
            label = self.defaults.checksum_fallback_label
            self.logger.warning(
                f"Unrecognized checksum file suffix: {file_name}, "
                f"using label '{label}'"
            )
        attributes = dict(computed, label=label)
        return MetadataRecord(
            metadata=fill_defaults(self.defaults.as_dict(), attributes)
        )
