"""Metadata document and result record models."""

from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class MetadataDefaults(BaseModel):
    """Immutable generator configuration.

    Holds the default metadata values applied to every record and the rules
    used to label checksum files that belong to no component.
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field("FILE", description="Default publisher file type")
    hidden: bool = Field(False, description="Default hidden flag")
    invisible: bool = Field(False, description="Default invisible flag")
    checksum_prefix: str = Field(
        "sha256", min_length=1, description="Prefix identifying checksum files"
    )
    checksum_labels: tuple[tuple[str, str], ...] = Field(
        (
            (".gpg", "Checksum - GPG"),
            (".sig", "Checksum - Signature"),
            (".txt", "Checksum"),
        ),
        description="Ordered (suffix, label) pairs for checksum files",
    )
    checksum_fallback_label: str = Field(
        "Checksum",
        min_length=1,
        description="Label for checksum files with an unrecognized suffix",
    )

    def as_dict(self) -> dict[str, Any]:
        """Default metadata values, in publisher key order."""
        return {"type": self.type, "hidden": self.hidden, "invisible": self.invisible}

    def is_checksum_file(self, file_name: str) -> bool:
        return file_name.startswith(self.checksum_prefix)

    def checksum_label(self, file_name: str) -> Optional[str]:
        """Return the label for a checksum file, or None if the suffix is unknown."""
        for suffix, label in self.checksum_labels:
            if file_name.endswith(suffix):
                return label
        return None


class MetadataRecord(BaseModel):
    """Single entry of the metadata document consumed by push-cgw-metadata."""

    type: Literal["file"] = "file"
    action: Literal["create"] = "create"
    metadata: dict[str, Any] = Field(..., description="Publisher file attributes")


class CommandResult(BaseModel):
    """Captured outcome of the external publisher command."""

    return_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.return_code == 0

    @property
    def output(self) -> str:
        """Diagnostic text of the run.

        push-cgw-metadata logs to stderr, so stderr is preferred and stdout is
        only used when stderr is empty.
        """
        return self.stderr or self.stdout


class PublishResult(BaseModel):
    """Result record written to results.json."""

    no_of_files_processed: int = Field(..., ge=0, description="Number of metadata records")
    metadata_file_path: str = Field(..., description="Path to the metadata document")
    command_output: str = Field("", description="Publisher diagnostic output")
