"""Release manifest data models (contentGateway section of the data file)."""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class ComponentSpec(BaseModel):
    """Component entry under contentGateway.components.

    Only ``name`` is required. It is used as the file name prefix to match
    against and never appears in the published metadata. Every other key is
    passed through to the publisher untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(..., min_length=1, description="File name prefix (e.g., 'cosign-')")

    def matches(self, file_name: str) -> bool:
        """Check whether a content file belongs to this component."""
        return file_name.startswith(self.name)

    def attributes(self) -> dict[str, Any]:
        """Return component attributes without ``name``.

        Values are returned exactly as they appear in the data file, in the
        same key order. Keys such as type, hidden and invisible override the
        metadata defaults only when the component sets them.
        """
        data = self.model_dump()
        data.pop("name", None)
        return data


class ReleaseManifest(BaseModel):
    """Product identity and components to publish."""

    model_config = ConfigDict(frozen=True)

    productName: str = Field(..., min_length=1, description="Product display name")
    productCode: str = Field(..., min_length=1, description="Product code used in short URLs")
    productVersionName: str = Field(..., min_length=1, description="Product version")
    components: list[ComponentSpec] = Field(
        ..., description="Components in declaration order"
    )

    def product_fields(self) -> dict[str, str]:
        """Product identity fields copied into every metadata record."""
        return {
            "productName": self.productName,
            "productCode": self.productCode,
            "productVersionName": self.productVersionName,
        }


class ManifestDocument(BaseModel):
    """Root of the data file. Keys other than contentGateway are ignored."""

    contentGateway: ReleaseManifest
