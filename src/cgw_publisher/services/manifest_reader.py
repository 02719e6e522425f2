"""Read the contentGateway release manifest from the task data file."""

import json
from pathlib import Path
import logging

from pydantic import ValidationError

from cgw_publisher.errors import ManifestError
from cgw_publisher.models.manifest import ManifestDocument, ReleaseManifest


def load_manifest(data_path: Path) -> ReleaseManifest:
    """Load and validate the contentGateway section of a JSON data file.

    Args:
        data_path: Path to the merged release data JSON

    Returns:
        Parsed ReleaseManifest

    Raises:
        ManifestError: If the file is missing, not valid JSON, or lacks
            contentGateway.productName/productCode/productVersionName/components
    """
    logger = logging.getLogger("cgw_publisher.manifest")

    try:
        with open(data_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Data file not found: {data_path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid data file JSON {data_path}: {e}") from e

    if not isinstance(data, dict) or "contentGateway" not in data:
        raise ManifestError(f"Data file {data_path} has no contentGateway key")

    try:
        manifest = ManifestDocument(**data).contentGateway
    except ValidationError as e:
        raise ManifestError(f"Invalid contentGateway data in {data_path}: {e}") from e

    logger.info(
        f"Manifest loaded: product={manifest.productCode}, "
        f"version={manifest.productVersionName}, "
        f"components={len(manifest.components)}"
    )
    return manifest
