"""Global pytest fixtures and configuration."""

import json
import logging
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def sample_data():
    """Sample merged release data with a contentGateway section."""
    return {
        "releaseNotes": {"product_name": "ignored"},
        "contentGateway": {
            "productName": "Konflux test product",
            "productCode": "KTP",
            "productVersionName": "1.2",
            "components": [
                {
                    "name": "cosign",
                    "description": "Red Hat cosign",
                    "shortURL": "/cosign/latest",
                    "hidden": True,
                },
                {
                    "name": "gitsign",
                    "type": "BINARY",
                },
            ],
        },
    }


@pytest.fixture
def data_file(tmp_path, sample_data):
    """Write sample_data to a data file inside a workspace directory."""
    workspace = tmp_path / "release"
    workspace.mkdir()
    path = workspace / "data.json"
    path.write_text(json.dumps(sample_data), encoding="utf-8")
    return path


@pytest.fixture
def make_content_dir(tmp_path):
    """Factory creating a content directory from {file_name: bytes}."""

    def _make(files, name="content"):
        content_dir = tmp_path / name
        content_dir.mkdir(exist_ok=True)
        for file_name, content in files.items():
            (content_dir / file_name).write_bytes(content)
        return content_dir

    return _make


@pytest.fixture(autouse=True)
def reset_cgw_logger():
    """Drop handlers attached by setup_logger() during a test."""
    yield
    logger = logging.getLogger("cgw_publisher")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
