"""SHA-256 checksum and content gateway URL helpers."""

import hashlib
from pathlib import Path
import logging

DOWNLOAD_URL_PREFIX = "/content/origin/files/sha256"
SHORT_URL_PREFIX = "/cgw"


def compute_sha256(file_path: Path, chunk_size: int = 64 * 1024) -> str:
    """Return the lowercase hex SHA-256 digest of a file.

    The file is read in chunk_size blocks, so artifacts of any size hash in
    constant memory. OSError from opening or reading propagates unchanged.
    """
    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as f:
        for block in iter(lambda: f.read(chunk_size), b""):
            sha256_hash.update(block)

    checksum = sha256_hash.hexdigest()
    logging.getLogger("cgw_publisher.checksum").debug(
        f"sha256({file_path.name}) = {checksum}"
    )
    return checksum


def build_download_url(checksum: str, file_name: str) -> str:
    """Build the content-addressed download URL.

    Format: /content/origin/files/sha256/{checksum[:2]}/{checksum}/{file_name}

    Raises:
        ValueError: If checksum is not a 64-char hex string
    """
    if not isinstance(checksum, str) or len(checksum) != 64:
        raise ValueError(f"Invalid SHA-256 format: {checksum} (must be 64-char hex)")
    checksum = checksum.lower()
    return f"{DOWNLOAD_URL_PREFIX}/{checksum[:2]}/{checksum}/{file_name}"


def build_short_url(product_code: str, file_name: str) -> str:
    """Build the short URL: /cgw/{product_code}/{file_name}."""
    return f"{SHORT_URL_PREFIX}/{product_code}/{file_name}"


def generate_download_url(file_path: Path) -> str:
    """Hash a file and return its download URL."""
    return build_download_url(compute_sha256(file_path), file_path.name)
