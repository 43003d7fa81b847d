"""
Input Provenance Utilities

SHA-256 checksums of the reference datasets, logged by each stage so a
generated CSV can be traced back to the exact input it was built from.
"""

import hashlib
from pathlib import Path

from src.utils.logging_config import logger

CHUNK_SIZE = 8192


def compute_sha256(file_path: Path) -> str:
    """
    Compute SHA-256 checksum of a file.

    Reads file in 8KB chunks so large PDFs are never loaded into memory.

    Args:
        file_path: Path to the file to hash

    Returns:
        Hexadecimal SHA-256 checksum string

    Raises:
        IOError: If file cannot be read
    """
    logger.debug(f"Computing SHA-256 checksum for: {file_path.name}")
    sha256_hash = hashlib.sha256()

    try:
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                sha256_hash.update(chunk)
    except IOError as e:
        logger.error(f"Failed to read file for checksum: {e}")
        raise

    checksum = sha256_hash.hexdigest()
    logger.info(f"  SHA-256: {checksum[:16]}...")
    return checksum
