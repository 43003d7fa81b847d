"""
CSV Output Utilities

Writes the flat row streams produced by both extraction stages. The
destination is always fully overwritten and rows are written one by one in
input order, so a failure part-way through leaves a truncated prefix.
"""

import csv
from pathlib import Path
from typing import Iterable, Sequence, Any

from src.utils.logging_config import logger


class OutputDestinationError(Exception):
    """Raised when the output CSV cannot be created or written."""
    pass


def _to_record(row: Any) -> Sequence[str]:
    if hasattr(row, "as_record"):
        return row.as_record()
    return row


def write_csv(path: Path, header: Sequence[str], rows: Iterable[Any]) -> int:
    """
    Write a header and rows to a CSV file, overwriting it.

    Args:
        path: Destination CSV path (parent directories are created)
        header: Column names, written as the first record
        rows: Sequences of strings, or row objects exposing as_record()

    Returns:
        Number of data rows written (header excluded)

    Raises:
        OutputDestinationError: If the destination cannot be opened or written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        f = open(path, "w", newline="", encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot open output destination {path}: {e}")
        raise OutputDestinationError(f"Cannot open output destination {path}: {e}") from e

    row_count = 0
    with f:
        writer = csv.writer(f)
        try:
            writer.writerow(header)
            for row in rows:
                writer.writerow(_to_record(row))
                row_count += 1
            f.flush()
        except OSError as e:
            logger.error(f"Failed writing {path} after {row_count} rows: {e}")
            raise OutputDestinationError(f"Failed writing {path}: {e}") from e

    logger.debug(f"Wrote {row_count:,} rows to {path}")
    return row_count


__all__ = [
    "OutputDestinationError",
    "write_csv",
]
