"""
ICD-O-3 SITE/TYPE EXTRACTION

Recovers topography/morphology combinations from the ICD-O-3 site/type PDF
and writes them to CSV.

Process:
1. Extract the numbered line stream of the PDF (pdfplumber)
2. Classify each line (site header / labeled entry / simple entry),
   carrying section fields forward
3. Write one CSV row per entry line, in line order
4. Log classification statistics

Lines matching no known shape are logged as warnings and skipped.

Input: ICDO3_PDF_PATH
Output: ICDO3_CSV_PATH (overwritten)
"""

import time
from pathlib import Path
from typing import Optional

from src.utils.logging_config import logger, log_step_start, log_step_complete
from src.config import (
    EMIT_ORPHAN_ENTRIES,
    ICDO3_CSV_HEADER,
    ICDO3_CSV_PATH,
    ICDO3_PDF_PATH,
)
from src.parsers.base import BaseParser
from src.parsers.pdfplumber_parser import PdfplumberParser
from src.utils.checksums import compute_sha256
from src.utils.csv_writer import write_csv
from src.utils.extraction.section_tracker import ClassificationStats, SectionTracker

STAGE_NAME = "ICD-O-3 Site/Type Extraction"


class ExtractionError(Exception):
    """Raised when the ICD-O-3 extraction stage fails."""
    pass


def run(
    pdf_path: Optional[Path] = None,
    csv_path: Optional[Path] = None,
    parser: Optional[BaseParser] = None,
    emit_orphans: Optional[bool] = None,
) -> ClassificationStats:
    """
    Execute the ICD-O-3 extraction stage.

    Args:
        pdf_path: Source PDF (default: ICDO3_PDF_PATH)
        csv_path: Output CSV (default: ICDO3_CSV_PATH)
        parser: Text parser (default: PdfplumberParser)
        emit_orphans: Emit simple entries seen before any labeled entry
            (default: EMIT_ORPHAN_ENTRIES)

    Returns:
        ClassificationStats for the run

    Raises:
        ExtractionError: If the text cannot be extracted or the CSV cannot be written
    """
    pdf_path = pdf_path or ICDO3_PDF_PATH
    csv_path = csv_path or ICDO3_CSV_PATH
    emit_orphans = EMIT_ORPHAN_ENTRIES if emit_orphans is None else emit_orphans

    start_time = time.time()
    log_step_start(STAGE_NAME)

    # 1. Extract line stream
    if not pdf_path.exists():
        logger.error(f"❌ PDF not found: {pdf_path}")
        raise ExtractionError(f"PDF not found at {pdf_path}")

    try:
        compute_sha256(pdf_path)
        parser = parser or PdfplumberParser()
        extraction = parser.extract_lines(pdf_path)
        logger.success(f"✓ Recovered {len(extraction.lines):,} lines from {extraction.num_pages} pages")
    except Exception as e:
        logger.error(f"❌ Text extraction failed: {e}")
        raise ExtractionError(f"Text extraction failed: {e}") from e

    # 2-3. Classify lines and write rows as they are produced
    tracker = SectionTracker(emit_orphans=emit_orphans)
    try:
        row_count = write_csv(csv_path, ICDO3_CSV_HEADER, tracker.iter_rows(extraction.lines))
    except Exception as e:
        logger.error(f"❌ Failed to write {csv_path}: {e}")
        raise ExtractionError(f"Failed to write {csv_path}: {e}") from e

    # 4. Statistics
    tracker.stats.log()
    if tracker.stats.skipped_lines:
        logger.warning(f"⚠ {tracker.stats.skipped_lines:,} lines did not match any known shape")

    logger.success(f"✓ CSV written to {csv_path} ({row_count:,} rows)")
    log_step_complete(STAGE_NAME, time.time() - start_time)
    return tracker.stats


if __name__ == "__main__":
    # Initialize logging when run directly
    from src.utils.logging_config import setup_logger
    setup_logger()

    try:
        run()
        logger.info("✓ ICD-O-3 extraction completed successfully")
    except Exception as e:
        logger.error(f"❌ ICD-O-3 extraction failed: {e}")
        exit(1)
