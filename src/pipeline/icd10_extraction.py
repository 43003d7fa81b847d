"""
ICD-10 CATALOGUE EXTRACTION

Flattens the diagnosis criteria of the search catalogue into CSV.

Process:
1. Load and deserialize the catalogue JSON (typed category variants)
2. Find autocomplete categories with the configured key (default "diagnosis")
3. Write one CSV row per criterion and nested sub-criterion, in pre-order

Input: CATALOGUE_JSON_PATH
Output: ICD10_CSV_PATH (overwritten)
"""

import time
from pathlib import Path
from typing import Optional

from src.utils.logging_config import logger, log_step_start, log_step_complete
from src.config import (
    CATALOGUE_JSON_PATH,
    DIAGNOSIS_CATEGORY_KEY,
    ICD10_CSV_HEADER,
    ICD10_CSV_PATH,
)
from src.models.catalogue import load_catalogue
from src.utils.checksums import compute_sha256
from src.utils.csv_writer import write_csv
from src.utils.extraction.catalogue_flattener import (
    count_criteria,
    flatten_catalogue,
    iter_autocomplete_categories,
)

STAGE_NAME = "ICD-10 Catalogue Extraction"


class ExtractionError(Exception):
    """Raised when the ICD-10 extraction stage fails."""
    pass


def run(
    json_path: Optional[Path] = None,
    csv_path: Optional[Path] = None,
    category_key: Optional[str] = None,
) -> int:
    """
    Execute the ICD-10 extraction stage.

    Args:
        json_path: Catalogue JSON (default: CATALOGUE_JSON_PATH)
        csv_path: Output CSV (default: ICD10_CSV_PATH)
        category_key: Autocomplete category to flatten (default: DIAGNOSIS_CATEGORY_KEY)

    Returns:
        Number of rows written

    Raises:
        ExtractionError: If the catalogue cannot be loaded or the CSV cannot be written
    """
    json_path = json_path or CATALOGUE_JSON_PATH
    csv_path = csv_path or ICD10_CSV_PATH
    category_key = category_key or DIAGNOSIS_CATEGORY_KEY

    start_time = time.time()
    log_step_start(STAGE_NAME)

    # 1. Load catalogue
    try:
        compute_sha256(json_path)
        catalogue = load_catalogue(json_path)
    except Exception as e:
        logger.error(f"❌ Failed to load catalogue: {e}")
        raise ExtractionError(f"Failed to load catalogue: {e}") from e

    # 2. Locate categories
    categories = list(iter_autocomplete_categories(catalogue, category_key))
    if not categories:
        logger.warning(f"⚠ No autocomplete category with key '{category_key}' found")
    for category in categories:
        logger.info(f"  {category.key} ({category.name}): {count_criteria(category.criteria):,} criteria")

    # 3. Write rows
    try:
        row_count = write_csv(csv_path, ICD10_CSV_HEADER, flatten_catalogue(catalogue, category_key))
    except Exception as e:
        logger.error(f"❌ Failed to write {csv_path}: {e}")
        raise ExtractionError(f"Failed to write {csv_path}: {e}") from e

    logger.success(f"✓ CSV written to {csv_path} ({row_count:,} rows)")
    log_step_complete(STAGE_NAME, time.time() - start_time)
    return row_count


if __name__ == "__main__":
    # Initialize logging when run directly
    from src.utils.logging_config import setup_logger
    setup_logger()

    try:
        run()
        logger.info("✓ ICD-10 extraction completed successfully")
    except Exception as e:
        logger.error(f"❌ ICD-10 extraction failed: {e}")
        exit(1)
