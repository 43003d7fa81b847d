"""
Configuration Module for the Medical Code Extraction Pipeline

Loads configuration from environment variables (.env file) and validates
the settings on import. Includes input/output file paths, the catalogue
category key to flatten, line classification policy and stage policy.
"""

import os
import sys
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Note: Logger will be configured by setup_logger() in logging_config
# Import is deferred to avoid circular dependency during config loading


# Load environment variables from .env file
# Look for .env in the project root (parent of src/)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
else:
    # Try loading from current directory as fallback
    load_dotenv()


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def get_env_variable(var_name: str, required: bool = True, default: Optional[str] = None) -> str:
    """
    Get environment variable with validation.

    Args:
        var_name: Name of environment variable
        required: Whether this variable is required
        default: Default value if not required and not found

    Returns:
        Value of environment variable

    Raises:
        ConfigurationError: If required variable is missing
    """
    value = os.getenv(var_name)

    if value is None or value.strip() == "":
        if required:
            raise ConfigurationError(
                f"Required environment variable '{var_name}' is not set. "
                f"Please add it to your .env file."
            )
        return default

    return value.strip()


def get_env_bool(var_name: str, default: bool = False) -> bool:
    """
    Get boolean environment variable.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).

    Raises:
        ConfigurationError: If the value is not a recognised boolean
    """
    value = get_env_variable(var_name, required=False)
    if value is None:
        return default

    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False

    raise ConfigurationError(
        f"Environment variable '{var_name}' must be a boolean, got '{value}'"
    )


def resolve_path(value: str) -> Path:
    """Resolve a configured path; relative paths are anchored at PROJECT_ROOT."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


# ==================================
# File Paths
# ==================================

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# ICD-10 catalogue (JSON tree) and its flattened CSV
CATALOGUE_JSON_PATH = resolve_path(
    get_env_variable(
        "CATALOGUE_JSON_PATH",
        required=False,
        default="resources/catalogue-with-icd10-codes.json",
    )
)
ICD10_CSV_PATH = resolve_path(
    get_env_variable("ICD10_CSV_PATH", required=False, default="resources/icd10_full.csv")
)

# ICD-O-3 site/type PDF and its recovered CSV
ICDO3_PDF_PATH = resolve_path(
    get_env_variable(
        "ICDO3_PDF_PATH",
        required=False,
        default="resources/sitetype.icdo3.20220429.pdf",
    )
)
ICDO3_CSV_PATH = resolve_path(
    get_env_variable("ICDO3_CSV_PATH", required=False, default="resources/icdo3_full.csv")
)

# Intermediate processing directory (recovered PDF text dumps)
INTERMEDIATE_DIR = PROJECT_ROOT / "data" / "intermediate"

# Logging directory
LOGS_DIR = PROJECT_ROOT / "logs"


# ==================================
# Extraction Settings
# ==================================

# Only autocomplete categories with this key are flattened
DIAGNOSIS_CATEGORY_KEY = get_env_variable(
    "DIAGNOSIS_CATEGORY_KEY", required=False, default="diagnosis"
)

# CSV headers (column order is part of the output contract)
ICD10_CSV_HEADER = (
    "Category Key",
    "Category Name",
    "Group Key",
    "Group Name",
    "Description",
)
ICDO3_CSV_HEADER = (
    "Site Group",
    "Topography Codes",
    "Label",
    "Topography",
    "Morphology",
    "Description",
)

# Simple entry lines seen before any labeled entry are skipped unless enabled
EMIT_ORPHAN_ENTRIES = get_env_bool("EMIT_ORPHAN_ENTRIES", default=False)

# Keep running remaining stages after a fatal stage failure
CONTINUE_ON_ERROR = get_env_bool("CONTINUE_ON_ERROR", default=False)

# Write the recovered PDF text to INTERMEDIATE_DIR for inspection
SAVE_EXTRACTED_TEXT = get_env_bool("SAVE_EXTRACTED_TEXT", default=False)


# ==================================
# Logging Configuration
# ==================================

# Log level (used by logging_config.py)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Note: Log format, rotation, and retention are configured in src/utils/logging_config.py
# to avoid redundancy and maintain a single source of truth for logging setup.


# ==================================
# Validation on Import
# ==================================

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def validate_configuration():
    """
    Validate configuration on module import.

    Checks:
    - Category key is non-empty
    - Log level is a known loguru level
    - Output paths do not point at the inputs

    Input files are not required to exist here: a missing input is a
    stage failure, not a configuration failure.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    errors = []

    if not DIAGNOSIS_CATEGORY_KEY:
        errors.append("DIAGNOSIS_CATEGORY_KEY is empty")

    if LOG_LEVEL not in VALID_LOG_LEVELS:
        errors.append(
            f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got {LOG_LEVEL}"
        )

    if ICD10_CSV_PATH == CATALOGUE_JSON_PATH:
        errors.append(f"ICD10_CSV_PATH would overwrite the catalogue: {ICD10_CSV_PATH}")
    if ICDO3_CSV_PATH == ICDO3_PDF_PATH:
        errors.append(f"ICDO3_CSV_PATH would overwrite the source PDF: {ICDO3_CSV_PATH}")
    if ICD10_CSV_PATH == ICDO3_CSV_PATH:
        errors.append(f"Both stages write to the same CSV: {ICD10_CSV_PATH}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
        raise ConfigurationError(error_msg)


# Run validation on import
try:
    validate_configuration()
except ConfigurationError as e:
    # Note: Using print() here because this runs during module import,
    # before logging is configured. Logging setup depends on config being loaded first.
    print(f"\n❌ {e}", file=sys.stderr)
    sys.exit(1)


# ==================================
# Helper Functions
# ==================================

def print_configuration():
    """Print current configuration (for debugging)."""
    print("\n" + "=" * 80)
    print("Medical Code Extraction Pipeline Configuration")
    print("=" * 80)
    print(f"\nICD-10 Catalogue:")
    print(f"  Source JSON: {CATALOGUE_JSON_PATH} ({'exists' if CATALOGUE_JSON_PATH.exists() else 'missing'})")
    print(f"  Output CSV: {ICD10_CSV_PATH}")
    print(f"  Category key: {DIAGNOSIS_CATEGORY_KEY}")
    print(f"\nICD-O-3 Site/Type:")
    print(f"  Source PDF: {ICDO3_PDF_PATH} ({'exists' if ICDO3_PDF_PATH.exists() else 'missing'})")
    print(f"  Output CSV: {ICDO3_CSV_PATH}")
    print(f"  Emit orphan entries: {EMIT_ORPHAN_ENTRIES}")
    print(f"  Save extracted text: {SAVE_EXTRACTED_TEXT}")
    print(f"\nPipeline:")
    print(f"  Continue on error: {CONTINUE_ON_ERROR}")
    print(f"\nDirectories:")
    print(f"  Intermediate: {INTERMEDIATE_DIR}")
    print(f"  Logs: {LOGS_DIR}")
    print("=" * 80 + "\n")


# Export all configuration variables
__all__ = [
    # File paths
    "PROJECT_ROOT",
    "CATALOGUE_JSON_PATH",
    "ICD10_CSV_PATH",
    "ICDO3_PDF_PATH",
    "ICDO3_CSV_PATH",
    "INTERMEDIATE_DIR",
    "LOGS_DIR",
    # Extraction settings
    "DIAGNOSIS_CATEGORY_KEY",
    "ICD10_CSV_HEADER",
    "ICDO3_CSV_HEADER",
    "EMIT_ORPHAN_ENTRIES",
    "CONTINUE_ON_ERROR",
    "SAVE_EXTRACTED_TEXT",
    # Logging
    "LOG_LEVEL",
    # Helper functions
    "ConfigurationError",
    "get_env_variable",
    "get_env_bool",
    "resolve_path",
    "print_configuration",
]
