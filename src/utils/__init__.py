"""
Utilities Module for the Medical Code Extraction Pipeline

Structure:
- logging_config.py: Shared logging utilities
- checksums.py: Input provenance (SHA-256)
- csv_writer.py: CSV output for both stages
- extraction/: Catalogue flattening, PDF line patterns and section tracking
"""

# Re-export logging utilities at top level for backward compatibility
from src.utils.logging_config import setup_logger, get_logger, logger

__all__ = [
    "setup_logger",
    "get_logger",
    "logger",
]
