"""
Unit Tests for src.utils.logging_config
"""

from loguru import logger

from src.utils.logging_config import _below_warning, get_logger


def record_for(level_name):
    return {"level": logger.level(level_name)}


class TestConsoleSplit:
    """Progress goes to stdout, warnings and errors to stderr"""

    def test_progress_levels_go_to_stdout(self):
        for level in ("DEBUG", "INFO", "SUCCESS"):
            assert _below_warning(record_for(level)) is True

    def test_warning_levels_do_not(self):
        for level in ("WARNING", "ERROR", "CRITICAL"):
            assert _below_warning(record_for(level)) is False


def test_get_logger_binds_name():
    records = []
    handler_id = logger.add(lambda m: records.append(m.record), level="INFO", format="{message}")
    try:
        get_logger("icd10_extraction").info("hello")
    finally:
        logger.remove(handler_id)

    assert records[0]["extra"]["name"] == "icd10_extraction"
