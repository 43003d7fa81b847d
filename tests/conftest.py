"""
Pytest configuration and shared fixtures for the Medical Code Extraction tests.

Provides sample catalogue documents, sample PDF line streams and a loguru
capture fixture for asserting on warnings.
"""

import json
from pathlib import Path
from typing import Generator, List

import pytest
from loguru import logger

from src.parsers.base import TextLine, split_text_lines

# Test data paths
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_catalogue_data() -> list:
    """
    Catalogue with a nested diagnosis category plus distractor nodes.

    Diagnosis criteria tree (pre-order):
        C00-C97 > C50 > C50.0, C50.1 ; then D00-D09 (no description)

    Also contains a non-matching autocomplete key, a single-select
    category and range/string leaves which must all be skipped.
    """
    return [
        {
            "fieldType": "group",
            "key": "patient",
            "name": "Patient",
            "childCategories": [
                {
                    "fieldType": "single-select",
                    "key": "gender",
                    "name": "Gender",
                    "system": "",
                    "type": "EQUALS",
                    "criteria": [
                        {"key": "male", "name": "male"},
                        {"key": "female", "name": "female"},
                    ],
                },
                {
                    "fieldType": "number",
                    "key": "age_at_diagnosis",
                    "name": "Age at diagnosis",
                    "system": "",
                    "type": "BETWEEN",
                    "min": 0,
                    "max": None,
                    "unitText": "years",
                },
                {
                    "fieldType": "date",
                    "key": "diagnosis_date",
                    "name": "Date of diagnosis",
                    "system": "",
                    "type": "BETWEEN",
                    "min": "1900-01-01",
                    "max": None,
                },
            ],
        },
        {
            "fieldType": "group",
            "key": "diagnosis_group",
            "name": "Diagnosis",
            "infoLink": {"link": "https://www.bfarm.de", "display": "ICD-10-GM"},
            "childCategories": [
                {
                    "fieldType": "autocomplete",
                    "key": "diagnosis",
                    "name": "Diagnosis ICD-10",
                    "system": "http://fhir.de/CodeSystem/bfarm/icd-10-gm",
                    "type": "EQUALS",
                    "criteria": [
                        {
                            "key": "C00-C97",
                            "name": "C00-C97",
                            "description": "Malignant neoplasms",
                            "subgroup": [
                                {
                                    "key": "C50",
                                    "name": "C50",
                                    "description": "Malignant neoplasm of breast",
                                    "subgroup": [
                                        {
                                            "key": "C50.0",
                                            "name": "C50.0",
                                            "description": "Nipple and areola",
                                        },
                                        {
                                            "key": "C50.1",
                                            "name": "C50.1",
                                            "description": "Central portion of breast",
                                            "subgroup": [],
                                        },
                                    ],
                                },
                            ],
                        },
                        {"key": "D00-D09", "name": "D00-D09"},
                    ],
                },
                {
                    "fieldType": "autocomplete",
                    "key": "morphology",
                    "name": "Morphology ICD-O-3",
                    "system": "",
                    "type": "EQUALS",
                    "criteria": [{"key": "8500/3", "name": "8500/3"}],
                },
                {
                    "fieldType": "string",
                    "key": "pseudonym",
                    "name": "Pseudonym",
                    "system": "",
                    "type": "EQUALS",
                },
            ],
        },
    ]


@pytest.fixture
def catalogue_json_path(tmp_path: Path, sample_catalogue_data: list) -> Path:
    """Sample catalogue written to a temporary JSON file."""
    json_path = tmp_path / "catalogue.json"
    json_path.write_text(json.dumps(sample_catalogue_data), encoding="utf-8")
    return json_path


SAMPLE_SITETYPE_TEXT = """\
ICD-O-3 SEER Site/Histology Validation List
BREAST C500-C509
Nipple 500 8500/0 Adenocarcinoma
8500/3 Infiltrating duct carcinoma

8520/3 Lobular carcinoma
Page 1 of 200
Central portion of breast 501 8500/3 Infiltrating duct carcinoma
EYE & ADNEXA C690-C699
Conjunctiva 690 8720/3 Malignant melanoma
"""


@pytest.fixture
def sample_sitetype_text() -> str:
    """Raw text shaped like the ICD-O-3 site/type PDF after extraction."""
    return SAMPLE_SITETYPE_TEXT


@pytest.fixture
def sample_sitetype_lines() -> List[TextLine]:
    """Numbered line stream of SAMPLE_SITETYPE_TEXT."""
    return split_text_lines(SAMPLE_SITETYPE_TEXT)


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """
    Capture loguru WARNING+ messages emitted during the test.

    Yields:
        List that receives each formatted message

    Example:
        >>> def test_warns(log_messages):
        ...     logger.warning("careful")
        ...     assert "careful" in log_messages[0]
    """
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m).rstrip("\n")), level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)
