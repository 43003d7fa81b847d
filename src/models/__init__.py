"""
Data Models for the Medical Code Extraction Pipeline

- catalogue.py: Typed catalogue tree (input of the ICD-10 stage)
- rows.py: Output rows of both stages
"""

from src.models.catalogue import (
    CatalogueFormatError,
    Criterion,
    CategoryGroup,
    SingleSelectCategory,
    AutocompleteCategory,
    NumericRangeCategory,
    DateRangeCategory,
    StringCategory,
    Category,
    load_catalogue,
    parse_catalogue,
)
from src.models.rows import DiagnosisRow, MorphologyRow

__all__ = [
    "CatalogueFormatError",
    "Criterion",
    "CategoryGroup",
    "SingleSelectCategory",
    "AutocompleteCategory",
    "NumericRangeCategory",
    "DateRangeCategory",
    "StringCategory",
    "Category",
    "load_catalogue",
    "parse_catalogue",
    "DiagnosisRow",
    "MorphologyRow",
]
