"""
Parser Module for the Medical Code Extraction Pipeline

Provides parser implementations for recovering the text line stream of PDFs.
Currently includes pdfplumber.
"""

from src.parsers.base import (
    BaseParser,
    TextExtractionError,
    TextExtractionResult,
    TextLine,
    split_text_lines,
)
from src.parsers.pdfplumber_parser import PdfplumberParser

__all__ = [
    "BaseParser",
    "TextExtractionError",
    "TextExtractionResult",
    "TextLine",
    "split_text_lines",
    "PdfplumberParser",
]
