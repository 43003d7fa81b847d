"""
Parser Base Classes and Data Structures

Defines the abstract text-extraction interface and result dataclasses.

All parser implementations must inherit from BaseParser and return a
TextExtractionResult containing:
- lines: numbered, trimmed, non-empty text lines in reading order
- num_pages: Total page count
- parser_version: Parser version for reproducibility
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List

from src.utils.logging_config import logger


class TextExtractionError(Exception):
    """Raised when the text of a PDF cannot be recovered."""
    pass


@dataclass(frozen=True)
class TextLine:
    """One line of recovered text with its 1-based position in the stream."""

    number: int
    text: str


def split_text_lines(text: str) -> List[TextLine]:
    """
    Turn raw extracted text into the numbered line stream.

    Only newlines break lines; other separators such as form feeds stay in
    the line text. Lines are trimmed, empty lines are dropped, and the
    remaining lines are numbered from 1, so numbers refer to positions in
    the filtered stream.

    Example:
        >>> split_text_lines("BREAST C500\\n\\n  Nipple 500 8500/0 Adenocarcinoma  ")
        [TextLine(number=1, text='BREAST C500'), TextLine(number=2, text='Nipple 500 8500/0 Adenocarcinoma')]
    """
    stripped = (raw.strip() for raw in text.split("\n"))
    return [
        TextLine(number=i, text=line)
        for i, line in enumerate((line for line in stripped if line), start=1)
    ]


@dataclass
class TextExtractionResult:
    """
    Structured result from PDF text extraction.

    Example:
        >>> result = parser.extract_lines(pdf_path)
        >>> print(f"Recovered {len(result.lines)} lines from {result.num_pages} pages")
    """

    lines: List[TextLine]
    num_pages: int
    parser_version: str

    def __post_init__(self):
        """Validate fields after initialization."""
        if not isinstance(self.lines, list):
            raise TypeError("lines must be a list")
        if not isinstance(self.num_pages, int) or self.num_pages < 0:
            raise ValueError("num_pages must be a non-negative integer")
        if not isinstance(self.parser_version, str) or not self.parser_version.strip():
            raise ValueError("parser_version must be a non-empty string")


class BaseParser(ABC):
    """
    Abstract base class for PDF text parsers.

    The parser is responsible for:
    1. Loading and reading the PDF file
    2. Recovering its text in reading order
    3. Reducing it to the numbered line stream
    4. Reporting version information for reproducibility

    Example:
        >>> class MyParser(BaseParser):
        ...     def extract_lines(self, pdf_path: Path) -> TextExtractionResult:
        ...         return TextExtractionResult(...)
    """

    def __init__(self):
        """Initialize the parser."""
        self.logger = logger.bind(parser=self.__class__.__name__)
        self.logger.debug(f"Initialized {self.__class__.__name__}")

    @abstractmethod
    def extract_lines(self, pdf_path: Path) -> TextExtractionResult:
        """
        Extract the numbered line stream of a PDF file.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            TextExtractionResult with lines, num_pages and parser_version

        Raises:
            FileNotFoundError: If PDF file doesn't exist
            TextExtractionError: If text extraction fails
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement extract_lines() method"
        )


__all__ = [
    "TextExtractionError",
    "TextLine",
    "TextExtractionResult",
    "split_text_lines",
    "BaseParser",
]
