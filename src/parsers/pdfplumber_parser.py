"""
pdfplumber Parser Implementation

Uses pdfplumber to recover the plain text of the ICD-O-3 site/type PDF
page by page. Layout is reduced to text lines in reading order; the
structure is rebuilt downstream by the section tracker.

Optionally saves the recovered text to data/intermediate/ for inspection
when SAVE_EXTRACTED_TEXT is enabled.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pdfplumber

from src.config import INTERMEDIATE_DIR, SAVE_EXTRACTED_TEXT
from .base import BaseParser, TextExtractionError, TextExtractionResult, split_text_lines


class PdfplumberParser(BaseParser):
    """
    pdfplumber-based text parser.

    Example:
        >>> parser = PdfplumberParser()
        >>> result = parser.extract_lines(Path("resources/sitetype.icdo3.20220429.pdf"))
        >>> result.lines[0]
        TextLine(number=1, text='...')
    """

    def __init__(self, save_text: Optional[bool] = None, output_dir: Optional[Path] = None) -> None:
        super().__init__()
        self._save_text = SAVE_EXTRACTED_TEXT if save_text is None else save_text
        self._output_dir = output_dir or INTERMEDIATE_DIR

    def extract_lines(self, pdf_path: Path) -> TextExtractionResult:
        """
        Extract the numbered line stream of a PDF using pdfplumber.

        Process:
        1. Validate PDF file exists
        2. Extract text of every page in order
        3. Split into trimmed, non-empty, numbered lines
        4. Optionally save the text to data/intermediate/

        Raises:
            FileNotFoundError: If PDF file doesn't exist
            TextExtractionError: If pdfplumber fails
        """
        if not pdf_path.exists():
            self.logger.error(f"PDF not found: {pdf_path}")
            raise FileNotFoundError(f"PDF not found at {pdf_path}")

        self.logger.info(f"Extracting text: {pdf_path.name}")
        file_size_mb = pdf_path.stat().st_size / (1024 * 1024)
        self.logger.info(f"  File size: {file_size_mb:.2f} MB")

        try:
            with pdfplumber.open(pdf_path) as pdf:
                num_pages = len(pdf.pages)
                page_texts = []
                for page_num, page in enumerate(pdf.pages, 1):
                    if page_num % 50 == 0:
                        self.logger.debug(f"Processed {page_num}/{num_pages} pages...")
                    # Image-only pages yield None
                    page_texts.append(page.extract_text() or "")
        except Exception as e:
            self.logger.error(f"pdfplumber text extraction failed: {e}")
            raise TextExtractionError(f"Text extraction failed for {pdf_path}: {e}") from e

        text = "\n".join(page_texts)
        lines = split_text_lines(text)
        self.logger.success(f"✓ Text extracted: {num_pages} pages, {len(lines):,} lines")

        if self._save_text:
            self._save_output(pdf_path.stem, text)

        return TextExtractionResult(
            lines=lines,
            num_pages=num_pages,
            parser_version=pdfplumber.__version__,
        )

    def _save_output(self, base_name: str, text: str) -> None:
        """Save recovered text to the intermediate directory."""
        text_path = self._output_dir / f"{base_name}_pdfplumber.txt"
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            text_path.write_text(text, encoding="utf-8")
            self.logger.info(f"Saved extracted text: {text_path}")
        except OSError as e:
            self.logger.warning(f"Could not save extracted text: {e}")
