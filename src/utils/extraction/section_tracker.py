"""
Section Tracking for the ICD-O-3 Site/Type Listing

Rebuilds table rows from the linear line stream of the site/type PDF.
A site header opens a section, a labeled entry names a topography within
it, and simple entries list further morphologies for that same topography.
Since the repeated columns are blank in the PDF, the tracker carries them
forward from the last line that supplied them.

Each line is tried against an ordered list of (kind, matcher, handler)
triples. The first matching triple wins and no other is tried. Lines
matching nothing are logged with their line number and skipped, leaving
the section state untouched.

A simple entry that appears before any labeled entry in the run has no
label or topography to inherit. Such orphan lines are skipped as unmatched
unless emit_orphans is set, in which case they produce a row with whatever
(possibly empty) fields are carried at that point.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from src.models.rows import MorphologyRow
from src.parsers.base import TextLine
from src.utils.extraction.line_patterns import LINE_MATCHERS, LineKind
from src.utils.logging_config import logger


@dataclass
class SectionState:
    """Fields carried across lines until a matching line overwrites them."""

    site_group: str = ""
    topography_codes: str = ""
    label: str = ""
    topography: str = ""
    has_entry: bool = False


@dataclass
class ClassificationStats:
    """Per-run counts of line kinds and emitted rows."""

    total_lines: int = 0
    site_headers: int = 0
    labeled_entries: int = 0
    simple_entries: int = 0
    skipped_lines: int = 0
    rows_emitted: int = 0

    def log(self) -> None:
        logger.info("Line classification statistics:")
        logger.info(f"  Lines read:       {self.total_lines:,}")
        logger.info(f"  Site headers:     {self.site_headers:,}")
        logger.info(f"  Labeled entries:  {self.labeled_entries:,}")
        logger.info(f"  Simple entries:   {self.simple_entries:,}")
        logger.info(f"  Skipped lines:    {self.skipped_lines:,}")
        logger.info(f"  Rows emitted:     {self.rows_emitted:,}")


class SectionTracker:
    """
    Line classifier with carry-over section state.

    One tracker covers one extraction run; state is never reset.

    Example:
        >>> tracker = SectionTracker()
        >>> tracker.process(TextLine(1, "BREAST C500-C509"))
        >>> tracker.process(TextLine(2, "Nipple 500 8500/0 Adenocarcinoma"))
        MorphologyRow(site_group='BREAST', topography_codes='C500-C509', label='Nipple', ...)
    """

    def __init__(self, emit_orphans: bool = False):
        self.emit_orphans = emit_orphans
        self.state = SectionState()
        self.stats = ClassificationStats()

        handlers: Dict[LineKind, Callable] = {
            LineKind.SITE_HEADER: self._on_site_header,
            LineKind.LABELED_ENTRY: self._on_labeled_entry,
            LineKind.SIMPLE_ENTRY: self._on_simple_entry,
        }
        self._rules: List[Tuple[LineKind, Callable[[str], Optional[tuple]], Callable]] = [
            (kind, matcher, handlers[kind]) for kind, matcher in LINE_MATCHERS
        ]

    def process(self, line: TextLine) -> Optional[MorphologyRow]:
        """
        Classify one line, update the section state and return its row.

        Args:
            line: Numbered, trimmed text line

        Returns:
            MorphologyRow for entry lines, None for headers and skipped lines
        """
        self.stats.total_lines += 1

        for kind, matcher, handler in self._rules:
            fields = matcher(line.text)
            if fields is None:
                continue

            logger.trace(f"Line {line.number}: {kind.value}")
            row = handler(line, fields)
            if row is not None:
                self.stats.rows_emitted += 1
            return row

        self._skip(line)
        return None

    def iter_rows(self, lines: Iterable[TextLine]) -> Iterator[MorphologyRow]:
        """Process lines in order and yield the rows they produce."""
        for line in lines:
            row = self.process(line)
            if row is not None:
                yield row

    def _on_site_header(self, line: TextLine, fields: Tuple[str, str]) -> None:
        self.state.site_group, self.state.topography_codes = fields
        self.stats.site_headers += 1
        logger.debug(f"Line {line.number}: site group {self.state.site_group} ({self.state.topography_codes})")
        return None

    def _on_labeled_entry(self, line: TextLine, fields: Tuple[str, str, str, str]) -> MorphologyRow:
        label, topography, morphology, description = fields
        self.state.label = label
        self.state.topography = topography
        self.state.has_entry = True
        self.stats.labeled_entries += 1
        return self._emit(morphology, description)

    def _on_simple_entry(self, line: TextLine, fields: Tuple[str, str]) -> Optional[MorphologyRow]:
        if not self.state.has_entry and not self.emit_orphans:
            logger.warning(f"Skipped line {line.number}: '{line.text}' (no preceding labeled entry)")
            self.stats.skipped_lines += 1
            return None

        morphology, description = fields
        self.stats.simple_entries += 1
        return self._emit(morphology, description)

    def _emit(self, morphology: str, description: str) -> MorphologyRow:
        return MorphologyRow(
            site_group=self.state.site_group,
            topography_codes=self.state.topography_codes,
            label=self.state.label,
            topography=self.state.topography,
            morphology=morphology,
            description=description,
        )

    def _skip(self, line: TextLine) -> None:
        logger.warning(f"Skipped line {line.number}: '{line.text}'")
        self.stats.skipped_lines += 1


def classify_lines(
    lines: Iterable[TextLine],
    emit_orphans: bool = False,
) -> Iterator[MorphologyRow]:
    """
    Convert a line stream into MorphologyRow records with a fresh tracker.

    Args:
        lines: Numbered, trimmed, non-empty lines in document order
        emit_orphans: Emit simple entries seen before any labeled entry

    Returns:
        Iterator of rows in input line order

    Example:
        >>> lines = [TextLine(1, "BREAST C500-C509"),
        ...          TextLine(2, "Nipple 500 8500/0 Adenocarcinoma"),
        ...          TextLine(3, "8500/3 Infiltrating duct carcinoma")]
        >>> [r.morphology for r in classify_lines(lines)]
        ['8500/0', '8500/3']
    """
    return SectionTracker(emit_orphans=emit_orphans).iter_rows(lines)


__all__ = [
    "SectionState",
    "ClassificationStats",
    "SectionTracker",
    "classify_lines",
]
