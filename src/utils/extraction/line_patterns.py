"""
ICD-O-3 Site/Type Line Patterns

Regex patterns recognising the three line shapes of the ICD-O-3 site/type
listing once it has been reduced to plain text. The column layout of the
PDF is lost in extraction, so each line is identified by its field shape
alone:

- Site header:    "BREAST C500-C509"
- Labeled entry:  "Nipple 500 8500/0 Adenocarcinoma"
- Simple entry:   "8500/3 Infiltrating duct carcinoma"

Code formats:
- Topography code: "C" followed by exactly 3 digits (C500)
- Topography sub-code: exactly 3 digits (500)
- Morphology code: 4 digits, a slash, 1 digit (8500/3)

Key Functions:
- match_site_header: Site label and topography code list
- match_labeled_entry: Label, topography, morphology, description
- match_simple_entry: Morphology and description
- classify_line: Which shape a line has, in priority order
"""

import re
from enum import Enum
from typing import Callable, Optional, Tuple


# Upper-case site words (with & . , ' -) then comma/hyphen-joined topography codes
SITE_HEADER_PATTERN = re.compile(r"^([A-Z &.,'-]+)\s+(C\d{3}(?:[-,]C\d{3})*)$")

# Free-form label, 3-digit topography, morphology code, description
LABELED_ENTRY_PATTERN = re.compile(r"^([\w\s.,&'/-]+)\s+(\d{3})\s+(\d{4}/\d)\s+(.+)$")

# Morphology code and description, continuing the previous labeled entry
SIMPLE_ENTRY_PATTERN = re.compile(r"^(\d{4}/\d)\s+(.+)$")


class LineKind(str, Enum):
    """Structural shape of one line of the site/type listing."""

    SITE_HEADER = "site_header"
    LABELED_ENTRY = "labeled_entry"
    SIMPLE_ENTRY = "simple_entry"
    UNMATCHED = "unmatched"


def match_site_header(line: str) -> Optional[Tuple[str, str]]:
    """
    Match a site group header line.

    Args:
        line: Trimmed text line

    Returns:
        Tuple of (site_label, topography_codes) if the line is a header,
        None otherwise

    Example:
        >>> match_site_header("BREAST C500-C509")
        ('BREAST', 'C500-C509')
        >>> match_site_header("Nipple 500 8500/0 Adenocarcinoma")
        None
    """
    if not line:
        return None

    match = SITE_HEADER_PATTERN.match(line)
    if match:
        return (match.group(1).strip(), match.group(2).strip())

    return None


def match_labeled_entry(line: str) -> Optional[Tuple[str, str, str, str]]:
    """
    Match an entry line that carries its own label and topography code.

    Args:
        line: Trimmed text line

    Returns:
        Tuple of (label, topography, morphology, description) if matched,
        None otherwise

    Example:
        >>> match_labeled_entry("Nipple 500 8500/0 Adenocarcinoma")
        ('Nipple', '500', '8500/0', 'Adenocarcinoma')
    """
    if not line:
        return None

    match = LABELED_ENTRY_PATTERN.match(line)
    if match:
        return tuple(group.strip() for group in match.groups())

    return None


def match_simple_entry(line: str) -> Optional[Tuple[str, str]]:
    """
    Match an entry line that only has a morphology code and description.

    Example:
        >>> match_simple_entry("8500/3 Infiltrating duct carcinoma")
        ('8500/3', 'Infiltrating duct carcinoma')
    """
    if not line:
        return None

    match = SIMPLE_ENTRY_PATTERN.match(line)
    if match:
        return (match.group(1).strip(), match.group(2).strip())

    return None


# Priority order is significant: the first matching shape wins
LINE_MATCHERS: Tuple[Tuple[LineKind, Callable[[str], Optional[tuple]]], ...] = (
    (LineKind.SITE_HEADER, match_site_header),
    (LineKind.LABELED_ENTRY, match_labeled_entry),
    (LineKind.SIMPLE_ENTRY, match_simple_entry),
)


def classify_line(line: str) -> LineKind:
    """
    Classify a line by trying the patterns in priority order.

    Priority: site header, then labeled entry, then simple entry. The
    first match wins.

    Example:
        >>> classify_line("BREAST C500")
        <LineKind.SITE_HEADER: 'site_header'>
        >>> classify_line("Page 3 of 40")
        <LineKind.UNMATCHED: 'unmatched'>
    """
    for kind, matcher in LINE_MATCHERS:
        if matcher(line) is not None:
            return kind
    return LineKind.UNMATCHED


__all__ = [
    "SITE_HEADER_PATTERN",
    "LABELED_ENTRY_PATTERN",
    "SIMPLE_ENTRY_PATTERN",
    "LineKind",
    "LINE_MATCHERS",
    "match_site_header",
    "match_labeled_entry",
    "match_simple_entry",
    "classify_line",
]
