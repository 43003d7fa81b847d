"""
Extraction Utilities

- catalogue_flattener.py: ICD-10 catalogue tree to rows
- line_patterns.py: ICD-O-3 line shapes
- section_tracker.py: ICD-O-3 line stream to rows
"""

from src.utils.extraction.catalogue_flattener import (
    iter_autocomplete_categories,
    iter_criteria,
    count_criteria,
    flatten_category,
    flatten_catalogue,
)

from src.utils.extraction.line_patterns import (
    LineKind,
    LINE_MATCHERS,
    match_site_header,
    match_labeled_entry,
    match_simple_entry,
    classify_line,
)

from src.utils.extraction.section_tracker import (
    SectionState,
    ClassificationStats,
    SectionTracker,
    classify_lines,
)

__all__ = [
    # catalogue_flattener
    'iter_autocomplete_categories',
    'iter_criteria',
    'count_criteria',
    'flatten_category',
    'flatten_catalogue',
    # line_patterns
    'LineKind',
    'LINE_MATCHERS',
    'match_site_header',
    'match_labeled_entry',
    'match_simple_entry',
    'classify_line',
    # section_tracker
    'SectionState',
    'ClassificationStats',
    'SectionTracker',
    'classify_lines',
]
