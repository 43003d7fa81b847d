"""
Catalogue Flattening Utilities

Walks the catalogue tree and flattens the criteria of one autocomplete
category (the ICD-10 diagnoses) into DiagnosisRow records.

Traversal is depth-first pre-order in document order: a criterion's row is
emitted before the rows of its sub-criteria, and siblings keep their listed
order. Every criterion produces a row, not only the leaves. The walk itself
uses explicit stacks, but json decoding and parse_criterion are recursive,
so load_catalogue rejects a document nested deeper than the interpreter's
recursion limit with CatalogueFormatError before it reaches this module.
"""

from typing import Iterable, Iterator, List

from src.models.catalogue import (
    AutocompleteCategory,
    Category,
    CategoryGroup,
    Criterion,
)
from src.models.rows import DiagnosisRow


def iter_autocomplete_categories(
    catalogue: Iterable[Category],
    category_key: str,
) -> Iterator[AutocompleteCategory]:
    """
    Yield autocomplete categories with the given key, in document order.

    Groups are descended at any depth. All other node kinds, and
    autocomplete categories with a different key, are skipped.

    Args:
        catalogue: Top-level category nodes
        category_key: Key of the autocomplete categories to yield

    Example:
        >>> [c.key for c in iter_autocomplete_categories(catalogue, "diagnosis")]
        ['diagnosis']
    """
    stack: List[Category] = list(reversed(list(catalogue)))

    while stack:
        node = stack.pop()
        if isinstance(node, CategoryGroup):
            stack.extend(reversed(node.child_categories))
        elif isinstance(node, AutocompleteCategory) and node.key == category_key:
            yield node


def iter_criteria(criteria: Iterable[Criterion]) -> Iterator[Criterion]:
    """Yield criteria and all nested sub-criteria in pre-order."""
    stack: List[Criterion] = list(reversed(list(criteria)))

    while stack:
        criterion = stack.pop()
        yield criterion
        stack.extend(reversed(criterion.subgroup))


def count_criteria(criteria: Iterable[Criterion]) -> int:
    """Total number of criteria in a criteria forest, nested ones included."""
    return sum(1 for _ in iter_criteria(criteria))


def flatten_category(category: AutocompleteCategory) -> Iterator[DiagnosisRow]:
    """
    Flatten one autocomplete category's criteria tree.

    Every row carries the category's own key and name, whatever the
    nesting depth of the criterion.
    """
    for criterion in iter_criteria(category.criteria):
        yield DiagnosisRow(
            category_key=category.key,
            category_name=category.name,
            criterion_key=criterion.key,
            criterion_name=criterion.name,
            description=criterion.description or "",
        )


def flatten_catalogue(
    catalogue: Iterable[Category],
    category_key: str,
) -> Iterator[DiagnosisRow]:
    """
    Flatten every matching autocomplete category of the catalogue.

    Args:
        catalogue: Top-level category nodes
        category_key: Key of the autocomplete categories to flatten
            (e.g. "diagnosis")

    Returns:
        Iterator of DiagnosisRow in document pre-order

    Example:
        >>> rows = list(flatten_catalogue(catalogue, "diagnosis"))
        >>> rows[0].as_record()
        ('diagnosis', 'Diagnosis ICD-10', 'C00-C97', 'Malignant neoplasms', '')
    """
    for category in iter_autocomplete_categories(catalogue, category_key):
        yield from flatten_category(category)


__all__ = [
    "iter_autocomplete_categories",
    "iter_criteria",
    "count_criteria",
    "flatten_category",
    "flatten_catalogue",
]
