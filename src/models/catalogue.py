"""
Catalogue Data Model

Typed representation of the search catalogue: a forest of category nodes
describing what a user can search for. Each node in the JSON document carries
a "fieldType" discriminator which selects one of six variants:

- group: collapsible grouping with child categories
- single-select, autocomplete: pick criteria from a predefined list
- number, date: numeric or date range
- string: free text

Deserialization dispatches on the discriminator and rejects unknown variants.
Only the fields of the external catalogue format that are needed here are
modelled; everything else in a node is ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from src.utils.logging_config import logger


class CatalogueFormatError(Exception):
    """Raised when the catalogue document does not have the expected tree shape."""
    pass


@dataclass
class InfoLink:
    """Hyperlink shown next to a category's display name."""

    link: str
    display: str


@dataclass
class AggregatedValue:
    value: str
    name: str


@dataclass
class Criterion:
    """
    A selectable value of a single-select or autocomplete category.

    Criteria nest through `subgroup` to arbitrary depth. A key is unique
    among its siblings only.
    """

    key: str
    name: str
    description: Optional[str] = None
    visible: Optional[bool] = None
    aggregated_value: Optional[List[List[AggregatedValue]]] = None
    subgroup: List[Criterion] = field(default_factory=list)


@dataclass
class CategoryGroup:
    key: str
    name: str
    child_categories: List[Category] = field(default_factory=list)
    info_button_text: Optional[List[str]] = None
    info_link: Optional[InfoLink] = None


@dataclass
class SingleSelectCategory:
    key: str
    name: str
    system: str = ""
    type: str = "EQUALS"
    criteria: List[Criterion] = field(default_factory=list)
    info_button_text: Optional[List[str]] = None
    # Overrides the display name in the catalogue tree only
    sub_category_name: Optional[str] = None


@dataclass
class AutocompleteCategory:
    key: str
    name: str
    system: str = ""
    type: str = "EQUALS"
    criteria: List[Criterion] = field(default_factory=list)
    info_button_text: Optional[List[str]] = None


@dataclass
class NumericRangeCategory:
    key: str
    name: str
    system: str = ""
    type: str = "BETWEEN"
    min: Optional[float] = None
    max: Optional[float] = None
    unit_text: Optional[str] = None
    info_button_text: Optional[List[str]] = None


@dataclass
class DateRangeCategory:
    key: str
    name: str
    system: str = ""
    type: str = "BETWEEN"
    # ISO date strings
    min: Optional[str] = None
    max: Optional[str] = None
    info_button_text: Optional[List[str]] = None


@dataclass
class StringCategory:
    key: str
    name: str
    system: str = ""
    type: str = "EQUALS"
    info_button_text: Optional[List[str]] = None


Category = Union[
    CategoryGroup,
    SingleSelectCategory,
    AutocompleteCategory,
    NumericRangeCategory,
    DateRangeCategory,
    StringCategory,
]


# ==================================
# Deserialization
# ==================================

def _require(node: Dict[str, Any], name: str, context: str) -> Any:
    if not isinstance(node, dict):
        raise CatalogueFormatError(f"{context} must be an object, got {type(node).__name__}")
    if name not in node or node[name] is None:
        raise CatalogueFormatError(f"{context} is missing required field '{name}'")
    return node[name]


def _require_str(node: Dict[str, Any], name: str, context: str) -> str:
    value = _require(node, name, context)
    if not isinstance(value, str):
        raise CatalogueFormatError(
            f"{context} field '{name}' must be a string, got {type(value).__name__}"
        )
    return value


def _require_list(value: Any, context: str) -> list:
    if not isinstance(value, list):
        raise CatalogueFormatError(f"{context} must be a list, got {type(value).__name__}")
    return value


def _parse_aggregated_value(value: Any, context: str) -> Optional[List[List[AggregatedValue]]]:
    if value is None:
        return None
    rows = []
    for row in _require_list(value, f"{context} aggregatedValue"):
        rows.append([
            AggregatedValue(
                value=_require_str(item, "value", f"{context} aggregatedValue"),
                name=_require_str(item, "name", f"{context} aggregatedValue"),
            )
            for item in _require_list(row, f"{context} aggregatedValue row")
        ])
    return rows


def parse_criterion(node: Dict[str, Any]) -> Criterion:
    """
    Build a Criterion (and its nested sub-criteria) from a JSON object.

    A missing `subgroup` becomes an empty list and a missing `description`
    stays None.

    Raises:
        CatalogueFormatError: If key/name are missing or the shape is wrong
    """
    if not isinstance(node, dict):
        raise CatalogueFormatError(f"Criterion must be an object, got {type(node).__name__}")

    context = f"Criterion '{node.get('key', '?')}'"
    subgroup = node.get("subgroup") or []

    return Criterion(
        key=_require_str(node, "key", context),
        name=_require_str(node, "name", context),
        description=node.get("description"),
        visible=node.get("visible"),
        aggregated_value=_parse_aggregated_value(node.get("aggregatedValue"), context),
        subgroup=[parse_criterion(child) for child in _require_list(subgroup, f"{context} subgroup")],
    )


def _parse_criteria(node: Dict[str, Any], context: str) -> List[Criterion]:
    criteria = _require_list(_require(node, "criteria", context), f"{context} criteria")
    return [parse_criterion(c) for c in criteria]


def _parse_info_link(value: Any) -> Optional[InfoLink]:
    if value is None:
        return None
    return InfoLink(
        link=_require_str(value, "link", "infoLink"),
        display=_require_str(value, "display", "infoLink"),
    )


def _parse_group(node: Dict[str, Any], context: str) -> CategoryGroup:
    children = _require_list(
        _require(node, "childCategories", context), f"{context} childCategories"
    )
    return CategoryGroup(
        key=_require_str(node, "key", context),
        name=_require_str(node, "name", context),
        child_categories=[parse_category(child) for child in children],
        info_button_text=node.get("infoButtonText"),
        info_link=_parse_info_link(node.get("infoLink")),
    )


def _parse_single_select(node: Dict[str, Any], context: str) -> SingleSelectCategory:
    return SingleSelectCategory(
        key=_require_str(node, "key", context),
        name=_require_str(node, "name", context),
        system=node.get("system", ""),
        type=node.get("type", "EQUALS"),
        criteria=_parse_criteria(node, context),
        info_button_text=node.get("infoButtonText"),
        sub_category_name=node.get("subCategoryName"),
    )


def _parse_autocomplete(node: Dict[str, Any], context: str) -> AutocompleteCategory:
    return AutocompleteCategory(
        key=_require_str(node, "key", context),
        name=_require_str(node, "name", context),
        system=node.get("system", ""),
        type=node.get("type", "EQUALS"),
        criteria=_parse_criteria(node, context),
        info_button_text=node.get("infoButtonText"),
    )


def _parse_numeric_range(node: Dict[str, Any], context: str) -> NumericRangeCategory:
    return NumericRangeCategory(
        key=_require_str(node, "key", context),
        name=_require_str(node, "name", context),
        system=node.get("system", ""),
        type=node.get("type", "BETWEEN"),
        min=node.get("min"),
        max=node.get("max"),
        unit_text=node.get("unitText"),
        info_button_text=node.get("infoButtonText"),
    )


def _parse_date_range(node: Dict[str, Any], context: str) -> DateRangeCategory:
    return DateRangeCategory(
        key=_require_str(node, "key", context),
        name=_require_str(node, "name", context),
        system=node.get("system", ""),
        type=node.get("type", "BETWEEN"),
        min=node.get("min"),
        max=node.get("max"),
        info_button_text=node.get("infoButtonText"),
    )


def _parse_string(node: Dict[str, Any], context: str) -> StringCategory:
    return StringCategory(
        key=_require_str(node, "key", context),
        name=_require_str(node, "name", context),
        system=node.get("system", ""),
        type=node.get("type", "EQUALS"),
        info_button_text=node.get("infoButtonText"),
    )


# Discriminator value -> variant builder
CATEGORY_PARSERS: Dict[str, Callable[[Dict[str, Any], str], Category]] = {
    "group": _parse_group,
    "single-select": _parse_single_select,
    "autocomplete": _parse_autocomplete,
    "number": _parse_numeric_range,
    "date": _parse_date_range,
    "string": _parse_string,
}


def parse_category(node: Dict[str, Any]) -> Category:
    """
    Build a category node by dispatching on its "fieldType" discriminator.

    Args:
        node: JSON object for one category

    Returns:
        One of the Category variants

    Raises:
        CatalogueFormatError: If the discriminator is missing or unknown, or
            a required field is missing

    Example:
        >>> parse_category({"fieldType": "string", "key": "pseudonym", "name": "Pseudonym"})
        StringCategory(key='pseudonym', name='Pseudonym', ...)
    """
    if not isinstance(node, dict):
        raise CatalogueFormatError(f"Category must be an object, got {type(node).__name__}")

    field_type = node.get("fieldType")
    context = f"Category '{node.get('key', '?')}'"

    if field_type is None:
        raise CatalogueFormatError(f"{context} has no 'fieldType' discriminator")

    builder = CATEGORY_PARSERS.get(field_type)
    if builder is None:
        raise CatalogueFormatError(f"{context} has unknown fieldType '{field_type}'")

    return builder(node, context)


def parse_catalogue(data: Any) -> List[Category]:
    """
    Build the catalogue forest from already-decoded JSON.

    Raises:
        CatalogueFormatError: If the top level is not a list of categories
    """
    return [parse_category(node) for node in _require_list(data, "Catalogue")]


def load_catalogue(json_path: Path) -> List[Category]:
    """
    Read and deserialize a catalogue JSON document.

    Args:
        json_path: Path to the catalogue JSON file

    Returns:
        List of top-level category nodes in document order

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogueFormatError: If the file is not valid JSON or has the wrong shape
    """
    if not json_path.exists():
        logger.error(f"Catalogue not found: {json_path}")
        raise FileNotFoundError(f"Catalogue not found at {json_path}")

    logger.info(f"Loading catalogue: {json_path.name}")

    try:
        with open(json_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        catalogue = parse_catalogue(data)
    except json.JSONDecodeError as e:
        raise CatalogueFormatError(f"Catalogue is not valid JSON: {e}") from e
    except RecursionError as e:
        raise CatalogueFormatError("Catalogue is nested too deeply to load") from e

    logger.info(f"  Top-level categories: {len(catalogue)}")
    return catalogue


__all__ = [
    "CatalogueFormatError",
    "InfoLink",
    "AggregatedValue",
    "Criterion",
    "CategoryGroup",
    "SingleSelectCategory",
    "AutocompleteCategory",
    "NumericRangeCategory",
    "DateRangeCategory",
    "StringCategory",
    "Category",
    "CATEGORY_PARSERS",
    "parse_criterion",
    "parse_category",
    "parse_catalogue",
    "load_catalogue",
]
