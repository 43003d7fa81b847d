"""
Unit Tests for src.models.catalogue

Tests discriminator dispatch, optional field defaults and rejection of
malformed catalogue documents.
"""

import json
import sys

import pytest

from src.models.catalogue import (
    AutocompleteCategory,
    CatalogueFormatError,
    CategoryGroup,
    DateRangeCategory,
    NumericRangeCategory,
    SingleSelectCategory,
    StringCategory,
    load_catalogue,
    parse_catalogue,
    parse_category,
    parse_criterion,
)


class TestParseCategory:
    """Tests for parse_category()"""

    @pytest.mark.parametrize(
        "field_type, expected_cls, extra",
        [
            ("group", CategoryGroup, {"childCategories": []}),
            ("single-select", SingleSelectCategory, {"criteria": []}),
            ("autocomplete", AutocompleteCategory, {"criteria": []}),
            ("number", NumericRangeCategory, {}),
            ("date", DateRangeCategory, {}),
            ("string", StringCategory, {}),
        ],
    )
    def test_dispatch_on_field_type(self, field_type, expected_cls, extra):
        node = {"fieldType": field_type, "key": "k", "name": "Name", **extra}
        category = parse_category(node)

        assert isinstance(category, expected_cls)
        assert category.key == "k"
        assert category.name == "Name"

    def test_unknown_field_type_rejected(self):
        with pytest.raises(CatalogueFormatError, match="unknown fieldType 'boolean'"):
            parse_category({"fieldType": "boolean", "key": "k", "name": "Name"})

    def test_missing_field_type_rejected(self):
        with pytest.raises(CatalogueFormatError, match="fieldType"):
            parse_category({"key": "k", "name": "Name"})

    def test_missing_key_rejected(self):
        with pytest.raises(CatalogueFormatError, match="'key'"):
            parse_category({"fieldType": "string", "name": "Name"})

    def test_group_requires_child_categories(self):
        with pytest.raises(CatalogueFormatError, match="childCategories"):
            parse_category({"fieldType": "group", "key": "g", "name": "Group"})

    def test_autocomplete_requires_criteria(self):
        with pytest.raises(CatalogueFormatError, match="criteria"):
            parse_category({"fieldType": "autocomplete", "key": "diagnosis", "name": "Diagnosis"})

    def test_non_object_rejected(self):
        with pytest.raises(CatalogueFormatError):
            parse_category(["not", "an", "object"])

    def test_numeric_range_fields(self):
        category = parse_category({
            "fieldType": "number",
            "key": "age",
            "name": "Age",
            "system": "",
            "type": "BETWEEN",
            "min": 0,
            "max": 120.5,
            "unitText": "years",
        })

        assert category.min == 0
        assert category.max == 120.5
        assert category.unit_text == "years"

    def test_group_info_link(self):
        category = parse_category({
            "fieldType": "group",
            "key": "g",
            "name": "Group",
            "childCategories": [],
            "infoButtonText": ["Line one"],
            "infoLink": {"link": "https://example.org", "display": "Docs"},
        })

        assert category.info_button_text == ["Line one"]
        assert category.info_link.link == "https://example.org"
        assert category.info_link.display == "Docs"

    def test_single_select_sub_category_name(self):
        category = parse_category({
            "fieldType": "single-select",
            "key": "gender",
            "name": "Gender",
            "criteria": [{"key": "male", "name": "male"}],
            "subCategoryName": "Sex",
        })

        assert category.sub_category_name == "Sex"
        assert category.type == "EQUALS"

    def test_info_link_must_be_object(self):
        with pytest.raises(CatalogueFormatError, match="infoLink must be an object"):
            parse_category({
                "fieldType": "group",
                "key": "g",
                "name": "Group",
                "childCategories": [],
                "infoLink": "see link here",
            })

    def test_invalid_child_fails_whole_group(self):
        with pytest.raises(CatalogueFormatError):
            parse_category({
                "fieldType": "group",
                "key": "g",
                "name": "Group",
                "childCategories": [{"fieldType": "mystery", "key": "x", "name": "X"}],
            })


class TestParseCriterion:
    """Tests for parse_criterion()"""

    def test_optional_fields_default(self):
        criterion = parse_criterion({"key": "C50", "name": "C50"})

        assert criterion.description is None
        assert criterion.subgroup == []
        assert criterion.visible is None
        assert criterion.aggregated_value is None

    def test_null_subgroup_is_empty(self):
        criterion = parse_criterion({"key": "C50", "name": "C50", "subgroup": None})
        assert criterion.subgroup == []

    def test_nested_subgroups(self):
        criterion = parse_criterion({
            "key": "C00-C97",
            "name": "C00-C97",
            "subgroup": [
                {"key": "C50", "name": "C50", "subgroup": [{"key": "C50.0", "name": "C50.0"}]},
            ],
        })

        assert criterion.subgroup[0].key == "C50"
        assert criterion.subgroup[0].subgroup[0].key == "C50.0"

    def test_aggregated_value(self):
        criterion = parse_criterion({
            "key": "k",
            "name": "n",
            "aggregatedValue": [[{"value": "C50.0", "name": "C50.0"}]],
        })

        assert criterion.aggregated_value[0][0].value == "C50.0"

    def test_aggregated_value_item_must_be_object(self):
        with pytest.raises(CatalogueFormatError, match="must be an object"):
            parse_criterion({
                "key": "k",
                "name": "n",
                "aggregatedValue": [["value name"]],
            })

    def test_missing_name_rejected(self):
        with pytest.raises(CatalogueFormatError, match="'name'"):
            parse_criterion({"key": "C50"})


class TestLoadCatalogue:
    """Tests for parse_catalogue() and load_catalogue()"""

    def test_top_level_must_be_list(self):
        with pytest.raises(CatalogueFormatError, match="must be a list"):
            parse_catalogue({"fieldType": "group"})

    def test_load_sample(self, catalogue_json_path):
        catalogue = load_catalogue(catalogue_json_path)

        assert [c.key for c in catalogue] == ["patient", "diagnosis_group"]
        assert isinstance(catalogue[1].child_categories[0], AutocompleteCategory)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalogue(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        json_path = tmp_path / "broken.json"
        json_path.write_text("[{", encoding="utf-8")

        with pytest.raises(CatalogueFormatError, match="not valid JSON"):
            load_catalogue(json_path)

    def test_nesting_beyond_recursion_limit_is_format_error(self, tmp_path):
        depth = sys.getrecursionlimit() + 100
        criterion = '{"key": "k", "name": "n", "subgroup": [' * depth + "]}" * depth
        document = (
            '[{"fieldType": "autocomplete", "key": "diagnosis", "name": "Diagnosis", '
            '"criteria": [' + criterion + "]}]"
        )
        json_path = tmp_path / "deep.json"
        json_path.write_text(document, encoding="utf-8")

        with pytest.raises(CatalogueFormatError, match="nested too deeply"):
            load_catalogue(json_path)

    def test_empty_catalogue(self, tmp_path):
        json_path = tmp_path / "empty.json"
        json_path.write_text(json.dumps([]), encoding="utf-8")

        assert load_catalogue(json_path) == []
