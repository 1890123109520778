"""Tests for loading comparison options from configuration."""

import pytest
from docassert import (
    ConfigurationError,
    CsvOptions,
    Header,
    JsonOptions,
    Order,
    ReportFormat,
    XmlOptions,
    load_options,
    options_from_dict,
)


class TestLoadOptions:
    """Test loading options from YAML and JSON."""

    def test_json_options_from_yaml_text(self):
        """Test loading JSON options from YAML contents."""
        options = load_options("order: include\nignored_nodes: [id, timestamp]", "json")

        assert isinstance(options, JsonOptions)
        assert options.order == Order.INCLUDE
        assert options.ignored_nodes == ("id", "timestamp")

    def test_xml_options_from_json_text(self):
        """Test that JSON contents are accepted as configuration."""
        options = load_options('{"order": "include", "culture": "nl-NL"}', "xml")

        assert isinstance(options, XmlOptions)
        assert options.culture == "nl-NL"

    def test_csv_options_from_file(self, tmp_path):
        """Test loading CSV options from a YAML file."""
        path = tmp_path / "options.yaml"
        path.write_text(
            "header: missing\n"
            "separator: ','\n"
            "row_order: ignore\n"
            "report_format: horizontal\n"
            "ignored_column_indexes: [0, 2]\n"
        )

        options = load_options(path, "csv")

        assert isinstance(options, CsvOptions)
        assert options.header == Header.MISSING
        assert options.separator == ","
        assert options.row_order == Order.IGNORE
        assert options.report_format == ReportFormat.HORIZONTAL
        assert options.ignored_column_indexes == (0, 2)

    def test_file_path_as_string(self, tmp_path):
        """Test that a string naming a configuration file is read from disk."""
        path = tmp_path / "options.yml"
        path.write_text("max_report_characters: 100\n")

        options = load_options(str(path), "json")
        assert options.max_report_characters == 100

    def test_empty_configuration(self):
        """Test that empty contents produce the default options."""
        assert load_options("", "csv") == CsvOptions()

    def test_missing_file(self, tmp_path):
        """Test that a missing configuration file is reported."""
        with pytest.raises(FileNotFoundError):
            load_options(tmp_path / "missing.yaml", "json")

    def test_invalid_yaml(self):
        """Test that malformed YAML is a configuration error."""
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_options("order: [include", "json")

    def test_invalid_combination(self):
        """Test that the options are validated after loading."""
        with pytest.raises(ConfigurationError):
            load_options("header: missing\nignored_columns: [a]", "csv")


class TestOptionsFromDict:
    """Test building options from mappings."""

    def test_unknown_option(self):
        """Test that unknown option names are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown JsonOptions option"):
            options_from_dict({"ordr": "include"}, "json")

    def test_unknown_format(self):
        """Test that only JSON, XML and CSV options exist."""
        with pytest.raises(ConfigurationError, match="Unknown format"):
            options_from_dict({}, "yaml")

    def test_invalid_enum_value(self):
        """Test that enum values must be one of their names."""
        with pytest.raises(ConfigurationError, match="expected one of: include, ignore"):
            options_from_dict({"order": "sometimes"}, "xml")

    def test_enum_values_are_case_insensitive(self):
        """Test that enum values may be written in any casing."""
        options = options_from_dict({"column_order": "Ignore"}, "csv")
        assert options.column_order == Order.IGNORE

    def test_single_ignored_node(self):
        """Test that a single name is accepted where a list is expected."""
        options = options_from_dict({"ignored_nodes": "id"}, "json")
        assert options.ignored_nodes == ("id",)

    def test_negative_limit(self):
        """Test that invalid values are rejected by the options."""
        with pytest.raises(ConfigurationError):
            options_from_dict({"max_input_characters": -1}, "json")
