"""Tests for the external XSLT transform wrappers."""

import pytest
from docassert import (
    CsvTable,
    LoadError,
    TransformationFailure,
    ValueNode,
    XmlNode,
    assert_json_equal,
    load_stylesheet,
    load_xml,
    transform_to_csv,
    transform_to_json,
    transform_to_xml,
)


STYLESHEET = (
    '<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">'
    '<xsl:template match="/"><out/></xsl:template>'
    '</xsl:stylesheet>'
)


class RecordingTransform:
    """Transform stub that returns a fixed output and records its calls."""

    def __init__(self, output):
        self.output = output
        self.calls = []

    def __call__(self, stylesheet, input_xml, arguments):
        self.calls.append((stylesheet, input_xml, arguments))
        return self.output


def failing_transform(stylesheet, input_xml, arguments):
    raise RuntimeError("unknown template")


class TestTransforms:
    """Test transforming XML input to each format."""

    def test_transform_to_xml(self):
        """Test that the output is loaded as an XML document."""
        transform = RecordingTransform("<out><v>1</v></out>")
        result = transform_to_xml(transform, STYLESHEET, "<in/>")

        assert isinstance(result, XmlNode)
        assert result.local_name == "out"

    def test_transform_to_json(self):
        """Test that the output is loaded as a JSON document."""
        result = transform_to_json(RecordingTransform('{"v": 1}'), STYLESHEET, "<in/>")

        assert isinstance(result, ValueNode)
        assert_json_equal('{"v": 1}', result)

    def test_transform_to_csv(self):
        """Test that the output is loaded as a CSV table."""
        result = transform_to_csv(RecordingTransform("a;b\n1;2"), STYLESHEET, "<in/>")

        assert isinstance(result, CsvTable)
        assert result.rows[0].values == ("1", "2")

    def test_arguments_and_input_are_passed(self):
        """Test that the stylesheet, serialized input and arguments reach the transform."""
        transform = RecordingTransform("<out/>")
        transform_to_xml(transform, STYLESHEET, load_xml("<in><v>1</v></in>"), {"mode": "full"})

        stylesheet, input_xml, arguments = transform.calls[0]
        assert stylesheet == STYLESHEET
        assert input_xml == "<in><v>1</v></in>"
        assert arguments == {"mode": "full"}

    @pytest.mark.parametrize("transform_to, format_name", [
        (transform_to_xml, "XML"),
        (transform_to_json, "JSON"),
        (transform_to_csv, "CSV"),
    ])
    def test_transformation_failure(self, transform_to, format_name):
        """Test that failures of the transform are wrapped."""
        with pytest.raises(TransformationFailure) as exc_info:
            transform_to(failing_transform, STYLESHEET, "<in/>")

        message = str(exc_info.value)
        assert f"cannot correctly transform XML input to {format_name} due to a transformation failure" in message
        assert "unknown template" in message
        assert exc_info.value.format_name == format_name
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_non_text_output(self):
        """Test that a transform must return text."""
        with pytest.raises(TransformationFailure, match="instead of text"):
            transform_to_xml(RecordingTransform(None), STYLESHEET, "<in/>")

    def test_invalid_output(self):
        """Test that output that cannot be loaded is a load error of the target format."""
        with pytest.raises(LoadError) as exc_info:
            transform_to_json(RecordingTransform("{not json"), STYLESHEET, "<in/>")

        assert exc_info.value.format_name == "JSON"
        assert "deserialization failure" in str(exc_info.value)


class TestLoadStylesheet:
    """Test loading raw XSLT contents."""

    def test_well_formed_stylesheet(self):
        """Test that well-formed contents are returned unchanged."""
        assert load_stylesheet(STYLESHEET) == STYLESHEET

    def test_malformed_stylesheet(self):
        """Test that malformed contents are a load error."""
        with pytest.raises(LoadError) as exc_info:
            load_stylesheet("<xsl:stylesheet")

        assert exc_info.value.format_name == "XSLT"
        assert "XSLT contents" in str(exc_info.value)
