"""Tests for XML loading and comparison."""

import pytest
from docassert import (
    AssertionFailure,
    ConfigurationError,
    DifferenceKind,
    LoadError,
    Order,
    XmlOptions,
    assert_xml_equal,
    load_xml,
)
from docassert.comparators import TextKind, describe_text, infer_kind


class TestXmlLoading:
    """Test loading raw XML contents."""

    def test_load_resolves_namespaces(self):
        """Test that prefixes are resolved to their namespace."""
        node = load_xml('<ns:root xmlns:ns="https://example.com" ns:id="1"><child>text</child></ns:root>')

        assert node.local_name == "root"
        assert node.namespace == "https://example.com"
        assert node.attributes[0].local_name == "id"
        assert node.attributes[0].namespace == "https://example.com"
        assert node.children[0].text == "text"

    def test_whitespace_only_text_is_dropped(self):
        """Test that indentation is not part of an element's text."""
        node = load_xml("<root>\n  <child/>\n</root>")
        assert node.text is None

    def test_render_element(self):
        """Test that elements render back to XML."""
        node = load_xml("<root><child>1</child></root>")
        assert "<child>1</child>" in node.render()

    def test_invalid_xml_fails_to_load(self):
        """Test that malformed contents raise a load error."""
        with pytest.raises(LoadError) as exc_info:
            load_xml("<root><child></root>")

        message = str(exc_info.value)
        assert "XML contents" in message
        assert "deserialization failure" in message
        assert exc_info.value.format_name == "XML"

    def test_blank_xml_fails_to_load(self):
        """Test that blank contents raise a load error."""
        with pytest.raises(LoadError, match="blank"):
            load_xml("")


class TestXmlEqual:
    """Test the equality assertion on XML documents."""

    def test_identical_documents(self):
        """Test that a document equals a copy of itself."""
        xml = '<tree kind="oak"><branch leaves="10">green</branch><branch leaves="5"/></tree>'
        assert_xml_equal(xml, xml)
        assert_xml_equal(xml, xml, XmlOptions(order=Order.INCLUDE))

    def test_same_namespace_different_prefix(self):
        """Test that prefixes do not matter, only the resolved namespaces."""
        assert_xml_equal(
            '<ns:value xmlns:ns="https://same-namespace-different-prefix"/>',
            '<nsx:value xmlns:nsx="https://same-namespace-different-prefix"/>'
        )

    def test_different_namespace(self):
        """Test that elements in different namespaces differ."""
        with pytest.raises(AssertionFailure) as exc_info:
            assert_xml_equal(
                '<tree xmlns:ns1="https://nature.com"><ns1:branch/><ns1:branch/></tree>',
                '<tree xmlns:ns1="https://nature.com"><ns1:branch/>'
                '<ns2:branch xmlns:ns2="https://diff.com"/></tree>'
            )

        assert exc_info.value.difference.kind == DifferenceKind.DIFFERENT_NAMESPACE
        assert ("actual XML has a different namespace at /tree/branch[1], "
                "expected https://nature.com while actual https://diff.com") in str(exc_info.value)

    def test_report_starts_with_method_and_content_kind(self):
        """Test the first line of the failure report."""
        with pytest.raises(AssertionFailure) as exc_info:
            assert_xml_equal("<id>2</id>", "<id>1</id>")

        lines = str(exc_info.value).splitlines()
        assert lines[0] == "assert_xml_equal failure: expected and actual XML documents do not match"
        assert "has a different value at /id" in lines[1]

    def test_attribute_order_ignored_by_default(self):
        """Test that attributes are matched by name by default."""
        assert_xml_equal('<a x="1" y="2"/>', '<a y="2" x="1"/>')

    def test_culture_aware_values(self):
        """Test that texts are compared as numbers in the configured culture."""
        assert_xml_equal("<v>1,50</v>", "<v>1,5</v>", XmlOptions(culture="nl-NL"))

    def test_unknown_culture_is_a_configuration_error(self):
        """Test that cultures are validated eagerly."""
        with pytest.raises(ConfigurationError):
            XmlOptions(culture="not-a-culture")


class TestXmlDifferences:
    """Test the reported differences between XML documents."""

    @pytest.mark.parametrize("expected, actual, message, order", [
        ("<items><fork/><knife/></items>",
         "<items><fork/><knife/><spoon/></items>",
         "has 3 element(s) instead of 2 at /items", Order.IGNORE),
        ("<items><fork/><knife/><spoon/></items>",
         "<items><fork/><knife/></items>",
         "2 element(s) instead of 3 at /items/", Order.IGNORE),
        ("<items><fork/><spoon/><knife/></items>",
         "<items><fork/><knife/><spoon/></items>",
         "has a different name at /items/spoon, expected an element: <spoon> while actual an element: <knife>",
         Order.INCLUDE),
        ("<items>2</items>",
         "<items><branch/></items>",
         "has a different value at /items/text(), expected a number: 2 while actual an element: <branch>",
         Order.IGNORE),
        ("<tree><leaves>10</leaves></tree>",
         "<tree><leaves>5</leaves></tree>",
         "has a different value at /tree/leaves/text(), expected a number: 10 while actual a number: 5",
         Order.IGNORE),
        ("<eyes>2</eyes>",
         '<eyes>"blue"</eyes>',
         'has a different value at /eyes/text(), expected a number: 2 while actual a string: "blue"',
         Order.IGNORE),
        ('<tree>"oak"</tree>',
         "<tree><branch/></tree>",
         'has a different value at /tree/text(), expected a string: "oak" while actual an element: <branch>',
         Order.IGNORE),
        ("<tree>oak</tree>",
         "<tree>elm</tree>",
         "has a different value at /tree/text(), expected a text: oak while actual a text: elm",
         Order.IGNORE),
        ('<tree branches="11" />',
         '<tree branches="10" />',
         "has a different value at /tree[@branches], expected a number: 11 while actual a number: 10",
         Order.IGNORE),
        ('<items meta="data" info="root" />',
         '<items meta="data" other="19" />',
         "has a different name at /items[@info], expected an attribute: info while actual an attribute: other",
         Order.INCLUDE),
        ('<items meta="data" info="root" />',
         '<items meta="data" other="19" />',
         "misses an attribute: info at /items[@info]",
         Order.IGNORE),
        ('<tree><branches branch_1="" branch_2=""/></tree>',
         '<tree><branches branch_1="" branch_2="" branch_3=""/></tree>',
         "3 attribute(s) instead of 2 at /tree/branches",
         Order.IGNORE),
        ('<tree><branch xmlns:ns1="https://climate.com" ns1:leaf_1="" ns1:leaf_2=""/></tree>',
         '<tree><branch xmlns:ns1="https://climate.com" xmlns:ns2="https://earth.com" '
         'ns1:leaf_1="" ns2:leaf_2=""/></tree>',
         "has a different namespace at /tree/branch[@leaf_2], "
         "expected https://climate.com while actual https://earth.com",
         Order.INCLUDE),
    ])
    def test_difference_message(self, expected, actual, message, order):
        """Test the description of each kind of difference."""
        with pytest.raises(AssertionFailure) as exc_info:
            assert_xml_equal(expected, actual, XmlOptions(order=order))

        assert message in str(exc_info.value)

    def test_limited_scope_shows_differing_element(self):
        """Test that the report only shows the element containing the difference."""
        with pytest.raises(AssertionFailure) as exc_info:
            assert_xml_equal(
                "<tree><leaves>10</leaves><roots>3</roots></tree>",
                "<tree><leaves>5</leaves><roots>3</roots></tree>"
            )

        message = str(exc_info.value)
        assert "<leaves>10</leaves>" in message
        assert "<roots>" not in message


class TestXmlIgnore:
    """Test ignoring nodes in XML documents."""

    def test_ignore_element(self):
        """Test that ignored elements are removed from both documents."""
        options = XmlOptions().ignore_node("id")
        assert_xml_equal(
            "<a><id>1</id><v>x</v></a>",
            "<a><id>2</id><v>x</v></a>",
            options
        )

    def test_ignore_element_present_on_one_side(self):
        """Test that an ignored element may be absent on one side."""
        assert_xml_equal("<a><id>1</id><v>x</v></a>", "<a><v>x</v></a>", XmlOptions(ignored_nodes=("id",)))

    def test_ignore_attribute(self):
        """Test that ignored attributes are removed from both documents."""
        assert_xml_equal('<a ts="1" v="x"/>', '<a ts="2" v="x"/>', XmlOptions(ignored_nodes=("ts",)))

    def test_ignore_root_is_a_configuration_error(self):
        """Test that the root element cannot be ignored."""
        with pytest.raises(ConfigurationError, match="root of the XML contents"):
            assert_xml_equal("<a/>", "<a/>", XmlOptions(ignored_nodes=("a",)))


class TestTextKinds:
    """Test the kinds inferred from literal texts for messages."""

    @pytest.mark.parametrize("text, kind, description", [
        ("12", TextKind.NUMBER, "a number: 12"),
        ('"abc"', TextKind.QUOTED_STRING, 'a string: "abc"'),
        ("abc", TextKind.RAW_TEXT, "a text: abc"),
        ('"', TextKind.RAW_TEXT, 'a text: "'),
        (None, TextKind.NULL, "null"),
    ])
    def test_infer_kind(self, text, kind, description):
        """Test that numbers, quoted strings and raw texts are told apart."""
        assert infer_kind(text) == kind
        assert describe_text(text) == description
