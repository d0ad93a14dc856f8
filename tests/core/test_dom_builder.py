# tests/core/test_dom_builder.py
import pytest

from a11yscan.dom.builder import DOMBuilder, DOCUMENT_TAG
from a11yscan.dom.core import DocumentTree, ElementNode
from a11yscan.exceptions import ParseError


@pytest.fixture
def builder():
    return DOMBuilder()


def test_parse_builds_document_root(builder):
    doc = builder.parse_doc("<!DOCTYPE html><html><body><p>Hi</p></body></html>")

    assert doc.root.tag == DOCUMENT_TAG
    assert doc.has_doctype
    assert [n.tag for n in doc.root.find_all("p")] == ["p"]
    assert doc.root.find_all("p")[0].text_content == "Hi"


def test_find_all_is_document_order_across_nesting(builder):
    doc = builder.parse_doc("<section><h2>a</h2><div><h1>b</h1></div></section><h3>c</h3>")

    headings = doc.root.find_all("h1", "h2", "h3")
    assert [h.tag for h in headings] == ["h2", "h1", "h3"]


def test_tag_and_attribute_names_are_case_insensitive(builder):
    doc = builder.parse_doc('<IMG SRC="a.png" ALT="logo">')

    img = doc.root.find_all("IMG")[0]
    assert img.tag == "img"
    assert img.has_attr("alt")
    assert img.get_attr("ALT") == "logo"


def test_class_attribute_is_flattened(builder):
    doc = builder.parse_doc('<div class="card  wide">x</div>')

    div = doc.root.find_all("div")[0]
    assert div.get_attr("class") == "card wide"
    assert div.classes == ["card", "wide"]


def test_valueless_attribute_is_present_and_empty(builder):
    doc = builder.parse_doc('<img src="x" alt>')

    img = doc.root.find_all("img")[0]
    assert img.has_attr("alt")
    assert img.get_attr("alt") == ""


def test_text_content_includes_descendants(builder):
    doc = builder.parse_doc("<div> <span>one</span> two </div>")

    div = doc.root.find_all("div")[0]
    assert div.text_content.strip() == "one two"
    assert div.outer_html.startswith("<div>")
    assert "<span>one</span>" in div.outer_html


def test_malformed_markup_degrades_gracefully(builder):
    doc = builder.parse_doc("<div><p>unclosed <b>bold</div><img src=x")

    assert doc.root.find_all("div")
    assert doc.root.find_all("p")


def test_empty_input_gives_empty_tree(builder):
    doc = builder.parse_doc("")

    assert doc.root.children == []
    assert doc.root.find_all("div") == []


def test_byte_order_mark_is_stripped(builder):
    doc = builder.parse_doc("\ufeff<p>x</p>")

    assert doc.root.text_content == "x"


def test_non_text_input_raises_parse_error(builder):
    with pytest.raises(ParseError):
        builder.parse_doc(b"<p>bytes</p>")


def test_element_node_satisfies_document_tree_protocol():
    node = ElementNode(tag="div")

    assert isinstance(node, DocumentTree)


def test_deeply_nested_unclosed_tags_build_a_tree(builder):
    doc = builder.parse_doc("<span>x" * 5000)

    spans = doc.root.find_all("span")
    assert len(spans) == 5000
    assert spans[-1].text_content == "x"
    assert spans[0].outer_html.startswith("<span>x<span>")


def test_text_content_includes_script_and_style_text(builder):
    doc = builder.parse_doc("<div><script>var x = 1;</script><style>p {}</style><!-- note --></div>")

    div = doc.root.find_all("div")[0]
    assert div.text_content == "var x = 1;p {}"


def test_hand_built_node_uses_given_text_and_markup():
    node = ElementNode(tag="p", text="hello", markup="<p>hello</p>")

    assert node.text_content == "hello"
    assert node.outer_html == "<p>hello</p>"
    assert ElementNode(tag="p").text_content == ""
