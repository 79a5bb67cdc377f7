import pytest

from syntax_sweep.document import parse
from syntax_sweep.errors import MarkupParseError

VALID_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Shop</title></head>
<body>
  <div id="main"><img src="a.png" alt=""><br/><p>Hi</p></div>
</body>
</html>
"""


def test_parse_records_doctype():
    """Test that the doctype declaration is captured."""
    document = parse(VALID_PAGE)

    assert document.doctype == "html"


def test_parse_without_doctype():
    """Test that a missing doctype leaves doctype unset."""
    document = parse("<html><head></head><body></body></html>")

    assert document.doctype is None


def test_parse_tracks_depth():
    """Test nesting depth of elements, including void elements."""
    document = parse(VALID_PAGE)

    assert [el.tag for el in document.roots()] == ["html"]
    assert document.find("head").depth == 1
    assert document.find("meta").depth == 2
    assert document.find("p").depth == 3
    # Void and self-closing elements do not open a level
    assert document.find("br").depth == 3


def test_parse_attributes():
    """Test attribute lookups."""
    document = parse(VALID_PAGE)

    div = document.find("div")
    assert div.get("id") == "main"
    assert div.has("id")
    assert not div.has("class")
    assert [el.tag for el in document.with_attribute("id")] == ["div"]


def test_parse_html_inside_element_is_merged():
    """Test that an <html> tag after content counts as stray, not a second root."""
    document = parse("<div><html></html></div>")

    assert [el.tag for el in document.roots()] == ["html"]
    assert len(document.find_all("html")) == 1
    assert document.find("html").implied
    assert document.root_implied_by == "div"
    assert document.stray_html_tags == 1
    assert document.find("div").depth == 2


def test_parse_creates_omitted_html_head_body():
    """Test a page with every optional tag left out."""
    document = parse("<!DOCTYPE html>\n<title>t</title>\n<p id='a'>x</p>\n")

    assert [el.tag for el in document.elements] == ["html", "head", "title", "body", "p"]
    assert [el.implied for el in document.elements] == [True, True, False, True, False]
    assert document.find("title").depth == 2
    assert document.find("body").depth == 1
    assert document.find("p").depth == 2
    assert document.root_implied_by == "title"
    assert document.stray_html_tags == 0


def test_parse_explicit_html_implies_head_and_body_only():
    """Test that an explicit <html> is kept and only head/body are created."""
    document = parse("<!DOCTYPE html><html lang='en'><p>x</p></html>")

    html = document.find("html")
    assert not html.implied
    assert html.get("lang") == "en"
    assert document.find("head").implied
    assert document.find("body").implied
    assert document.root_implied_by is None


def test_parse_text_before_html_tag():
    """Test that character data implies the root before the <html> tag."""
    document = parse("hello<html><body></body></html>")

    assert document.root_implied_by == "text"
    assert document.stray_html_tags == 1
    assert len(document.find_all("body")) == 1


def test_parse_empty_document():
    """Test that empty input still yields html, head and body."""
    document = parse("")

    assert [el.tag for el in document.elements] == ["html", "head", "body"]
    assert document.root_implied_by is None
    assert document.stray_html_tags == 0


def test_parse_second_body_tag_is_merged():
    """Test that repeated body start tags do not add elements."""
    document = parse("<html><head></head><body><body><p>x</p></body></html>")

    assert len(document.find_all("body")) == 1
    assert len(document.find_all("head")) == 1


def test_parse_stray_end_tag_is_ignored():
    """Test that unmatched end tags do not unbalance the tree."""
    document = parse("<html></span><body></body></html>")

    assert document.find("body").depth == 1


def test_parse_rejects_null_characters():
    """Test that content with NUL characters cannot be parsed."""
    with pytest.raises(MarkupParseError, match="null character"):
        parse("<html>\x00</html>")
