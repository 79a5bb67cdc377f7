"""Minimal document model used as a structural oracle for markup.

Built on the standard-library HTML tokenizer. Like a browser, it creates the
``html``, ``head`` and ``body`` elements when their tags are omitted, so
every parsed document has them. It records the doctype, every element with
its attributes and nesting depth, and any ``<html>`` start tag that arrives
after the root already exists. No source positions are tracked.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from html.parser import HTMLParser

from syntax_sweep.errors import MarkupParseError

# Elements that never have an end tag
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements that stay in <head> instead of opening <body>
HEAD_ELEMENTS = frozenset(
    {"base", "link", "meta", "noscript", "script", "style", "template", "title"}
)

# Text inside these never implies <body>
_RAW_TEXT_ELEMENTS = frozenset({"noscript", "script", "style", "template", "textarea", "title"})


@dataclass(frozen=True)
class Element:
    """One element and where it sits in the tree.

    ``implied`` marks html/head/body elements created for omitted tags.
    """

    tag: str
    attrs: tuple[tuple[str, str | None], ...]
    depth: int
    implied: bool = False

    def get(self, name: str) -> str | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    def has(self, name: str) -> bool:
        return any(key == name for key, _ in self.attrs)


@dataclass
class Document:
    """Parsed markup: optional doctype plus elements in document order.

    ``root_implied_by`` names what forced the root to be created before any
    ``<html>`` tag ("text" for character data, None when the tag came first
    or never appeared). ``stray_html_tags`` counts ``<html>`` start tags that
    arrived once the root already existed.
    """

    doctype: str | None = None
    elements: list[Element] = field(default_factory=list)
    root_implied_by: str | None = None
    stray_html_tags: int = 0

    def find_all(self, tag: str) -> list[Element]:
        return [el for el in self.elements if el.tag == tag]

    def find(self, tag: str) -> Element | None:
        for el in self.elements:
            if el.tag == tag:
                return el
        return None

    def roots(self) -> list[Element]:
        """Top-level elements."""
        return [el for el in self.elements if el.depth == 0]

    def with_attribute(self, name: str) -> list[Element]:
        return [el for el in self.elements if el.has(name)]


class _TreeBuilder(HTMLParser):
    """Tokenizer callbacks that fill in a Document.

    Follows the shape of the HTML tree-construction rules closely enough for
    the structural checks: omitted html/head/body are created, head content
    stays in head, anything else opens body, and later html/head/body start
    tags are merged instead of adding elements.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Document()
        self._open: list[str] = []
        self._has = {"html": False, "head": False, "body": False}

    def _add(self, tag: str, attrs: list[tuple[str, str | None]], implied: bool = False) -> None:
        self.document.elements.append(Element(tag, tuple(attrs), len(self._open), implied))
        if tag in self._has:
            self._has[tag] = True

    def _ensure_html(self, trigger: str | None) -> None:
        if not self._has["html"]:
            self.document.root_implied_by = trigger
            self._add("html", [], implied=True)
            self._open.append("html")

    def _ensure_head(self) -> None:
        if not self._has["head"]:
            self._add("head", [], implied=True)
            self._open.append("head")

    def _close_head(self) -> None:
        if "head" in self._open:
            while self._open.pop() != "head":
                pass

    def _ensure_body(self, trigger: str | None) -> None:
        self._ensure_html(trigger)
        if not self._has["body"]:
            self._ensure_head()
            self._close_head()
            self._add("body", [], implied=True)
            self._open.append("body")

    def handle_decl(self, decl: str) -> None:
        if decl.lower().startswith("doctype") and self.document.doctype is None:
            self.document.doctype = decl[len("doctype") :].strip()

    def _start(self, tag: str, attrs: list[tuple[str, str | None]], self_closing: bool) -> None:
        if tag == "html":
            if self._has["html"]:
                self.document.stray_html_tags += 1
            else:
                self._add(tag, attrs)
                self._open.append(tag)
            return

        if tag == "head":
            self._ensure_html(tag)
            if not self._has["head"] and not self._has["body"]:
                self._add(tag, attrs)
                self._open.append(tag)
            return

        if tag == "body":
            self._ensure_html(tag)
            if not self._has["body"]:
                self._ensure_head()
                self._close_head()
                self._add(tag, attrs)
                self._open.append(tag)
            return

        if tag in HEAD_ELEMENTS and not self._has["body"]:
            self._ensure_html(tag)
            self._ensure_head()
        else:
            self._ensure_body(tag)

        self._add(tag, attrs)
        if not self_closing and tag not in VOID_ELEMENTS:
            self._open.append(tag)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start(tag, attrs, self_closing=False)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._start(tag, attrs, self_closing=True)

    def handle_endtag(self, tag: str) -> None:
        if tag == "head":
            self._close_head()
            return
        # html and body stay open until the end of input
        if tag in ("html", "body"):
            return
        # Close back to the matching open element; stray end tags are ignored
        if tag in self._open:
            while self._open.pop() != tag:
                pass

    def handle_data(self, data: str) -> None:
        if not data.strip():
            return
        if self._open and self._open[-1] in _RAW_TEXT_ELEMENTS:
            return
        self._ensure_body("text")

    def close(self) -> None:
        super().close()
        # Every document ends up with html, head and body
        self._ensure_body(None)


def parse(content: str) -> Document:
    """Build a Document from raw markup.

    Args:
        content: Markup text

    Returns:
        Parsed document

    Raises:
        MarkupParseError: If the content cannot be tokenized as markup
    """
    if "\x00" in content:
        raise MarkupParseError("Unexpected null character in markup")

    builder = _TreeBuilder()
    try:
        builder.feed(content)
        builder.close()
    except Exception as e:
        raise MarkupParseError(f"Markup could not be parsed: {e}") from e
    return builder.document
