"""Parse HTML with BeautifulSoup and convert it into the document tree."""

from __future__ import annotations

from bs4 import BeautifulSoup, CData, Comment as SoupComment, Declaration
from bs4 import Doctype as SoupDoctype, NavigableString, ProcessingInstruction, Tag
from bs4.builder import ParserRejectedMarkup

from mailcss.errors import ParseError
from mailcss.html.tree import Attribute, Comment, Doctype, Document, Element, HtmlNode, Text

__all__ = ["parse_html"]


def _convert(node: object) -> HtmlNode | None:
    # Order matters: the special strings below all subclass NavigableString.
    if isinstance(node, SoupDoctype):
        return Doctype(str(node))
    if isinstance(node, (SoupComment, CData, ProcessingInstruction, Declaration)):
        return Comment(str(node))
    if isinstance(node, NavigableString):
        return Text(str(node))
    if isinstance(node, Tag):
        attrs = []
        for name, value in node.attrs.items():
            if isinstance(value, list):
                value = " ".join(value)
            attrs.append(Attribute(name, "" if value is None else str(value)))
        children = [c for c in (_convert(child) for child in node.contents) if c is not None]
        return Element(tag=node.name, attrs=attrs, children=children)
    return None


def parse_html(markup: str) -> Document:
    """Parse *markup* without adding implied ``<html>``/``<head>``/``<body>``.

    Raises:
        ParseError: If the parser rejects the markup.
    """
    try:
        soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as e:
        raise ParseError(f"Invalid HTML: {e}") from e
    children = [c for c in (_convert(child) for child in soup.contents) if c is not None]
    return Document(children=children)
