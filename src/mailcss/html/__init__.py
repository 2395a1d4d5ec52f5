from mailcss.html.parser import parse_html
from mailcss.html.serializer import serialize
from mailcss.html.tree import Attribute, Comment, Doctype, Document, Element, Text
from mailcss.html.walk import walk

__all__ = [
    "parse_html",
    "serialize",
    "walk",
    "Attribute",
    "Comment",
    "Doctype",
    "Document",
    "Element",
    "Text",
]
