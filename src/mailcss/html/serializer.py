"""Serialize the document tree back to HTML."""

from __future__ import annotations

from mailcss.html.tree import Comment, Doctype, Document, Element, HtmlNode, Text

VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)
RAW_TEXT_ELEMENTS = frozenset({"style", "script"})


def escape_text(data: str) -> str:
    return (
        data.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\xa0", "&nbsp;")
    )


def escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("\xa0", "&nbsp;")


def _serialize(node: HtmlNode, parts: list[str], raw: bool = False) -> None:
    if isinstance(node, Text):
        parts.append(node.data if raw else escape_text(node.data))
    elif isinstance(node, Comment):
        parts.append(f"<!--{node.data}-->")
    elif isinstance(node, Doctype):
        parts.append(f"<!DOCTYPE {node.data}>")
    elif isinstance(node, Element):
        attrs = "".join(f' {a.name}="{escape_attribute(a.value)}"' for a in node.attrs)
        parts.append(f"<{node.tag}{attrs}>")
        if node.tag in VOID_ELEMENTS:
            return
        for child in node.children:
            _serialize(child, parts, raw=node.tag in RAW_TEXT_ELEMENTS)
        parts.append(f"</{node.tag}>")


def serialize(document: Document) -> str:
    parts: list[str] = []
    for child in document.children:
        _serialize(child, parts)
    return "".join(parts)
