"""Parse CSS source into the stylesheet model using tinycss2.

Syntax example:
    :root { --color: rgb(0 0 0); }
    .text-sm { font-size: 0.875rem; }
    @media (min-width: 40rem) { .sm\\:p-2 { padding: 0.5rem; } }
"""

from __future__ import annotations

import tinycss2
from tinycss2 import ast

from mailcss.errors import ParseError
from mailcss.stylesheet.model import AtRule, Declaration, Node, StyleRule, Stylesheet

__all__ = ["parse_stylesheet"]


def _raise(error: ast.ParseError) -> None:
    raise ParseError(
        f"Invalid CSS ({error.kind}): {error.message}",
        line=error.source_line,
        column=error.source_column,
    )


def _check_tokens(tokens: list) -> None:
    """Raise on any parse error token, including inside nested blocks."""
    for token in tokens:
        if isinstance(token, ast.ParseError):
            _raise(token)
        content = getattr(token, "content", None)
        if isinstance(content, list):
            _check_tokens(content)
        arguments = getattr(token, "arguments", None)
        if isinstance(arguments, list):
            _check_tokens(arguments)


def _serialize(tokens: list) -> str:
    return tinycss2.serialize(tokens).strip()


def _convert_declaration(node: ast.Declaration) -> Declaration:
    _check_tokens(node.value)
    prop = node.name if node.name.startswith("--") else node.lower_name
    return Declaration(prop=prop, value=_serialize(node.value), important=node.important)


def _convert_block(tokens: list) -> list[Node]:
    nodes = tinycss2.parse_blocks_contents(
        tokens, skip_comments=True, skip_whitespace=True
    )
    return [_convert(node) for node in nodes]


def _convert(node: object) -> Node:
    if isinstance(node, ast.ParseError):
        _raise(node)
    if isinstance(node, ast.Declaration):
        return _convert_declaration(node)
    if isinstance(node, ast.QualifiedRule):
        _check_tokens(node.prelude)
        return StyleRule(
            selector=_serialize(node.prelude),
            children=_convert_block(node.content),
        )
    if isinstance(node, ast.AtRule):
        _check_tokens(node.prelude)
        children = None
        if node.content is not None:
            children = _convert_block(node.content)
        return AtRule(
            name=node.lower_at_keyword,
            params=" ".join(_serialize(node.prelude).split()),
            children=children,
        )
    line = getattr(node, "source_line", None)
    column = getattr(node, "source_column", None)
    raise ParseError(f"Unexpected CSS node: {type(node).__name__}", line, column)


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse a CSS source string into a Stylesheet.

    Raises:
        ParseError: If tinycss2 reports an error anywhere in the source.
    """
    nodes = tinycss2.parse_stylesheet(source, skip_comments=True, skip_whitespace=True)
    return Stylesheet(children=[_convert(node) for node in nodes])

