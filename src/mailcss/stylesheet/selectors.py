"""Selector helpers: list splitting, pseudo detection and class renaming."""

from __future__ import annotations

import re
from typing import Callable

import tinycss2
from tinycss2 import ast

__all__ = [
    "split_selector_list",
    "has_pseudo_selector",
    "selector_classes",
    "rename_classes",
]

# A colon preceded by a backslash belongs to an escaped class name (sm\:p-2).
_PSEUDO_RE = re.compile(r"(?<!\\)::?[\w-]+(\([^)]*\))?")


def split_selector_list(selector: str) -> list[str]:
    """Split a selector list on top-level commas.

    Commas inside ``()``, ``[]`` or quoted strings do not split.  Fragments are
    trimmed and empty fragments are kept as ``""``.
    """
    fragments: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    escaped = False

    for char in selector:
        if escaped:
            current.append(char)
            escaped = False
            continue
        if char == "\\":
            current.append(char)
            escaped = True
            continue
        if quote is not None:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            fragments.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    fragments.append("".join(current).strip())
    return fragments


def has_pseudo_selector(selector: str) -> bool:
    """True when *selector* uses a pseudo-class or pseudo-element."""
    return _PSEUDO_RE.search(selector) is not None


def _class_tokens(tokens: list[ast.Node]):
    """Yield the ident token of every ``.name`` pair, searching nested blocks."""
    previous = None
    for token in tokens:
        if isinstance(token, ast.IdentToken) and previous == ".":
            yield token
        if isinstance(token, ast.FunctionBlock):
            yield from _class_tokens(token.arguments)
        elif token.type in ("() block", "[] block"):
            yield from _class_tokens(token.content)
        previous = token


def selector_classes(selector: str) -> list[str]:
    """Class names referenced by *selector*, escapes resolved, in order."""
    tokens = tinycss2.parse_component_value_list(selector)
    names: list[str] = []
    for token in _class_tokens(tokens):
        if token.value not in names:
            names.append(token.value)
    return names


def _rename_tokens(tokens: list[ast.Node], rename: Callable[[str], str]) -> str:
    parts: list[str] = []
    previous = None
    for token in tokens:
        if isinstance(token, ast.IdentToken) and previous == ".":
            parts.append(tinycss2.serialize_identifier(rename(token.value)))
        elif isinstance(token, ast.FunctionBlock):
            inner = _rename_tokens(token.arguments, rename)
            parts.append(f"{tinycss2.serialize_identifier(token.name)}({inner})")
        elif token.type == "() block":
            parts.append(f"({_rename_tokens(token.content, rename)})")
        elif token.type == "[] block":
            parts.append(f"[{_rename_tokens(token.content, rename)}]")
        else:
            parts.append(token.serialize())
        previous = token
    return "".join(parts)


def rename_classes(selector: str, rename: Callable[[str], str]) -> str:
    """Rewrite every class name in *selector* through *rename*."""
    return _rename_tokens(tinycss2.parse_component_value_list(selector), rename)
