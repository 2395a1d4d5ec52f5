"""Utility-CSS generator protocol and custom CSS sanitization."""

from __future__ import annotations

from typing import Protocol

from mailcss.stylesheet.parser import parse_stylesheet


class CssGenerator(Protocol):
    """Produces a stylesheet for the utility classes found in a document."""

    def generate(self, candidates: list[str], custom_css: str = "") -> str: ...


def sanitize_custom_css(css: str) -> str:
    """Remove ``@import`` at-rules from user-supplied CSS."""
    stylesheet = parse_stylesheet(css)
    for at_rule in list(stylesheet.walk_at_rules("import")):
        if at_rule.parent is not None:
            at_rule.parent.remove(at_rule)
    return stylesheet.to_css()
