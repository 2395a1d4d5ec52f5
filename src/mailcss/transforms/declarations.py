"""Per-declaration rewrites that make values safe for email clients."""

from __future__ import annotations

import logging
import math
import re

import tinycss2
from tinycss2 import ast

from mailcss.calc.evaluator import Quantity, format_number, to_px
from mailcss.model.diagnostic import Diagnostics
from mailcss.stylesheet.model import Declaration, Stylesheet
from mailcss.stylesheet.values import rewrite_value, significant_tokens, tokenize
from mailcss.transforms.colors import convert_colors

logger = logging.getLogger(__name__)

_INFINITE_RADIUS_RE = re.compile(r"calc\s*\(\s*infinity\s*\*\s*1px\s*\)", re.IGNORECASE)

# Logical shorthand -> (start side, end side)
_LOGICAL_SHORTHANDS: dict[str, tuple[str, str]] = {
    "padding-inline": ("padding-left", "padding-right"),
    "padding-block": ("padding-top", "padding-bottom"),
    "margin-inline": ("margin-left", "margin-right"),
    "margin-block": ("margin-top", "margin-bottom"),
}

_CONVERTIBLE_UNITS = frozenset({"rem", "em", "pt", "pc", "in", "cm", "mm"})


def _round3(value: float) -> float:
    """Round to three decimals, halves away from zero."""
    scaled = abs(value) * 1000
    if not math.isfinite(scaled):
        return value
    sign = -1 if value < 0 else 1
    return sign * math.floor(scaled + 0.5) / 1000


def convert_units(value: str, base_font_size: float = 16) -> str:
    """Rewrite rem/em/pt/pc/in/cm/mm dimensions as px."""

    def on_token(token: ast.Node) -> str | None:
        if isinstance(token, ast.DimensionToken) and token.lower_unit in _CONVERTIBLE_UNITS:
            px = to_px(Quantity(token.value, token.lower_unit), base_font_size)
            if px is not None and math.isfinite(px):
                return f"{format_number(_round3(px))}px"
        return None

    return rewrite_value(value, on_token=on_token)


def _split_values(value: str) -> list[str]:
    """Top-level space separated components of a value."""
    return [tinycss2.serialize([t]) for t in significant_tokens(tokenize(value))]


def sanitize_declaration(
    decl: Declaration, base_font_size: float = 16
) -> list[Declaration]:
    """Rewrite *decl* in place; returns it plus any declaration split off it.

    Raises:
        MalformedColorError: If a color function cannot be read.
    """
    if decl.prop == "border-radius" and _INFINITE_RADIUS_RE.search(decl.value):
        decl.value = "9999px"

    result = [decl]
    sides = _LOGICAL_SHORTHANDS.get(decl.prop)
    if sides is not None:
        values = _split_values(decl.value)
        if values:
            start, end = sides
            decl.prop = start
            decl.value = values[0]
            result.append(decl.clone(prop=end, value=values[1] if len(values) > 1 else values[0]))

    for item in result:
        item.value = convert_units(item.value, base_font_size)
        item.value = convert_colors(item.value, item)
    return result


class DeclarationSanitizeTransform:
    """Apply :func:`sanitize_declaration` to every declaration in a stylesheet."""

    def __init__(self, base_font_size: float = 16) -> None:
        self.base_font_size = base_font_size

    def apply(self, stylesheet: Stylesheet, diagnostics: Diagnostics) -> Stylesheet:
        expanded = 0
        for container in list(stylesheet.walk_containers()):
            if container.children is None:
                continue
            children = []
            for child in container.children:
                if isinstance(child, Declaration):
                    produced = sanitize_declaration(child, self.base_font_size)
                    expanded += len(produced) - 1
                    children.extend(produced)
                else:
                    children.append(child)
            container.replace_children(children)
        logger.debug("Sanitized declarations (%d shorthands expanded)", expanded)
        return stylesheet
