"""Lark Transformer that evaluates the arithmetic inside ``calc()``."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, VisitError

from mailcss.stylesheet.values import rewrite_value

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_VALUE_RE = re.compile(r"^(.*?)(%|[a-zA-Z]+)?$")

# Multipliers to px; rem and em both use the base font size.
_PX_FACTORS: dict[str, float] = {
    "px": 1.0,
    "": 1.0,
    "pt": 96 / 72,
    "pc": 16.0,
    "in": 96.0,
    "cm": 96 / 2.54,
    "mm": 96 / 25.4,
}
_FONT_RELATIVE = ("rem", "em")


class Unresolvable(Exception):
    """The expression is valid syntax but cannot be reduced to one value."""


@dataclass(frozen=True)
class Quantity:
    value: float
    unit: str = ""

    @property
    def is_number(self) -> bool:
        return self.unit == ""

    @property
    def is_percentage(self) -> bool:
        return self.unit == "%"

    @property
    def is_dimension(self) -> bool:
        return not self.is_number and not self.is_percentage

    def __str__(self) -> str:
        return f"{format_number(self.value)}{self.unit}"


def format_number(value: float) -> str:
    """Shortest round-trip form: ``15`` rather than ``15.0``."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_px(quantity: Quantity, base_font_size: float) -> float | None:
    if quantity.unit in _FONT_RELATIVE:
        return quantity.value * base_font_size
    factor = _PX_FACTORS.get(quantity.unit)
    if factor is None:
        return None
    return quantity.value * factor


class CalcTransformer(Transformer):  # type: ignore[type-arg]
    """Reduce a calc parse tree to a single :class:`Quantity`."""

    def __init__(self, base_font_size: float = 16) -> None:
        super().__init__()
        self.base_font_size = base_font_size

    def quantity(self, items: list[Token]) -> Quantity:
        match = _VALUE_RE.match(str(items[0]))
        assert match is not None
        number, unit = match.group(1), match.group(2) or ""
        return Quantity(float(number), unit.lower())

    def mul(self, items: list[object]) -> Quantity:
        left, op, right = items
        assert isinstance(left, Quantity) and isinstance(right, Quantity)
        if str(op) == "*":
            value = left.value * right.value
        else:
            value = 0.0 if right.value == 0 else left.value / right.value

        if left.is_dimension and right.is_number:
            unit = left.unit
        elif left.is_number and right.is_dimension:
            unit = right.unit
        elif left.is_dimension and right.is_dimension:
            unit = "" if str(op) == "/" else left.unit
        elif left.is_percentage or right.is_percentage:
            both = left.is_percentage and right.is_percentage
            unit = "" if str(op) == "/" and both else "%"
        else:
            unit = ""
        return Quantity(value, unit)

    def add(self, items: list[object]) -> Quantity:
        left, op, right = items
        assert isinstance(left, Quantity) and isinstance(right, Quantity)
        sign = 1 if str(op) == "+" else -1
        if left.unit == right.unit:
            return Quantity(left.value + sign * right.value, left.unit)
        left_px = to_px(left, self.base_font_size)
        right_px = to_px(right, self.base_font_size)
        if left_px is None or right_px is None:
            raise Unresolvable(f"cannot combine {left} and {right}")
        return Quantity(left_px + sign * right_px, "px")


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        lexer="contextual",
        start="start",
    )


def evaluate_calc(expression: str, base_font_size: float = 16) -> str | None:
    """Evaluate the body of a ``calc()``; ``None`` when it cannot be reduced."""
    try:
        tree = _parser().parse(expression)
        result = CalcTransformer(base_font_size).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, Unresolvable):
            return None
        raise
    except LarkError:
        return None
    if not math.isfinite(result.value):
        return None
    return str(result)


def resolve_calc_expressions(value: str, base_font_size: float = 16) -> str:
    """Replace every reducible ``calc()`` in a declaration value."""
    if "calc(" not in value.lower():
        return value

    def on_function(name: str, arguments: str) -> str | None:
        if name != "calc":
            return None
        return evaluate_calc(arguments, base_font_size)

    return rewrite_value(value, on_function=on_function)
