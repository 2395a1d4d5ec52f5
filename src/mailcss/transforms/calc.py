"""Calc resolution transform: reduces ``calc()`` expressions to plain values."""

from __future__ import annotations

from mailcss.calc.evaluator import resolve_calc_expressions
from mailcss.model.diagnostic import Diagnostics
from mailcss.stylesheet.model import Stylesheet


class CalcResolutionTransform:
    """Replace every reducible ``calc()`` in the stylesheet with its result.

    Expressions that cannot be reduced (percentages, viewport units,
    parentheses) stay as written.
    """

    def __init__(self, base_font_size: float = 16) -> None:
        self.base_font_size = base_font_size

    def apply(self, stylesheet: Stylesheet, diagnostics: Diagnostics) -> Stylesheet:
        for decl in stylesheet.walk_declarations():
            decl.value = resolve_calc_expressions(decl.value, self.base_font_size)
        return stylesheet
