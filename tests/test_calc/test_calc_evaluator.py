"""Tests for calc() evaluation."""

import pytest

from mailcss.calc import evaluate_calc, resolve_calc_expressions
from mailcss.calc.evaluator import Quantity, format_number, to_px


# ---------------------------------------------------------------------------
# evaluate_calc
# ---------------------------------------------------------------------------


class TestEvaluateCalc:
    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("10px + 5px", "15px"),
            ("10px - 5px", "5px"),
            ("10px+5px", "15px"),
            ("1rem + 1rem", "2rem"),
            ("0.625rem + 4px", "14px"),
            ("1.5px + 1px", "2.5px"),
            ("2 * 3px", "6px"),
            ("10px / 2", "5px"),
            ("3px * 2", "6px"),
            ("100% / 4", "25%"),
            ("2 * 3", "6"),
            ("10px - 4px * 2", "2px"),
            ("-2px + 5px", "3px"),
        ],
    )
    def test_reducible(self, expression, expected):
        assert evaluate_calc(expression) == expected

    def test_division_by_zero_is_zero(self):
        assert evaluate_calc("10px / 0") == "0px"

    def test_units_are_case_insensitive(self):
        assert evaluate_calc("10PX + 5px") == "15px"

    def test_base_font_size(self):
        assert evaluate_calc("1rem + 2px", base_font_size=10) == "12px"

    @pytest.mark.parametrize(
        "expression",
        ["50% + 10px", "100vw - 10px", "(1px + 2px) * 2", "infinity * 1px", "var(--x) + 1px", ""],
    )
    def test_unreducible(self, expression):
        assert evaluate_calc(expression) is None

    @pytest.mark.parametrize("expression", ["1e400px + 1px", "1e400px - 1e400px", "1e308px * 10"])
    def test_overflow_is_unreducible(self, expression):
        assert evaluate_calc(expression) is None


# ---------------------------------------------------------------------------
# resolve_calc_expressions
# ---------------------------------------------------------------------------


class TestResolveCalcExpressions:
    def test_replaces_calc_inside_value(self):
        assert resolve_calc_expressions("0 calc(1rem + 2px) 4px") == "0 18px 4px"

    def test_keeps_unreducible_calc(self):
        assert resolve_calc_expressions("calc(50% + 10px)") == "calc(50% + 10px)"

    def test_keeps_overflowing_calc(self):
        assert resolve_calc_expressions("calc(1e400px + 1px)") == "calc(1e400px + 1px)"

    def test_value_without_calc_is_untouched(self):
        assert resolve_calc_expressions("1px solid red") == "1px solid red"

    def test_multiple_calcs(self):
        value = "calc(1px + 1px) calc(2px * 2)"
        assert resolve_calc_expressions(value) == "2px 4px"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_format_number_integral(self):
        assert format_number(15.0) == "15"

    def test_format_number_fraction(self):
        assert format_number(2.5) == "2.5"

    @pytest.mark.parametrize("value, expected", [(float("inf"), "inf"), (float("nan"), "nan")])
    def test_format_number_non_finite(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        "quantity, expected",
        [
            (Quantity(2, "rem"), 32),
            (Quantity(1, "em"), 16),
            (Quantity(12, "pt"), 16),
            (Quantity(1, "in"), 96),
            (Quantity(3, "px"), 3),
            (Quantity(3, ""), 3),
        ],
    )
    def test_to_px(self, quantity, expected):
        assert to_px(quantity, 16) == pytest.approx(expected)

    def test_to_px_unknown_unit(self):
        assert to_px(Quantity(1, "vw"), 16) is None

    def test_quantity_str(self):
        assert str(Quantity(1.5, "rem")) == "1.5rem"
