"""Tests for CSS custom property resolution."""

import logging

import pytest

from mailcss.model.diagnostic import Diagnostics
from mailcss.stylesheet import parse_stylesheet
from mailcss.transforms.variables import (
    VariableResolutionTransform,
    resolve_all_css_variables,
    selectors_intersect,
)


def _resolve(css: str, max_iterations: int = 10):
    ss = parse_stylesheet(css)
    diagnostics = Diagnostics()
    result = resolve_all_css_variables(ss, diagnostics, max_iterations)
    return ss, diagnostics, result


def _value(ss, selector: str, prop: str) -> str:
    for rule in ss.walk_rules():
        if rule.selector == selector:
            for decl in rule.walk_declarations():
                if decl.prop == prop:
                    return decl.value
    raise AssertionError(f"{selector} {{ {prop} }} not found")


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


class TestSubstitution:
    def test_root_variable(self):
        ss, _, result = _resolve(":root { --c: red; } .x { color: var(--c); }")
        assert _value(ss, ".x", "color") == "red"
        assert result.converged is True

    def test_chain_resolves_in_one_pass(self):
        ss, _, result = _resolve(
            ":root { --a: var(--b); --b: red; } .x { color: var(--a); }"
        )
        assert _value(ss, ".x", "color") == "red"
        assert result.iterations == 1

    def test_value_inside_longer_declaration(self):
        ss, _, _ = _resolve(":root { --w: 2px; } .x { border: var(--w) solid black; }")
        assert _value(ss, ".x", "border") == "2px solid black"

    def test_fallback_used_when_undefined(self):
        ss, _, _ = _resolve(".x { color: var(--missing, blue); }")
        assert _value(ss, ".x", "color") == "blue"

    def test_nested_fallback(self):
        ss, _, _ = _resolve(":root { --b: green; } .x { color: var(--a, var(--b)); }")
        assert _value(ss, ".x", "color") == "green"

    def test_unresolvable_is_left_in_place(self):
        ss, diagnostics, result = _resolve(".x { color: var(--missing); }")
        assert _value(ss, ".x", "color") == "var(--missing)"
        assert result.converged is True
        assert result.iterations == 0
        assert len(diagnostics) == 0

    def test_universal_definition(self):
        ss, _, _ = _resolve("* { --c: red; } .b { color: var(--c); }")
        assert _value(ss, ".b", "color") == "red"

    def test_unrelated_selector_does_not_match(self):
        ss, _, _ = _resolve(".a { --c: red; } .b { color: var(--c); }")
        assert _value(ss, ".b", "color") == "var(--c)"

    def test_same_selector_definition_wins(self):
        ss, _, _ = _resolve(":root { --c: red; } .x { --c: blue; color: var(--c); }")
        assert _value(ss, ".x", "color") == "blue"

    def test_first_matching_definition_otherwise(self):
        ss, _, _ = _resolve(":root { --c: red; } * { --c: blue; } .x { color: var(--c); }")
        assert _value(ss, ".x", "color") == "red"


class TestAtRuleContext:
    def test_nested_media_uses_enclosing_selector(self):
        ss, _, _ = _resolve(
            ".y { --c: blue; } .x { --c: red; @media print { color: var(--c); } }"
        )
        assert _value(ss, ".x", "color") == "red"

    def test_rule_inside_media_uses_its_selector(self):
        ss, _, _ = _resolve(".x { --c: red; } @media print { .x { color: var(--c); } }")
        assert _value(ss, ".x", "color") == "red"

    def test_properties_layer_is_ignored(self):
        ss, _, _ = _resolve(
            "@layer properties { @supports (-webkit-hyphens: none) { *, ::before { --tw-x: 0; } } }"
            " .x { width: var(--tw-x); }"
        )
        assert _value(ss, ".x", "width") == "var(--tw-x)"


# ---------------------------------------------------------------------------
# Iteration cap
# ---------------------------------------------------------------------------


class TestIterationCap:
    def test_circular_references_hit_the_cap(self):
        _, diagnostics, result = _resolve(
            ":root { --a: var(--b); --b: var(--a); }", max_iterations=3
        )
        assert result.converged is False
        assert result.iterations == 3
        [warning] = diagnostics.by_code("variable-iterations")
        assert "maximum iterations (3)" in warning.message
        assert "circular" in warning.message

    def test_warning_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mailcss"):
            _resolve(":root { --a: var(--a); }", max_iterations=2)
        assert any("maximum iterations" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# Helpers and transform
# ---------------------------------------------------------------------------


class TestSelectorsIntersect:
    @pytest.mark.parametrize(
        "first, second",
        [(".a", ".a"), (":root", ".b"), (".b", ":root"), ("*", ".b"), (".b", "*")],
    )
    def test_intersect(self, first, second):
        assert selectors_intersect(first, second) is True

    def test_disjoint(self):
        assert selectors_intersect(".a", ".b") is False


def test_transform_records_last_result():
    transform = VariableResolutionTransform(max_iterations=5)
    ss = parse_stylesheet(":root { --c: red; } .x { color: var(--c); }")
    assert transform.apply(ss, Diagnostics()) is ss
    assert transform.last_result is not None
    assert transform.last_result.converged is True
