"""Variable resolution transform: substitutes ``var(--x)`` with matching definitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mailcss.model.diagnostic import Diagnostics
from mailcss.stylesheet.model import AtRule, Declaration, StyleRule, Stylesheet, iter_ancestors
from mailcss.stylesheet.values import rewrite_value, split_var_arguments

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10


@dataclass(frozen=True)
class VariableResolution:
    """Outcome of :func:`resolve_all_css_variables`."""

    iterations: int
    converged: bool


@dataclass(frozen=True)
class _Definition:
    declaration: Declaration
    selector: str


@dataclass(frozen=True)
class _UseContext:
    selector: str
    in_at_rule: bool
    at_rule_selector: str | None


def _is_in_properties_layer(decl: Declaration) -> bool:
    return any(
        isinstance(a, AtRule) and a.name == "layer" and "properties" in a.params
        for a in iter_ancestors(decl)
    )


def _owning_selector(decl: Declaration) -> str:
    if isinstance(decl.parent, StyleRule):
        return decl.parent.selector
    return "*"


def _at_rule_selector(decl: Declaration) -> str | None:
    for ancestor in iter_ancestors(decl):
        if isinstance(ancestor, AtRule) and isinstance(ancestor.parent, StyleRule):
            return ancestor.parent.selector
        if isinstance(ancestor, StyleRule):
            return ancestor.selector
    return None


def _use_context(decl: Declaration) -> _UseContext:
    return _UseContext(
        selector=_owning_selector(decl),
        in_at_rule=any(isinstance(a, AtRule) for a in iter_ancestors(decl)),
        at_rule_selector=_at_rule_selector(decl),
    )


def selectors_intersect(first: str, second: str) -> bool:
    """Loose overlap test: identical, or either side is ``:root`` or ``*``."""
    if first == second:
        return True
    if ":root" in first or ":root" in second:
        return True
    return first == "*" or second == "*"


def _matches(use: _UseContext, definition: _Definition) -> bool:
    if use.in_at_rule:
        if use.at_rule_selector is not None:
            return selectors_intersect(use.at_rule_selector, definition.selector)
        return ":root" in definition.selector or definition.selector == "*"
    return selectors_intersect(use.selector, definition.selector)


def _pick_definition(
    use: _UseContext, candidates: list[_Definition]
) -> _Definition | None:
    matching = [d for d in candidates if _matches(use, d)]
    if not matching:
        return None
    own = use.at_rule_selector if use.in_at_rule else use.selector
    for definition in matching:
        if definition.selector == own:
            return definition
    return matching[0]


def _collect(stylesheet: Stylesheet) -> tuple[dict[str, list[_Definition]], list[Declaration]]:
    definitions: dict[str, list[_Definition]] = {}
    uses: list[Declaration] = []
    for decl in stylesheet.walk_declarations():
        if _is_in_properties_layer(decl):
            continue
        if decl.is_custom_property:
            definitions.setdefault(decl.prop, []).append(
                _Definition(decl, _owning_selector(decl))
            )
        if "var(" in decl.value:
            uses.append(decl)
    return definitions, uses


def _resolve_pass(stylesheet: Stylesheet) -> int:
    """Run one substitution pass; returns how many ``var()`` calls were replaced."""
    definitions, uses = _collect(stylesheet)
    substitutions = 0

    for decl in uses:
        context = _use_context(decl)

        def on_function(name: str, arguments: str) -> str | None:
            nonlocal substitutions
            if name != "var":
                return None
            variable, fallback = split_var_arguments(arguments)
            definition = _pick_definition(context, definitions.get(variable, []))
            if definition is not None:
                substitutions += 1
                return definition.declaration.value
            if fallback is not None:
                substitutions += 1
                return fallback
            return None

        decl.value = rewrite_value(decl.value, on_function=on_function)

    return substitutions


def resolve_all_css_variables(
    stylesheet: Stylesheet,
    diagnostics: Diagnostics,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> VariableResolution:
    """Substitute ``var()`` references until nothing changes or the cap is hit.

    Declarations inside ``@layer properties`` are neither definitions nor uses.
    Unresolvable references without a fallback are left in place.
    """
    iterations = 0
    while iterations < max_iterations:
        substitutions = _resolve_pass(stylesheet)
        if substitutions == 0:
            logger.debug("Variables resolved after %d passes", iterations)
            return VariableResolution(iterations=iterations, converged=True)
        iterations += 1

    diagnostics.warn(
        "variable-iterations",
        f"CSS variable resolution hit maximum iterations ({max_iterations}). "
        "This may indicate circular variable references.",
    )
    return VariableResolution(iterations=iterations, converged=False)


class VariableResolutionTransform:
    """Resolve CSS custom properties across a stylesheet."""

    def __init__(self, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> None:
        self.max_iterations = max_iterations
        self.last_result: VariableResolution | None = None

    def apply(self, stylesheet: Stylesheet, diagnostics: Diagnostics) -> Stylesheet:
        self.last_result = resolve_all_css_variables(
            stylesheet, diagnostics, self.max_iterations
        )
        return stylesheet
