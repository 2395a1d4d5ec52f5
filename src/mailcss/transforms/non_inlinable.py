"""Build the ``<style>`` block from rules that cannot be inlined.

Email clients do not understand CSS nesting, so nested rules are flattened:
``.x { @media q { d } }`` becomes ``@media q { .x { d } }`` and
``.x { &:hover { d } }`` becomes ``.x:hover { d }``.
"""

from __future__ import annotations

import logging
from typing import Iterable

from mailcss.inline.class_names import sanitize_class_name
from mailcss.stylesheet.model import (
    AtRule,
    AtRuleKind,
    Declaration,
    Node,
    StyleRule,
    Stylesheet,
    iter_ancestors,
)
from mailcss.stylesheet.selectors import rename_classes

logger = logging.getLogger(__name__)

_Wrapper = tuple[str, str]


def _nest_selector(parent: str, child: str) -> str:
    if "&" in child:
        return child.replace("&", parent)
    return f"{parent} {child}"


def _wrap(node: Node, wrappers: list[_Wrapper]) -> Node:
    for name, params in reversed(wrappers):
        node = AtRule(name=name, params=params, children=[node])
    return node


def _flatten(
    children: list[Node], selector: str, wrappers: list[_Wrapper], out: Stylesheet
) -> None:
    decls = [
        child.clone(important=True) for child in children if isinstance(child, Declaration)
    ]
    if decls:
        renamed = rename_classes(selector, sanitize_class_name)
        out.append(_wrap(StyleRule(selector=renamed, children=decls), wrappers))

    for child in children:
        if isinstance(child, StyleRule):
            _flatten(child.children, _nest_selector(selector, child.selector), wrappers, out)
        elif isinstance(child, AtRule) and child.children is not None:
            inner = wrappers
            if child.kind is not AtRuleKind.LAYER:
                inner = wrappers + [(child.name, child.params)]
            _flatten(child.children, selector, inner, out)


def _context(rule: StyleRule) -> tuple[str, list[_Wrapper]]:
    """Full selector of *rule* and the conditional at-rules around it."""
    selector = rule.selector
    wrappers: list[_Wrapper] = []
    for ancestor in iter_ancestors(rule):
        if isinstance(ancestor, StyleRule):
            selector = _nest_selector(ancestor.selector, selector)
        elif isinstance(ancestor, AtRule) and ancestor.kind is AtRuleKind.CONDITIONAL:
            wrappers.insert(0, (ancestor.name, ancestor.params))
    return selector, wrappers


def sanitize_non_inlinable_rules(rules: Iterable[StyleRule]) -> Stylesheet:
    """Copy *rules* into a flat stylesheet with DOM-safe class names.

    Every declaration is marked ``!important`` so it wins over the inlined
    styles on the same element.  A rule listed more than once is emitted once.
    """
    out = Stylesheet()
    seen: set[int] = set()
    for rule in rules:
        if id(rule) in seen:
            continue
        seen.add(id(rule))
        selector, wrappers = _context(rule)
        _flatten(rule.children, selector, wrappers, out)
    logger.debug("Kept %d rules for the <style> block", len(out.children))
    return out
