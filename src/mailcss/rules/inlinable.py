"""Rule classification: can a rule's declarations move into ``style`` attributes?"""

from __future__ import annotations

from mailcss.stylesheet.model import AtRule, AtRuleKind, Node, StyleRule, iter_ancestors
from mailcss.stylesheet.selectors import has_pseudo_selector


def _is_conditional(node: object) -> bool:
    return isinstance(node, AtRule) and node.kind is AtRuleKind.CONDITIONAL


def is_in_conditional_at_rule(node: Node) -> bool:
    """True when any ancestor of *node* is ``@media``, ``@supports``, ... (``@layer`` is not)."""
    return any(_is_conditional(ancestor) for ancestor in iter_ancestors(node))


def contains_conditional_at_rule(rule: StyleRule) -> bool:
    """True for nested conditions such as ``.sm\\:p-2 { @media (...) { ... } }``."""
    return any(_is_conditional(node) for node in rule.walk())


def is_rule_inlinable(rule: StyleRule) -> bool:
    if contains_conditional_at_rule(rule):
        return False
    if is_in_conditional_at_rule(rule):
        return False
    if rule.selector.strip() == ":root":
        return True
    return not has_pseudo_selector(rule.selector)
