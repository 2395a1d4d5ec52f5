"""Index stylesheet rules by the classes and elements they apply to."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from mailcss.html.tree import Element
from mailcss.rules.inlinable import is_in_conditional_at_rule, is_rule_inlinable
from mailcss.stylesheet.model import Declaration, StyleRule, Stylesheet
from mailcss.stylesheet.selectors import (
    has_pseudo_selector,
    selector_classes,
    split_selector_list,
)

logger = logging.getLogger(__name__)

# Universal-rule properties copied onto every element.
ALWAYS_APPLY_PROPS = frozenset({"box-sizing", "margin"})
# Applied only when the element's class attribute mentions the captured word.
_CONDITIONAL_PROP_RE = re.compile(r"(border|outline)-color")

_COMBINATOR_RE = re.compile(r"[>\s+~]")
_ELEMENT_RE = re.compile(r"^[a-z][a-z0-9-]*$", re.IGNORECASE)


@dataclass
class ClassRules:
    """First rule found for each class, split by whether it can be inlined."""

    inlinable: dict[str, StyleRule] = field(default_factory=dict)
    non_inlinable: dict[str, StyleRule] = field(default_factory=dict)


@dataclass
class GlobalRules:
    """Rules keyed by ``*``, a tag name, or ``:root``."""

    universal: list[StyleRule] = field(default_factory=list)
    element: dict[str, list[StyleRule]] = field(default_factory=dict)
    root: list[StyleRule] = field(default_factory=list)

    def for_tag(self, tag: str) -> list[StyleRule]:
        return self.element.get(tag.lower(), [])


def extract_rules_per_class(stylesheet: Stylesheet, classes: Iterable[str]) -> ClassRules:
    """Find the rule for each of *classes*; the first rule per class wins."""
    wanted = set(classes)
    result = ClassRules()
    for rule in stylesheet.walk_rules():
        bucket = result.inlinable if is_rule_inlinable(rule) else result.non_inlinable
        for name in selector_classes(rule.selector):
            if name in wanted and name not in bucket:
                bucket[name] = rule
    logger.debug(
        "Matched %d inlinable and %d non-inlinable class rules",
        len(result.inlinable),
        len(result.non_inlinable),
    )
    return result


def extract_global_rules(stylesheet: Stylesheet) -> GlobalRules:
    """Collect inlinable ``*``, element and ``:root`` rules.

    Selector lists are split so ``*, ::before, ::after`` contributes just ``*``.
    Every stored rule is a clone carrying a single selector.
    """
    result = GlobalRules()
    for rule in stylesheet.walk_rules():
        conditional = is_in_conditional_at_rule(rule)
        for selector in split_selector_list(rule.selector):
            if not selector:
                continue
            if selector == ":root":
                if not conditional:
                    result.root.append(rule.clone(selector=selector))
                continue
            if has_pseudo_selector(selector) or conditional:
                continue
            if any(marker in selector for marker in ".[#"):
                continue
            if selector != "*" and _COMBINATOR_RE.search(selector):
                continue
            if selector == "*":
                result.universal.append(rule.clone(selector=selector))
            elif _ELEMENT_RE.match(selector):
                result.element.setdefault(selector.lower(), []).append(
                    rule.clone(selector=selector)
                )
    return result


def _applies_to(decl: Declaration, element: Element) -> bool:
    if decl.prop in ALWAYS_APPLY_PROPS:
        return True
    match = _CONDITIONAL_PROP_RE.search(decl.prop)
    if match is None:
        return False
    class_attr = element.get("class")
    return class_attr is not None and match.group(1) in class_attr


def get_matching_global_rules_for_element(
    rules: list[StyleRule], element: Element
) -> list[StyleRule]:
    """Clones of *rules* holding only the declarations that apply to *element*.

    ``box-sizing`` and ``margin`` always apply; ``border-color`` and
    ``outline-color`` only when the element's class attribute contains
    ``border`` or ``outline``.  Rules left with no declarations are dropped.
    """
    matching = []
    for rule in rules:
        decls = [d.clone() for d in rule.declarations if _applies_to(d, element)]
        if decls:
            matching.append(StyleRule(selector=rule.selector, children=decls))
    return matching
