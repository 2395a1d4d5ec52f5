from mailcss.stylesheet.parser import parse_stylesheet
from mailcss.stylesheet.model import AtRule, AtRuleKind, Declaration, StyleRule, Stylesheet
from mailcss.stylesheet.selectors import split_selector_list

__all__ = [
    "parse_stylesheet",
    "Stylesheet",
    "StyleRule",
    "AtRule",
    "AtRuleKind",
    "Declaration",
    "split_selector_list",
]
