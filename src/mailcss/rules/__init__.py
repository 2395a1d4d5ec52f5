from mailcss.rules.custom_properties import CustomProperty, get_custom_properties
from mailcss.rules.extract import (
    ClassRules,
    GlobalRules,
    extract_global_rules,
    extract_rules_per_class,
    get_matching_global_rules_for_element,
)
from mailcss.rules.inlinable import is_in_conditional_at_rule, is_rule_inlinable

__all__ = [
    "ClassRules",
    "CustomProperty",
    "GlobalRules",
    "extract_global_rules",
    "extract_rules_per_class",
    "get_custom_properties",
    "get_matching_global_rules_for_element",
    "is_in_conditional_at_rule",
    "is_rule_inlinable",
]
