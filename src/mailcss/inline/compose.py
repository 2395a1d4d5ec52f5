"""Compose inline ``style`` strings from matched rules."""

from __future__ import annotations

from typing import Optional

from mailcss.rules.custom_properties import CustomProperty
from mailcss.stylesheet.model import Declaration, StyleRule
from mailcss.stylesheet.values import rewrite_value, split_var_arguments


def _resolve_variables(
    value: str,
    local: dict[str, Declaration],
    custom_properties: dict[str, CustomProperty],
) -> str:
    def on_function(name: str, arguments: str) -> str | None:
        if name != "var":
            return None
        variable, _ = split_var_arguments(arguments)
        if not variable:
            return None
        if variable in local:
            return local[variable].value
        registered = custom_properties.get(variable)
        if registered is not None and registered.initial_value is not None:
            return registered.initial_value.value
        return None

    return rewrite_value(value, on_function=on_function)


def make_inline_styles_for(
    rules: list[StyleRule], custom_properties: dict[str, CustomProperty]
) -> str:
    """Serialize the declarations of *rules*, in order, as a style string.

    Custom properties are not emitted.  ``var()`` references resolve against
    custom properties declared in the same rules first, then against the
    ``initial-value`` of ``@property`` registrations; anything else is left
    as written.
    """
    local: dict[str, Declaration] = {}
    for rule in rules:
        for decl in rule.walk_declarations():
            if decl.is_custom_property:
                local[decl.prop] = decl

    styles = []
    for rule in rules:
        for decl in rule.declarations:
            if decl.is_custom_property:
                continue
            value = decl.value
            if "var(" in value:
                value = _resolve_variables(value, local, custom_properties)
            important = " !important" if decl.important else ""
            styles.append(f"{decl.prop}: {value}{important};")
    return " ".join(styles)


def combine_styles(*styles: Optional[str]) -> str:
    """Join style strings with ``;``, dropping empty ones and trailing semicolons.

    >>> combine_styles("color:red ", " ", "font-size:14px;")
    'color:red;font-size:14px'
    """
    parts = []
    for style in styles:
        if not style:
            continue
        style = style.strip().rstrip(";").strip()
        if style:
            parts.append(style)
    return ";".join(parts)
