"""Registry of custom properties declared with ``@property``."""

from __future__ import annotations

from dataclasses import dataclass

from mailcss.stylesheet.model import Declaration, Stylesheet


@dataclass
class CustomProperty:
    syntax: Declaration | None = None
    inherits: Declaration | None = None
    initial_value: Declaration | None = None


def get_custom_properties(stylesheet: Stylesheet) -> dict[str, CustomProperty]:
    """Map ``--name`` to its ``@property`` descriptors."""
    registry: dict[str, CustomProperty] = {}
    for at_rule in stylesheet.walk_at_rules("property"):
        name = at_rule.params.strip()
        if not name.startswith("--"):
            continue
        prop = CustomProperty()
        for decl in at_rule.walk_declarations():
            if decl.prop == "syntax":
                prop.syntax = decl
            elif decl.prop == "inherits":
                prop.inherits = decl
            elif decl.prop == "initial-value":
                prop.initial_value = decl
        registry[name] = prop
    return registry
