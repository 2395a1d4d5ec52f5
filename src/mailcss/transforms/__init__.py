from __future__ import annotations

from mailcss.config import RenderConfig
from mailcss.model.diagnostic import Diagnostics
from mailcss.stylesheet.model import Stylesheet
from mailcss.transforms.base import StylesheetTransform
from mailcss.transforms.calc import CalcResolutionTransform
from mailcss.transforms.declarations import DeclarationSanitizeTransform
from mailcss.transforms.non_inlinable import sanitize_non_inlinable_rules
from mailcss.transforms.variables import (
    VariableResolution,
    VariableResolutionTransform,
    resolve_all_css_variables,
)

__all__ = [
    "StylesheetTransform",
    "CalcResolutionTransform",
    "DeclarationSanitizeTransform",
    "VariableResolution",
    "VariableResolutionTransform",
    "apply_transforms",
    "build_transforms",
    "resolve_all_css_variables",
    "sanitize_non_inlinable_rules",
    "sanitize_stylesheet",
]


def build_transforms(config: RenderConfig | None = None) -> list[StylesheetTransform]:
    """The built-in pipeline: variables, then calc(), then per-declaration fixes."""
    config = config or RenderConfig()
    return [
        VariableResolutionTransform(config.max_variable_iterations),
        CalcResolutionTransform(config.base_font_size),
        DeclarationSanitizeTransform(config.base_font_size),
    ]


def apply_transforms(
    stylesheet: Stylesheet,
    diagnostics: Diagnostics,
    transforms: list[StylesheetTransform] | None = None,
    custom_transforms: list[StylesheetTransform] | None = None,
) -> Stylesheet:
    """Apply *transforms* (the built-in pipeline by default) and any custom ones."""
    steps = list(transforms) if transforms is not None else build_transforms()
    if custom_transforms:
        steps.extend(custom_transforms)
    for t in steps:
        stylesheet = t.apply(stylesheet, diagnostics)
    return stylesheet


def sanitize_stylesheet(
    stylesheet: Stylesheet,
    diagnostics: Diagnostics,
    config: RenderConfig | None = None,
) -> VariableResolution:
    """Run the built-in pipeline in place; returns the variable resolution outcome."""
    transforms = build_transforms(config)
    apply_transforms(stylesheet, diagnostics, transforms)
    variables = transforms[0]
    assert isinstance(variables, VariableResolutionTransform)
    assert variables.last_result is not None
    return variables.last_result
