"""Settings for a render: unit base, iteration cap, stripped attributes, DOCTYPE."""

from __future__ import annotations

from dataclasses import dataclass

XHTML_TRANSITIONAL_DOCTYPE = (
    '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" '
    '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">'
)


@dataclass(frozen=True)
class RenderConfig:
    base_font_size: float = 16
    max_variable_iterations: int = 10
    stripped_attributes: tuple[str, ...] = ("onload", "onerror")
    doctype: str = XHTML_TRANSITIONAL_DOCTYPE
