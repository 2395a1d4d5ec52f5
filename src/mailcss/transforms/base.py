"""Base protocol for stylesheet transforms."""

from __future__ import annotations

from typing import Protocol

from mailcss.model.diagnostic import Diagnostics
from mailcss.stylesheet.model import Stylesheet


class StylesheetTransform(Protocol):
    """A stylesheet-to-stylesheet rewriting step."""

    def apply(self, stylesheet: Stylesheet, diagnostics: Diagnostics) -> Stylesheet: ...
