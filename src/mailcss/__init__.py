"""mailcss: resolve and inline CSS into email-safe HTML."""

from mailcss.config import RenderConfig
from mailcss.errors import MailcssError, MalformedColorError, MissingHeadError, ParseError
from mailcss.generator import CssGenerator, sanitize_custom_css
from mailcss.model.diagnostic import Diagnostic, Diagnostics, Severity
from mailcss.renderer import Renderer, RenderResult, render

__version__ = "0.1.0"

__all__ = [
    "CssGenerator",
    "Diagnostic",
    "Diagnostics",
    "MailcssError",
    "MalformedColorError",
    "MissingHeadError",
    "ParseError",
    "RenderConfig",
    "RenderResult",
    "Renderer",
    "Severity",
    "render",
    "sanitize_custom_css",
]
