"""mailcss model layer -- public type re-exports."""

from mailcss.model.diagnostic import Diagnostic, Diagnostics, Severity

__all__ = [
    "Severity",
    "Diagnostic",
    "Diagnostics",
]
