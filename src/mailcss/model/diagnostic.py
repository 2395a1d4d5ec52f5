"""Diagnostic model: non-fatal findings collected during a single render."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about the rendered document or its stylesheet.

    Attributes:
        code: Identifier for the kind of finding (``unknown-class``, ...).
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        subject: The class name, variable or selector involved, if any.
    """

    code: str
    severity: Severity
    message: str
    subject: str | None = None

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [{self.subject}]" if self.subject else ""
        return f"{self.severity.value}{location}: {self.message}"


class Diagnostics:
    """Accumulates diagnostics for one render call.

    Every recorded diagnostic is also emitted on the module logger at a level
    matching its severity.
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> Diagnostic:
        self._items.append(diagnostic)
        logger.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic.message)
        return diagnostic

    def warn(self, code: str, message: str, subject: str | None = None) -> Diagnostic:
        return self.add(Diagnostic(code, Severity.WARNING, message, subject))

    def info(self, code: str, message: str, subject: str | None = None) -> Diagnostic:
        return self.add(Diagnostic(code, Severity.INFO, message, subject))

    @property
    def items(self) -> list[Diagnostic]:
        return list(self._items)

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self._items if d.is_warning]

    def by_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self._items if d.code == code]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)
