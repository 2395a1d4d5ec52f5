"""Error hierarchy for the mailcss rendering engine."""

from __future__ import annotations

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from mailcss.stylesheet.model import Declaration


class MailcssError(Exception):
    """Base error for all mailcss errors."""


class ParseError(MailcssError):
    """Raised when CSS or HTML source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class MalformedColorError(MailcssError):
    """Raised when the channels of an ``oklch()`` or ``rgb()`` cannot be read."""

    def __init__(self, message: str, declaration: Declaration | None = None):
        self.declaration = declaration
        if declaration is not None:
            message = f"{message} ({declaration.prop}: {declaration.value})"
        super().__init__(message)


class MissingHeadError(MailcssError):
    """Raised when non-inlinable rules exist but the document has no ``<head>``."""

    def __init__(self, classes: Iterable[str]):
        self.classes = list(classes)
        super().__init__(
            "You are trying to use the following classes that cannot be inlined: "
            f"{' '.join(self.classes)}.\n"
            "Media queries and pseudo-classes only work from a <style> tag inside "
            "a <head> element, and no <head> element was found in the document. "
            "Add a <head> element at any depth."
        )
