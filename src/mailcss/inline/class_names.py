"""DOM-safe class names for rules that stay in the ``<style>`` block."""

from __future__ import annotations

import re

_REPLACEMENTS = (
    ("+", "plus"),
    ("[", ""),
    ("]", ""),
    ("(", ""),
    (")", ""),
    ("%", "pc"),
    ("!", "imprtnt"),
    (">", "gt"),
    ("<", "lt"),
    ("=", "eq"),
)

_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9\-_]")


def sanitize_class_name(name: str) -> str:
    """Spell out or drop characters some email clients reject in class names.

    >>> sanitize_class_name("min-height-[calc(25px+100%-20%*2/4)]")
    'min-height-calc25pxplus100pc-20pc_2_4'
    """
    for char, replacement in _REPLACEMENTS:
        name = name.replace(char, replacement)
    return _UNSAFE_RE.sub("_", name)
