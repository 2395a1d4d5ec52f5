"""Token-level rewriting of declaration values.

Values are tokenized with tinycss2 and rebuilt piece by piece, so replacing
``calc(...)`` or ``var(...)`` never touches text that merely looks the same
somewhere else in the value.
"""

from __future__ import annotations

from typing import Callable, Optional

import tinycss2
from tinycss2 import ast

__all__ = [
    "FunctionCallback",
    "TokenCallback",
    "rewrite_value",
    "significant_tokens",
    "split_var_arguments",
    "tokenize",
]

# Called with the lower-cased function name and its already rewritten
# arguments; returns replacement text, or None to keep the function.
FunctionCallback = Callable[[str, str], Optional[str]]
# Called with a plain token; returns replacement text, or None to keep it.
TokenCallback = Callable[[ast.Node], Optional[str]]

_BLOCK_DELIMITERS = {
    "() block": ("(", ")"),
    "[] block": ("[", "]"),
    "{} block": ("{", "}"),
}


def tokenize(value: str) -> list[ast.Node]:
    return tinycss2.parse_component_value_list(value, skip_comments=True)


def significant_tokens(tokens: list[ast.Node]) -> list[ast.Node]:
    """Drop whitespace and comments."""
    return [t for t in tokens if t.type not in ("whitespace", "comment")]


def _rewrite_tokens(
    tokens: list[ast.Node],
    on_function: FunctionCallback | None,
    on_token: TokenCallback | None,
) -> str:
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, ast.FunctionBlock):
            arguments = _rewrite_tokens(token.arguments, on_function, on_token)
            replacement = None
            if on_function is not None:
                replacement = on_function(token.lower_name, arguments)
            if replacement is None:
                replacement = f"{tinycss2.serialize_identifier(token.name)}({arguments})"
            parts.append(replacement)
        elif token.type in _BLOCK_DELIMITERS:
            opening, closing = _BLOCK_DELIMITERS[token.type]
            inner = _rewrite_tokens(token.content, on_function, on_token)
            parts.append(f"{opening}{inner}{closing}")
        else:
            replacement = on_token(token) if on_token is not None else None
            parts.append(token.serialize() if replacement is None else replacement)
    return "".join(parts)


def rewrite_value(
    value: str,
    on_function: FunctionCallback | None = None,
    on_token: TokenCallback | None = None,
) -> str:
    """Rebuild *value*, letting callbacks replace functions and tokens.

    Functions are visited innermost first: by the time ``on_function`` sees
    ``color-mix(...)`` its ``oklch(...)`` argument has already been rewritten.
    """
    return _rewrite_tokens(tokenize(value), on_function, on_token)


def split_var_arguments(arguments: str) -> tuple[str, str | None]:
    """Split the inside of ``var()`` into the variable name and its fallback.

    The fallback is ``None`` when absent or empty.
    """
    tokens = tokenize(arguments)
    fallback = None
    for index, token in enumerate(tokens):
        if token == ",":
            fallback = tinycss2.serialize(tokens[index + 1 :]).strip() or None
            tokens = tokens[:index]
            break
    names = significant_tokens(tokens)
    first = names[0] if names else None
    return (first.value if isinstance(first, ast.IdentToken) else ""), fallback
