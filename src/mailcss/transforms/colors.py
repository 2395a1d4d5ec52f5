"""Color rewriting: oklch(), color-mix(), space-separated rgb() and hex to rgb()."""

from __future__ import annotations

import math
import string
from dataclasses import dataclass

from tinycss2 import ast

from mailcss.calc.evaluator import format_number
from mailcss.errors import MalformedColorError
from mailcss.stylesheet.model import Declaration
from mailcss.stylesheet.values import rewrite_value, significant_tokens, tokenize

__all__ = ["convert_colors", "oklch_to_rgb", "format_rgb", "hex_to_rgb"]

LAB_TO_LMS = {
    "l": (0.3963377773761749, 0.2158037573099136),
    "m": (-0.1055613458156586, -0.0638541728258133),
    "s": (-0.0894841775298119, -1.2914855480194092),
}
LMS_TO_RGB = {
    "r": (4.0767416360759583, -3.3077115392580629, 0.2309699031821043),
    "g": (-1.2684379732850315, 2.6097573492876882, -0.341319376002657),
    "b": (-0.0041960761386756, -0.7034186179359362, 1.7076146940746117),
}

_COLOR_FUNCTIONS = ("oklch(", "rgb(", "color-mix(", "#")


@dataclass
class Channels:
    """Parsed color channels; ``None`` where the value was not given."""

    first: float | None = None
    second: float | None = None
    third: float | None = None
    alpha: float | None = None

    @property
    def complete(self) -> bool:
        return None not in (self.first, self.second, self.third)


def _linear_to_srgb(value: float) -> float:
    magnitude = abs(value)
    sign = -1 if value < 0 else 1
    if magnitude > 0.0031308:
        return sign * (magnitude ** (1 / 2.4) * 1.055 - 0.055)
    return value * 12.92


def _clamp(value: float, low: float = 0, high: float = 255) -> float:
    return min(max(value, low), high)


def oklch_to_rgb(lightness: float, chroma: float, hue: float) -> tuple[float, float, float]:
    """Convert OKLCH to sRGB channels in [0, 255] (not rounded)."""
    a = chroma * math.cos(hue / 180 * math.pi)
    b = chroma * math.sin(hue / 180 * math.pi)

    lms = {
        key: (lightness + coeffs[0] * a + coeffs[1] * b) ** 3
        for key, coeffs in LAB_TO_LMS.items()
    }
    channels = []
    for key in ("r", "g", "b"):
        coeffs = LMS_TO_RGB[key]
        linear = coeffs[0] * lms["l"] + coeffs[1] * lms["m"] + coeffs[2] * lms["s"]
        channels.append(_clamp(255 * _linear_to_srgb(linear)))
    return channels[0], channels[1], channels[2]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_rgb(r: float, g: float, b: float, alpha: float | None = None) -> str:
    channels = f"{_round_half_up(r)}, {_round_half_up(g)}, {_round_half_up(b)}"
    if alpha is not None and alpha != 1:
        return f"rgb({channels}, {format_number(alpha)})"
    return f"rgb({channels})"


def hex_to_rgb(digits: str) -> tuple[int, int, int, float | None] | None:
    """Decode 3, 4, 6 or 8 hex digits; ``None`` for anything else."""
    if len(digits) not in (3, 4, 6, 8) or any(c not in string.hexdigits for c in digits):
        return None
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else None
    return r, g, b, alpha


def _parse_oklch(arguments: str) -> Channels:
    channels = Channels()
    for token in significant_tokens(tokenize(arguments)):
        if isinstance(token, ast.PercentageToken):
            if channels.first is None:
                channels.first = token.value / 100
            elif channels.alpha is None:
                channels.alpha = token.value / 100
        elif isinstance(token, ast.DimensionToken) and token.lower_unit == "deg":
            if channels.third is None:
                channels.third = token.value
        elif isinstance(token, ast.NumberToken):
            if channels.first is None:
                channels.first = token.value
            elif channels.second is None:
                channels.second = token.value
            elif channels.third is None:
                channels.third = token.value
            elif channels.alpha is None:
                channels.alpha = token.value
    return channels


def _parse_rgb(tokens: list[ast.Node]) -> Channels:
    channels = Channels()
    for token in significant_tokens(tokens):
        if isinstance(token, ast.PercentageToken):
            percent = True
        elif isinstance(token, ast.NumberToken):
            percent = False
        else:
            continue
        value = token.value
        if channels.first is None:
            channels.first = value * 255 / 100 if percent else value
        elif channels.second is None:
            channels.second = value * 255 / 100 if percent else value
        elif channels.third is None:
            channels.third = value * 255 / 100 if percent else value
        elif channels.alpha is None:
            channels.alpha = value / 100 if percent else value
    return channels


def _color_mix(arguments: str) -> str | None:
    """``color-mix(in <space>, rgb(...) P%, transparent)`` to ``rgb(r, g, b, P/100)``."""
    tokens = significant_tokens(tokenize(arguments))
    if not tokens:
        return None
    last = tokens[-1]
    if not isinstance(last, ast.IdentToken) or last.lower_value != "transparent":
        return None

    rgb: ast.FunctionBlock | None = None
    percentage: float | None = None
    for token in tokens:
        if isinstance(token, ast.FunctionBlock) and token.lower_name == "rgb":
            rgb = token
        elif isinstance(token, ast.PercentageToken):
            percentage = token.value / 100

    if rgb is None or percentage is None:
        return None
    channels = _parse_rgb(rgb.arguments)
    if not channels.complete:
        return None
    return format_rgb(channels.first, channels.second, channels.third, percentage)  # type: ignore[arg-type]


def convert_colors(value: str, declaration: Declaration | None = None) -> str:
    """Rewrite every supported color in *value* as a comma-separated ``rgb()``.

    Raises:
        MalformedColorError: If an ``oklch()`` or ``rgb()`` is missing channels.
    """
    if not any(marker in value.lower() for marker in _COLOR_FUNCTIONS):
        return value

    def on_function(name: str, arguments: str) -> str | None:
        if name == "oklch":
            channels = _parse_oklch(arguments)
            if not channels.complete:
                raise MalformedColorError(
                    "Could not determine the parameters of an oklch() function.",
                    declaration,
                )
            r, g, b = oklch_to_rgb(channels.first, channels.second, channels.third)  # type: ignore[arg-type]
            return format_rgb(r, g, b, channels.alpha)
        if name == "rgb":
            channels = _parse_rgb(tokenize(arguments))
            if not channels.complete:
                raise MalformedColorError(
                    "Could not determine the parameters of an rgb() function.",
                    declaration,
                )
            return format_rgb(channels.first, channels.second, channels.third, channels.alpha)  # type: ignore[arg-type]
        if name == "color-mix":
            return _color_mix(arguments)
        return None

    def on_token(token: ast.Node) -> str | None:
        if isinstance(token, ast.HashToken):
            decoded = hex_to_rgb(token.value)
            if decoded is not None:
                return format_rgb(*decoded)
        return None

    return rewrite_value(value, on_function=on_function, on_token=on_token)
