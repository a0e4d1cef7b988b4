"""Colour normalisation — any resolved CSS colour → canonical hex (+ alpha).

State bags carry colours as the Frame Source reported them, which is
usually ``rgb(...)``/``rgba(...)``. Descriptors store ``#rrggbb`` so two
recordings of the same colour compare equal.
"""

from __future__ import annotations

import colorsys
import re
from dataclasses import dataclass

from motionsight.utils.math_helpers import clamp, round_to

_NUM = r"(\d+(?:\.\d+)?)"
_ALPHA = r"(\d*\.?\d+%?)"

_RGB_COMMA_RE = re.compile(
    rf"rgba?\s*\(\s*{_NUM}\s*,\s*{_NUM}\s*,\s*{_NUM}\s*(?:,\s*{_ALPHA})?\s*\)", re.IGNORECASE
)
_RGB_SPACE_RE = re.compile(
    rf"rgba?\s*\(\s*{_NUM}\s+{_NUM}\s+{_NUM}\s*(?:/\s*{_ALPHA})?\s*\)", re.IGNORECASE
)
_HSL_RE = re.compile(
    rf"hsla?\s*\(\s*{_NUM}(?:deg)?\s*,?\s*{_NUM}%?\s*,?\s*{_NUM}%?\s*(?:[,/]\s*{_ALPHA})?\s*\)",
    re.IGNORECASE,
)
_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)

# Keywords passed through untouched.
_KEYWORDS = {"transparent", "inherit", "currentcolor", "initial", "unset"}

NAMED_COLORS: dict[str, str] = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "gray": "#808080",
    "grey": "#808080",
    "orange": "#ffa500",
    "purple": "#800080",
    "pink": "#ffc0cb",
}


@dataclass(frozen=True)
class NormalizedColor:
    hex: str
    alpha: float | None = None

    @property
    def is_keyword(self) -> bool:
        return not self.hex.startswith("#")


def _to_hex(r: float, g: float, b: float) -> str:
    return "#" + "".join(f"{int(clamp(round(c), 0, 255)):02x}" for c in (r, g, b))


def _parse_alpha(token: str | None) -> float | None:
    if token is None:
        return None
    if token.endswith("%"):
        return float(token[:-1]) / 100
    return float(token)


def _with_alpha(hex_value: str, alpha: float | None) -> NormalizedColor:
    if alpha is not None and alpha < 1:
        return NormalizedColor(hex_value, round_to(clamp(alpha, 0.0, 1.0), 2))
    return NormalizedColor(hex_value)


def normalize_color(value: str | None) -> NormalizedColor | None:
    """Normalise a CSS colour. Unrecognised strings pass through as-is."""
    if value is None:
        return None
    text = value.strip().lower()
    if not text:
        return None

    if text in _KEYWORDS:
        return NormalizedColor(text)
    if text in NAMED_COLORS:
        return NormalizedColor(NAMED_COLORS[text])

    m = _HEX_RE.match(text)
    if m:
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else None
        return _with_alpha(_to_hex(r, g, b), alpha)

    m = _RGB_COMMA_RE.match(text) or _RGB_SPACE_RE.match(text)
    if m:
        r, g, b = (float(m.group(i)) for i in (1, 2, 3))
        return _with_alpha(_to_hex(r, g, b), _parse_alpha(m.group(4)))

    m = _HSL_RE.match(text)
    if m:
        h = (float(m.group(1)) % 360) / 360
        s = clamp(float(m.group(2)) / 100, 0.0, 1.0)
        lightness = clamp(float(m.group(3)) / 100, 0.0, 1.0)
        r, g, b = colorsys.hls_to_rgb(h, lightness, s)
        return _with_alpha(_to_hex(r * 255, g * 255, b * 255), _parse_alpha(m.group(4)))

    return NormalizedColor(value.strip())


def is_transparent(value: str | None) -> bool:
    normalized = normalize_color(value)
    if normalized is None:
        return True
    return normalized.hex == "transparent" or normalized.alpha == 0


def to_css(normalized: NormalizedColor) -> str:
    """Format back to CSS: ``#rrggbb`` or ``rgba(r, g, b, a)`` when translucent."""
    if normalized.is_keyword or normalized.alpha is None:
        return normalized.hex
    r, g, b = (int(normalized.hex[i : i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r}, {g}, {b}, {normalized.alpha})"


def canonical_color(value: str | None) -> str | None:
    """Shortcut used by state bags: normalise then format, None if transparent."""
    if is_transparent(value):
        return None
    normalized = normalize_color(value)
    return to_css(normalized) if normalized is not None else None
