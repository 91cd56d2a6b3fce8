"""
Color codec.

Converts between the host's normalized color records (``r``, ``g``, ``b`` and
optional ``a``, each in [0, 1]) and CSS color strings.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from .errors import InvalidColorFormat

_RGB = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$")
_RGBA = re.compile(r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*([\d.]+)\s*\)$")
_HSL = re.compile(r"^hsl\(\s*(\d{1,3})\s*,\s*(\d{1,3})%\s*,\s*(\d{1,3})%\s*\)$")
_HSLA = re.compile(
    r"^hsla\(\s*(\d{1,3})\s*,\s*(\d{1,3})%\s*,\s*(\d{1,3})%\s*,\s*([\d.]+)\s*\)$"
)
_HEX = re.compile(r"^#([A-Fa-f0-9]{3}|[A-Fa-f0-9]{6})$")
_FLOAT_OBJECT = re.compile(
    r"^\{\s*r:\s*([\d.]+),\s*g:\s*([\d.]+),\s*b:\s*([\d.]+)(?:,\s*opacity:\s*([\d.]+))?\s*\}$"
)


def _channel(record: Mapping[str, Any], key: str) -> float | None:
    value = record.get(key)
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    if math.isnan(value):
        return None
    return float(value)


def _to_byte(value: float) -> int:
    # half-up
    return math.floor(max(0.0, min(1.0, value)) * 255 + 0.5)


def to_css_color(color: Any) -> str | None:
    """Encode a color record as ``#rrggbb`` or ``rgba(...)``.

    Strings pass through unchanged. Anything that is not a record with
    numeric ``r``, ``g`` and ``b`` returns ``None`` so callers can omit the
    property.
    """
    if isinstance(color, str):
        return color
    if not isinstance(color, Mapping):
        return None

    channels = [_channel(color, key) for key in ("r", "g", "b")]
    if any(channel is None for channel in channels):
        return None

    alpha = _channel(color, "a")
    if alpha is None:
        alpha = 1.0

    if alpha != 1:
        rgb = ", ".join(str(_to_byte(c)) for c in channels)
        return f"rgba({rgb}, {alpha:.4f})"

    return "#" + "".join(f"{_to_byte(c):02x}" for c in channels)


def hsl_to_rgb(h: float, s: float, lightness: float) -> dict[str, float]:
    """Convert HSL (each in [0, 1]) to a normalized RGB record."""
    if s == 0:
        return {"r": lightness, "g": lightness, "b": lightness}

    def hue_to_rgb(p: float, q: float, t: float) -> float:
        if t < 0:
            t += 1
        if t > 1:
            t -= 1
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    q = lightness * (1 + s) if lightness < 0.5 else lightness + s - lightness * s
    p = 2 * lightness - q
    return {
        "r": hue_to_rgb(p, q, h + 1 / 3),
        "g": hue_to_rgb(p, q, h),
        "b": hue_to_rgb(p, q, h - 1 / 3),
    }


def from_css_color(text: str) -> dict[str, float]:
    """Parse a CSS color string into a normalized record.

    Accepts ``rgb()``, ``rgba()``, ``hsl()``, ``hsla()``, 3 or 6 digit hex,
    and the raw ``{r: .., g: .., b: ..[, opacity: ..]}`` literal.

    Raises:
        InvalidColorFormat: If the string matches none of the forms.
    """
    color = text.strip()

    if match := _RGB.match(color):
        r, g, b = (int(v) / 255 for v in match.groups())
        return {"r": r, "g": g, "b": b}

    if match := _RGBA.match(color):
        r, g, b = (int(v) / 255 for v in match.groups()[:3])
        return {"r": r, "g": g, "b": b, "a": float(match.group(4))}

    if match := _HSL.match(color):
        h, s, lightness = (int(v) for v in match.groups())
        return hsl_to_rgb(h / 360, s / 100, lightness / 100)

    if match := _HSLA.match(color):
        h, s, lightness = (int(v) for v in match.groups()[:3])
        record = hsl_to_rgb(h / 360, s / 100, lightness / 100)
        record["a"] = float(match.group(4))
        return record

    if match := _HEX.match(color):
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return {
            "r": int(digits[0:2], 16) / 255,
            "g": int(digits[2:4], 16) / 255,
            "b": int(digits[4:6], 16) / 255,
        }

    if match := _FLOAT_OBJECT.match(color):
        try:
            r, g, b = (float(v) for v in match.groups()[:3])
            record = {"r": r, "g": g, "b": b}
            if match.group(4) is not None:
                record["a"] = float(match.group(4))
        except ValueError as e:
            raise InvalidColorFormat(f"Invalid color format: {text!r}") from e
        return record

    raise InvalidColorFormat(f"Invalid color format: {text!r}")
