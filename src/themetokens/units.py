"""
Unit formatting for numeric tokens.

Numbers in sizing categories get a ``px`` suffix, or are converted to
``rem`` when the export enables rem output for a matching category.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import ExportOptions

ROOT_FONT_SIZE_PX = 16

PX_CATEGORIES = frozenset({"spacing", "font", "size", "grid", "radius", "width", "height"})

# Path segments that also satisfy the ``font`` rem toggle
FONT_ALIASES = frozenset({"typography", "heading"})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def number_to_str(value: int | float) -> str:
    """Render a number the way it appears in CSS (``8``, not ``8.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def round_to_max_3_decimals(value: float) -> int | str:
    """Round half-up to 3 decimals.

    Integral results come back as ``int``; anything else as the shortest
    decimal string with no trailing zeros.
    """
    rounded = math.floor(value * 1000 + 0.5) / 1000
    if rounded.is_integer():
        return int(rounded)
    return repr(rounded)


def convert_px_to_rem(px: float) -> str:
    return f"{round_to_max_3_decimals(px / ROOT_FONT_SIZE_PX)}rem"


def should_use_pixel_unit(parts: Sequence[str], value: Any) -> bool:
    """True for a nonzero number whose path contains a sizing category."""
    if not _is_number(value) or value == 0:
        return False
    return any(part.lower() in PX_CATEGORIES for part in parts)


def should_use_rem(parts: Sequence[str], options: ExportOptions | None) -> bool:
    """True when rem output is enabled and a toggled category is in the path."""
    if options is None or not options.use_rem:
        return False
    lowered = {part.lower() for part in parts}
    for category, enabled in options.rem_collections.items():
        if not enabled:
            continue
        if category in lowered:
            return True
        if category == "font" and lowered & FONT_ALIASES:
            return True
    return False


def format_value(
    parts: Sequence[str],
    value: Any,
    options: ExportOptions | None = None,
    scope: Sequence[str] = (),
) -> Any:
    """Format a numeric token value for output.

    Args:
        parts: Lowercased name segments of the variable.
        value: Raw literal value. Non-numbers pass through unchanged.
        options: Export options carrying the rem toggles.
        scope: Extra segments (such as the collection name) that only count
            towards the rem decision.

    Returns:
        A ``rem`` string, a ``px`` string, or the value unchanged.
    """
    if not _is_number(value):
        return value
    if should_use_rem([*parts, *scope], options):
        return convert_px_to_rem(value)
    if should_use_pixel_unit(parts, value):
        return f"{number_to_str(value)}px"
    return value
