"""
Typography preset builder.

Converts host text styles into theme.json typography presets. A facet bound
to a variable is always emitted as a reference to that variable; otherwise
the literal value is formatted for CSS, matched against existing font
variables where possible.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .color import to_css_color
from .models import ExportOptions, LiteralValue, TextStyle, Variable
from .naming import css_var_ref, label, name_parts, slug
from .source import VariableSource, list_variables
from .units import format_value, number_to_str, round_to_max_3_decimals

logger = logging.getLogger(__name__)

# =============================================================================
# Lookup tables
# =============================================================================

FONT_WEIGHT_BY_STYLE = {
    "thin": 100,
    "extralight": 200,
    "extra light": 200,
    "ultra light": 200,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "semi bold": 600,
    "demi bold": 600,
    "bold": 700,
    "extrabold": 800,
    "extra bold": 800,
    "ultra bold": 800,
    "black": 900,
    "heavy": 900,
}

FONT_WEIGHT_NAMES = {
    100: "thin",
    200: "extra-light",
    300: "light",
    400: "regular",
    500: "medium",
    600: "semi-bold",
    700: "bold",
    800: "extra-bold",
    900: "black",
}

TEXT_TRANSFORM = {
    "UPPER": "uppercase",
    "LOWER": "lowercase",
    "TITLE": "capitalize",
    "SMALL_CAPS": "small-caps",
    "SMALL_CAPS_FORCED": "small-caps",
}
TEXT_DECORATION = {"UNDERLINE": "underline", "STRIKETHROUGH": "line-through"}
TEXT_DECORATION_STYLE = {"DASHED": "dashed", "DOTTED": "dotted", "WAVY": "wavy"}
TEXT_DECORATION_SKIP_INK = {"NONE": "none", "ALL": "all"}
LEADING_TRIM = {"NONE": "none", "BOTH": "both", "CAP": "start", "ALPHABETIC": "end"}

# Enumerated facets: (style attribute, host facet key, output key, no-op value, table)
ENUM_FACETS = (
    ("text_case", "textCase", "textTransform", "ORIGINAL", TEXT_TRANSFORM),
    ("text_decoration", "textDecoration", "textDecoration", "NONE", TEXT_DECORATION),
    (
        "text_decoration_style",
        "textDecorationStyle",
        "textDecorationStyle",
        "SOLID",
        TEXT_DECORATION_STYLE,
    ),
    (
        "text_decoration_skip_ink",
        "textDecorationSkipInk",
        "textDecorationSkipInk",
        "AUTO",
        TEXT_DECORATION_SKIP_INK,
    ),
    ("leading_trim", "leadingTrim", "leadingTrim", "AUTO", LEADING_TRIM),
)

WP_PRESET_FAMILIES = re.compile(r"^(sans|serif|monospace|system)$", re.IGNORECASE)
_HEADING_SLUG = re.compile(r"^h[1-6]$")
_HEADING_LEVEL = re.compile(r"h([1-6])|heading[- ]([1-6])", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# Helpers
# =============================================================================


def format_font_property_path(parts: list[str], property_type: str) -> list[str]:
    """Ensure a font variable path has both a ``font`` and a property segment.

    >>> format_font_property_path(["size", "large"], "size")
    ['font', 'size', 'large']
    """
    lowered = [part.lower() for part in parts]
    has_property = property_type in lowered
    has_font = "font" in lowered

    if not has_font and not has_property:
        return ["font", property_type, *lowered]
    if has_font and not has_property:
        index = lowered.index("font")
        return [*lowered[: index + 1], property_type, *lowered[index + 1 :]]
    if not has_font and has_property:
        index = lowered.index(property_type)
        return [*lowered[:index], "font", *lowered[index:]]
    return lowered


def heading_selector(style_name: str, style_slug: str) -> str | None:
    if not (_HEADING_SLUG.match(style_slug) or style_slug.startswith("heading-")):
        return None
    match = _HEADING_LEVEL.search(style_name)
    if match is None:
        return None
    return f"h{match.group(1) or match.group(2)}"


def font_weight_from_style(style: str) -> int | None:
    """Map a font style name such as ``"Semi Bold Italic"`` to a weight."""
    key = style.strip().lower()
    if key.isdigit() and 100 <= int(key) <= 900:
        return int(key)
    # Longest names first so "extra bold" is not read as "bold"
    for name in sorted(FONT_WEIGHT_BY_STYLE, key=len, reverse=True):
        if name in key:
            return FONT_WEIGHT_BY_STYLE[name]
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _unit_value(value: Any) -> tuple[str | None, Any]:
    if isinstance(value, dict):
        return value.get("unit"), value.get("value")
    return None, None


def _parse_float(text: str) -> float | None:
    match = re.match(r"\s*(-?\d*\.?\d+)", text)
    return float(match.group(1)) if match else None


def format_line_height(line_height: Any, font_size: float | None) -> Any:
    """Unitless line height, or None when it cannot be computed."""
    if isinstance(line_height, dict):
        unit, value = _unit_value(line_height)
        if value is None:
            return "normal"
        if unit == "PERCENT":
            return round_to_max_3_decimals(value / 100)
        if unit == "PIXELS":
            return round_to_max_3_decimals(value / font_size) if font_size else None
        return round_to_max_3_decimals(value)

    if _is_number(line_height):
        return round_to_max_3_decimals(line_height)

    if isinstance(line_height, str):
        number = _parse_float(line_height)
        if number is None:
            return None
        if line_height.endswith("px"):
            return round_to_max_3_decimals(number / font_size) if font_size else None
        if line_height.endswith("%"):
            return round_to_max_3_decimals(number / 100)
        return round_to_max_3_decimals(number)

    return None


def format_letter_spacing(letter_spacing: Any, font_size: float | None) -> Any:
    """Letter spacing in ``em`` (pixels) or unitless, or None."""
    if isinstance(letter_spacing, dict):
        unit, value = _unit_value(letter_spacing)
        if unit == "PERCENT" and value == 0:
            return 0
        if unit == "PIXELS" and value is not None:
            return f"{round_to_max_3_decimals(value / font_size)}em" if font_size else None
        if value is not None:
            return round_to_max_3_decimals(value)
        return 0

    if _is_number(letter_spacing):
        return round_to_max_3_decimals(letter_spacing)

    if isinstance(letter_spacing, str):
        number = _parse_float(letter_spacing)
        if number is None:
            return None
        if letter_spacing.endswith("px"):
            return f"{round_to_max_3_decimals(number / font_size)}em" if font_size else None
        return round_to_max_3_decimals(number)

    return None


def format_decoration_length(value: Any) -> str | None:
    """``Npx`` for a number or ``{"value": number}``; None otherwise."""
    if isinstance(value, dict):
        value = value.get("value")
    if _is_number(value):
        return f"{number_to_str(value)}px"
    return None


# =============================================================================
# Builder
# =============================================================================


class TypographyBuilder:
    """Builds typography presets from a source's text styles."""

    def __init__(self, source: VariableSource, options: ExportOptions | None = None):
        self.source = source
        self.options = options or ExportOptions()
        self._variables: list[Variable] | None = None

    async def build(self) -> list[dict[str, Any]]:
        styles = await self.source.get_text_styles()
        presets = [await self.build_preset(style) for style in styles]
        logger.debug("Built %d typography presets", len(presets))
        return presets

    async def build_preset(self, style: TextStyle) -> dict[str, Any]:
        style_slug = slug(style.name)
        preset: dict[str, Any] = {"slug": style_slug, "name": label(style.name)}

        selector = heading_selector(style.name, style_slug)
        if selector:
            preset["selector"] = selector

        await self._font_family(style, preset)
        await self._font_size(style, preset)
        await self._font_weight(style, preset)

        if style.line_height is not None:
            await self._set(
                preset,
                "lineHeight",
                style,
                "lineHeight",
                lambda: format_line_height(style.line_height, style.font_size),
                property_type="line-height",
            )

        if style.letter_spacing is not None:
            await self._set(
                preset,
                "letterSpacing",
                style,
                "letterSpacing",
                lambda: format_letter_spacing(style.letter_spacing, style.font_size),
                property_type="letter-spacing",
            )

        for attr, facet, key, noop, table in ENUM_FACETS:
            value = getattr(style, attr)
            if value is None or value == noop:
                continue
            await self._set(preset, key, style, facet, lambda v=value, t=table: t.get(v))

        if style.text_decoration_color:
            await self._set(
                preset,
                "textDecorationColor",
                style,
                "textDecorationColor",
                lambda: to_css_color(style.text_decoration_color),
            )

        if style.text_decoration_thickness is not None:
            await self._set(
                preset,
                "textDecorationThickness",
                style,
                "textDecorationThickness",
                lambda: format_decoration_length(style.text_decoration_thickness),
            )

        if style.text_decoration_offset is not None:
            await self._set(
                preset,
                "textUnderlineOffset",
                style,
                "textDecorationOffset",
                lambda: format_decoration_length(style.text_decoration_offset),
            )

        if style.hanging_punctuation is not None:
            await self._set(
                preset,
                "hangingPunctuation",
                style,
                "hangingPunctuation",
                lambda: "first" if style.hanging_punctuation else "none",
            )

        return preset

    # -------------------------------------------------------------------------
    # Facets
    # -------------------------------------------------------------------------

    async def _set(
        self,
        preset: dict[str, Any],
        key: str,
        style: TextStyle,
        facet: str,
        literal,
        property_type: str | None = None,
    ) -> None:
        """Set ``preset[key]`` from a bound variable or the literal fallback.

        A bound variable that cannot be found leaves the key unset, as does a
        literal fallback that returns None.
        """
        variable_id = style.bound_variable_id(facet)
        if variable_id is not None:
            value = await self._bound_reference(variable_id, property_type)
        else:
            value = literal()
        if value is not None:
            preset[key] = value

    async def _bound_reference(self, variable_id: str, property_type: str | None) -> str | None:
        variable = await self.source.get_variable(variable_id)
        if variable is None:
            logger.debug("Bound variable %s not found", variable_id)
            return None
        parts = variable.parts
        if property_type is not None:
            parts = format_font_property_path(parts, property_type)
        return css_var_ref(parts)

    async def _font_family(self, style: TextStyle, preset: dict[str, Any]) -> None:
        if style.font_family:
            variable_id = style.bound_variable_id("fontFamily")
            if variable_id is not None:
                ref = await self._bound_reference(variable_id, "family")
                if ref is not None:
                    preset["fontFamily"] = ref
            else:
                preset["fontFamily"] = await self.find_font_family(style.font_family)
        elif style.font_name and style.font_name.get("family"):
            preset["fontFamily"] = await self.find_font_family(style.font_name["family"])

    async def _font_size(self, style: TextStyle, preset: dict[str, Any]) -> None:
        if not style.font_size:
            return
        variable_id = style.bound_variable_id("fontSize")
        if variable_id is not None:
            ref = await self._bound_reference(variable_id, "size")
            if ref is not None:
                preset["fontSize"] = ref
            return
        match = await self._find_variable(("font", "size"), style.font_size)
        preset["fontSize"] = match or format_value(["font", "size"], style.font_size, self.options)

    async def _font_weight(self, style: TextStyle, preset: dict[str, Any]) -> None:
        if style.font_weight:
            variable_id = style.bound_variable_id("fontWeight")
            if variable_id is not None:
                ref = await self._bound_reference(variable_id, "weight")
                if ref is not None:
                    preset["fontWeight"] = ref
            else:
                preset["fontWeight"] = await self.find_font_weight(style.font_weight)
        elif style.font_name and style.font_name.get("style"):
            weight = font_weight_from_style(str(style.font_name["style"]))
            if weight is not None:
                preset["fontWeight"] = weight

    # -------------------------------------------------------------------------
    # Variable lookups for literal values
    # -------------------------------------------------------------------------

    async def _all_variables(self) -> list[Variable]:
        if self._variables is None:
            self._variables = await list_variables(self.source)
        return self._variables

    async def _find_variable(self, words: tuple[str, ...], value: Any) -> str | None:
        """Reference to the first variable named with ``words`` holding ``value``."""
        for variable in await self._all_variables():
            lowered = variable.name.lower()
            if not all(word in lowered for word in words):
                continue
            for mode_value in variable.values_by_mode.values():
                if isinstance(mode_value, LiteralValue) and mode_value.value == value:
                    return css_var_ref(name_parts(variable.name))
        return None

    async def find_font_family(self, family: str) -> str:
        """Reference for a font family name.

        Generic families map to WordPress presets, then a matching
        ``font/family`` variable is preferred, then a preset slug is derived
        from the family name.
        """
        match = WP_PRESET_FAMILIES.match(family)
        if match:
            return f"var(--wp--preset--font-family--{match.group(1).lower()})"

        ref = await self._find_variable(("font", "family"), family)
        if ref:
            return ref

        return f"var(--wp--preset--font-family--{_WHITESPACE.sub('-', family.lower())})"

    async def find_font_weight(self, weight: Any) -> Any:
        ref = await self._find_variable(("font", "weight"), weight)
        if ref:
            return ref

        weight_name = FONT_WEIGHT_NAMES.get(weight) if _is_number(weight) else None
        if weight_name:
            for variable in await self._all_variables():
                lowered = variable.name.lower()
                if "font" in lowered and "weight" in lowered and weight_name in lowered:
                    return css_var_ref(name_parts(variable.name))
        return weight


async def build_typography_presets(
    source: VariableSource, options: ExportOptions | None = None
) -> list[dict[str, Any]]:
    return await TypographyBuilder(source, options).build()
