"""
Color and spacing preset builders.

Presets always reference the variable's own custom property, never the
primitive an alias resolves to, so palette entries follow semantic tokens.
"""

from __future__ import annotations

import logging
import re

from .aliases import AliasResolver
from .color import to_css_color
from .models import ColorPreset, ColorPresetEntry, SpacingPreset, VariableType
from .naming import capitalize_first, css_var_ref, name_parts
from .source import VariableSource

logger = logging.getLogger(__name__)

PRIMITIVES_COLLECTION = "primitives"
SPACING_COLLECTION = "spacing"

# Primitives variables with one of these segments count as spacing
SPACING_SEGMENTS = frozenset({"spacing", "space", "gap", "margin", "padding", "size"})

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_LABEL_SEPARATORS = re.compile(r"[/\-_\s]+")
_FLUID_NAME = re.compile(r"^(\d+)_(\d+)$")
_CAMEL = re.compile(r"([a-z])([A-Z])")


def _slugify(text: str) -> str:
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def _title(word: str) -> str:
    return capitalize_first(word.lower())


# =============================================================================
# Color presets
# =============================================================================


def color_preset_label(name: str) -> str:
    return " ".join(_title(word) for word in _LABEL_SEPARATORS.split(name) if word)


async def build_color_presets(
    source: VariableSource, selected_colors: list[str] | None = None
) -> list[ColorPreset]:
    """Palette entries for every COLOR variable outside Primitives.

    Args:
        source: Variable source.
        selected_colors: When given, only these variable ids are included.

    Returns:
        Presets sorted by display name.
    """
    selected = set(selected_colors) if selected_colors is not None else None
    presets: list[ColorPreset] = []

    for collection in await source.get_collections():
        if collection.key == PRIMITIVES_COLLECTION:
            continue
        mode = collection.first_mode
        if mode is None:
            continue

        for variable_id in collection.variable_ids:
            if selected is not None and variable_id not in selected:
                continue
            variable = await source.get_variable(variable_id)
            if variable is None or variable.resolved_type != VariableType.COLOR:
                continue
            if mode.mode_id not in variable.values_by_mode:
                continue
            presets.append(
                ColorPreset(
                    name=color_preset_label(variable.name),
                    slug=_slugify(variable.name),
                    color=css_var_ref(["color", *name_parts(variable.name)]),
                )
            )

    return sorted(presets, key=lambda p: p.name.casefold())


async def build_all_color_presets(source: VariableSource) -> list[ColorPresetEntry]:
    """Preset catalog across all collections, with resolved preview colors.

    Returns:
        Entries sorted by collection name, then display name.
    """
    resolver = AliasResolver(source)
    entries: list[ColorPresetEntry] = []

    for collection in await source.get_collections():
        mode = collection.first_mode
        if mode is None:
            continue
        for variable_id in collection.variable_ids:
            variable = await source.get_variable(variable_id)
            if variable is None or variable.resolved_type != VariableType.COLOR:
                continue
            if mode.mode_id not in variable.values_by_mode:
                continue

            raw = await resolver.resolve_value(variable, mode.mode_id)
            entries.append(
                ColorPresetEntry(
                    id=variable.id,
                    name=color_preset_label(variable.name),
                    slug=_slugify(variable.name),
                    color=css_var_ref(["color", *name_parts(variable.name)]),
                    collection_name=collection.name,
                    resolved_color=to_css_color(raw),
                )
            )

    return sorted(entries, key=lambda e: (e.collection_name.casefold(), e.name.casefold()))


# =============================================================================
# Spacing presets
# =============================================================================


def spacing_preset_label(name: str) -> str:
    """Display label from the last name segment.

    ``MAX_MIN`` numeric names render as ``Fluid (MIN → MAX)``, or the bare
    number when both are equal.
    """
    last = name.split("/")[-1]
    fluid = _FLUID_NAME.match(last)
    if fluid:
        max_value, min_value = fluid.groups()
        if max_value == min_value:
            return max_value
        return f"Fluid ({min_value} → {max_value})"

    words = [w for w in re.split(r"[-_\s]+", _CAMEL.sub(r"\1 \2", last)) if w]
    return " ".join(_title(word) for word in words)


def spacing_preset_slug(name: str) -> str:
    return _slugify(name.split("/")[-1])


async def build_spacing_presets(source: VariableSource) -> list[SpacingPreset]:
    """Spacing sizes from the Spacing collection and spacing-named primitives."""
    presets: list[SpacingPreset] = []

    for collection in await source.get_collections():
        is_spacing = collection.key == SPACING_COLLECTION
        is_primitives = collection.key == PRIMITIVES_COLLECTION
        if not (is_spacing or is_primitives):
            continue
        mode = collection.first_mode
        if mode is None:
            continue

        for variable_id in collection.variable_ids:
            variable = await source.get_variable(variable_id)
            if variable is None or variable.resolved_type != VariableType.FLOAT:
                continue
            if mode.mode_id not in variable.values_by_mode:
                continue
            if is_primitives and not SPACING_SEGMENTS.intersection(variable.parts):
                continue

            css_parts = [part.replace("_", "-") for part in variable.parts]
            if is_spacing and not variable.name.lower().startswith("spacing/"):
                css_parts = ["spacing", *css_parts]

            presets.append(
                SpacingPreset(
                    name=spacing_preset_label(variable.name),
                    slug=spacing_preset_slug(variable.name),
                    size=css_var_ref(css_parts),
                )
            )

    return sorted(presets, key=lambda p: p.name.casefold())
