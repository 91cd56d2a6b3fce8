"""
Export orchestration.

Drives one export run end to end:

1. Seed the theme document from ``base_theme`` (or the empty skeleton).
2. Merge the Primitives collection at the root of ``settings.custom``.
3. Process the Color collection per mode, with button specialization and
   one section style file per mode; merge its first mode under ``color``.
4. Merge every other collection under its lowercased name.
5. Append the requested typography, color and spacing presets.

The result is a list of virtual files with ``theme.json`` first.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any

from .button import THEME_SCHEMA, THEME_VERSION, ButtonSpecializer
from .collection import CollectionProcessor
from .errors import ThemeTokensError
from .merge import deep_merge, merge_into_theme
from .models import Collection, ExportOptions, OutputFile
from .naming import css_var_ref
from .presets import build_color_presets, build_spacing_presets
from .source import VariableSource
from .typography import TypographyBuilder

logger = logging.getLogger(__name__)

ROOT_FILE = "theme.json"
PRIMITIVES_COLLECTION = "primitives"
COLOR_COLLECTION = "color"

_WHITESPACE = re.compile(r"\s+")


def default_theme() -> dict[str, Any]:
    return {"$schema": THEME_SCHEMA, "version": THEME_VERSION, "settings": {"custom": {}}}


def seed_theme(base_theme: dict[str, Any] | None) -> dict[str, Any]:
    """Merge ``base_theme`` into the skeleton and ensure ``settings.custom``."""
    theme = default_theme()
    if base_theme:
        theme = deep_merge(theme, base_theme)
    if not isinstance(theme.get("settings"), dict):
        theme["settings"] = {}
    if not isinstance(theme["settings"].get("custom"), dict):
        theme["settings"]["custom"] = {}
    return theme


def section_file(mode_name: str, color_data: dict[str, Any]) -> OutputFile:
    """Style variation for one Color mode, applied to group blocks."""
    mode_slug = _WHITESPACE.sub("-", mode_name.lower())
    return OutputFile(
        file_name=f"styles/section-{mode_slug}.json",
        body={
            "$schema": THEME_SCHEMA,
            "version": THEME_VERSION,
            "title": mode_name,
            "slug": f"section-{mode_slug}",
            "blockTypes": ["core/group"],
            "settings": {"custom": {"color": copy.deepcopy(color_data)}},
            "styles": {
                "color": {
                    "background": css_var_ref(["color", "surface", "primary"]),
                    "text": css_var_ref(["color", "text", "primary"]),
                }
            },
        },
    )


class ThemeExporter:
    """One export run against a variable source.

    All per-run state (button variants already emitted, pending files) lives
    on the instance, so each run should use a new exporter.
    """

    def __init__(self, source: VariableSource, options: ExportOptions | None = None):
        self.source = source
        self.options = options or ExportOptions()
        self.processor = CollectionProcessor(source, self.options)
        self.buttons = ButtonSpecializer()
        self.files: list[OutputFile] = []

    async def export(self) -> list[OutputFile]:
        self.buttons.reset()
        self.files = []

        collections = await self.source.get_collections()
        theme = seed_theme(self.options.base_theme)
        custom = theme["settings"]["custom"]

        primitives = next((c for c in collections if c.key == PRIMITIVES_COLLECTION), None)
        if primitives is not None:
            await self._merge_collection(custom, primitives, section="")

        collection_keys = {c.key for c in collections}
        for collection in collections:
            if collection.key == PRIMITIVES_COLLECTION:
                continue
            try:
                if collection.key == COLOR_COLLECTION and collection.modes:
                    await self._export_color(custom, collection, collection_keys)
                else:
                    await self._merge_collection(custom, collection, section=collection.key)
            except ThemeTokensError as e:
                logger.warning("Skipping collection %s: %s", collection.name, e)

        await self._add_presets(theme)

        logger.info("Export produced %d files", len(self.files) + 1)
        return [OutputFile(file_name=ROOT_FILE, body=theme), *self.files]

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    async def _merge_collection(
        self, custom: dict[str, Any], collection: Collection, section: str
    ) -> None:
        data = await self.processor.process_collection(collection)
        merge_into_theme(custom, section, data)
        logger.debug("Merged collection %s", collection.name)

    async def _export_color(
        self, custom: dict[str, Any], collection: Collection, collection_keys: set[str]
    ) -> None:
        # A lone mode next to nothing but Primitives would only repeat theme.json
        trivial_set = collection_keys == {COLOR_COLLECTION, PRIMITIVES_COLLECTION}
        several_modes = len(collection.modes) > 1

        for index, mode in enumerate(collection.modes):
            data = await self.processor.process_collection_mode(collection, mode)

            if isinstance(data.get("button"), dict):
                self.buttons.process(data["button"], self.files)

            if index == 0:
                merge_into_theme(custom, COLOR_COLLECTION, data)

            has_colors = any(key != "button" for key in data)
            if several_modes or (has_colors and not trivial_set):
                self.files.append(section_file(mode.name, data))

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    async def _add_presets(self, theme: dict[str, Any]) -> None:
        settings = theme["settings"]

        if self.options.generate_typography:
            presets = await TypographyBuilder(self.source, self.options).build()
            if presets:
                custom = settings["custom"]
                if not isinstance(custom.get("typography"), dict):
                    if "typography" in custom:
                        logger.warning("Replacing custom.typography leaf with typography presets")
                    custom["typography"] = {}
                typography = custom["typography"]
                typography["presets"] = presets

        if self.options.generate_color_presets:
            palette = await build_color_presets(self.source, self.options.selected_colors)
            if palette:
                color = settings.setdefault("color", {})
                color["palette"] = [p.model_dump(by_alias=True) for p in palette]

        if self.options.generate_spacing_presets:
            sizes = await build_spacing_presets(self.source)
            if sizes:
                spacing = settings.setdefault("spacing", {})
                spacing["spacingSizes"] = [s.model_dump(by_alias=True) for s in sizes]


async def export_theme(
    source: VariableSource, options: ExportOptions | None = None
) -> list[OutputFile]:
    return await ThemeExporter(source, options).export()
