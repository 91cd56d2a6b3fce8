"""
Collection processing.

Converts one collection (or one mode of it) into a nested token tree keyed by
the lowercased segments of each variable's name. A collection with exactly
two modes named Desktop and Mobile is *fluid*: values that differ between
the modes become ``{"fluid": True, "min": <mobile>, "max": <desktop>}``.

Every variable yields either a ``Leaf`` or a ``Skip``; the tree builder
drops skips, so one bad token never aborts a collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .aliases import AliasResolver
from .color import from_css_color, to_css_color
from .errors import InvalidColorFormat
from .models import AliasRef, Collection, ExportOptions, Mode, TokenValue, Variable, VariableType
from .source import VariableSource
from .units import format_value

logger = logging.getLogger(__name__)

DESKTOP_MODE = "desktop"
MOBILE_MODE = "mobile"


class SkipReason(StrEnum):
    MISSING_VARIABLE = "missing_variable"
    UNDEFINED_VALUE = "undefined_value"
    UNSUPPORTED_TYPE = "unsupported_type"
    MISSING_ALIAS_TARGET = "missing_alias_target"
    INVALID_COLOR = "invalid_color"


@dataclass(frozen=True)
class Leaf:
    value: Any


@dataclass(frozen=True)
class Skip:
    reason: SkipReason
    detail: str = ""


LeafResult = Leaf | Skip


def fluid_pair(min_value: Any, max_value: Any) -> dict[str, Any]:
    return {"fluid": True, "min": min_value, "max": max_value}


def is_fluid_collection(collection: Collection) -> bool:
    """Exactly two modes, named Desktop and Mobile in any order."""
    names = {mode.name.lower() for mode in collection.modes}
    return len(collection.modes) == 2 and names == {DESKTOP_MODE, MOBILE_MODE}


def _find_mode(collection: Collection, name: str) -> Mode | None:
    return next((m for m in collection.modes if m.name.lower() == name), None)


def place_leaf(tree: dict[str, Any], parts: list[str], value: Any) -> bool:
    """Set ``value`` at the nested path ``parts``, creating subtrees.

    Returns False when an intermediate segment already holds a leaf.
    """
    node = tree
    for part in parts[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            return False
        node = child
    node[parts[-1]] = value
    return True


class CollectionProcessor:
    """Builds token trees for collections read from a variable source."""

    def __init__(self, source: VariableSource, options: ExportOptions | None = None):
        self.source = source
        self.options = options or ExportOptions()
        self.resolver = AliasResolver(source)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def process_collection(self, collection: Collection) -> dict[str, Any]:
        """Process a whole collection.

        Fluid collections merge their Desktop and Mobile modes; any other
        collection is processed from its first mode only.
        """
        if is_fluid_collection(collection):
            desktop = _find_mode(collection, DESKTOP_MODE)
            mobile = _find_mode(collection, MOBILE_MODE)
            if desktop is not None and mobile is not None:
                return await self._build_tree(
                    collection,
                    lambda variable: self._fluid_leaf(collection, variable, desktop, mobile),
                )

        mode = collection.first_mode
        if mode is None:
            return {}
        return await self.process_collection_mode(collection, mode)

    async def process_collection_mode(self, collection: Collection, mode: Mode) -> dict[str, Any]:
        """Process a single mode of a collection."""
        return await self._build_tree(
            collection, lambda variable: self._mode_leaf(collection, variable, mode)
        )

    # -------------------------------------------------------------------------
    # Tree building
    # -------------------------------------------------------------------------

    async def _build_tree(self, collection: Collection, compute) -> dict[str, Any]:
        tree: dict[str, Any] = {}
        for variable_id in collection.variable_ids:
            variable = await self.source.get_variable(variable_id)
            if variable is None:
                logger.debug("Skipping %s: %s", variable_id, SkipReason.MISSING_VARIABLE)
                continue

            result = await compute(variable)
            if isinstance(result, Skip):
                if result.reason is SkipReason.INVALID_COLOR:
                    logger.warning("Skipping %s: %s", variable.name, result.detail)
                else:
                    logger.debug("Skipping %s: %s", variable.name, result.reason)
                continue

            if not place_leaf(tree, variable.parts, result.value):
                logger.warning(
                    "Skipping %s: a parent segment already holds a value", variable.name
                )
        return tree

    async def _mode_leaf(self, collection: Collection, variable: Variable, mode: Mode) -> LeafResult:
        value = variable.values_by_mode.get(mode.mode_id)
        if value is None:
            return Skip(SkipReason.UNDEFINED_VALUE)
        if not variable.is_exported_type:
            return Skip(SkipReason.UNSUPPORTED_TYPE, variable.resolved_type)
        return await self._token_leaf(collection, variable, value)

    async def _fluid_leaf(
        self, collection: Collection, variable: Variable, desktop: Mode, mobile: Mode
    ) -> LeafResult:
        desktop_value = variable.values_by_mode.get(desktop.mode_id)
        mobile_value = variable.values_by_mode.get(mobile.mode_id)
        if desktop_value is None or mobile_value is None:
            return Skip(SkipReason.UNDEFINED_VALUE)
        if not variable.is_exported_type:
            return Skip(SkipReason.UNSUPPORTED_TYPE, variable.resolved_type)

        desktop_alias = isinstance(desktop_value, AliasRef)
        mobile_alias = isinstance(mobile_value, AliasRef)

        if desktop_alias and mobile_alias:
            max_ref = await self.resolver.resolve_to_css_ref(desktop_value)
            min_ref = await self.resolver.resolve_to_css_ref(mobile_value)
            if max_ref is None or min_ref is None:
                return Skip(SkipReason.MISSING_ALIAS_TARGET)
            if max_ref == min_ref:
                return Leaf(max_ref)
            return Leaf(fluid_pair(min_ref, max_ref))

        if desktop_alias or mobile_alias:
            # A half-bound pair collapses to its literal side; the alias side
            # only has to point at an existing variable.
            alias_side, literal_side = (
                (desktop_value, mobile_value) if desktop_alias else (mobile_value, desktop_value)
            )
            if await self.resolver.resolve_target(alias_side) is None:
                return Skip(SkipReason.MISSING_ALIAS_TARGET)
            return self._literal_leaf(collection, variable, literal_side.value)

        max_leaf = self._literal_leaf(collection, variable, desktop_value.value)
        min_leaf = self._literal_leaf(collection, variable, mobile_value.value)
        if isinstance(max_leaf, Skip):
            return max_leaf
        if isinstance(min_leaf, Skip):
            return min_leaf
        if max_leaf.value == min_leaf.value:
            return max_leaf
        return Leaf(fluid_pair(min_leaf.value, max_leaf.value))

    async def _token_leaf(
        self, collection: Collection, variable: Variable, value: TokenValue
    ) -> LeafResult:
        if isinstance(value, AliasRef):
            ref = await self.resolver.resolve_to_css_ref(value)
            if ref is None:
                return Skip(SkipReason.MISSING_ALIAS_TARGET, value.target_id)
            return Leaf(ref)
        return self._literal_leaf(collection, variable, value.value)

    def _literal_leaf(self, collection: Collection, variable: Variable, raw: Any) -> LeafResult:
        if variable.resolved_type == VariableType.COLOR:
            record = raw
            if isinstance(raw, str):
                try:
                    record = from_css_color(raw)
                except InvalidColorFormat as e:
                    return Skip(SkipReason.INVALID_COLOR, e.message)
            css = to_css_color(record)
            if css is None:
                return Skip(SkipReason.INVALID_COLOR, f"Unreadable color value: {raw!r}")
            return Leaf(css)

        return Leaf(format_value(variable.parts, raw, self.options, scope=[collection.key]))


async def process_collection(
    source: VariableSource, collection: Collection, options: ExportOptions | None = None
) -> dict[str, Any]:
    return await CollectionProcessor(source, options).process_collection(collection)


async def process_collection_mode(
    source: VariableSource,
    collection: Collection,
    mode: Mode,
    options: ExportOptions | None = None,
) -> dict[str, Any]:
    return await CollectionProcessor(source, options).process_collection_mode(collection, mode)
