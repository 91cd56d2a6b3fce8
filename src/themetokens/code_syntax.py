"""
Code-syntax writeback.

Writes ``var(--wp--custom--<path>, <fallback>)`` onto each variable's WEB
code syntax so developers copying a token from the design tool get the
custom property that the export produces. This runs outside the export and
is the only path that writes to the host.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .aliases import AliasResolver
from .color import to_css_color
from .errors import ThemeTokensError
from .models import CodeSyntaxResult, Collection, Variable, VariableType
from .naming import CUSTOM_PROPERTY_PREFIX, css_var_path
from .source import WEB_PLATFORM, VariableSource
from .units import number_to_str

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = "inherit"

_FALLBACK = re.compile(r"^var\(--wp--custom--[^,]+,\s*(.*)\)\s*$")


def has_css_var_syntax(text: str) -> bool:
    return f"var({CUSTOM_PROPERTY_PREFIX}" in text


def extract_original_value(text: str) -> str | None:
    """Fallback value of an existing ``var(--wp--custom--x, fallback)``."""
    match = _FALLBACK.match(text.strip())
    return match.group(1).strip() if match else None


def generate_css_var_syntax(parts: list[str], fallback: str) -> str:
    return f"var({css_var_path(parts)}, {fallback})"


def variable_path(collection: Collection, variable: Variable) -> list[str]:
    """Custom-property path as placed by the export.

    Primitives sit at the tree root; other collections add their own name.
    """
    if collection.key == "primitives":
        return variable.parts
    return [collection.key, *variable.parts]


def format_fallback(resolved_type: str, value: Any) -> str | None:
    if resolved_type == VariableType.COLOR:
        return to_css_color(value)
    if resolved_type == VariableType.FLOAT and isinstance(value, (int, float)):
        return f"{number_to_str(value)}px"
    return None


async def apply_css_var_syntax(
    source: VariableSource, overwrite_existing: bool = False
) -> CodeSyntaxResult:
    """Write CSS var syntax onto every variable in ``source``.

    Args:
        source: Variable source that supports ``set_code_syntax``.
        overwrite_existing: Rewrite variables that already carry a
            ``var(--wp--custom--...)`` syntax instead of skipping them.

    Returns:
        Counts of updated and skipped variables. Variables whose write fails
        are logged and counted as neither.
    """
    resolver = AliasResolver(source)
    updated = skipped = 0

    for collection in await source.get_collections():
        mode = collection.first_mode
        for variable_id in collection.variable_ids:
            variable = await source.get_variable(variable_id)
            if variable is None:
                continue

            current = variable.code_syntax.get(WEB_PLATFORM, "")
            if has_css_var_syntax(current):
                if not overwrite_existing:
                    skipped += 1
                    continue
                fallback = extract_original_value(current)
            else:
                fallback = current or None

            if not fallback:
                value = await resolver.resolve_value(variable, mode.mode_id if mode else None)
                fallback = format_fallback(variable.resolved_type, value) or DEFAULT_FALLBACK

            syntax = generate_css_var_syntax(variable_path(collection, variable), fallback)
            try:
                await source.set_code_syntax(variable.id, WEB_PLATFORM, syntax)
            except ThemeTokensError as e:
                logger.error("Failed to update code syntax for %s: %s", variable.name, e)
                continue
            updated += 1

    logger.info("Code syntax: %d updated, %d skipped", updated, skipped)
    return CodeSyntaxResult(updated_count=updated, skipped_count=skipped)
