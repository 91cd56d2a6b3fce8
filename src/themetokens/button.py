"""
Button variant specialization.

When a Color-collection tree carries ``button.primary``, each sibling
variant (secondary, outline, ...) is written to its own style variation file
whose settings reference the variant's custom properties. The shared
default/hover/disabled states at the button root are rewritten to reference
the primary button.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .models import OutputFile
from .naming import capitalize_first, css_var_ref

logger = logging.getLogger(__name__)

THEME_SCHEMA = "https://schemas.wp.org/trunk/theme.json"
THEME_VERSION = 3

BUTTON_VARIANTS = ("secondary", "tertiary", "outline", "ghost", "link", "destructive")
BUTTON_STATES = ("default", "hover", "disabled")

_WHITESPACE = re.compile(r"\s+")


def _state_refs(variant_slug: str, state: str, props: dict[str, Any]) -> dict[str, str]:
    return {
        prop: css_var_ref(["color", "button", variant_slug, state, prop]) for prop in props
    }


def button_variant_file(variant_name: str, variant: dict[str, Any]) -> OutputFile:
    """Build the style variation file for one button variant."""
    variant_slug = _WHITESPACE.sub("-", variant_name.lower())
    settings = {
        state: _state_refs(variant_slug, state, variant[state])
        for state in BUTTON_STATES
        if isinstance(variant.get(state), dict) and variant[state]
    }
    return OutputFile(
        file_name=f"styles/button-{variant_slug}.json",
        body={
            "$schema": THEME_SCHEMA,
            "version": THEME_VERSION,
            "title": capitalize_first(variant_name),
            "slug": f"button-{variant_slug}",
            "blockTypes": ["core/button"],
            "settings": {"custom": {"color": {"button": settings}}},
            "styles": {
                "color": {
                    "background": css_var_ref(["color", "button", "default", "background"]),
                    "text": css_var_ref(["color", "button", "default", "text"]),
                }
            },
        },
    )


class ButtonSpecializer:
    """Emits one file per button variant per export run.

    The processed-variant set lives on the instance; call :meth:`reset` (or
    use a fresh instance) at the start of every run.
    """

    def __init__(self) -> None:
        self.processed: set[str] = set()

    def reset(self) -> None:
        self.processed.clear()

    def find_variants(self, button_tree: dict[str, Any]) -> list[str]:
        return [
            key
            for key, value in button_tree.items()
            if key.lower() in BUTTON_VARIANTS
            and isinstance(value, dict)
            and key.lower() not in self.processed
        ]

    def process(self, button_tree: dict[str, Any], files: list[OutputFile]) -> None:
        """Specialize ``button_tree`` in place and append variant files.

        Args:
            button_tree: The ``button`` subtree of a processed Color mode.
            files: Output list that receives one file per new variant.
        """
        primary = button_tree.get("primary")
        if not isinstance(primary, dict) or not primary:
            return

        variants = self.find_variants(button_tree)

        # Root states only defer to primary when other variants exist
        if variants:
            for state in BUTTON_STATES:
                props = primary.get(state)
                if not isinstance(props, dict) or not props:
                    continue
                root_state = button_tree.setdefault(state, {})
                if not isinstance(root_state, dict):
                    root_state = button_tree[state] = {}
                root_state.update(_state_refs("primary", state, props))

        for variant_name in variants:
            self.processed.add(variant_name.lower())
            files.append(button_variant_file(variant_name, button_tree[variant_name]))
            logger.debug("Emitted button variant %s", variant_name)
