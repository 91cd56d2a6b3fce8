"""
Alias resolution.

An alias is a per-mode value that points at another variable. The export
turns an alias into a CSS reference built from the *target's* own name,
one hop only: ``var(--wp--custom--<target name parts>)``. Callers that need
the concrete value behind a chain of aliases use ``resolve_value``, which
follows hops up to a fixed budget.
"""

from __future__ import annotations

import logging
from typing import Any

from .models import AliasRef, LiteralValue, Variable, alias_target_id
from .naming import css_var_ref
from .source import VariableSource

logger = logging.getLogger(__name__)

# Maximum alias hops followed when resolving a concrete value
MAX_ALIAS_HOPS = 16


def is_alias(value: Any) -> bool:
    """True for an ``AliasRef`` or a raw host alias record."""
    return isinstance(value, AliasRef) or alias_target_id(value) is not None


def _target_id(value: Any) -> str | None:
    if isinstance(value, AliasRef):
        return value.target_id
    return alias_target_id(value)


class AliasResolver:
    """Resolves aliases against a variable source."""

    def __init__(self, source: VariableSource):
        self.source = source

    async def resolve_target(self, value: Any) -> Variable | None:
        target_id = _target_id(value)
        if target_id is None:
            return None
        target = await self.source.get_variable(target_id)
        if target is None:
            logger.debug("Alias target %s not found", target_id)
        return target

    async def resolve_to_css_ref(self, value: Any) -> str | None:
        """Build a CSS reference to the alias target.

        Returns:
            ``var(--wp--custom--...)`` for the target's name, or None when the
            value is not an alias or the target does not exist.
        """
        target = await self.resolve_target(value)
        if target is None:
            return None
        return css_var_ref(target.parts)

    async def resolve_value(self, variable: Variable, mode_id: str | None = None) -> Any:
        """Follow aliases from ``variable`` down to a literal value.

        Each hop reads the target's value in ``mode_id`` when the target has
        that mode, else the target's first available mode.

        Returns:
            The raw literal value, or None when a target is missing, a value
            is undefined, or the hop budget runs out.
        """
        current = variable.value_for(mode_id)
        for _ in range(MAX_ALIAS_HOPS):
            if current is None:
                return None
            if isinstance(current, LiteralValue):
                return current.value
            target = await self.resolve_target(current)
            if target is None:
                return None
            current = target.value_for(mode_id)

        logger.warning("Alias chain from %s exceeds %d hops", variable.name, MAX_ALIAS_HOPS)
        return None
