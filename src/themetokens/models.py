"""
Token models for the themetokens export pipeline.

Mirrors the host design tool's variable storage (collections, modes,
variables, text styles) plus the export options and output records.
Host records use camelCase keys; every model accepts both camelCase and
snake_case field names.

A variable's per-mode value is decided once, when the record is loaded:
either a ``LiteralValue`` or an ``AliasRef`` pointing at another variable.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# =============================================================================
# Enums
# =============================================================================


class VariableType(StrEnum):
    """Resolved type of a host variable. Only COLOR and FLOAT are exported."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


EXPORTED_TYPES = frozenset({VariableType.COLOR, VariableType.FLOAT})

ALIAS_TYPE_TAG = "VARIABLE_ALIAS"


class _HostModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# Token values
# =============================================================================


class LiteralValue(BaseModel):
    """A concrete per-mode value (color record, number, string)."""

    model_config = ConfigDict(frozen=True)

    value: Any


class AliasRef(BaseModel):
    """A per-mode value that points at another variable by id."""

    model_config = ConfigDict(frozen=True)

    target_id: str


TokenValue = LiteralValue | AliasRef


def alias_target_id(raw: Any) -> str | None:
    """Return the target id of a raw host alias record, or None.

    Both host shapes are recognized: ``{"type": "VARIABLE_ALIAS", "id": ...}``
    and ``{"isAlias": true, "targetId": ...}``.
    """
    if not isinstance(raw, Mapping):
        return None
    if raw.get("type") == ALIAS_TYPE_TAG and raw.get("id") is not None:
        return str(raw["id"])
    if raw.get("isAlias") is True and raw.get("targetId") is not None:
        return str(raw["targetId"])
    return None


def to_token_value(raw: Any) -> TokenValue:
    if isinstance(raw, (LiteralValue, AliasRef)):
        return raw
    target_id = alias_target_id(raw)
    if target_id is not None:
        return AliasRef(target_id=target_id)
    return LiteralValue(value=raw)


# =============================================================================
# Host records
# =============================================================================


class Mode(_HostModel):
    mode_id: str
    name: str


class Collection(_HostModel):
    """A named group of variables sharing a set of modes."""

    id: str = ""
    name: str
    modes: list[Mode] = Field(default_factory=list)
    variable_ids: list[str] = Field(default_factory=list)

    @property
    def key(self) -> str:
        """Lowercased name used for special-casing and tree placement."""
        return self.name.lower()

    @property
    def first_mode(self) -> Mode | None:
        return self.modes[0] if self.modes else None


class Variable(_HostModel):
    """A named, typed design token."""

    id: str = ""
    name: str
    resolved_type: str
    values_by_mode: dict[str, TokenValue] = Field(default_factory=dict)
    code_syntax: dict[str, str] = Field(default_factory=dict)

    @field_validator("values_by_mode", mode="before")
    @classmethod
    def _decide_token_values(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        # None means the mode has no value
        return {
            str(mode_id): to_token_value(raw) for mode_id, raw in value.items() if raw is not None
        }

    @property
    def parts(self) -> list[str]:
        return [part.lower() for part in self.name.split("/")]

    @property
    def is_exported_type(self) -> bool:
        return self.resolved_type in EXPORTED_TYPES

    def value_for(self, mode_id: str | None) -> TokenValue | None:
        """Value in ``mode_id``, else the first available mode's value."""
        if mode_id is not None and mode_id in self.values_by_mode:
            return self.values_by_mode[mode_id]
        return next(iter(self.values_by_mode.values()), None)


class TextStyle(_HostModel):
    """A host text style with optional typography facets."""

    id: str = ""
    name: str
    font_family: str | None = None
    font_size: float | None = None
    font_weight: Any = None
    font_name: dict[str, Any] | None = None
    line_height: Any = None
    letter_spacing: Any = None
    text_case: str | None = None
    text_decoration: str | None = None
    text_decoration_color: Any = None
    text_decoration_style: str | None = None
    text_decoration_thickness: Any = None
    text_decoration_offset: Any = None
    text_decoration_skip_ink: str | None = None
    hanging_punctuation: bool | None = None
    leading_trim: str | None = None
    bound_variables: dict[str, Any] = Field(default_factory=dict)

    def bound_variable_id(self, facet: str) -> str | None:
        """Id of the variable bound to ``facet`` (host camelCase key)."""
        bound = self.bound_variables.get(facet)
        if isinstance(bound, Mapping) and bound.get("id") is not None:
            return str(bound["id"])
        return None


# =============================================================================
# Export options and results
# =============================================================================


class ExportOptions(_HostModel):
    """Options accepted by the EXPORT command and the CLI config file."""

    generate_typography: bool = Field(default=False, description="Append typography presets")
    generate_color_presets: bool = Field(default=False, description="Append a color palette")
    generate_spacing_presets: bool = Field(default=False, description="Append spacing sizes")
    base_theme: dict[str, Any] | None = Field(
        default=None, description="Seed document merged into the default theme skeleton"
    )
    use_rem: bool = Field(default=False, description="Convert px values to rem")
    rem_collections: dict[str, bool] = Field(
        default_factory=dict,
        description="Per-category rem toggles, e.g. {'font': True, 'spacing': False}",
    )
    selected_colors: list[str] | None = Field(
        default=None, description="Restrict color presets to these variable ids"
    )


class OutputFile(_HostModel):
    """A virtual file produced by an export run."""

    file_name: str
    body: dict[str, Any]


class ColorPreset(_HostModel):
    name: str
    slug: str
    color: str


class SpacingPreset(_HostModel):
    name: str
    slug: str
    size: str


class ColorPresetEntry(_HostModel):
    """Color preset with preview data, used by color pickers."""

    id: str
    name: str
    slug: str
    color: str
    collection_name: str
    resolved_color: str | None = None


class CodeSyntaxResult(_HostModel):
    updated_count: int = 0
    skipped_count: int = 0

    @property
    def total_processed(self) -> int:
        return self.updated_count + self.skipped_count

    def to_message(self) -> dict[str, int]:
        return {
            "updatedCount": self.updated_count,
            "skippedCount": self.skipped_count,
            "totalProcessed": self.total_processed,
        }
