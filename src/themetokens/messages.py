"""
Command message dispatcher.

Inbound commands carry a ``type`` discriminator and are answered with a
result message of the matching type. Failures are reported in the result's
``error`` field rather than raised, so the UI always gets an answer.

    EXPORT {options}                       -> EXPORT_RESULT {files} | {error}
    GET_COLOR_PRESETS                      -> COLOR_PRESETS_RESULT {presets} | {error}
    APPLY_CSS_VAR_SYNTAX {overwriteExisting} -> CSS_VAR_SYNTAX_RESULT {counts} | {error}
    RESIZE {width, height}                 -> no result
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .code_syntax import apply_css_var_syntax
from .errors import MessageError
from .exporter import ThemeExporter
from .models import ExportOptions
from .presets import build_all_color_presets
from .source import VariableSource

logger = logging.getLogger(__name__)


class _Command(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ExportCommand(_Command):
    type: Literal["EXPORT"]
    options: ExportOptions = Field(default_factory=ExportOptions)


class GetColorPresetsCommand(_Command):
    type: Literal["GET_COLOR_PRESETS"]


class ApplyCssVarSyntaxCommand(_Command):
    type: Literal["APPLY_CSS_VAR_SYNTAX"]
    overwrite_existing: bool = False


class ResizeCommand(_Command):
    type: Literal["RESIZE"]
    width: int
    height: int


Command = Annotated[
    ExportCommand | GetColorPresetsCommand | ApplyCssVarSyntaxCommand | ResizeCommand,
    Field(discriminator="type"),
]

_command_adapter: TypeAdapter[Any] = TypeAdapter(Command)

RESULT_TYPES = {
    "EXPORT": "EXPORT_RESULT",
    "GET_COLOR_PRESETS": "COLOR_PRESETS_RESULT",
    "APPLY_CSS_VAR_SYNTAX": "CSS_VAR_SYNTAX_RESULT",
}


def parse_command(message: Mapping[str, Any]) -> Any:
    """Validate an inbound message into its command model.

    Raises:
        MessageError: If the message type is unknown or its payload invalid.
    """
    try:
        return _command_adapter.validate_python(message)
    except ValidationError as e:
        raise MessageError(f"Invalid command message: {e}") from e


async def handle_message(
    message: Mapping[str, Any], source: VariableSource
) -> dict[str, Any] | None:
    """Run one command against ``source`` and return its result message.

    Returns:
        The result message, or None for commands with no result (RESIZE).

    Raises:
        MessageError: If the message is not a recognizable command.
    """
    command = parse_command(message)

    if isinstance(command, ResizeCommand):
        logger.debug("Ignoring resize to %dx%d", command.width, command.height)
        return None

    result_type = RESULT_TYPES[command.type]
    try:
        if isinstance(command, ExportCommand):
            files = await ThemeExporter(source, command.options).export()
            return {"type": result_type, "files": [f.model_dump(by_alias=True) for f in files]}

        if isinstance(command, GetColorPresetsCommand):
            presets = await build_all_color_presets(source)
            return {
                "type": result_type,
                "presets": [p.model_dump(by_alias=True) for p in presets],
            }

        result = await apply_css_var_syntax(source, command.overwrite_existing)
        return {"type": result_type, **result.to_message()}
    except Exception as e:
        logger.exception("%s failed", command.type)
        return {"type": result_type, "error": str(e)}
