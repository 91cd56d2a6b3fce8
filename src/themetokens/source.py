"""
Variable sources.

The export pipeline reads the host's variable storage through the async
``VariableSource`` protocol. ``SnapshotSource`` implements it over a JSON
snapshot of that storage:

    {
      "collections": [{"id", "name", "modes": [{"modeId", "name"}], "variableIds"}],
      "variables": [{"id", "name", "resolvedType", "valuesByMode", "codeSyntax"}],
      "textStyles": [{"id", "name", "fontFamily", ..., "boundVariables"}]
    }
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from .errors import SnapshotError
from .models import (
    ALIAS_TYPE_TAG,
    AliasRef,
    Collection,
    Mode,
    TextStyle,
    TokenValue,
    Variable,
)

logger = logging.getLogger(__name__)

WEB_PLATFORM = "WEB"


@runtime_checkable
class VariableSource(Protocol):
    """Read access to the host's variables, plus the code-syntax writer."""

    async def get_collections(self) -> list[Collection]:
        """Enumerate variable collections in host order."""
        ...

    async def get_variable(self, variable_id: str) -> Variable | None:
        """Resolve a variable id, or None when it does not exist."""
        ...

    async def get_text_styles(self) -> list[TextStyle]:
        """Enumerate local text styles."""
        ...

    async def set_code_syntax(self, variable_id: str, platform: str, syntax: str) -> None:
        """Write a code-syntax string for ``platform`` onto a variable."""
        ...


async def list_variables(source: VariableSource) -> list[Variable]:
    """All variables reachable from the source's collections, in order."""
    variables: list[Variable] = []
    for collection in await source.get_collections():
        for variable_id in collection.variable_ids:
            variable = await source.get_variable(variable_id)
            if variable is not None:
                variables.append(variable)
    return variables


def token_value_to_host(value: TokenValue) -> Any:
    if isinstance(value, AliasRef):
        return {"type": ALIAS_TYPE_TAG, "id": value.target_id}
    return value.value


class SnapshotSource:
    """In-memory variable source, loadable from and savable to JSON."""

    def __init__(
        self,
        collections: list[Collection] | None = None,
        variables: list[Variable] | None = None,
        text_styles: list[TextStyle] | None = None,
    ):
        self._collections: dict[str, Collection] = {}
        self._variables: dict[str, Variable] = {}
        self._text_styles: list[TextStyle] = list(text_styles or [])

        for index, collection in enumerate(collections or []):
            key = collection.id or f"VariableCollectionId:{index}"
            self._collections[key] = collection.model_copy(update={"id": key})
        for variable in variables or []:
            self._variables[variable.id] = variable

    # -------------------------------------------------------------------------
    # Loading and saving
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SnapshotSource:
        """Build a source from a decoded snapshot document.

        Raises:
            SnapshotError: If any record fails validation.
        """
        if not isinstance(data, Mapping):
            raise SnapshotError("Snapshot must be a JSON object")
        try:
            collections = [Collection.model_validate(c) for c in data.get("collections", [])]
            variables = [Variable.model_validate(v) for v in data.get("variables", [])]
            text_styles = [TextStyle.model_validate(s) for s in data.get("textStyles", [])]
        except ValidationError as e:
            raise SnapshotError(f"Invalid snapshot: {e}") from e
        return cls(collections, variables, text_styles)

    @classmethod
    def load(cls, path: Path) -> SnapshotSource:
        """Load a snapshot file.

        Raises:
            SnapshotError: If the file is missing, unreadable or invalid.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SnapshotError(f"Snapshot not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Failed to read snapshot {path}: {e}") from e
        source = cls.from_dict(data)
        logger.debug(
            "Loaded snapshot %s (%d collections, %d variables)",
            path,
            len(source._collections),
            len(source._variables),
        )
        return source

    def to_dict(self) -> dict[str, Any]:
        return {
            "collections": [c.model_dump(by_alias=True) for c in self._collections.values()],
            "variables": [
                {
                    "id": v.id,
                    "name": v.name,
                    "resolvedType": v.resolved_type,
                    "valuesByMode": {
                        mode_id: token_value_to_host(value)
                        for mode_id, value in v.values_by_mode.items()
                    },
                    "codeSyntax": dict(v.code_syntax),
                }
                for v in self._variables.values()
            ],
            "textStyles": [
                s.model_dump(by_alias=True, exclude_none=True) for s in self._text_styles
            ],
        }

    def save(self, path: Path) -> None:
        try:
            path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise SnapshotError(f"Failed to write snapshot {path}: {e}") from e
        logger.info("Saved snapshot to %s", path)

    # -------------------------------------------------------------------------
    # VariableSource
    # -------------------------------------------------------------------------

    async def get_collections(self) -> list[Collection]:
        return list(self._collections.values())

    async def get_variable(self, variable_id: str) -> Variable | None:
        return self._variables.get(variable_id)

    async def get_text_styles(self) -> list[TextStyle]:
        return list(self._text_styles)

    async def set_code_syntax(self, variable_id: str, platform: str, syntax: str) -> None:
        variable = self._variables.get(variable_id)
        if variable is None:
            raise SnapshotError(f"Unknown variable id: {variable_id}")
        code_syntax = {**variable.code_syntax, platform: syntax}
        self._variables[variable_id] = variable.model_copy(update={"code_syntax": code_syntax})

    # -------------------------------------------------------------------------
    # Writers used by the token importer
    # -------------------------------------------------------------------------

    def create_collection(self, name: str, mode_name: str = "Mode 1") -> Collection:
        index = len(self._collections)
        collection_id = f"VariableCollectionId:{index}"
        while collection_id in self._collections:
            index += 1
            collection_id = f"VariableCollectionId:{index}"
        collection = Collection(
            id=collection_id,
            name=name,
            modes=[Mode(mode_id=f"{index}:0", name=mode_name)],
        )
        self._collections[collection_id] = collection
        return collection

    def create_variable(
        self,
        collection_id: str,
        name: str,
        resolved_type: str,
        mode_id: str,
        value: Any,
    ) -> Variable:
        collection = self._collections.get(collection_id)
        if collection is None:
            raise SnapshotError(f"Unknown collection id: {collection_id}")

        index = len(self._variables)
        variable_id = f"VariableID:{collection_id.rsplit(':', 1)[-1]}:{index}"
        while variable_id in self._variables:
            index += 1
            variable_id = f"VariableID:{collection_id.rsplit(':', 1)[-1]}:{index}"

        variable = Variable(
            id=variable_id,
            name=name,
            resolved_type=resolved_type,
            values_by_mode={mode_id: value},
        )
        self._variables[variable_id] = variable
        self._collections[collection_id] = collection.model_copy(
            update={"variable_ids": [*collection.variable_ids, variable_id]}
        )
        return variable

    def get_collection(self, collection_id: str) -> Collection | None:
        return self._collections.get(collection_id)
