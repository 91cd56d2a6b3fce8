"""
Design-token document importer.

Imports a token document (``$value``/``$type`` groups, as written by token
editors) into a new single-mode collection of a snapshot. Nested groups
become slash-joined variable names. A ``{group.token}`` value is an alias;
aliases whose target has not been created yet are retried until a pass makes
no progress, and whatever is still unresolved is dropped with a warning.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .color import from_css_color
from .errors import InvalidColorFormat, TokenImportError
from .models import AliasRef, Collection, Variable, VariableType
from .source import SnapshotSource

logger = logging.getLogger(__name__)

TOKEN_TYPES = {
    "color": VariableType.COLOR,
    "number": VariableType.FLOAT,
}


@dataclass
class PendingAlias:
    key: str
    target_key: str


def is_token_alias(value: Any) -> bool:
    return isinstance(value, str) and value.strip().startswith("{")


def alias_key(value: str) -> str:
    """``"{Color.Brand}"`` -> ``"color/brand"``."""
    return value.strip().strip("{}").replace(".", "/").lower()


class TokenImporter:
    """Imports one token document into one new collection."""

    def __init__(self, source: SnapshotSource, collection: Collection):
        self.source = source
        self.collection_id = collection.id
        self.mode_id = collection.modes[0].mode_id
        self.tokens: dict[str, Variable] = {}
        self.pending: dict[str, PendingAlias] = {}

    def run(self, document: Mapping[str, Any]) -> None:
        root_type = document.get("$type")
        for key, node in document.items():
            self.traverse(key.lower(), node, root_type)
        self.resolve_pending()

    def traverse(self, key: str, node: Any, inherited_type: str | None) -> None:
        if key.startswith("$") or not isinstance(node, Mapping):
            return

        token_type = node.get("$type", inherited_type)
        if "$value" not in node:
            for child_key, child in node.items():
                if not child_key.startswith("$"):
                    self.traverse(f"{key}/{child_key.lower()}", child, token_type)
            return

        value = node["$value"]
        if is_token_alias(value):
            target_key = alias_key(value)
            if target_key in self.tokens:
                self._create_alias(key, target_key)
            else:
                self.pending[key] = PendingAlias(key=key, target_key=target_key)
            return

        resolved_type = TOKEN_TYPES.get(token_type or "")
        if resolved_type is None:
            logger.warning("Unsupported token type %r for %s", token_type, key)
            return

        if resolved_type == VariableType.COLOR:
            if not isinstance(value, str):
                logger.warning("Color token %s is not a string: %r", key, value)
                return
            try:
                value = from_css_color(value)
            except InvalidColorFormat as e:
                logger.warning("Skipping %s: %s", key, e)
                return

        self.tokens[key] = self.source.create_variable(
            self.collection_id, key, resolved_type, self.mode_id, value
        )

    def resolve_pending(self) -> None:
        pending = list(self.pending.values())
        generations = len(pending)
        while pending and generations > 0:
            unresolved = []
            for alias in pending:
                if alias.target_key in self.tokens:
                    self._create_alias(alias.key, alias.target_key)
                else:
                    unresolved.append(alias)
            pending = unresolved
            generations -= 1

        for alias in pending:
            logger.warning("Dropping %s: alias target %s not found", alias.key, alias.target_key)
        self.pending = {}

    def _create_alias(self, key: str, target_key: str) -> None:
        target = self.tokens[target_key]
        self.tokens[key] = self.source.create_variable(
            self.collection_id,
            key,
            target.resolved_type,
            self.mode_id,
            AliasRef(target_id=target.id),
        )


def import_token_document(
    source: SnapshotSource, file_name: str, body: str | Mapping[str, Any]
) -> Collection:
    """Import a token document into a new collection named after the file.

    Args:
        source: Snapshot that receives the collection and variables.
        file_name: Document name; lowercased to name the collection.
        body: JSON text or an already decoded document.

    Returns:
        The created collection, including its variable ids.

    Raises:
        TokenImportError: If the body is not a JSON object.
    """
    if isinstance(body, str):
        try:
            document = json.loads(body)
        except json.JSONDecodeError as e:
            raise TokenImportError(f"Invalid token document {file_name}: {e}") from e
    else:
        document = body
    if not isinstance(document, Mapping):
        raise TokenImportError(f"Token document {file_name} must be a JSON object")

    collection = source.create_collection(file_name.lower())
    TokenImporter(source, collection).run(document)

    created = source.get_collection(collection.id) or collection
    logger.info("Imported %d tokens into %s", len(created.variable_ids), created.name)
    return created
