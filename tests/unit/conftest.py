"""Shared pytest fixtures for themetokens unit tests."""

from __future__ import annotations

import pytest
from factories import RED, alias, collection, make_source, variable

from themetokens.source import SnapshotSource


@pytest.fixture
def empty_source() -> SnapshotSource:
    return make_source()


@pytest.fixture
def design_system_source() -> SnapshotSource:
    """Primitives, a two-mode Color collection with buttons, and Spacing."""
    return make_source(
        collections=[
            collection("Primitives", ["p-blue", "p-red", "p-space"], modes=[("p", "Default")]),
            collection(
                "Color",
                ["c-surface", "c-text", "c-btn-bg", "c-btn-text", "c-sec-bg"],
                modes=[("light", "Light"), ("dark", "Dark")],
            ),
            collection("Spacing", ["s-large", "s-fluid"], modes=[("s", "Default")]),
        ],
        variables=[
            variable("p-blue", "blue/500", "COLOR", {"p": {"r": 0.2, "g": 0.4, "b": 0.8}}),
            variable("p-red", "red/500", "COLOR", {"p": RED}),
            variable("p-space", "size/unit", "FLOAT", {"p": 8}),
            variable(
                "c-surface",
                "surface/primary",
                "COLOR",
                {"light": {"r": 1, "g": 1, "b": 1}, "dark": {"r": 0, "g": 0, "b": 0}},
            ),
            variable(
                "c-text",
                "text/primary",
                "COLOR",
                {"light": {"r": 0, "g": 0, "b": 0}, "dark": {"r": 1, "g": 1, "b": 1}},
            ),
            variable(
                "c-btn-bg",
                "button/primary/default/background",
                "COLOR",
                {"light": alias("p-blue"), "dark": alias("p-blue")},
            ),
            variable(
                "c-btn-text",
                "button/primary/default/text",
                "COLOR",
                {"light": {"r": 1, "g": 1, "b": 1}, "dark": {"r": 1, "g": 1, "b": 1}},
            ),
            variable(
                "c-sec-bg",
                "button/secondary/default/background",
                "COLOR",
                {"light": alias("p-red"), "dark": alias("p-red")},
            ),
            variable("s-large", "spacing/large", "FLOAT", {"s": 24}),
            variable("s-fluid", "spacing/24_16", "FLOAT", {"s": 24}),
        ],
    )
