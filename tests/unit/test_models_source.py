"""Tests for token models and the snapshot variable source."""

from __future__ import annotations

import json

import pytest
from factories import RED, alias, collection, make_source, variable
from pydantic import ValidationError

from themetokens.errors import SnapshotError
from themetokens.models import (
    AliasRef,
    CodeSyntaxResult,
    Collection,
    LiteralValue,
    TextStyle,
    Variable,
    VariableType,
    to_token_value,
)
from themetokens.source import SnapshotSource, VariableSource, list_variables


class TestTokenValue:
    """Token values are decided once at load time."""

    def test_host_alias_shape(self):
        assert to_token_value(alias("v1")) == AliasRef(target_id="v1")

    def test_legacy_alias_shape(self):
        assert to_token_value({"isAlias": True, "targetId": "v2"}) == AliasRef(target_id="v2")

    def test_literal(self):
        assert to_token_value(RED) == LiteralValue(value=RED)
        assert to_token_value(8) == LiteralValue(value=8)

    def test_alias_tag_without_id_is_literal(self):
        raw = {"type": "VARIABLE_ALIAS"}
        assert to_token_value(raw) == LiteralValue(value=raw)

    def test_variable_converts_values_and_drops_none(self):
        var = Variable.model_validate(
            variable("v", "a/b", "FLOAT", {"m1": 4, "m2": alias("x"), "m3": None})
        )
        assert var.values_by_mode == {
            "m1": LiteralValue(value=4),
            "m2": AliasRef(target_id="x"),
        }


class TestVariable:
    """Test Variable helpers."""

    def test_parts_are_lowercased(self):
        var = Variable(name="Button/Primary/Default", resolved_type="COLOR")
        assert var.parts == ["button", "primary", "default"]

    def test_exported_types(self):
        assert Variable(name="a", resolved_type=VariableType.COLOR).is_exported_type
        assert Variable(name="a", resolved_type="FLOAT").is_exported_type
        assert not Variable(name="a", resolved_type="STRING").is_exported_type
        assert not Variable(name="a", resolved_type="BOOLEAN").is_exported_type

    def test_value_for_falls_back_to_first_mode(self):
        var = Variable.model_validate(variable("v", "a", "FLOAT", {"m1": 1, "m2": 2}))
        assert var.value_for("m2") == LiteralValue(value=2)
        assert var.value_for("missing") == LiteralValue(value=1)
        assert var.value_for(None) == LiteralValue(value=1)

    def test_value_for_without_values(self):
        assert Variable(name="a", resolved_type="FLOAT").value_for("m1") is None

    def test_models_are_frozen(self):
        var = Variable(name="a", resolved_type="FLOAT")
        with pytest.raises(ValidationError):
            var.name = "b"


class TestCollection:
    """Test Collection helpers."""

    def test_key_and_first_mode(self):
        col = Collection.model_validate(collection("Primitives", [], modes=[("a", "A"), ("b", "B")]))
        assert col.key == "primitives"
        assert col.first_mode.mode_id == "a"

    def test_no_modes(self):
        assert Collection(name="Empty").first_mode is None


class TestTextStyle:
    """Test TextStyle bound variables."""

    def test_bound_variable_id(self):
        style = TextStyle.model_validate(
            {"name": "Body", "boundVariables": {"fontSize": alias("v-size"), "fontFamily": "x"}}
        )
        assert style.bound_variable_id("fontSize") == "v-size"
        assert style.bound_variable_id("fontFamily") is None
        assert style.bound_variable_id("lineHeight") is None


class TestCodeSyntaxResult:
    def test_to_message(self):
        result = CodeSyntaxResult(updated_count=3, skipped_count=2)
        assert result.total_processed == 5
        assert result.to_message() == {"updatedCount": 3, "skippedCount": 2, "totalProcessed": 5}


class TestSnapshotSource:
    """Test SnapshotSource loading, saving and writes."""

    def test_satisfies_protocol(self, empty_source):
        assert isinstance(empty_source, VariableSource)

    @pytest.mark.asyncio
    async def test_collections_in_order(self, design_system_source):
        names = [c.name for c in await design_system_source.get_collections()]
        assert names == ["Primitives", "Color", "Spacing"]

    @pytest.mark.asyncio
    async def test_missing_collection_ids_are_assigned(self):
        source = make_source(collections=[collection("A", [], id=""), collection("B", [], id="")])
        ids = [c.id for c in await source.get_collections()]
        assert ids == ["VariableCollectionId:0", "VariableCollectionId:1"]

    @pytest.mark.asyncio
    async def test_get_variable(self, design_system_source):
        var = await design_system_source.get_variable("p-space")
        assert var.name == "size/unit"
        assert await design_system_source.get_variable("nope") is None

    @pytest.mark.asyncio
    async def test_list_variables_skips_dangling_ids(self):
        source = make_source(
            collections=[collection("A", ["v1", "ghost"])],
            variables=[variable("v1", "a", "FLOAT", {"m1": 1})],
        )
        assert [v.id for v in await list_variables(source)] == ["v1"]

    def test_invalid_snapshot(self):
        with pytest.raises(SnapshotError):
            SnapshotSource.from_dict({"variables": [{"id": "x"}]})
        with pytest.raises(SnapshotError):
            SnapshotSource.from_dict([])

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError, match="not found"):
            SnapshotSource.load(tmp_path / "missing.json")

    def test_load_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(SnapshotError):
            SnapshotSource.load(path)

    @pytest.mark.asyncio
    async def test_save_and_load(self, tmp_path, design_system_source):
        path = tmp_path / "snapshot.json"
        design_system_source.save(path)

        raw = json.loads(path.read_text(encoding="utf-8"))
        btn = next(v for v in raw["variables"] if v["id"] == "c-btn-bg")
        assert btn["valuesByMode"]["light"] == alias("p-blue")
        assert raw["collections"][0]["variableIds"] == ["p-blue", "p-red", "p-space"]

        reloaded = SnapshotSource.load(path)
        var = await reloaded.get_variable("c-btn-bg")
        assert var.values_by_mode["dark"] == AliasRef(target_id="p-blue")

    @pytest.mark.asyncio
    async def test_set_code_syntax(self, design_system_source):
        await design_system_source.set_code_syntax("p-red", "WEB", "var(--x)")
        var = await design_system_source.get_variable("p-red")
        assert var.code_syntax == {"WEB": "var(--x)"}

    @pytest.mark.asyncio
    async def test_set_code_syntax_unknown_variable(self, empty_source):
        with pytest.raises(SnapshotError):
            await empty_source.set_code_syntax("ghost", "WEB", "var(--x)")

    @pytest.mark.asyncio
    async def test_create_collection_and_variable(self, empty_source):
        col = empty_source.create_collection("tokens")
        assert col.id == "VariableCollectionId:0"
        assert col.modes[0].mode_id == "0:0"

        var = empty_source.create_variable(col.id, "color/brand", "COLOR", "0:0", RED)
        assert var.values_by_mode == {"0:0": LiteralValue(value=RED)}
        assert empty_source.get_collection(col.id).variable_ids == [var.id]
        assert await empty_source.get_variable(var.id) == var

    def test_create_variable_unknown_collection(self, empty_source):
        with pytest.raises(SnapshotError):
            empty_source.create_variable("ghost", "a", "FLOAT", "0:0", 1)
