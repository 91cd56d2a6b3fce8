"""Tests for the command message dispatcher."""

from __future__ import annotations

import pytest

from themetokens.errors import MessageError, SnapshotError
from themetokens.messages import (
    ApplyCssVarSyntaxCommand,
    ExportCommand,
    ResizeCommand,
    handle_message,
    parse_command,
)


class UnreadableSource:
    """Variable source whose storage cannot be read."""

    async def get_collections(self):
        raise SnapshotError("storage unavailable")

    async def get_variable(self, variable_id):
        return None

    async def get_text_styles(self):
        return []

    async def set_code_syntax(self, variable_id, platform, syntax):
        raise SnapshotError("read-only")


class TestParseCommand:
    """Test command validation."""

    def test_export_with_camel_case_options(self):
        command = parse_command(
            {"type": "EXPORT", "options": {"generateColorPresets": True, "useRem": True}}
        )
        assert isinstance(command, ExportCommand)
        assert command.options.generate_color_presets
        assert command.options.use_rem

    def test_export_without_options(self):
        command = parse_command({"type": "EXPORT"})
        assert not command.options.generate_typography

    def test_apply_syntax(self):
        command = parse_command({"type": "APPLY_CSS_VAR_SYNTAX", "overwriteExisting": True})
        assert isinstance(command, ApplyCssVarSyntaxCommand)
        assert command.overwrite_existing

    def test_resize(self):
        command = parse_command({"type": "RESIZE", "width": 400, "height": 600})
        assert isinstance(command, ResizeCommand)

    @pytest.mark.parametrize(
        "message",
        [
            {"type": "DELETE_EVERYTHING"},
            {"type": "RESIZE", "width": 400},
            {"width": 400},
        ],
    )
    def test_invalid_messages(self, message):
        with pytest.raises(MessageError):
            parse_command(message)


class TestHandleMessage:
    """Test command dispatch."""

    @pytest.mark.asyncio
    async def test_resize_has_no_result(self, empty_source):
        assert await handle_message({"type": "RESIZE", "width": 1, "height": 1}, empty_source) is None

    @pytest.mark.asyncio
    async def test_export(self, design_system_source):
        result = await handle_message(
            {"type": "EXPORT", "options": {"generateSpacingPresets": True}}, design_system_source
        )
        assert result["type"] == "EXPORT_RESULT"
        files = result["files"]
        assert files[0]["fileName"] == "theme.json"
        assert "spacingSizes" in files[0]["body"]["settings"]["spacing"]
        assert [f["fileName"] for f in files[1:]] == [
            "styles/button-secondary.json",
            "styles/section-light.json",
            "styles/section-dark.json",
        ]

    @pytest.mark.asyncio
    async def test_color_presets(self, design_system_source):
        result = await handle_message({"type": "GET_COLOR_PRESETS"}, design_system_source)
        assert result["type"] == "COLOR_PRESETS_RESULT"
        first = result["presets"][0]
        assert first["collectionName"] == "Color"
        assert first["resolvedColor"] == "#3366cc"

    @pytest.mark.asyncio
    async def test_apply_css_var_syntax(self, design_system_source):
        result = await handle_message({"type": "APPLY_CSS_VAR_SYNTAX"}, design_system_source)
        assert result == {
            "type": "CSS_VAR_SYNTAX_RESULT",
            "updatedCount": 10,
            "skippedCount": 0,
            "totalProcessed": 10,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("command", "result_type"),
        [
            ("EXPORT", "EXPORT_RESULT"),
            ("GET_COLOR_PRESETS", "COLOR_PRESETS_RESULT"),
            ("APPLY_CSS_VAR_SYNTAX", "CSS_VAR_SYNTAX_RESULT"),
        ],
    )
    async def test_failures_are_reported(self, command, result_type):
        result = await handle_message({"type": command}, UnreadableSource())
        assert result == {"type": result_type, "error": "storage unavailable"}

    @pytest.mark.asyncio
    async def test_unknown_command_raises(self, empty_source):
        with pytest.raises(MessageError):
            await handle_message({"type": "NOPE"}, empty_source)
