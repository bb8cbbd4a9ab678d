"""Tests for palette loading, validation, and configuration."""

import tempfile
from pathlib import Path

import pytest

from ansi_richtext.codes import SGRCode
from ansi_richtext.config import PALETTE_ENV, PALETTES_DIR_ENV, ConverterConfig
from ansi_richtext.palettes import (
    Palette,
    PaletteError,
    list_palettes,
    load_palette,
    load_palette_from_dict,
    validate_palette_data,
)


class TestPaletteValidation:
    def test_valid_palette(self):
        data = {
            "id": "test",
            "foreground": {"red": "#cc0000"},
            "background": {"black": "#111111"},
        }
        assert validate_palette_data(data) == []

    def test_missing_id(self):
        errors = validate_palette_data({"foreground": {}})
        assert any("id" in e for e in errors)

    def test_unknown_color_name(self):
        errors = validate_palette_data({"id": "x", "foreground": {"orange": "#ff8800"}})
        assert any("orange" in e for e in errors)

    def test_invalid_color(self):
        errors = validate_palette_data({"id": "x", "background": {"red": "nope"}})
        assert any("not a valid color" in e for e in errors)

    def test_unknown_key(self):
        errors = validate_palette_data({"id": "x", "bold": {}})
        assert any("unknown key" in e for e in errors)

    def test_section_must_be_mapping(self):
        errors = validate_palette_data({"id": "x", "foreground": ["red"]})
        assert any("mapping" in e for e in errors)

    def test_document_must_be_mapping(self):
        errors = validate_palette_data(["a", "b"])
        assert len(errors) == 1
        assert "mapping" in errors[0]


class TestPaletteLoading:
    def test_load_builtin_palettes(self):
        for name in list_palettes():
            palette = load_palette(name)
            assert palette.id == name

    def test_builtin_registry(self):
        palettes = list_palettes()
        assert {"standard", "xterm", "solarized"} <= set(palettes)

    def test_standard_has_no_overrides(self):
        assert load_palette("standard").overrides() == {}

    def test_solarized_overrides(self):
        overrides = load_palette("solarized").overrides()
        assert overrides[SGRCode.FG_RED] == (220, 50, 47)
        assert overrides[SGRCode.BG_BLACK] == (0, 43, 54)

    def test_palette_mapper(self):
        mapper = load_palette("solarized").mapper()
        assert mapper.code_for_color("#dc322f", foreground=True) is SGRCode.FG_RED

    def test_not_found(self):
        with pytest.raises(PaletteError, match="not found"):
            load_palette("nonexistent_palette_xyz")

    def test_load_from_dict(self):
        palette = load_palette_from_dict(
            {"id": "custom", "foreground": {"green": "#00aa00"}, "meta": {"by": "me"}}
        )
        assert isinstance(palette, Palette)
        assert palette.name == "Custom"
        assert palette.foreground == {"green": (0, 170, 0)}
        assert palette.overrides() == {SGRCode.FG_GREEN: (0, 170, 0)}
        assert palette.meta["by"] == "me"


class TestPaletteFile:
    def test_invalid_yaml_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.yaml"
            path.write_text("id: [unclosed")
            with pytest.raises(PaletteError, match="Invalid YAML"):
                load_palette("bad", palettes_dir=Path(tmpdir))

    def test_validation_failure_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "incomplete.yaml"
            path.write_text("foreground:\n  red: '#cc0000'\n")
            with pytest.raises(PaletteError, match="validation failed"):
                load_palette("incomplete", palettes_dir=Path(tmpdir))

    def test_list_missing_dir(self):
        assert list_palettes(Path("/nonexistent/palettes")) == []


class TestConverterConfig:
    def test_defaults(self):
        config = ConverterConfig()
        assert config.palette == "standard"
        assert config.font is None
        assert config.mapper().overrides == {}

    def test_from_env(self):
        config = ConverterConfig.from_env({PALETTE_ENV: "xterm"})
        assert config.palette == "xterm"
        assert config.mapper().color_for_code(SGRCode.FG_RED) == (205, 0, 0)

    def test_from_env_palettes_dir(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "mine.yaml").write_text("id: mine\nbackground:\n  blue: '#000080'\n")
            config = ConverterConfig.from_env(
                {PALETTE_ENV: "mine", PALETTES_DIR_ENV: tmpdir}
            )
            assert config.mapper().color_for_code(SGRCode.BG_BLUE) == (0, 0, 128)

    def test_overrides_beat_env(self):
        config = ConverterConfig.from_env({PALETTE_ENV: "xterm"}, palette="solarized")
        assert config.palette == "solarized"
