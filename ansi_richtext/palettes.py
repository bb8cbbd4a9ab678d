"""Palette loader, validator, and registry.

Palettes are YAML files in the palettes/ directory that override the
colors used for the eight ANSI foreground and background colors:

    id: solarized
    name: Solarized Dark
    foreground:
      red: "#dc322f"
    background:
      black: "#002b36"

Colors that a palette doesn't mention fall back to the standard colors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ansi_richtext.codes import COLOR_NAMES, SGRCode, color_code
from ansi_richtext.colors import Color, ColorMapper, parse_color
from ansi_richtext.config import PALETTES_DIR

logger = logging.getLogger(__name__)

SECTIONS = {"foreground": True, "background": False}
KNOWN_KEYS = {"id", "name", "meta"} | set(SECTIONS)


class PaletteError(Exception):
    """Raised when a palette is missing or invalid."""

    pass


@dataclass
class Palette:
    """A fully resolved palette."""

    id: str
    name: str = ""
    foreground: dict[str, Color] = field(default_factory=dict)
    background: dict[str, Color] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.id.title()

    def overrides(self) -> dict[SGRCode, Color]:
        """Palette colors keyed by their SGR code."""
        result: dict[SGRCode, Color] = {}
        for section, is_fg in SECTIONS.items():
            for color_name, color in getattr(self, section).items():
                result[color_code(COLOR_NAMES.index(color_name), is_fg)] = color
        return result

    def mapper(self) -> ColorMapper:
        return ColorMapper(self.overrides())


# ── Loader ────────────────────────────────────────────────────────────────

def validate_palette_data(data: Any, source: str = "<unknown>") -> list[str]:
    """Validate palette data. Returns list of error messages (empty = valid)."""
    if not isinstance(data, dict):
        return [f"{source}: palette must be a mapping (got {type(data).__name__})"]

    errors = []

    if "id" not in data:
        errors.append(f"{source}: missing required field 'id'")

    for key in data:
        if key not in KNOWN_KEYS:
            errors.append(f"{source}: unknown key '{key}'")

    for section in SECTIONS:
        colors = data.get(section) or {}
        if not isinstance(colors, dict):
            errors.append(f"{source}: '{section}' must be a mapping of color names")
            continue
        for key, val in colors.items():
            if key not in COLOR_NAMES:
                errors.append(f"{source}: unknown {section} color '{key}'")
            try:
                parse_color(val)
            except ValueError:
                errors.append(f"{source}: {section} color '{key}' is not a valid color (got {val!r})")

    return errors


def load_palette_from_dict(data: dict) -> Palette:
    """Load a Palette from a validated dict."""
    sections = {
        section: {
            k: parse_color(v)
            for k, v in (data.get(section) or {}).items()
            if k in COLOR_NAMES
        }
        for section in SECTIONS
    }

    return Palette(
        id=data["id"],
        name=data.get("name", str(data["id"]).title()),
        meta=data.get("meta") or {},
        **sections,
    )


def load_palette(name: str, palettes_dir: Optional[Path] = None) -> Palette:
    """Load a palette by name from the palettes directory."""
    palettes_dir = palettes_dir or PALETTES_DIR
    path = palettes_dir / f"{name}.yaml"

    if not path.exists():
        available = list_palettes(palettes_dir)
        raise PaletteError(
            f"Palette '{name}' not found at {path}. "
            f"Available: {', '.join(available) or 'none'}"
        )

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise PaletteError(f"Invalid YAML in {path}: {e}") from e

    errors = validate_palette_data(data, source=str(path))
    if errors:
        raise PaletteError("Palette validation failed:\n  " + "\n  ".join(errors))

    palette = load_palette_from_dict(data)
    logger.debug("loaded palette %s from %s", palette.id, path)
    return palette


def list_palettes(palettes_dir: Optional[Path] = None) -> list[str]:
    """List available palette names."""
    palettes_dir = palettes_dir or PALETTES_DIR
    if not palettes_dir.exists():
        return []
    return sorted(p.stem for p in palettes_dir.glob("*.yaml"))
