"""Central configuration for the converter."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ansi_richtext.colors import ColorMapper


# Resolve package root relative to this file
PACKAGE_ROOT = Path(__file__).resolve().parent
PALETTES_DIR = PACKAGE_ROOT / "palettes"
DEFAULT_PALETTE = "standard"

PALETTE_ENV = "ANSI_RICHTEXT_PALETTE"
PALETTES_DIR_ENV = "ANSI_RICHTEXT_PALETTES_DIR"


@dataclass
class ConverterConfig:
    """Converter settings assembled from env and defaults."""

    palette: str = DEFAULT_PALETTE
    palettes_dir: Path = field(default_factory=lambda: PALETTES_DIR)
    # Opaque pass-through for rich text sinks, never interpreted here
    font: Optional[Any] = None

    def __post_init__(self) -> None:
        self.palettes_dir = Path(self.palettes_dir)

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None, **overrides: Any) -> "ConverterConfig":
        """Build a config, letting environment variables replace defaults."""
        environ = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}
        if environ.get(PALETTE_ENV):
            kwargs["palette"] = environ[PALETTE_ENV]
        if environ.get(PALETTES_DIR_ENV):
            kwargs["palettes_dir"] = Path(environ[PALETTES_DIR_ENV])
        kwargs.update(overrides)
        return cls(**kwargs)

    def mapper(self) -> "ColorMapper":
        """Load the configured palette as a ColorMapper."""
        from ansi_richtext.palettes import load_palette

        return load_palette(self.palette, palettes_dir=self.palettes_dir).mapper()
