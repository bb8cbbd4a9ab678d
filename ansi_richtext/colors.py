"""Bidirectional mapping between color values and SGR color codes.

Colors are plain (r, g, b) tuples. Strings are parsed with Pillow's
ImageColor, so anything from "#cc0000" to "rgb(204, 0, 0)" or "red" works
wherever a color is accepted.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from PIL import ImageColor

from ansi_richtext.codes import SGRCode, color_code, color_codes

Color = tuple[int, int, int]
ColorLike = Union[str, tuple, list]


def parse_color(value: Any) -> Color:
    """Normalise a color string or 3/4-tuple to an (r, g, b) tuple.

    Raises ValueError for anything that isn't a color.
    """
    if isinstance(value, str):
        rgb = ImageColor.getrgb(value)
        return (rgb[0], rgb[1], rgb[2])
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = tuple(value[:3])
        if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in channels):
            return channels
    raise ValueError(f"Not a color: {value!r}")


# Standard ANSI colors by color index (black, red, ..., white)
STANDARD_COLORS: tuple[Color, ...] = tuple(
    parse_color(hex_value)
    for hex_value in (
        "#000000", "#ff0000", "#00ff00", "#ffff00",
        "#0000ff", "#ff00ff", "#00ffff", "#ffffff",
    )
)


class ColorMapper:
    """Color lookup with caller overrides and standard-color fallback.

    Usage:
        mapper = ColorMapper({SGRCode.FG_RED: "#cc0000"})
        mapper.color_for_code(SGRCode.FG_RED)           # (204, 0, 0)
        mapper.code_for_color("#cc0000", foreground=True)  # SGRCode.FG_RED
    """

    def __init__(self, overrides: Optional[Mapping[SGRCode, ColorLike]] = None) -> None:
        self._overrides: dict[SGRCode, Color] = {}
        for code, color in (overrides or {}).items():
            code = SGRCode.from_param(int(code))
            if not code.is_color:
                raise ValueError(f"Override key {code!r} is not a color code")
            self._overrides[code] = parse_color(color)

    @property
    def overrides(self) -> dict[SGRCode, Color]:
        return dict(self._overrides)

    def color_for_code(self, code: SGRCode) -> Optional[Color]:
        """Color to display for a color code; None for anything else."""
        if code in self._overrides:
            return self._overrides[code]
        index = SGRCode.from_param(int(code)).color_index
        if index is None:
            return None
        return STANDARD_COLORS[index]

    def code_for_color(self, color: Any, foreground: bool) -> SGRCode:
        """Find the FG/BG code whose color equals `color` exactly."""
        try:
            wanted = parse_color(color)
        except ValueError:
            return SGRCode.NONE_OR_INVALID

        for code in color_codes(foreground):
            if self._overrides.get(code) == wanted:
                return code

        for index, standard in enumerate(STANDARD_COLORS):
            if standard == wanted:
                return color_code(index, foreground)

        return SGRCode.NONE_OR_INVALID

    def __repr__(self) -> str:
        return f"ColorMapper(overrides={self._overrides!r})"
