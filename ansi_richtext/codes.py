"""SGR (Select Graphic Rendition) code table.

Every code belongs to exactly one category:
  - ALL_RESET: cancels everything
  - INTENSITY: bold, faint, normal
  - ITALIC: on
  - UNDERLINE: single, double, none
  - FOREGROUND / BACKGROUND: 8 colors plus reset
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class Category(Enum):
    """Formatting channel an SGR code acts on."""

    ALL_RESET = "all_reset"
    INTENSITY = "intensity"
    ITALIC = "italic"
    UNDERLINE = "underline"
    FOREGROUND = "foreground"
    BACKGROUND = "background"
    INVALID = "invalid"


# Channel categories in canonical output order
FORMATTING_CATEGORIES: tuple[Category, ...] = (
    Category.INTENSITY,
    Category.ITALIC,
    Category.UNDERLINE,
    Category.FOREGROUND,
    Category.BACKGROUND,
)

COLOR_NAMES: tuple[str, ...] = (
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
)

_FG_BASE = 30
_BG_BASE = 40


class SGRCode(IntEnum):
    """SGR parameter values understood by the converter."""

    NONE_OR_INVALID = -1

    ALL_RESET = 0

    INTENSITY_BOLD = 1
    INTENSITY_FAINT = 2
    INTENSITY_NORMAL = 22

    ITALIC_ON = 3

    UNDERLINE_SINGLE = 4
    UNDERLINE_DOUBLE = 21
    UNDERLINE_NONE = 24

    FG_BLACK = 30
    FG_RED = 31
    FG_GREEN = 32
    FG_YELLOW = 33
    FG_BLUE = 34
    FG_MAGENTA = 35
    FG_CYAN = 36
    FG_WHITE = 37
    FG_RESET = 39

    BG_BLACK = 40
    BG_RED = 41
    BG_GREEN = 42
    BG_YELLOW = 43
    BG_BLUE = 44
    BG_MAGENTA = 45
    BG_CYAN = 46
    BG_WHITE = 47
    BG_RESET = 49

    @classmethod
    def from_param(cls, value: int) -> "SGRCode":
        """Map a raw SGR parameter to its code, or NONE_OR_INVALID."""
        try:
            return cls(value)
        except ValueError:
            return cls.NONE_OR_INVALID

    @property
    def category(self) -> Category:
        return _CATEGORIES[self]

    @property
    def is_reset(self) -> bool:
        """True for a category's cancel code (not ALL_RESET)."""
        return self in _RESET_CODES.values()

    @property
    def is_color(self) -> bool:
        return self.color_index is not None

    @property
    def color_index(self) -> Optional[int]:
        """0-7 for color codes, None otherwise."""
        if _FG_BASE <= self.value <= _FG_BASE + 7:
            return self.value - _FG_BASE
        if _BG_BASE <= self.value <= _BG_BASE + 7:
            return self.value - _BG_BASE
        return None


_CATEGORIES: dict[SGRCode, Category] = {
    SGRCode.NONE_OR_INVALID: Category.INVALID,
    SGRCode.ALL_RESET: Category.ALL_RESET,
    SGRCode.INTENSITY_BOLD: Category.INTENSITY,
    SGRCode.INTENSITY_FAINT: Category.INTENSITY,
    SGRCode.INTENSITY_NORMAL: Category.INTENSITY,
    SGRCode.ITALIC_ON: Category.ITALIC,
    SGRCode.UNDERLINE_SINGLE: Category.UNDERLINE,
    SGRCode.UNDERLINE_DOUBLE: Category.UNDERLINE,
    SGRCode.UNDERLINE_NONE: Category.UNDERLINE,
    SGRCode.FG_RESET: Category.FOREGROUND,
    SGRCode.BG_RESET: Category.BACKGROUND,
}
_CATEGORIES.update({SGRCode(_FG_BASE + i): Category.FOREGROUND for i in range(8)})
_CATEGORIES.update({SGRCode(_BG_BASE + i): Category.BACKGROUND for i in range(8)})

_RESET_CODES: dict[Category, SGRCode] = {
    Category.INTENSITY: SGRCode.INTENSITY_NORMAL,
    Category.UNDERLINE: SGRCode.UNDERLINE_NONE,
    Category.FOREGROUND: SGRCode.FG_RESET,
    Category.BACKGROUND: SGRCode.BG_RESET,
}


def reset_code_for(category: Category) -> Optional[SGRCode]:
    """Return the cancel code for a category (italic has none)."""
    return _RESET_CODES.get(category)


def color_code(index: int, foreground: bool) -> SGRCode:
    """Build the FG or BG code for a 0-7 color index."""
    if not 0 <= index <= 7:
        return SGRCode.NONE_OR_INVALID
    return SGRCode((_FG_BASE if foreground else _BG_BASE) + index)


def color_codes(foreground: bool) -> list[SGRCode]:
    """All eight value-bearing color codes of one channel, ascending."""
    return [color_code(i, foreground) for i in range(8)]
