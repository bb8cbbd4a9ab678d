"""Rich text model and the ANSI <-> rich text facade.

RichText is clean text plus formatting ranges. Sinks (whatever actually
displays the text) receive it as named attributes:

    foreground_color  (r, g, b)
    background_color  (r, g, b)
    intensity         "bold" | "faint"
    italic            True
    underline         "single" | "double"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Protocol

from ansi_richtext.codes import Category, SGRCode
from ansi_richtext.colors import Color, ColorLike, ColorMapper, parse_color
from ansi_richtext.config import ConverterConfig
from ansi_richtext.escape_parser import EscapeOccurrence, insert_escapes, parse_escapes
from ansi_richtext.resolver import FormattingRange, ends_formatting, resolve_runs
from ansi_richtext.serializer import serialize

ATTRIBUTE_NAMES: dict[Category, str] = {
    Category.FOREGROUND: "foreground_color",
    Category.BACKGROUND: "background_color",
    Category.INTENSITY: "intensity",
    Category.ITALIC: "italic",
    Category.UNDERLINE: "underline",
}
_CATEGORY_BY_NAME = {name: cat for cat, name in ATTRIBUTE_NAMES.items()}

_CODE_VALUES: dict[SGRCode, Any] = {
    SGRCode.INTENSITY_BOLD: "bold",
    SGRCode.INTENSITY_FAINT: "faint",
    SGRCode.ITALIC_ON: True,
    SGRCode.UNDERLINE_SINGLE: "single",
    SGRCode.UNDERLINE_DOUBLE: "double",
}
_VALUE_CODES: dict[tuple[Category, Any], SGRCode] = {
    (code.category, value): code for code, value in _CODE_VALUES.items()
}


class RichTextSink(Protocol):
    """Anything that can take attribute assignments over a text buffer."""

    def set_attribute(self, name: str, value: Any, start: int, end: int) -> None:
        ...


@dataclass(frozen=True)
class TextAttribute:
    """A formatting range in sink form."""

    name: str
    value: Any
    start: int
    end: int

    @classmethod
    def from_range(cls, r: FormattingRange) -> Optional["TextAttribute"]:
        """Sink form of a range; None for ranges no sink attribute expresses."""
        name = ATTRIBUTE_NAMES.get(r.category)
        if name is None:
            return None
        if r.category in (Category.FOREGROUND, Category.BACKGROUND):
            value = r.value
        else:
            try:
                code = SGRCode.from_param(int(r.value))
            except (TypeError, ValueError):
                return None
            if code.category is not r.category or code not in _CODE_VALUES:
                return None
            value = _CODE_VALUES[code]
        return cls(name, value, r.start, r.end)

    def to_range(self) -> Optional[FormattingRange]:
        """Back to a FormattingRange; None for unknown names or values."""
        category = _CATEGORY_BY_NAME.get(self.name)
        if category is None:
            return None
        if category in (Category.FOREGROUND, Category.BACKGROUND):
            try:
                value: Any = parse_color(self.value)
            except ValueError:
                return None
        else:
            value = _VALUE_CODES.get((category, self.value))
            if value is None:
                return None
        return FormattingRange(category, value, self.start, self.end)


@dataclass
class RichText:
    """Clean text with formatting ranges and an optional default font."""

    text: str
    ranges: list[FormattingRange] = field(default_factory=list)
    font: Optional[Any] = None

    @classmethod
    def from_attributes(
        cls, text: str, attributes: Iterable[TextAttribute], font: Optional[Any] = None
    ) -> "RichText":
        """Build from sink-form attributes, dropping any we can't express."""
        ranges = [r for r in (a.to_range() for a in attributes) if r is not None]
        return cls(text=text, ranges=ranges, font=font)

    def attributes(self) -> list[TextAttribute]:
        attrs = (TextAttribute.from_range(r) for r in self.ranges)
        return [a for a in attrs if a is not None]

    def apply_to(self, sink: RichTextSink) -> None:
        """Push every attribute into a sink."""
        for attr in self.attributes():
            sink.set_attribute(attr.name, attr.value, attr.start, attr.end)

    def ranges_at(self, offset: int) -> list[FormattingRange]:
        """Ranges covering the character at offset."""
        return [r for r in self.ranges if r.start <= offset < r.end]


class AnsiEscapeHelper:
    """Converts between ANSI-escaped strings and RichText.

    Holds no per-conversion state: the color overrides are snapshotted into
    a ColorMapper on every call.

    Usage:
        helper = AnsiEscapeHelper(ansi_colors={SGRCode.FG_RED: "#cc0000"})
        rich = helper.rich_text_from_ansi("\\x1b[31merror\\x1b[0m")
        helper.ansi_from_rich_text(rich)
    """

    def __init__(
        self,
        font: Optional[Any] = None,
        ansi_colors: Optional[Mapping[SGRCode, ColorLike]] = None,
    ) -> None:
        self.font = font
        self.ansi_colors: dict[SGRCode, ColorLike] = dict(ansi_colors or {})

    @classmethod
    def from_config(cls, config: Optional[ConverterConfig] = None) -> "AnsiEscapeHelper":
        """Build a helper from the configured palette and font."""
        config = config or ConverterConfig.from_env()
        return cls(font=config.font, ansi_colors=config.mapper().overrides)

    def _mapper(self) -> ColorMapper:
        return ColorMapper(self.ansi_colors)

    def rich_text_from_ansi(self, text: str) -> RichText:
        occurrences, clean = parse_escapes(text)
        ranges = resolve_runs(occurrences, len(clean), self._mapper())
        return RichText(text=clean, ranges=ranges, font=self.font)

    def ansi_from_rich_text(self, rich: RichText) -> str:
        return serialize(rich.text, rich.ranges, self._mapper())

    def escape_codes_for_string(self, text: str) -> tuple[list[EscapeOccurrence], str]:
        """SGR codes with their clean-text locations, plus the clean text."""
        result = parse_escapes(text)
        return result.occurrences, result.clean_text

    def ansi_from_codes_and_locations(
        self, occurrences: Iterable[EscapeOccurrence], clean_text: str
    ) -> str:
        return insert_escapes(clean_text, occurrences)

    def attributes_for_string(self, text: str) -> tuple[list[TextAttribute], str]:
        """Sink-form attributes for an escaped string, plus the clean text."""
        rich = self.rich_text_from_ansi(text)
        return rich.attributes(), rich.text

    def ends_formatting(self, end_code: SGRCode, start_code: SGRCode) -> bool:
        return ends_formatting(end_code, start_code)

    def color_for_code(self, code: SGRCode) -> Optional[Color]:
        return self._mapper().color_for_code(code)

    def code_for_color(self, color: ColorLike, foreground: bool) -> SGRCode:
        return self._mapper().code_for_color(color, foreground)
