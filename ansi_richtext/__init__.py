"""Convert between ANSI SGR-escaped text and rich text formatting ranges."""

from ansi_richtext.codes import Category, SGRCode
from ansi_richtext.colors import STANDARD_COLORS, ColorMapper, parse_color
from ansi_richtext.escape_parser import EscapeOccurrence, insert_escapes, parse_escapes, strip_escapes
from ansi_richtext.resolver import FormattingRange, ends_formatting, resolve_runs
from ansi_richtext.richtext import AnsiEscapeHelper, RichText, TextAttribute
from ansi_richtext.serializer import serialize

__version__ = "0.1.0"

__all__ = [
    "AnsiEscapeHelper",
    "Category",
    "ColorMapper",
    "EscapeOccurrence",
    "FormattingRange",
    "RichText",
    "SGRCode",
    "STANDARD_COLORS",
    "TextAttribute",
    "ends_formatting",
    "insert_escapes",
    "parse_color",
    "parse_escapes",
    "resolve_runs",
    "serialize",
    "strip_escapes",
]
