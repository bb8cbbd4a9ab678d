"""ANSI escape sequence parser.

Splits raw terminal text into:
  - clean text (every recognised escape sequence removed)
  - an ordered list of SGR code occurrences, located by offset into the
    clean text

Handles:
  - SGR sequences, ESC [ <params> m, one occurrence per parameter
  - Other complete CSI sequences (any final byte but m), OSC sequences and
    charset selection: removed, no effect
  - Malformed SGR (non-numeric parameters, intermediate bytes) and
    unterminated sequences: left in the text verbatim
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from ansi_richtext.codes import SGRCode

logger = logging.getLogger(__name__)

CSI = "\x1b["
SGR_END = "m"

# Any complete CSI, then the other escapes we recognise only to drop them
ESCAPE_RE = re.compile(
    r"\x1b\[(?P<params>[0-?]*)(?P<inter>[ -/]*)(?P<final>[@-~])"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[()][AB012]"
)

SGR_PARAMS_RE = re.compile(r"[0-9;]*")

# Longest parameter we bother converting; anything longer is unknown
_MAX_PARAM_DIGITS = 3

# Extended color introducers and the argument count per sub-mode
_EXTENDED_COLOR = {38, 48}
_EXTENDED_ARGS = {5: 1, 2: 3}


@dataclass(frozen=True)
class EscapeOccurrence:
    """An SGR code and where it applies in the clean text."""

    code: SGRCode
    location: int


@dataclass
class ParseResult:
    """Output of parse_escapes."""

    occurrences: list[EscapeOccurrence] = field(default_factory=list)
    clean_text: str = ""

    def __iter__(self):
        # Allows `occurrences, clean = parse_escapes(s)`
        return iter((self.occurrences, self.clean_text))


def _param_value(p: str) -> int:
    digits = p.lstrip("0")
    if len(digits) > _MAX_PARAM_DIGITS:
        return -1
    return int(digits or "0")


def parse_sgr_params(params_str: str) -> list[SGRCode]:
    """Expand an SGR parameter string into codes, left to right.

    An empty string is a single ALL_RESET and an empty parameter counts as 0.
    Unknown values are dropped; 38/48 swallow their 256-color and truecolor
    arguments.
    """
    if not params_str:
        return [SGRCode.ALL_RESET]

    params = [_param_value(p) for p in params_str.split(";")]
    codes: list[SGRCode] = []
    i = 0
    while i < len(params):
        p = params[i]
        if p in _EXTENDED_COLOR:
            if i + 1 < len(params) and params[i + 1] in _EXTENDED_ARGS:
                i += 1 + _EXTENDED_ARGS[params[i + 1]]
            logger.debug("ignoring extended color parameter %d", p)
        else:
            code = SGRCode.from_param(p)
            if code is SGRCode.NONE_OR_INVALID:
                logger.debug("ignoring unknown SGR parameter %d", p)
            else:
                codes.append(code)
        i += 1
    return codes


def parse_escapes(text: str) -> ParseResult:
    """Extract SGR occurrences and the clean text from a raw string."""
    result = ParseResult()
    pieces: list[str] = []
    clean_len = 0
    pos = 0

    for m in ESCAPE_RE.finditer(text):
        chunk = text[pos : m.start()]
        pieces.append(chunk)
        clean_len += len(chunk)
        pos = m.end()

        final = m.group("final")
        if final != SGR_END:
            logger.debug("dropping non-SGR escape %r", m.group(0))
            continue

        params = m.group("params")
        if m.group("inter") or not SGR_PARAMS_RE.fullmatch(params):
            # Malformed SGR stays in the text as-is
            logger.debug("keeping malformed SGR %r", m.group(0))
            pieces.append(m.group(0))
            clean_len += len(m.group(0))
            continue
        for code in parse_sgr_params(params):
            result.occurrences.append(EscapeOccurrence(code, clean_len))

    pieces.append(text[pos:])
    result.clean_text = "".join(pieces)
    return result


def strip_escapes(text: str) -> str:
    """Remove recognised escape sequences from text."""
    return parse_escapes(text).clean_text


def format_sequence(codes: Iterable[SGRCode]) -> str:
    """Build a single ESC[...m sequence from codes."""
    return CSI + ";".join(str(int(c)) for c in codes) + SGR_END


def insert_escapes(clean_text: str, occurrences: Iterable[EscapeOccurrence]) -> str:
    """Insert SGR sequences into clean text at the occurrences' locations.

    Codes sharing a location are joined into one sequence, in the order
    given. Locations outside the text are clamped to it.
    """
    by_location: dict[int, list[SGRCode]] = {}
    for occ in occurrences:
        if occ.code == SGRCode.NONE_OR_INVALID:
            continue
        location = min(max(occ.location, 0), len(clean_text))
        by_location.setdefault(location, []).append(occ.code)

    out: list[str] = []
    pos = 0
    for location in sorted(by_location):
        out.append(clean_text[pos:location])
        out.append(format_sequence(by_location[location]))
        pos = location
    out.append(clean_text[pos:])
    return "".join(out)
