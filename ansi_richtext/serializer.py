"""Formatting ranges -> text with SGR escape sequences.

The ranges may come from anywhere (not only the resolver). Every range
boundary is a cut point; at each one we emit a single sequence that closes
the categories ending there and opens the ones starting there.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ansi_richtext.codes import FORMATTING_CATEGORIES, Category, SGRCode, reset_code_for
from ansi_richtext.colors import ColorMapper
from ansi_richtext.escape_parser import EscapeOccurrence, insert_escapes
from ansi_richtext.resolver import COLOR_CATEGORIES, FormattingRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Span:
    category: Category
    code: SGRCode
    start: int
    end: int


def code_for_range(r: FormattingRange, colors: ColorMapper) -> SGRCode:
    """The value-bearing code that opens a range, or NONE_OR_INVALID."""
    if r.category not in FORMATTING_CATEGORIES:
        return SGRCode.NONE_OR_INVALID
    if r.category in COLOR_CATEGORIES:
        if isinstance(r.value, SGRCode):
            code = r.value
        else:
            code = colors.code_for_color(r.value, COLOR_CATEGORIES[r.category])
    else:
        try:
            code = SGRCode.from_param(int(r.value))
        except (TypeError, ValueError):
            return SGRCode.NONE_OR_INVALID

    if code.category is not r.category or code.is_reset:
        return SGRCode.NONE_OR_INVALID
    return code


def _normalise(
    ranges: Iterable[FormattingRange], length: int, colors: ColorMapper
) -> list[_Span]:
    by_category: dict[Category, list[_Span]] = {}
    for r in ranges:
        start = min(max(r.start, 0), length)
        end = min(max(r.end, 0), length)
        if end <= start:
            continue
        code = code_for_range(r, colors)
        if code is SGRCode.NONE_OR_INVALID:
            logger.debug("skipping range with no SGR code: %r", r)
            continue
        by_category.setdefault(r.category, []).append(_Span(r.category, code, start, end))

    spans: list[_Span] = []
    for category_spans in by_category.values():
        category_spans.sort(key=lambda s: s.start)
        # Overlaps within one category: the later start wins
        for cur, nxt in zip(category_spans, category_spans[1:] + [None]):
            end = cur.end if nxt is None else min(cur.end, nxt.start)
            if end > cur.start:
                spans.append(_Span(cur.category, cur.code, cur.start, end))
    return spans


def plan_escapes(
    clean_text: str,
    ranges: Iterable[FormattingRange],
    colors: Optional[ColorMapper] = None,
) -> list[EscapeOccurrence]:
    """Work out the SGR codes needed at each cut point."""
    colors = colors or ColorMapper()
    spans = _normalise(ranges, len(clean_text), colors)

    starts: dict[int, list[_Span]] = {}
    for span in spans:
        starts.setdefault(span.start, []).append(span)
    cut_points = sorted({s.start for s in spans} | {s.end for s in spans})

    order = FORMATTING_CATEGORIES.index
    active: dict[Category, _Span] = {}
    occurrences: list[EscapeOccurrence] = []

    for point in cut_points:
        opening = {s.category: s for s in starts.get(point, [])}
        ending = {c for c, s in active.items() if s.end == point}
        staying = sorted((c for c in active if c not in ending), key=order)
        to_close = sorted((c for c in ending if c not in opening), key=order)

        codes: list[SGRCode] = []
        if to_close:
            if not staying or any(reset_code_for(c) is None for c in to_close):
                codes.append(SGRCode.ALL_RESET)
                codes.extend(active[c].code for c in staying if c not in opening)
            else:
                codes.extend(reset_code_for(c) for c in to_close)
        codes.extend(opening[c].code for c in sorted(opening, key=order))

        for c in ending:
            del active[c]
        active.update(opening)

        occurrences.extend(EscapeOccurrence(code, point) for code in codes)

    return occurrences


def serialize(
    clean_text: str,
    ranges: Iterable[FormattingRange],
    colors: Optional[ColorMapper] = None,
) -> str:
    """Render clean text plus formatting ranges as ANSI-escaped text."""
    return insert_escapes(clean_text, plan_escapes(clean_text, ranges, colors))
