"""Formatting run resolution.

Turns the ordered SGR occurrences from the escape parser into closed
formatting ranges, one channel per category. A code closes whatever run
is open in its own category (or every run, for ALL_RESET) and, unless it
is a cancel code, opens a new run at the same location.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from ansi_richtext.codes import FORMATTING_CATEGORIES, Category, SGRCode
from ansi_richtext.colors import Color, ColorMapper
from ansi_richtext.escape_parser import EscapeOccurrence

RangeValue = Union[SGRCode, Color]

COLOR_CATEGORIES = {Category.FOREGROUND: True, Category.BACKGROUND: False}


@dataclass(frozen=True)
class FormattingRange:
    """One formatting value over [start, end) of the clean text.

    Foreground and background ranges carry a Color; the other categories
    carry the SGR code that opened them.
    """

    category: Category
    value: RangeValue
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class OpenRun:
    code: SGRCode
    start: int


@dataclass(frozen=True)
class ClosedRun:
    code: SGRCode
    start: int
    end: int


def ends_formatting(end_code: SGRCode, start_code: SGRCode) -> bool:
    """Whether end_code ends the formatting run introduced by start_code.

    ALL_RESET ends everything. Otherwise a code ends a run only within its
    own category, whether it is the category's cancel code or another value.
    """
    end_code = SGRCode.from_param(int(end_code))
    start_code = SGRCode.from_param(int(start_code))

    if end_code is SGRCode.ALL_RESET:
        return True
    if Category.INVALID in (end_code.category, start_code.category):
        return False
    if start_code is SGRCode.ALL_RESET:
        return False
    return end_code.category is start_code.category


@dataclass(frozen=True)
class ActiveState:
    """Runs currently open, at most one per category."""

    runs: dict[Category, OpenRun] = field(default_factory=dict, hash=False)

    @classmethod
    def empty(cls) -> "ActiveState":
        return cls()

    def get(self, category: Category) -> Optional[OpenRun]:
        return self.runs.get(category)

    def open(self, code: SGRCode, at: int) -> "ActiveState":
        runs = dict(self.runs)
        runs[code.category] = OpenRun(code, at)
        return ActiveState(runs)

    def close(self, category: Category) -> "ActiveState":
        runs = {k: v for k, v in self.runs.items() if k is not category}
        return ActiveState(runs)

    def apply(self, code: SGRCode, at: int) -> tuple["ActiveState", list[ClosedRun]]:
        """Apply one code at a location.

        Returns the next state and the runs the code closed.
        """
        code = SGRCode.from_param(int(code))
        if code is SGRCode.NONE_OR_INVALID:
            return self, []

        closed = [
            ClosedRun(run.code, run.start, at)
            for run in self.runs.values()
            if ends_formatting(code, run.code)
        ]
        state = ActiveState({k: v for k, v in self.runs.items() if not ends_formatting(code, v.code)})

        if code is not SGRCode.ALL_RESET and not code.is_reset:
            state = state.open(code, at)
        return state, closed

    def close_all(self, at: int) -> list[ClosedRun]:
        return [ClosedRun(run.code, run.start, at) for run in self.runs.values()]


def _range_for(run: ClosedRun, colors: ColorMapper) -> Optional[FormattingRange]:
    if run.end <= run.start:
        return None
    category = run.code.category
    value: Optional[RangeValue] = run.code
    if category in COLOR_CATEGORIES:
        value = colors.color_for_code(run.code)
        if value is None:
            return None
    return FormattingRange(category, value, run.start, run.end)


def _sort_key(r: FormattingRange) -> tuple[int, int, int]:
    return (r.start, FORMATTING_CATEGORIES.index(r.category), r.end)


def resolve_runs(
    occurrences: Iterable[EscapeOccurrence],
    length: int,
    colors: Optional[ColorMapper] = None,
) -> list[FormattingRange]:
    """Fold SGR occurrences into closed formatting ranges.

    Occurrences are applied by ascending location (stable for ties). Runs
    still open at the end close at `length`. Runs that would be empty are
    dropped; repeated identical codes give adjacent ranges, not one merged
    range.
    """
    colors = colors or ColorMapper()
    ordered = sorted(occurrences, key=lambda occ: occ.location)

    state = ActiveState.empty()
    closed: list[ClosedRun] = []
    for occ in ordered:
        at = min(max(occ.location, 0), length)
        code = SGRCode.from_param(int(occ.code))
        state, ended = state.apply(code, at)
        closed.extend(ended)
    closed.extend(state.close_all(length))

    ranges = [r for r in (_range_for(run, colors) for run in closed) if r is not None]
    return sorted(ranges, key=_sort_key)
