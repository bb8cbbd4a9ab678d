"""Tests for the SGR code table."""

import pytest

from ansi_richtext.codes import (
    FORMATTING_CATEGORIES,
    Category,
    SGRCode,
    color_code,
    color_codes,
    reset_code_for,
)


class TestCategories:
    def test_every_code_has_one_category(self):
        for code in SGRCode:
            assert isinstance(code.category, Category)

    @pytest.mark.parametrize(
        "code,category",
        [
            (SGRCode.ALL_RESET, Category.ALL_RESET),
            (SGRCode.INTENSITY_BOLD, Category.INTENSITY),
            (SGRCode.INTENSITY_NORMAL, Category.INTENSITY),
            (SGRCode.ITALIC_ON, Category.ITALIC),
            (SGRCode.UNDERLINE_DOUBLE, Category.UNDERLINE),
            (SGRCode.FG_WHITE, Category.FOREGROUND),
            (SGRCode.FG_RESET, Category.FOREGROUND),
            (SGRCode.BG_BLACK, Category.BACKGROUND),
            (SGRCode.BG_RESET, Category.BACKGROUND),
            (SGRCode.NONE_OR_INVALID, Category.INVALID),
        ],
    )
    def test_category_of(self, code, category):
        assert code.category is category

    def test_formatting_categories_exclude_reset_and_invalid(self):
        assert Category.ALL_RESET not in FORMATTING_CATEGORIES
        assert Category.INVALID not in FORMATTING_CATEGORIES
        assert len(FORMATTING_CATEGORIES) == 5


class TestFromParam:
    def test_known_value(self):
        assert SGRCode.from_param(31) is SGRCode.FG_RED

    def test_unknown_value(self):
        assert SGRCode.from_param(5) is SGRCode.NONE_OR_INVALID
        assert SGRCode.from_param(38) is SGRCode.NONE_OR_INVALID
        assert SGRCode.from_param(91) is SGRCode.NONE_OR_INVALID


class TestResetCodes:
    def test_reset_flags(self):
        resets = {c for c in SGRCode if c.is_reset}
        assert resets == {
            SGRCode.INTENSITY_NORMAL,
            SGRCode.UNDERLINE_NONE,
            SGRCode.FG_RESET,
            SGRCode.BG_RESET,
        }

    def test_all_reset_is_not_a_category_reset(self):
        assert SGRCode.ALL_RESET.is_reset is False

    def test_italic_has_no_reset(self):
        assert reset_code_for(Category.ITALIC) is None

    def test_reset_code_for(self):
        assert reset_code_for(Category.FOREGROUND) is SGRCode.FG_RESET
        assert reset_code_for(Category.INTENSITY) is SGRCode.INTENSITY_NORMAL


class TestColorCodes:
    def test_color_index(self):
        assert SGRCode.FG_BLACK.color_index == 0
        assert SGRCode.BG_WHITE.color_index == 7
        assert SGRCode.FG_RESET.color_index is None
        assert SGRCode.INTENSITY_BOLD.color_index is None

    def test_is_color(self):
        assert SGRCode.BG_CYAN.is_color
        assert not SGRCode.BG_RESET.is_color

    def test_color_code(self):
        assert color_code(1, foreground=True) is SGRCode.FG_RED
        assert color_code(4, foreground=False) is SGRCode.BG_BLUE
        assert color_code(8, foreground=True) is SGRCode.NONE_OR_INVALID

    def test_color_codes(self):
        assert color_codes(True)[0] is SGRCode.FG_BLACK
        assert color_codes(False)[-1] is SGRCode.BG_WHITE
        assert len(color_codes(True)) == 8
