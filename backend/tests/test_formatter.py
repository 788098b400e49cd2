"""
Tests for field formatting: how each field kind becomes display lines.

All widths here use MonoMeasurer (1mm per character).
"""

import pytest

from app.layout import BulletList, KeyValue, Label, Paragraph
from app.layout.formatter import BLANK_LINE, bullet_prefix

from factories import mono_formatter


def texts(lines):
    return [line.text for line in lines]


class TestLabel:
    def test_short_label_is_one_line(self):
        assert texts(mono_formatter().format(Label("Overall Score"), 50)) == ["Overall Score"]

    def test_blank_label_is_a_spacer(self):
        lines = mono_formatter().format(Label(""), 50)
        assert lines == [BLANK_LINE]
        assert lines[0].is_blank

    def test_long_label_wraps(self):
        lines = mono_formatter().format(Label("aaa bbb ccc"), 7)
        assert texts(lines) == ["aaa bbb", "ccc"]


class TestKeyValue:
    def test_value_starts_inline_after_bold_label(self):
        lines = mono_formatter().format(KeyValue("Score", "5/7"), 50)

        assert len(lines) == 1
        label, value = lines[0].runs
        assert label.text == "Score:"
        assert label.bold
        assert value.text == "5/7"
        assert not value.bold
        assert value.offset == 7  # "Score: "

    def test_overflow_continues_at_full_width(self):
        lines = mono_formatter().format(KeyValue("Role", "one two three four five six"), 20)

        assert texts(lines) == ["Role: one two three", "four five six"]
        assert lines[1].runs[0].offset == 0

    def test_label_wider_than_card_wraps_alone(self):
        lines = mono_formatter().format(KeyValue("Department", "Sales"), 8)

        assert texts(lines) == ["Department:", "Sales"]
        assert lines[0].runs[0].bold
        assert not lines[1].runs[0].bold

    def test_first_word_too_long_moves_below_label(self):
        lines = mono_formatter().format(KeyValue("ab", "abcdefghi"), 10)
        assert texts(lines) == ["ab:", "abcdefghi"]

    def test_empty_value_is_label_only(self):
        lines = mono_formatter().format(KeyValue("Status", ""), 50)
        assert texts(lines) == ["Status:"]


class TestBulletList:
    def test_continuation_lines_hang_under_text(self):
        lines = mono_formatter().format(BulletList(["alpha beta gamma"]), 12)

        assert texts(lines) == ["• alpha beta", "gamma"]
        assert lines[0].runs[0].offset == 0
        assert lines[0].runs[1].offset == 2  # "• "
        assert lines[1].runs[0].offset == 2

    def test_each_item_wraps_independently(self):
        lines = mono_formatter().format(BulletList(["one", "two"]), 50)
        assert texts(lines) == ["• one", "• two"]

    def test_lettered_items(self):
        lines = mono_formatter().format(BulletList(["x", "y", "z"], style="lettered"), 50)
        assert texts(lines) == ["A) x", "B) y", "C) z"]

    def test_numbered_items(self):
        lines = mono_formatter().format(BulletList(["x", "y"], style="numbered"), 50)
        assert texts(lines) == ["1. x", "2. y"]

    def test_empty_item_keeps_its_marker(self):
        lines = mono_formatter().format(BulletList([""], style="numbered"), 50)
        assert texts(lines) == ["1."]

    def test_empty_list_has_no_lines(self):
        assert mono_formatter().format(BulletList([]), 50) == []

    @pytest.mark.parametrize("style,index,expected", [
        ("bullet", 5, "•"),
        ("lettered", 0, "A)"),
        ("lettered", 25, "Z)"),
        ("lettered", 26, "AA)"),
        ("numbered", 9, "10."),
    ])
    def test_bullet_prefix(self, style, index, expected):
        assert bullet_prefix(style, index) == expected


class TestParagraph:
    def test_wraps_to_width(self):
        lines = mono_formatter().format(Paragraph("the quick brown fox"), 9)
        assert texts(lines) == ["the quick", "brown fox"]

    def test_empty_paragraph_has_no_lines(self):
        assert mono_formatter().format(Paragraph(""), 50) == []


def test_unknown_field_type_is_rejected():
    with pytest.raises(TypeError):
        mono_formatter().format("just a string", 50)
