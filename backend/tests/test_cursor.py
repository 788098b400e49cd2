"""Tests for the page cursor."""

import pytest

from app.layout import PageCursor


def test_starts_at_content_top_of_first_page(a4):
    cursor = PageCursor(a4)
    assert cursor.index == 0
    assert cursor.y == 30
    assert cursor.at_page_top
    assert cursor.remaining_height() == 247


def test_advance_and_fit(a4):
    cursor = PageCursor(a4)
    cursor.advance(200)

    assert cursor.y == 230
    assert not cursor.at_page_top
    assert cursor.can_fit(47)
    assert not cursor.can_fit(47.5)


def test_advance_is_clamped_to_content_bottom(a4):
    cursor = PageCursor(a4)
    cursor.advance(1000)
    assert cursor.y == a4.content_bottom
    assert cursor.remaining_height() == 0


def test_cannot_move_up(a4):
    with pytest.raises(ValueError):
        PageCursor(a4).advance(-1)


def test_new_page_resets_position(a4):
    cursor = PageCursor(a4)
    cursor.draw(["op"])
    cursor.advance(100)
    cursor.new_page()

    assert cursor.index == 1
    assert cursor.y == 30
    assert cursor.pages == [["op"], []]
