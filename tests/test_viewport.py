"""Test viewport scrolling."""

from kestrel.position import Position
from kestrel.viewport import Viewport


def test_scroll_down_and_up():
    viewport = Viewport(width=10, height=5)
    viewport.scroll_to(Position(0, 7))
    assert viewport.offset_y == 3
    viewport.scroll_to(Position(0, 4))
    assert viewport.offset_y == 3
    viewport.scroll_to(Position(0, 1))
    assert viewport.offset_y == 1


def test_scroll_horizontally():
    viewport = Viewport(width=10, height=5)
    viewport.scroll_to(Position(12, 0))
    assert viewport.offset_x == 3
    viewport.scroll_to(Position(2, 0))
    assert viewport.offset_x == 2


def test_cursor_always_visible_after_scroll():
    viewport = Viewport(width=4, height=3)
    for y in (0, 9, 3, 15, 2, 2, 40, 0):
        for x in (0, 7, 1, 30):
            cursor = Position(x, y)
            viewport.scroll_to(cursor)
            assert viewport.contains(cursor)


def test_resize_keeps_positive_size():
    viewport = Viewport()
    viewport.resize(0, -2)
    assert (viewport.width, viewport.height) == (1, 1)
    viewport.resize(100, 40)
    assert viewport.last_visible_row == 40
