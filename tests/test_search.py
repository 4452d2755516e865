"""Test literal search with wrap-around."""

from kestrel.line import Line
from kestrel.position import Position
from kestrel.search import SearchDirection, find


def make_lines(*texts):
    return [Line(text) for text in texts]


def test_forward_search_same_line_after_cursor():
    lines = make_lines("foo foo")
    assert find(lines, "foo", Position(0, 0)) == Position(4, 0)


def test_forward_search_wraps_to_top():
    lines = make_lines("needle", "hay", "hay")
    assert find(lines, "needle", Position(1, 2)) == Position(0, 0)


def test_forward_search_inclusive():
    lines = make_lines("foo")
    assert find(lines, "foo", Position(0, 0), inclusive=True) == Position(0, 0)


def test_backward_search():
    lines = make_lines("ab ab", "xx", "ab")
    assert find(lines, "ab", Position(3, 0), SearchDirection.BACKWARD) == Position(0, 0)
    assert find(lines, "ab", Position(0, 0), SearchDirection.BACKWARD) == Position(0, 2)
    assert find(lines, "ab", Position(0, 2), SearchDirection.BACKWARD) == Position(3, 0)


def test_no_match_and_empty_query():
    lines = make_lines("abc", "def")
    assert find(lines, "zzz", Position(0, 0)) is None
    assert find(lines, "", Position(0, 0)) is None
    assert find(lines, "zzz", Position(0, 0), SearchDirection.BACKWARD) is None


def test_search_is_case_sensitive_and_literal():
    lines = make_lines("Foo a.c abc")
    assert find(lines, "foo", Position(0, 0)) is None
    assert find(lines, "a.c", Position(0, 0)) == Position(4, 0)


def test_single_match_is_found_from_every_position():
    lines = make_lines("one", "two needle", "three", "")
    expected = Position(4, 1)
    for y, line in enumerate(lines):
        for x in range(len(line) + 1):
            for direction in SearchDirection:
                assert find(lines, "needle", Position(x, y), direction) == expected


def test_match_positions_are_grapheme_indices():
    lines = make_lines("e\u0301e\u0301x")
    assert find(lines, "x", Position(0, 0)) == Position(2, 0)
