"""Test syntax highlighting of lines and block-comment carry across lines."""

from kestrel.document import Document
from kestrel.filetype import file_type_for
from kestrel.grapheme import split_graphemes
from kestrel.highlighting import Classification, Span, highlight_line
from kestrel.position import Position

C = file_type_for("x.c").options
PLAIN = file_type_for(None).options


def spans_of(text, options=C, entering=False, query=None):
    spans, _ = highlight_line(split_graphemes(text), entering, options, query)
    return spans


def test_block_comment_spans_two_lines():
    document = Document(["int a; /* start", "still inside", "end */ x"], path="t.c")
    document.highlight()
    first, second, third = document.lines
    assert first.spans == [
        Span(0, 3, Classification.SECONDARY_KEYWORDS),
        Span(7, 15, Classification.MULTILINE_COMMENT),
    ]
    assert second.spans == [Span(0, 12, Classification.MULTILINE_COMMENT)]
    assert third.spans == [Span(0, 6, Classification.MULTILINE_COMMENT)]


def test_block_comment_carry_flags():
    _, exiting = highlight_line(split_graphemes("/* open"), False, C)
    assert exiting
    _, exiting = highlight_line(split_graphemes("close */"), True, C)
    assert not exiting
    _, exiting = highlight_line(split_graphemes("/* a */ b"), False, C)
    assert not exiting


def test_closing_comment_updates_following_lines():
    document = Document(["/* x", "y"], path="t.c")
    document.highlight()
    assert document.lines[1].spans == [Span(0, 1, Classification.MULTILINE_COMMENT)]
    document.insert(Position(4, 0), "*")
    document.insert(Position(5, 0), "/")
    document.highlight()
    assert document.lines[1].spans == []


def test_highlight_limit_leaves_rows_below_untouched():
    document = Document(["1", "2", "3"], path="t.c")
    document.highlight(visible_line_limit=2)
    assert document.lines[1].spans == [Span(0, 1, Classification.NUMBER)]
    assert document.lines[2].spans == []


def test_strings_with_escapes():
    assert spans_of('"a\\"b" x') == [Span(0, 6, Classification.STRING)]


def test_unterminated_string_runs_to_end():
    assert spans_of('x = "abc') == [Span(4, 8, Classification.STRING)]


def test_character_literal():
    assert spans_of("c = 'a';") == [Span(4, 7, Classification.CHARACTER)]


def test_numbers_not_inside_identifiers():
    assert spans_of("x1 = 42") == [Span(5, 7, Classification.NUMBER)]


def test_keywords_need_whole_tokens():
    assert spans_of("internal") == []
    assert spans_of("return 0;") == [
        Span(0, 6, Classification.PRIMARY_KEYWORDS),
        Span(7, 8, Classification.NUMBER),
    ]


def test_line_comment_suppresses_rest():
    assert spans_of('x // 12 "s"') == [Span(2, 11, Classification.COMMENT)]


def test_match_wins_over_lexical_classes():
    assert spans_of("// foo", query="foo") == [
        Span(0, 3, Classification.COMMENT),
        Span(3, 6, Classification.MATCH),
    ]
    assert spans_of("foo foo", options=PLAIN, query="foo") == [
        Span(0, 3, Classification.MATCH),
        Span(4, 7, Classification.MATCH),
    ]


def test_no_filetype_highlights_nothing():
    assert spans_of('int x = "1"; // c', options=PLAIN) == []


def test_other_languages_comment_tokens():
    python = file_type_for("a.py").options
    assert spans_of("x = 1  # note", options=python) == [
        Span(4, 5, Classification.NUMBER),
        Span(7, 13, Classification.COMMENT),
    ]
    haskell = file_type_for("a.hs").options
    _, exiting = highlight_line(split_graphemes("{- open"), False, haskell)
    assert exiting


def test_every_class_has_a_color():
    for classification in Classification:
        r, g, b = classification.color
        assert all(0 <= c <= 255 for c in (r, g, b))
    assert Classification.NONE.color == (255, 255, 255)
