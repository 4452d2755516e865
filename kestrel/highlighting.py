"""Lexical classification of a single line.

``highlight_line`` is a single left-to-right pass over a line's grapheme
clusters. The only state carried between lines is whether the line starts
inside an unterminated block comment; ``Document.highlight`` threads that
flag from the top of the document down.
"""

from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .filetype import HighlightingOptions
from .grapheme import find_sequence, split_graphemes


class Classification(Enum):
    NONE = "none"
    NUMBER = "number"
    MATCH = "match"
    STRING = "string"
    CHARACTER = "character"
    COMMENT = "comment"
    MULTILINE_COMMENT = "multiline_comment"
    PRIMARY_KEYWORDS = "primary_keywords"
    SECONDARY_KEYWORDS = "secondary_keywords"

    @property
    def color(self) -> Tuple[int, int, int]:
        """RGB foreground used when drawing this class."""
        return _COLORS.get(self, (255, 255, 255))


_COLORS = {
    Classification.NUMBER: (220, 163, 163),
    Classification.MATCH: (38, 139, 210),
    Classification.STRING: (211, 54, 130),
    Classification.CHARACTER: (108, 113, 196),
    Classification.COMMENT: (133, 153, 0),
    Classification.MULTILINE_COMMENT: (133, 153, 0),
    Classification.PRIMARY_KEYWORDS: (181, 137, 0),
    Classification.SECONDARY_KEYWORDS: (42, 161, 152),
}


class Span(NamedTuple):
    """Half-open grapheme range ``[start, end)`` with one classification."""
    start: int
    end: int
    classification: Classification


def is_identifier_char(cluster: str) -> bool:
    return cluster[0].isalnum() or cluster[0] == "_"


def _is_digit(cluster: str) -> bool:
    return len(cluster) == 1 and "0" <= cluster <= "9"


def _token_at(graphemes: Sequence[str], i: int, token: str) -> int:
    """Length in graphemes of ``token`` if it starts at ``i``, else 0."""
    parts = split_graphemes(token)
    n = len(parts)
    if list(graphemes[i:i + n]) == parts:
        return n
    return 0


def _find_token(graphemes: Sequence[str], start: int, token: str) -> Tuple[int, int]:
    """Position and length of the next ``token`` at or after ``start``; (-1, 0) if absent."""
    parts = split_graphemes(token)
    return find_sequence(list(graphemes), parts, start), len(parts)


def _scan_quoted(graphemes: Sequence[str], i: int, quote: str) -> int:
    """End (exclusive) of the quoted literal opening at ``i``.

    A backslash escapes the following cluster, including a quote. An
    unterminated literal runs to the end of the line.
    """
    n = len(graphemes)
    j = i + 1
    while j < n:
        g = graphemes[j]
        if g == "\\":
            j += 2
            continue
        j += 1
        if g == quote:
            return j
    return n


def _keyword_at(graphemes: Sequence[str], i: int, keywords) -> int:
    """Length of a whole-token keyword match starting at ``i``, or 0."""
    n = len(graphemes)
    for word in keywords:
        length = _token_at(graphemes, i, word)
        if not length:
            continue
        end = i + length
        if end < n and is_identifier_char(graphemes[end]):
            continue
        return length
    return 0


def highlight_line(
    graphemes: Sequence[str],
    entering_in_block_comment: bool,
    options: HighlightingOptions,
    active_query: Optional[str] = None,
) -> Tuple[List[Span], bool]:
    """Classify one line.

    Args:
        graphemes: The line's grapheme clusters.
        entering_in_block_comment: Whether the previous line ended inside
            an unterminated block comment.
        options: Highlighting rules of the document's file type.
        active_query: Search text whose matches are marked ``MATCH``; match
            spans take precedence over every lexical class.

    Returns:
        ``(spans, exiting_in_block_comment)`` where spans are sorted,
        non-overlapping and never ``Classification.NONE``.
    """
    n = len(graphemes)
    classes = [Classification.NONE] * n
    in_block = entering_in_block_comment
    i = 0

    def mark(start: int, end: int, cls: Classification) -> None:
        for k in range(start, min(end, n)):
            classes[k] = cls

    while i < n:
        if in_block:
            close = options.block_comment[1] if options.block_comment else None
            pos, length = _find_token(graphemes, i, close) if close else (-1, 0)
            if pos < 0:
                mark(i, n, Classification.MULTILINE_COMMENT)
                i = n
                break
            mark(i, pos + length, Classification.MULTILINE_COMMENT)
            i = pos + length
            in_block = False
            continue

        g = graphemes[i]
        prev_is_ident = i > 0 and is_identifier_char(graphemes[i - 1])

        if options.block_comment:
            length = _token_at(graphemes, i, options.block_comment[0])
            if length:
                mark(i, i + length, Classification.MULTILINE_COMMENT)
                i += length
                in_block = True
                continue

        if options.line_comment and _token_at(graphemes, i, options.line_comment):
            mark(i, n, Classification.COMMENT)
            break

        if options.strings and g == '"':
            end = _scan_quoted(graphemes, i, '"')
            mark(i, end, Classification.STRING)
            i = end
            continue

        if options.characters and g == "'":
            end = _scan_quoted(graphemes, i, "'")
            mark(i, end, Classification.CHARACTER)
            i = end
            continue

        if options.numbers and _is_digit(g) and not prev_is_ident:
            end = i
            while end < n and _is_digit(graphemes[end]):
                end += 1
            mark(i, end, Classification.NUMBER)
            i = end
            continue

        if not prev_is_ident:
            length = _keyword_at(graphemes, i, options.primary_keywords)
            if length:
                mark(i, i + length, Classification.PRIMARY_KEYWORDS)
                i += length
                continue
            length = _keyword_at(graphemes, i, options.secondary_keywords)
            if length:
                mark(i, i + length, Classification.SECONDARY_KEYWORDS)
                i += length
                continue

        if is_identifier_char(g):
            # Skip the rest of the identifier so embedded digits stay plain
            while i < n and is_identifier_char(graphemes[i]):
                i += 1
            continue
        i += 1

    if active_query:
        needle = split_graphemes(active_query)
        haystack = list(graphemes)
        pos = find_sequence(haystack, needle, 0)
        while pos >= 0:
            mark(pos, pos + len(needle), Classification.MATCH)
            pos = find_sequence(haystack, needle, pos + len(needle))

    return _to_spans(classes), in_block


def _to_spans(classes: List[Classification]) -> List[Span]:
    spans: List[Span] = []
    start = 0
    for k in range(1, len(classes) + 1):
        if k == len(classes) or classes[k] != classes[start]:
            if classes[start] != Classification.NONE:
                spans.append(Span(start, k, classes[start]))
            start = k
    return spans
