"""A single row of text stored as grapheme clusters."""

from typing import List, Optional, Tuple

from .constants import EditorConstants
from .errors import IndexOutOfRange
from .filetype import HighlightingOptions
from .grapheme import find_sequence, grapheme_width, rfind_sequence, split_graphemes
from .highlighting import Classification, Span, highlight_line


class Line:
    """One line of a document.

    All indices are grapheme indices. The highlight spans are cached and
    recomputed only when the text, the entering block-comment state, the
    rules or the active query differ from the last computation.
    """

    def __init__(self, text: str = ""):
        self._graphemes: List[str] = split_graphemes(text)
        self._spans: List[Span] = []
        self._exiting_in_block_comment = False
        self._highlight_key: Optional[tuple] = None

    @classmethod
    def _from_graphemes(cls, graphemes: List[str]) -> "Line":
        line = cls()
        line._graphemes = graphemes
        return line

    def __len__(self) -> int:
        return len(self._graphemes)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Line({self.text!r})"

    def __eq__(self, other):
        if isinstance(other, Line):
            return self._graphemes == other._graphemes
        return NotImplemented

    @property
    def text(self) -> str:
        return "".join(self._graphemes)

    @property
    def graphemes(self) -> Tuple[str, ...]:
        return tuple(self._graphemes)

    def is_empty(self) -> bool:
        return not self._graphemes

    def get(self, index: int) -> Optional[str]:
        """Grapheme at ``index`` or None when out of range."""
        if 0 <= index < len(self._graphemes):
            return self._graphemes[index]
        return None

    def substring(self, start: int, end: int) -> str:
        start = max(0, start)
        end = min(end, len(self._graphemes))
        return "".join(self._graphemes[start:end])

    def _invalidate(self) -> None:
        self._highlight_key = None

    def _resegment(self) -> None:
        self._graphemes = split_graphemes("".join(self._graphemes))
        self._invalidate()

    # --- editing ---

    def insert(self, at: int, text: str) -> int:
        """Insert ``text`` before grapheme ``at``.

        The line is segmented again afterwards, so a combining mark typed
        after its base joins that cluster. Returns how many clusters the
        line grew by, which is how far a cursor at ``at`` should advance.
        """
        if at < 0 or at > len(self._graphemes):
            raise IndexOutOfRange(f"insert at {at} in line of length {len(self._graphemes)}")
        before = len(self._graphemes)
        self._graphemes.insert(at, text)
        self._resegment()
        return len(self._graphemes) - before

    def delete(self, at: int) -> None:
        if 0 <= at < len(self._graphemes):
            del self._graphemes[at]
            self._resegment()

    def split(self, at: int) -> "Line":
        """Truncate to ``[0, at)`` and return the tail ``[at, len)`` as a new Line."""
        if at < 0 or at > len(self._graphemes):
            raise IndexOutOfRange(f"split at {at} in line of length {len(self._graphemes)}")
        tail = Line._from_graphemes(self._graphemes[at:])
        del self._graphemes[at:]
        self._invalidate()
        return tail

    def append(self, other: "Line") -> None:
        self._graphemes.extend(other._graphemes)
        self._resegment()

    # --- searching ---

    def find(self, query: str, start: int = 0) -> Optional[int]:
        """Index of the first match of ``query`` at or after ``start``."""
        pos = find_sequence(self._graphemes, split_graphemes(query), start)
        return pos if pos >= 0 else None

    def rfind(self, query: str, end: int) -> Optional[int]:
        """Index of the last match of ``query`` starting before ``end``."""
        pos = rfind_sequence(self._graphemes, split_graphemes(query), end)
        return pos if pos >= 0 else None

    # --- rendering ---

    def _display_cells(self, index: int, column: int) -> Tuple[str, int]:
        """Display text of the grapheme at ``index`` when drawn at ``column``."""
        g = self._graphemes[index]
        if g == "\t":
            stop = EditorConstants.TAB_STOP
            width = stop - (column % stop)
            return " " * width, width
        if not g[0].isprintable():
            return "?", 1
        return g, grapheme_width(g)

    def column_of(self, index: int) -> int:
        """Display column at which grapheme ``index`` starts."""
        column = 0
        for k in range(min(index, len(self._graphemes))):
            column += self._display_cells(k, column)[1]
        return column

    def render(self, visible_start: int, visible_end: int) -> str:
        """Display-ready text of graphemes ``[visible_start, visible_end)``.

        Tabs expand to the next tab stop measured from the start of the
        line, and the range is clamped to the line length.
        """
        return "".join(text for text, _ in self.render_segments(visible_start, visible_end))

    def render_segments(
        self, visible_start: int, visible_end: int
    ) -> List[Tuple[str, Classification]]:
        """Like :meth:`render` but split into runs of equal classification.

        Uses the spans from the last :meth:`highlight` call.
        """
        end = min(visible_end, len(self._graphemes))
        start = max(0, visible_start)
        classes = [Classification.NONE] * len(self._graphemes)
        for span in self._spans:
            for k in range(span.start, min(span.end, len(classes))):
                classes[k] = span.classification

        segments: List[Tuple[str, Classification]] = []
        column = self.column_of(start)
        for k in range(start, end):
            text, width = self._display_cells(k, column)
            column += width
            if segments and segments[-1][1] == classes[k]:
                segments[-1] = (segments[-1][0] + text, classes[k])
            else:
                segments.append((text, classes[k]))
        return segments

    # --- highlighting ---

    @property
    def spans(self) -> List[Span]:
        return list(self._spans)

    def highlight(
        self,
        entering_in_block_comment: bool,
        rules: HighlightingOptions,
        active_query: Optional[str] = None,
    ) -> Tuple[List[Span], bool]:
        """Classify this line, reusing the cached spans when nothing changed."""
        key = (entering_in_block_comment, rules, active_query or None)
        if key != self._highlight_key:
            self._spans, self._exiting_in_block_comment = highlight_line(
                self._graphemes, entering_in_block_comment, rules, active_query
            )
            self._highlight_key = key
        return list(self._spans), self._exiting_in_block_comment
