"""Document model: an ordered list of Lines plus file identity."""

import logging
import os
import tempfile
from typing import List, Optional

from .constants import EditorConstants
from .errors import InvalidPosition, MissingFileName
from .filetype import FileType, file_type_for
from .line import Line
from .position import Position
from .search import SearchDirection, find

logger = logging.getLogger(__name__)


class Document:
    """The text being edited.

    Invariant: there is always at least one Line. Every structural edit
    goes through the methods below, which keep the dirty flag current.
    """

    def __init__(self, lines: Optional[List[str]] = None, path: Optional[str] = None):
        self.lines: List[Line] = [Line(text) for text in (lines or [""])]
        self.path = path
        self.file_type: FileType = file_type_for(path)
        self.dirty = False

    @classmethod
    def open(cls, path: str) -> "Document":
        """Read ``path`` into a new Document, one Line per newline-separated line.

        Raises:
            OSError: The file could not be read.
        """
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
        lines = content.split('\n') if content else [""]
        logger.info(f"Opened {path} ({len(lines)} lines)")
        return cls(lines, path=path)

    def save(self, path: Optional[str] = None) -> None:
        """Write all lines joined by newline, atomically.

        Args:
            path: New location to save to; defaults to the current path.

        Raises:
            MissingFileName: Neither ``path`` nor a current path is set.
            OSError: Writing failed. The document stays dirty.
        """
        target = path or self.path
        if not target:
            raise MissingFileName("document has no file name")

        content = self.text
        dir_name = os.path.dirname(target) or '.'
        temp_filename = None
        try:
            # Same directory as the target so os.replace stays on one filesystem
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name,
                                             prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, target)
        except OSError as e:
            logger.warning(f"Could not save {target}: {e}")
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            raise

        if target != self.path:
            self.path = target
            self.file_type = file_type_for(target)
        self.dirty = False
        logger.info(f"Saved {target} ({len(self.lines)} lines)")

    # --- queries ---

    def __len__(self) -> int:
        return len(self.lines)

    def is_dirty(self) -> bool:
        return self.dirty

    def is_empty(self) -> bool:
        """True for a document holding a single empty line."""
        return len(self.lines) == 1 and self.lines[0].is_empty()

    def line(self, y: int) -> Optional[Line]:
        if 0 <= y < len(self.lines):
            return self.lines[y]
        return None

    @property
    def text(self) -> str:
        return '\n'.join(line.text for line in self.lines)

    def _line_at(self, pos: Position) -> Line:
        line = self.line(pos.y)
        if line is None:
            raise InvalidPosition(f"row {pos.y} outside document of {len(self.lines)} lines")
        return line

    # --- edits ---

    def insert(self, pos: Position, grapheme: str) -> int:
        """Insert one grapheme at ``pos``; a newline splits the line instead.

        Returns how many clusters were added to the line, 0 for a newline.
        """
        if grapheme in ('\n', '\r\n'):
            self.insert_newline(pos)
            return 0
        added = self._line_at(pos).insert(pos.x, grapheme)
        self.dirty = True
        return added

    def insert_newline(self, pos: Position) -> None:
        """Split the line at ``pos``; the tail becomes the next line."""
        tail = self._line_at(pos).split(pos.x)
        self.lines.insert(pos.y + 1, tail)
        self.dirty = True

    def insert_line(self, y: int) -> None:
        """Insert an empty line so that it becomes row ``y``."""
        if y < 0 or y > len(self.lines):
            raise InvalidPosition(f"cannot insert line at row {y}")
        self.lines.insert(y, Line())
        self.dirty = True

    def delete(self, pos: Position) -> None:
        """Delete the grapheme at ``pos``, or join the next line at end of line."""
        line = self._line_at(pos)
        if pos.x < len(line):
            line.delete(pos.x)
            self.dirty = True
        elif pos.x == len(line):
            if pos.y + 1 < len(self.lines):
                line.append(self.lines.pop(pos.y + 1))
                self.dirty = True
        else:
            raise InvalidPosition(f"column {pos.x} past end of row {pos.y}")

    def delete_line(self, y: int) -> None:
        """Remove row ``y``; the last remaining line is replaced by an empty one."""
        if self.line(y) is None:
            raise InvalidPosition(f"row {y} outside document of {len(self.lines)} lines")
        if self.is_empty():
            return
        del self.lines[y]
        if not self.lines:
            self.lines.append(Line())
        self.dirty = True

    # --- search and highlighting ---

    def find(self, query: str, at: Position,
             direction: SearchDirection = SearchDirection.FORWARD,
             inclusive: bool = False) -> Optional[Position]:
        return find(self.lines, query, at, direction, inclusive=inclusive)

    def highlight(self, active_query: Optional[str] = None,
                  visible_line_limit: Optional[int] = None) -> None:
        """Recompute highlight spans for rows ``[0, visible_line_limit)``.

        The block-comment carry is threaded from row 0 every time; each
        Line only reclassifies itself when its text, its entering carry or
        the query changed, so unchanged rows above an edit are cheap.
        """
        limit = len(self.lines) if visible_line_limit is None else min(visible_line_limit, len(self.lines))
        rules = self.file_type.options
        in_block_comment = False
        for y in range(limit):
            _, in_block_comment = self.lines[y].highlight(in_block_comment, rules, active_query)
