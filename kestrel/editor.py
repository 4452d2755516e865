"""Main editor controller: modal key dispatch, prompts and screen drawing."""

import logging
import os
import select
import signal
import sys
import time
from typing import Optional, Tuple

from .commands import CommandRegistry
from .constants import EditorConstants
from .document import Document
from .errors import MissingFileName, UnsavedChangesBlock
from .grapheme import grapheme_width, split_graphemes
from .highlighting import Classification, is_identifier_char
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .line import Line
from .mode import Mode
from .pending import PendingInput
from .position import Position
from .search import SearchDirection
from .settings_persistence import SettingsPersistence, get_persistence
from .version import get_version
from .viewport import Viewport

logger = logging.getLogger(__name__)


def _fit(text: str, width: int) -> Tuple[str, int]:
    """Longest prefix of ``text`` that fits in ``width`` cells, and its width."""
    used = 0
    out = []
    for g in split_graphemes(text):
        w = grapheme_width(g)
        if used + w > width:
            break
        out.append(g)
        used += w
    return "".join(out), used


class Editor:
    """Modal editor controller.

    Owns the document, the cursor, the viewport and the pending-keystroke
    state. Every key goes through :meth:`handle_key_event`, after which the
    cursor is clamped into the document and the viewport scrolled to it.
    """

    def __init__(self, document: Optional[Document] = None, terminal=None,
                 settings: Optional[SettingsPersistence] = None):
        if terminal is None:
            from .terminal import TerminalInterface
            terminal = TerminalInterface()
        self.terminal = terminal
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings if settings is not None else get_persistence()
        self.command_registry = CommandRegistry()

        self.document = document if document is not None else Document()
        self.cursor = Position()
        self.viewport = Viewport()
        self.mode = Mode.NORMAL
        self.pending = PendingInput()
        self.should_quit = False

        self.status_message = ""
        self.status_time = 0.0
        self.prompt_mode = None  # None, 'save_as' or 'search'
        self.prompt_input = ""
        self.search_origin: Optional[Position] = None
        self.last_search: Optional[str] = None

        self._resize_pipe_r = self._resize_pipe_w = None
        self.update_size()
        self.set_status(EditorConstants.INITIAL_MESSAGE)

    # --- state helpers ---

    @property
    def current_line(self) -> Line:
        return self.document.lines[self.cursor.y]

    def update_size(self) -> None:
        """Resize the viewport to the terminal minus the status and message bars."""
        width, height = self.terminal.size()
        self.viewport.resize(width, height - EditorConstants.RESERVED_ROWS)

    def set_mode(self, mode: Mode) -> None:
        if mode != self.mode:
            logger.debug(f"{self.mode} -> {mode}")
        self.mode = mode
        self.pending.reset()

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.status_time = time.monotonic()

    def current_message(self) -> str:
        """The status message, or an empty string once it has expired."""
        if time.monotonic() - self.status_time < EditorConstants.STATUS_MESSAGE_TIMEOUT:
            return self.status_message
        return ""

    def clamp_cursor(self) -> None:
        self.cursor.y = min(max(self.cursor.y, 0), len(self.document) - 1)
        self.cursor.x = min(max(self.cursor.x, 0), len(self.current_line))

    # --- files ---

    def load_file(self, path: str) -> None:
        """Open ``path``, creating it when it does not exist.

        If neither works the editor keeps an empty document bound to
        ``path`` and reports the error in the message bar.
        """
        try:
            document = Document.open(path)
        except OSError:
            try:
                with open(path, 'a', encoding='utf-8'):
                    pass
                document = Document.open(path)
                logger.info(f"Created {path}")
            except OSError as e:
                logger.warning(f"Could not open {path}: {e}")
                document = Document(path=path)
                self.set_status(f"Could not open {path}: {e.strerror or e}")
        self.document = document
        self.cursor = Position()
        self.viewport.offset_x = self.viewport.offset_y = 0

        saved = self.settings.load_cursor(path)
        if saved is not None:
            self.cursor = Position(x=saved[1], y=saved[0])
            self.clamp_cursor()
            self.scroll()

    def save(self) -> None:
        """Save to the document's path, prompting for one if it has none."""
        try:
            self.document.save()
        except MissingFileName:
            self.prompt_mode = 'save_as'
            self.prompt_input = ""
            return
        except OSError:
            self.set_status(EditorConstants.SAVE_ERROR_MESSAGE)
            return
        self.set_status(EditorConstants.SAVE_SUCCESS_MESSAGE)

    def _save_as(self, path: str) -> None:
        try:
            self.document.save(path)
        except OSError:
            self.set_status(EditorConstants.SAVE_ERROR_MESSAGE)
            return
        self.set_status(EditorConstants.SAVE_SUCCESS_MESSAGE)

    def quit(self, force: bool = False) -> None:
        """Ask the event loop to stop.

        Raises:
            UnsavedChangesBlock: The document is dirty and ``force`` is False.
        """
        if self.document.is_dirty() and not force:
            logger.debug("Quit refused: unsaved changes")
            raise UnsavedChangesBlock(self.document.path or EditorConstants.NO_NAME)
        if self.document.path:
            self.settings.save_cursor(self.document.path, self.cursor.y, self.cursor.x)
        self.should_quit = True

    # --- motions ---

    def move_left(self) -> None:
        if self.cursor.x > 0:
            self.cursor.x -= 1
        elif self.cursor.y > 0:
            self.cursor.y -= 1
            self.cursor.x = len(self.current_line)

    def move_right(self) -> None:
        if self.cursor.x < len(self.current_line):
            self.cursor.x += 1
        elif self.cursor.y < len(self.document) - 1:
            self.cursor.y += 1
            self.cursor.x = 0

    def move_up(self, count: int = 1) -> None:
        self.cursor.y = max(0, self.cursor.y - count)
        self.cursor.x = min(self.cursor.x, len(self.current_line))

    def move_down(self, count: int = 1) -> None:
        self.cursor.y = min(len(self.document) - 1, self.cursor.y + count)
        self.cursor.x = min(self.cursor.x, len(self.current_line))

    def goto_row(self, row: int) -> None:
        self.cursor.y = min(max(row, 0), len(self.document) - 1)
        self.cursor.x = min(self.cursor.x, len(self.current_line))

    def _is_word(self, line: Line, x: int) -> bool:
        g = line.get(x)
        return g is not None and is_identifier_char(g)

    def move_word_forward(self) -> None:
        """Move to the start of the next word, crossing line ends."""
        lines = self.document.lines
        x, y = self.cursor.x, self.cursor.y
        line = lines[y]
        while self._is_word(line, x):
            x += 1
        while True:
            while x < len(line) and not self._is_word(line, x):
                x += 1
            if x < len(line) or y == len(lines) - 1:
                break
            y += 1
            x = 0
            line = lines[y]
        self.cursor.x, self.cursor.y = x, y

    def move_word_backward(self) -> None:
        """Move to the start of the current or previous word."""
        lines = self.document.lines
        x, y = self.cursor.x, self.cursor.y
        while True:
            line = lines[y]
            while x > 0 and not self._is_word(line, x - 1):
                x -= 1
            if x > 0 or y == 0:
                break
            y -= 1
            x = len(lines[y])
        while x > 0 and self._is_word(line, x - 1):
            x -= 1
        self.cursor.x, self.cursor.y = x, y

    # --- search ---

    def start_search(self) -> None:
        self.prompt_mode = 'search'
        self.prompt_input = ""
        self.search_origin = Position(self.cursor.x, self.cursor.y)

    def repeat_search(self, direction: SearchDirection) -> None:
        if not self.last_search:
            return
        found = self.document.find(self.last_search, self.cursor, direction)
        if found is None:
            self.set_status(f"Not found: {self.last_search}")
        else:
            self.cursor = found

    def _search_step(self, direction: Optional[SearchDirection]) -> None:
        """Search for the prompt text; ``None`` re-searches from the origin."""
        query = self.prompt_input
        if not query:
            self.cursor = Position(self.search_origin.x, self.search_origin.y)
            return
        if direction is None:
            found = self.document.find(query, self.search_origin, inclusive=True)
        else:
            found = self.document.find(query, self.cursor, direction)
        if found is not None:
            self.cursor = found
        elif direction is None:
            self.cursor = Position(self.search_origin.x, self.search_origin.y)

    def _close_prompt(self) -> None:
        self.prompt_mode = None
        self.prompt_input = ""

    def _handle_prompt_key(self, key_event: KeyEvent) -> None:
        mode = self.prompt_mode
        special = key_event.value if key_event.key_type == KeyType.SPECIAL else None

        if special == 'escape':
            self._close_prompt()
            if mode == 'save_as':
                self.set_status(EditorConstants.SAVE_ABORTED_MESSAGE)
            else:
                self.cursor = self.search_origin
            return

        if special == 'enter':
            answer = self.prompt_input
            self._close_prompt()
            if mode == 'save_as':
                if answer:
                    self._save_as(answer)
                else:
                    self.set_status(EditorConstants.SAVE_ABORTED_MESSAGE)
            elif answer:
                self.last_search = answer
            else:
                self.cursor = self.search_origin
            return

        if special == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
            if mode == 'search':
                self._search_step(None)
        elif mode == 'search' and special in ('right', 'down'):
            self._search_step(SearchDirection.FORWARD)
        elif mode == 'search' and special in ('left', 'up'):
            self._search_step(SearchDirection.BACKWARD)
        elif key_event.is_printable and key_event.value != '\t':
            self.prompt_input += key_event.value
            if mode == 'search':
                self._search_step(None)

    # --- key dispatch ---

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Process one key and reconcile the cursor and viewport."""
        if self.prompt_mode:
            self._handle_prompt_key(key_event)
        else:
            self.command_registry.execute(self, key_event)
        self.clamp_cursor()
        self.scroll()

    # --- drawing ---

    def scroll(self) -> None:
        """Bring the cursor into view, in grapheme columns and in screen cells.

        Tabs and wide characters make a line wider on screen than its
        grapheme count, so the horizontal offset may need to move further
        right for the cursor's cell to be drawn.
        """
        self.viewport.scroll_to(self.cursor)
        line = self.current_line
        cursor_col = line.column_of(self.cursor.x)
        g = line.get(self.cursor.x)
        cells = grapheme_width(g) if g and g != "\t" else 1
        while (self.viewport.offset_x < self.cursor.x
               and cursor_col + cells > line.column_of(self.viewport.offset_x) + self.viewport.width):
            self.viewport.offset_x += 1

    def status_line(self, width: Optional[int] = None) -> str:
        """Left status (name, line count, modified) and right status (mode, type, row:col)."""
        name = self.document.path or EditorConstants.NO_NAME
        name = name[:EditorConstants.MAX_STATUS_FILENAME]
        modified = " (modified)" if self.document.is_dirty() else ""
        left = f"{name} - {len(self.document)} lines{modified}"
        right = f"{self.mode}: {self.document.file_type} | {self.cursor.y + 1}:{self.cursor.x + 1}"
        if width is None:
            return f"{left} {right}"
        gap = max(1, width - len(left) - len(right))
        return (left + " " * gap + right)[:width]

    def _welcome_row(self, width: int) -> str:
        message = f"{EditorConstants.APP_NAME} -- version {get_version()}"
        padding = max(0, width - len(message)) // 2
        return ("~" + " " * max(0, padding - 1) + message)[:width]

    def _draw_line(self, line: Line, width: int) -> None:
        start = self.viewport.offset_x
        segments = line.render_segments(start, start + width)
        remaining = width
        for text, classification in segments:
            text, used = _fit(text, remaining)
            if not text:
                break
            if classification != Classification.NONE:
                self.terminal.set_foreground(classification.color)
                self.terminal.write(text)
                self.terminal.reset_foreground()
            else:
                self.terminal.write(text)
            remaining -= used

    def _draw_rows(self) -> None:
        width, height = self.viewport.width, self.viewport.height
        show_welcome = self.document.is_empty() and self.document.path is None
        for row in range(height):
            self.terminal.move_cursor(0, row)
            self.terminal.clear_line()
            y = self.viewport.offset_y + row
            if y < len(self.document):
                self._draw_line(self.document.lines[y], width)
            elif show_welcome and row == height // 3:
                self.terminal.write(self._welcome_row(width))
            else:
                self.terminal.write(EditorConstants.EMPTY_ROW_MARKER)

    def _draw_status_bar(self, row: int, width: int) -> None:
        self.terminal.move_cursor(0, row)
        self.terminal.set_background(EditorConstants.STATUS_BG_COLOR)
        self.terminal.set_foreground(EditorConstants.STATUS_FG_COLOR)
        self.terminal.write(self.status_line(width).ljust(width))
        self.terminal.reset_foreground()
        self.terminal.reset_background()

    def _prompt_text(self) -> str:
        label = (EditorConstants.SAVE_AS_PROMPT if self.prompt_mode == 'save_as'
                 else EditorConstants.SEARCH_PROMPT)
        return label + self.prompt_input

    def _draw_message_bar(self, row: int, width: int) -> None:
        self.terminal.move_cursor(0, row)
        self.terminal.clear_line()
        text = self._prompt_text() if self.prompt_mode else self.current_message()
        self.terminal.write(_fit(text, width)[0])

    def _screen_cursor(self) -> Tuple[int, int]:
        width, height = self.viewport.width, self.viewport.height
        if self.prompt_mode:
            _, used = _fit(self._prompt_text(), width)
            return min(used, width - 1), height + 1
        line = self.current_line
        x = line.column_of(self.cursor.x) - line.column_of(self.viewport.offset_x)
        return min(max(x, 0), width - 1), self.cursor.y - self.viewport.offset_y

    def refresh_screen(self) -> None:
        """Redraw text rows, status bar and message bar, then place the cursor."""
        self.update_size()
        self.scroll()
        query = self.prompt_input if self.prompt_mode == 'search' and self.prompt_input else None
        self.document.highlight(query, self.viewport.last_visible_row)

        self.terminal.hide_cursor()
        self._draw_rows()
        self._draw_status_bar(self.viewport.height, self.viewport.width)
        self._draw_message_bar(self.viewport.height + 1, self.viewport.width)
        self.terminal.move_cursor(*self._screen_cursor())
        self.terminal.show_cursor()
        self.terminal.flush()

    # --- event loop ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _drain_input(self) -> None:
        event = self.keyboard.read_event(timeout=0)
        while event is not None:
            self.handle_key_event(event)
            if self.should_quit:
                return
            event = self.keyboard.read_event(timeout=0)

    def run(self) -> None:
        """Run the main editor loop until a quit command succeeds."""
        self.terminal.setup()
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            while not self.should_quit:
                self.refresh_screen()
                # Wake up again when the status message is due to expire
                timeout = EditorConstants.STATUS_MESSAGE_TIMEOUT if self.current_message() else None
                ready, _, _ = select.select([sys.stdin, self._resize_pipe_r], [], [], timeout)
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                if sys.stdin in ready:
                    self._drain_input()
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()

