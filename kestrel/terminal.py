"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import sys
from typing import List, Optional, Tuple

import blessed
from curtsies import Input
from curtsies.events import PasteEvent

logger = logging.getLogger(__name__)

# SGR sequences blessed has no capability name for
_RESET_FOREGROUND = '\x1b[39m'
_RESET_BACKGROUND = '\x1b[49m'


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Output is queued and written in one go by :meth:`flush`, so a frame is
    never shown half drawn.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self.is_fullscreen = False
        self._input: Optional[Input] = None
        self._queue: List[str] = []
        self._pasted: List[str] = []

    def setup(self):
        """Enter fullscreen mode and put stdin in raw mode."""
        self.stream.write(self.term.enter_fullscreen + self.term.clear)
        self.stream.flush()
        self.is_fullscreen = True
        if self._input is None:
            self._input = Input(keynames='curtsies')
            self._input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None
        if self.is_fullscreen:
            self.stream.write(self.term.normal + self.term.exit_fullscreen + self.term.normal_cursor)
            self.stream.flush()
            self.is_fullscreen = False

    def get_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Get a single key token from the user.

        Args:
            timeout: Seconds to wait (None blocks, 0 polls).

        Returns:
            The curtsies key name, or None on timeout or before setup().
        """
        if self._input is None:
            logger.debug("get_key called before setup")
            return None
        if self._pasted:
            return self._pasted.pop(0)
        event = self._input.send(timeout)
        if isinstance(event, PasteEvent):
            # A paste arrives as one event; hand its keys out one by one
            self._pasted.extend(str(e) for e in event.events)
            return self._pasted.pop(0) if self._pasted else None
        return None if event is None else str(event)

    def size(self) -> Tuple[int, int]:
        """Terminal (width, height) in cells."""
        return self.term.width, self.term.height

    # --- queued output ---

    def write(self, text: str) -> None:
        self._queue.append(text)

    def move_cursor(self, x: int, y: int) -> None:
        self._queue.append(self.term.move_xy(x, y))

    def hide_cursor(self) -> None:
        self._queue.append(self.term.hide_cursor)

    def show_cursor(self) -> None:
        self._queue.append(self.term.normal_cursor)

    def clear_line(self) -> None:
        self._queue.append(self.term.clear_eol)

    def clear_screen(self) -> None:
        self._queue.append(self.term.home + self.term.clear)

    def set_foreground(self, color: Tuple[int, int, int]) -> None:
        self._queue.append(self.term.color_rgb(*color))

    def set_background(self, color: Tuple[int, int, int]) -> None:
        self._queue.append(self.term.on_color_rgb(*color))

    def reset_foreground(self) -> None:
        if self.term.does_styling:
            self._queue.append(_RESET_FOREGROUND)

    def reset_background(self) -> None:
        if self.term.does_styling:
            self._queue.append(_RESET_BACKGROUND)

    def flush(self) -> None:
        """Write everything queued since the last flush."""
        if self._queue:
            self.stream.write(''.join(self._queue))
            self._queue.clear()
        self.stream.flush()
