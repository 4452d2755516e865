"""Shared fixtures: a fake terminal so the editor runs without a tty."""

import pytest

from kestrel.document import Document
from kestrel.editor import Editor
from kestrel.keyboard import KeyboardHandler
from kestrel.settings_persistence import SettingsPersistence


class FakeTerminal:
    """Records drawing calls and serves queued key tokens."""

    def __init__(self, width=80, height=24, keys=None):
        self.width = width
        self.height = height
        self.keys = list(keys or [])
        self.calls = []
        self.output = []
        self.is_setup = False

    def setup(self):
        self.is_setup = True

    def cleanup(self):
        self.is_setup = False

    def get_key(self, timeout=None):
        if self.keys:
            return self.keys.pop(0)
        return None

    def size(self):
        return self.width, self.height

    def write(self, text):
        self.output.append(text)
        self.calls.append(('write', text))

    def move_cursor(self, x, y):
        self.calls.append(('move_cursor', x, y))

    def hide_cursor(self):
        self.calls.append(('hide_cursor',))

    def show_cursor(self):
        self.calls.append(('show_cursor',))

    def clear_line(self):
        self.calls.append(('clear_line',))

    def clear_screen(self):
        self.calls.append(('clear_screen',))

    def set_foreground(self, color):
        self.calls.append(('set_foreground', color))

    def set_background(self, color):
        self.calls.append(('set_background', color))

    def reset_foreground(self):
        self.calls.append(('reset_foreground',))

    def reset_background(self):
        self.calls.append(('reset_background',))

    def flush(self):
        self.calls.append(('flush',))

    @property
    def text(self):
        return ''.join(self.output)


_parser = KeyboardHandler(None)


def press(editor, *keys):
    """Feed curtsies-style key tokens to the editor one by one."""
    for key in keys:
        editor.handle_key_event(_parser.parse_key(key))


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def settings(tmp_path):
    return SettingsPersistence(config_dir=str(tmp_path / "config"))


@pytest.fixture
def make_editor(terminal, settings):
    """Build an editor over the given lines with the cursor at ``(x, y)``."""
    def _make(lines=None, path=None, x=0, y=0):
        editor = Editor(Document(lines, path=path), terminal=terminal, settings=settings)
        editor.cursor.x, editor.cursor.y = x, y
        return editor
    return _make
