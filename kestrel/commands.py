"""Command pattern implementation for editor actions.

Every key the editor understands maps to one of the command classes below.
Single keys are looked up by ``(Mode, KeyType, value)``; Normal mode
compound commands (``dd``, ``gg``, ``:w``, ...) are looked up by
``(operator, key)`` once the operator prefix is pending.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .errors import UnsavedChangesBlock
from .constants import EditorConstants
from .keyboard import KeyType
from .mode import Mode
from .search import SearchDirection

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent', count: Optional[int] = None):
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
            count: Numeric prefix typed before the command, if any
        """


# --- motions ---

class LeftCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.move_left()


class RightCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.move_right()


class UpCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.move_up(count or 1)


class DownCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.move_down(count or 1)


class LineStartCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.cursor.x = 0


class LineEndCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.cursor.x = len(editor.current_line)


class WordForwardCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.move_word_forward()


class WordBackwardCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.move_word_backward()


class GotoLineCommand(EditorCommand):
    """``gg``: go to the row given by the count, or the first row."""

    def execute(self, editor, key_event, count=None):
        editor.goto_row(count or 0)


class GotoLastLineCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.goto_row(len(editor.document) - 1)


# --- mode changes ---

class EnterInsertCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.set_mode(Mode.INSERT)


class AppendCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.cursor.x = min(editor.cursor.x + 1, len(editor.current_line))
        editor.set_mode(Mode.INSERT)


class AppendAtEndCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.cursor.x = len(editor.current_line)
        editor.set_mode(Mode.INSERT)


class OpenLineBelowCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        row = editor.cursor.y + 1
        editor.document.insert_line(row)
        editor.cursor.y, editor.cursor.x = row, 0
        editor.set_mode(Mode.INSERT)


class OpenLineAboveCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        row = editor.cursor.y
        editor.document.insert_line(row)
        editor.cursor.x = 0
        editor.set_mode(Mode.INSERT)


class EnterVisualCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.set_mode(Mode.VISUAL)


class EscapeCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.set_mode(Mode.NORMAL)


# --- edits ---

class InsertCharCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.cursor.x += editor.document.insert(editor.cursor, key_event.value)


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.document.insert_newline(editor.cursor)
        editor.cursor.y += 1
        editor.cursor.x = 0


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        if editor.cursor.x > 0 or editor.cursor.y > 0:
            editor.move_left()
            editor.document.delete(editor.cursor)


class DeleteForwardCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.document.delete(editor.cursor)


class DeleteUnderCursorCommand(EditorCommand):
    """``x``: delete the grapheme under the cursor, then move left."""

    def execute(self, editor, key_event, count=None):
        editor.document.delete(editor.cursor)
        editor.move_left()


class DeleteLineCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.document.delete_line(editor.cursor.y)


# --- search, save, quit ---

class SearchCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.start_search()


class RepeatSearchCommand(EditorCommand):
    def __init__(self, direction: SearchDirection):
        self.direction = direction

    def execute(self, editor, key_event, count=None):
        editor.repeat_search(self.direction)


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.save()


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        try:
            editor.quit()
        except UnsavedChangesBlock:
            editor.set_status(EditorConstants.UNSAVED_CHANGES_MESSAGE)


class ForceQuitCommand(EditorCommand):
    def execute(self, editor, key_event, count=None):
        editor.quit(force=True)


_INSERT_CHAR = InsertCharCommand()


class CommandRegistry:
    """Registry for mapping (mode, key) combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[Mode, KeyType, str], EditorCommand] = {}
        self._operator_commands: Dict[Tuple[str, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        left, right = LeftCommand(), RightCommand()
        up, down = UpCommand(), DownCommand()
        line_start, line_end = LineStartCommand(), LineEndCommand()

        # Motions shared by Normal and Visual mode
        for mode in (Mode.NORMAL, Mode.VISUAL):
            self.register(mode, KeyType.REGULAR, 'h', left)
            self.register(mode, KeyType.REGULAR, 'l', right)
            self.register(mode, KeyType.REGULAR, 'k', up)
            self.register(mode, KeyType.REGULAR, 'j', down)
            self.register(mode, KeyType.REGULAR, '^', line_start)
            self.register(mode, KeyType.REGULAR, '$', line_end)
            self.register(mode, KeyType.REGULAR, 'w', WordForwardCommand())
            self.register(mode, KeyType.REGULAR, 'b', WordBackwardCommand())
            self.register(mode, KeyType.REGULAR, 'G', GotoLastLineCommand())
            self.register(mode, KeyType.SPECIAL, 'escape', EscapeCommand())

        # Arrow keys work in every mode
        for mode in Mode:
            self.register(mode, KeyType.SPECIAL, 'left', left)
            self.register(mode, KeyType.SPECIAL, 'right', right)
            self.register(mode, KeyType.SPECIAL, 'up', up)
            self.register(mode, KeyType.SPECIAL, 'down', down)
            self.register(mode, KeyType.SPECIAL, 'home', line_start)
            self.register(mode, KeyType.SPECIAL, 'end', line_end)

        # Normal mode
        self.register(Mode.NORMAL, KeyType.REGULAR, 'i', EnterInsertCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, 'a', AppendCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, 'A', AppendAtEndCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, 'o', OpenLineBelowCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, 'O', OpenLineAboveCommand())
        self.register(Mode.NORMAL, KeyType.CTRL, 'v', EnterVisualCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, 'x', DeleteUnderCursorCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, 'D', DeleteLineCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, '/', SearchCommand())
        self.register(Mode.NORMAL, KeyType.REGULAR, 'n', RepeatSearchCommand(SearchDirection.FORWARD))
        self.register(Mode.NORMAL, KeyType.REGULAR, 'N', RepeatSearchCommand(SearchDirection.BACKWARD))

        # Insert mode
        self.register(Mode.INSERT, KeyType.SPECIAL, 'escape', EscapeCommand())
        self.register(Mode.INSERT, KeyType.SPECIAL, 'enter', InsertNewlineCommand())
        self.register(Mode.INSERT, KeyType.SPECIAL, 'backspace', BackspaceCommand())
        self.register(Mode.INSERT, KeyType.SPECIAL, 'delete', DeleteForwardCommand())

        # Operator-prefixed Normal mode commands
        self.register_operator('d', 'd', DeleteLineCommand())
        self.register_operator('g', 'g', GotoLineCommand())
        self.register_operator(':', 'w', SaveCommand())
        self.register_operator(':', 'q', QuitCommand())
        self.register_operator(':', '!', ForceQuitCommand())

    def register(self, mode: Mode, key_type: KeyType, value: str, command: EditorCommand):
        """Register a command for a key in a mode."""
        self._commands[(mode, key_type, value)] = command

    def register_operator(self, operator: str, key: str, command: EditorCommand):
        """Register the command completed by ``key`` after ``operator``."""
        self._operator_commands[(operator, key)] = command

    def get_command(self, mode: Mode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key in a mode."""
        return self._commands.get((mode, key_type, value))

    def get_operator_command(self, operator: str, key: str) -> Optional[EditorCommand]:
        return self._operator_commands.get((operator, key))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Run the command bound to ``key_event`` in the editor's current mode.

        Returns:
            True if a command ran or the key was absorbed into the pending
            input; False if the key has no meaning here.
        """
        pending = editor.pending
        if editor.mode == Mode.NORMAL and key_event.key_type == KeyType.REGULAR:
            key = key_event.value
            if pending.operator is not None:
                command = self.get_operator_command(pending.operator, key)
                count = pending.take_count()
                if command:
                    command.execute(editor, key_event, count)
                    return True
                # Not a completion: drop the prefix and treat the key on its own
            if pending.can_extend(key):
                pending.push(key)
                return True

        command = self.get_command(editor.mode, key_event.key_type, key_event.value)
        if command is None and editor.mode == Mode.INSERT and key_event.is_printable:
            command = _INSERT_CHAR
        count = pending.take_count()
        if command is None:
            return False
        command.execute(editor, key_event, count)
        return True
