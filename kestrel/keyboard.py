"""Keyboard input handling using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str = ""  # The raw key string from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False

    @property
    def is_printable(self) -> bool:
        return self.key_type == KeyType.REGULAR and (self.value == '\t' or self.value.isprintable())


SPECIAL_KEYS = frozenset({
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'escape', 'tab',
})

_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'esc': 'escape',
    'del': 'delete',
    'return': 'enter',
    'space': ' ',
    'spacebar': ' ',
    'spc': ' ',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def read_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Read the next key; blocks when ``timeout`` is None."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token (or a single raw character) into a KeyEvent."""
        key_str = str(key)

        # Named tokens like '<LEFT>', '<Ctrl-v>', '<Esc+u>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str == '\t':
                return KeyEvent(KeyType.REGULAR, '\t', raw=key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(KeyType.SPECIAL, 'enter', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(KeyType.SPECIAL, 'backspace', raw=key_str)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), raw=key_str, is_ctrl=True)

        return KeyEvent(KeyType.REGULAR, key_str, raw=key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Keep the case of single-letter bases ('<Ctrl-V>' vs '<Ctrl-v>' are the same key)
        parts = name.replace('+', '-').split('-')
        # '<Ctrl-->' style tokens: a trailing '-' is the base key
        if name.endswith('-') and len(parts) > 1 and parts[-1] == '':
            parts = parts[:-2] + ['-']
        base = parts[-1]
        mods = {p.lower() for p in parts[:-1]}
        if len(base) > 1:
            base = base.lower()
        base = _ALIASES.get(base, base)
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')

        if 'ctrl' in mods and len(base) == 1:
            ch = base.lower()
            # Ctrl-J / Ctrl-M are what terminals send for Enter, Ctrl-H for backspace
            if ch in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', raw=key_str)
            if ch == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', raw=key_str)
            if ch == 'i':
                return KeyEvent(KeyType.REGULAR, '\t', raw=key_str)
            return KeyEvent(KeyType.CTRL, ch, raw=key_str, is_ctrl=True)
        if 'alt' in mods:
            return KeyEvent(KeyType.ALT, base, raw=key_str, is_alt=True)
        if 'shift' in mods and base in SPECIAL_KEYS:
            return KeyEvent(KeyType.SHIFT_SPECIAL, base, raw=key_str, is_shift=True)
        if base == 'tab':
            return KeyEvent(KeyType.REGULAR, '\t', raw=key_str)
        if len(base) == 1 and not mods:
            return KeyEvent(KeyType.REGULAR, base, raw=key_str)
        return KeyEvent(KeyType.SPECIAL, base, raw=key_str)
