"""Pending-keystroke state for multi-key Normal mode commands.

Replaces a free-form character stack with three explicit states:

* ``IDLE``: nothing pending.
* ``COUNTING``: digits typed so far form a repeat count / line number.
* ``AWAITING_OPERATOR``: an operator prefix (``d``, ``g``, ``:``) waits for
  the key that completes it; any count typed before it is kept.
"""

from enum import Enum
from typing import Optional

OPERATORS = frozenset("dg:")


def is_count_digit(key: str) -> bool:
    return len(key) == 1 and "0" <= key <= "9"


class PendingState(Enum):
    IDLE = "idle"
    COUNTING = "counting"
    AWAITING_OPERATOR = "awaiting_operator"


class PendingInput:
    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.state = PendingState.IDLE
        self.digits = ""
        self.operator: Optional[str] = None

    @property
    def is_idle(self) -> bool:
        return self.state == PendingState.IDLE

    @property
    def count(self) -> Optional[int]:
        return int(self.digits) if self.digits else None

    def can_extend(self, key: str) -> bool:
        """True if ``key`` would grow the pending state rather than complete it."""
        if self.state == PendingState.AWAITING_OPERATOR:
            return False
        return is_count_digit(key) or key in OPERATORS

    def push(self, key: str) -> None:
        """Add a digit or an operator prefix."""
        if key in OPERATORS:
            self.state = PendingState.AWAITING_OPERATOR
            self.operator = key
        elif is_count_digit(key):
            self.state = PendingState.COUNTING
            self.digits += key
        else:
            raise ValueError(f"{key!r} cannot extend pending input")

    def take_count(self) -> Optional[int]:
        """Return the count and go back to idle."""
        count = self.count
        self.reset()
        return count

    def describe(self) -> str:
        """Text shown in the status bar while a command is incomplete."""
        return self.digits + (self.operator or "")
