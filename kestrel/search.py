"""Literal, case-sensitive substring search over document lines."""

from enum import Enum
from typing import Optional, Sequence

from .line import Line
from .position import Position


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


def find(
    lines: Sequence[Line],
    query: str,
    at: Position,
    direction: SearchDirection = SearchDirection.FORWARD,
    inclusive: bool = False,
) -> Optional[Position]:
    """Find the next occurrence of ``query`` starting from ``at``.

    Forward search looks for a match beginning after ``at.x`` on the start
    row, then on each following row, wrapping from the last row to row 0,
    and finally before ``at.x`` on the start row. Backward search is the
    mirror image. Each row is examined once, so a single lap around the
    document is the most that is ever scanned.

    Args:
        lines: The document's lines.
        query: Text to look for; an empty query never matches.
        at: Position to search from.
        direction: Which way to scan.
        inclusive: Also accept a match that begins exactly at ``at``.

    Returns:
        Position of the first grapheme of the match, or None.
    """
    if not query or not lines:
        return None
    count = len(lines)
    y = min(max(at.y, 0), count - 1)
    start_line = lines[y]

    if direction == SearchDirection.FORWARD:
        start_x = at.x if inclusive else at.x + 1
        x = start_line.find(query, start_x)
        if x is not None:
            return Position(x, y)
        for step in range(1, count):
            row = (y + step) % count
            x = lines[row].find(query, 0)
            if x is not None:
                return Position(x, row)
        x = start_line.find(query, 0)
        if x is not None and x < start_x:
            return Position(x, y)
        return None

    end_x = at.x + 1 if inclusive else at.x
    x = start_line.rfind(query, end_x)
    if x is not None:
        return Position(x, y)
    for step in range(1, count):
        row = (y - step) % count
        x = lines[row].rfind(query, len(lines[row]))
        if x is not None:
            return Position(x, row)
    x = start_line.rfind(query, len(start_line))
    if x is not None and x >= end_x:
        return Position(x, y)
    return None
