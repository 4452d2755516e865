from dataclasses import dataclass

from .position import Position


@dataclass
class Viewport:
    """Scroll offsets of the visible window over the document.

    After :meth:`scroll_to` the cursor lies inside
    ``[offset, offset + size)`` on both axes.
    """
    width: int = 80
    height: int = 22
    offset_x: int = 0
    offset_y: int = 0

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.height = max(1, height)

    def scroll_to(self, cursor: Position) -> None:
        if cursor.y < self.offset_y:
            self.offset_y = cursor.y
        elif cursor.y >= self.offset_y + self.height:
            self.offset_y = cursor.y - self.height + 1
        if cursor.x < self.offset_x:
            self.offset_x = cursor.x
        elif cursor.x >= self.offset_x + self.width:
            self.offset_x = cursor.x - self.width + 1

    def contains(self, cursor: Position) -> bool:
        return (self.offset_x <= cursor.x < self.offset_x + self.width
                and self.offset_y <= cursor.y < self.offset_y + self.height)

    @property
    def last_visible_row(self) -> int:
        """Exclusive bound of the rows on screen."""
        return self.offset_y + self.height
