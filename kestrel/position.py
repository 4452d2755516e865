from dataclasses import dataclass


@dataclass
class Position:
    """Cursor or edit location: ``x`` is a grapheme column, ``y`` a row index."""
    x: int = 0
    y: int = 0
