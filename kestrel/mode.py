from enum import Enum


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"

    def __str__(self):
        return f"{self.value} mode"
