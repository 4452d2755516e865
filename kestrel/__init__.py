"""Kestrel - a modal terminal text editor."""

import logging

from .document import Document
from .editor import Editor
from .errors import EditorError, IndexOutOfRange, InvalidPosition, MissingFileName, UnsavedChangesBlock
from .line import Line
from .mode import Mode
from .position import Position

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Document',
    'Editor',
    'EditorError',
    'IndexOutOfRange',
    'InvalidPosition',
    'Line',
    'MissingFileName',
    'Mode',
    'Position',
    'UnsavedChangesBlock',
]
