"""Exception types raised by the editing core."""


class EditorError(Exception):
    """Base class for kestrel errors."""


class InvalidPosition(EditorError, IndexError):
    """A Position does not address an existing row/column of the document.

    Indicates a caller bug rather than a user-facing condition.
    """


class IndexOutOfRange(EditorError, IndexError):
    """A grapheme index lies outside the bounds of a Line."""


class UnsavedChangesBlock(EditorError):
    """Quit was refused because the document has unsaved changes."""


class MissingFileName(EditorError):
    """The document has no path to save to."""
