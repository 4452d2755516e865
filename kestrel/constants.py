"""Constants and configuration for the kestrel editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    APP_NAME = "kestrel"

    # Rendering
    TAB_STOP = 4  # Tabs expand to the next multiple of this column
    RESERVED_ROWS = 2  # Status bar + message bar at the bottom of the screen
    EMPTY_ROW_MARKER = "~"
    MAX_STATUS_FILENAME = 20  # File names are truncated in the status bar
    NO_NAME = "[No Name]"

    # Status bar colors (RGB)
    STATUS_FG_COLOR = (63, 63, 63)
    STATUS_BG_COLOR = (239, 239, 239)

    # Message bar
    STATUS_MESSAGE_TIMEOUT = 5.0  # Seconds a status message stays visible
    INITIAL_MESSAGE = "HELP: `/` = find | `:w` = save | `:q` = quit"
    UNSAVED_CHANGES_MESSAGE = "WARNING! File has unsaved changes."
    SAVE_SUCCESS_MESSAGE = "File saved successfully."
    SAVE_ERROR_MESSAGE = "Error writing file!"
    SAVE_ABORTED_MESSAGE = "Save aborted."

    # Prompts
    SAVE_AS_PROMPT = "Save as: "
    SEARCH_PROMPT = "Search (ESC to cancel, Arrows to navigate): "

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
