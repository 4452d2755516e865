"""Kestrel CLI entry point.

Allows running via `python -m kestrel` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .version import get_version_string


def _configure_logging() -> None:
    """Log to the file named by KESTREL_LOG; the screen belongs to the editor."""
    log_file = os.environ.get("KESTREL_LOG")
    if not log_file:
        return
    level_name = os.environ.get("KESTREL_LOG_LEVEL", "INFO").upper()
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    root = logging.getLogger("kestrel")
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))


def main(argv: list[str] | None = None) -> None:
    # Very small arg parsing: version flag and an optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    _configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args:
        editor.load_file(args[0])
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
