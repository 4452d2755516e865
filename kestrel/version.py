from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DISTRIBUTION = "kestrel"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=cwd or os.getcwd(),
                                      stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (OSError, subprocess.CalledProcessError):
        return None


def get_version() -> str:
    """The installed package version."""
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_build_info() -> BuildInfo:
    """Commit of the source checkout this module was imported from, if any."""
    here = str(Path(__file__).resolve().parent)
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    if commit is None:
        return BuildInfo(commit=None, dirty=False)
    status = _run_git(["status", "--porcelain"], cwd=here)
    return BuildInfo(commit=commit, dirty=bool(status))


def get_version_string() -> str:
    version = get_version()
    info = get_build_info()
    if info.commit is None:
        return f"{DISTRIBUTION} {version}"
    dirty_suffix = "-dirty" if info.dirty else ""
    # Use short (7-character) git hashes
    return f"{DISTRIBUTION} {version} ({info.commit[:7]}{dirty_suffix})"
