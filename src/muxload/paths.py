"""
paths.py

Root-path resolution for sessions, windows and panes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

HOME_TOKEN = "$HOME"


def resolve_root(spec: Optional[str], cwd: Path, home: Optional[Path]) -> Path:
    """! @brief Expand a root specification into a directory path.

    Rules:
      - None / ""           -> @p cwd
      - "~" or "~/..."      -> leading "~" replaced by @p home
      - "$HOME" (exactly)   -> @p home
      - anything else       -> returned as given (absolute or relative)

    The result is a Path, never a re-split string, so directories containing
    spaces survive intact. When no home directory is known, "~" and "$HOME"
    are passed through literally.

    @param spec Root as written in the project file.
    @param cwd Current working directory of the launcher.
    @param home Home directory, or None if it cannot be determined.
    @return Resolved path.
    """
    if not spec:
        return cwd

    if spec == HOME_TOKEN:
        return home if home is not None else Path(spec)

    if spec == "~" or spec.startswith("~/"):
        if home is None:
            return Path(spec)
        rest = spec[2:]
        return home / rest if rest else home

    return Path(spec)


def home_dir() -> Optional[Path]:
    """Home directory of the current user, or None if it cannot be found."""
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def pick_root(*specs: Optional[str]) -> Optional[str]:
    """First non-empty root spec, most specific first."""
    for spec in specs:
        if spec:
            return spec
    return None
