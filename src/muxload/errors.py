"""
errors.py

Exception types raised by muxload.

Configuration problems are detected before tmux is touched; driver failures
happen while a session is being built.
"""

from __future__ import annotations

from typing import Optional, Sequence


class MuxloadError(Exception):
    """Base class for every muxload error."""


class ConfigError(MuxloadError, ValueError):
    """The project document cannot be turned into a Configuration."""


class MissingWindows(ConfigError):
    """No `windows:` key, or it is empty."""


class MalformedWindow(ConfigError):
    """A window entry is neither a scalar nor a single-key mapping."""


class ProjectNotFound(ConfigError, FileNotFoundError):
    """No project file exists for the requested name."""


class DriverCallError(MuxloadError, RuntimeError):
    """! @brief A single tmux call failed.

    @param args tmux argv that was run (without the leading `tmux`).
    @param stderr Error output reported by tmux, if any.
    """

    def __init__(self, args: Sequence[str], stderr: Optional[str] = None) -> None:
        self.tmux_args = list(args)
        self.stderr = stderr or ""
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"tmux {' '.join(self.tmux_args)} failed{detail}")
