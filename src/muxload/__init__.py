"""muxload: build tmux sessions from YAML project files."""

from .compiler import compile_config, temp_window_name
from .config import Configuration, Pane, Window, parse
from .errors import ConfigError, DriverCallError, MalformedWindow, MissingWindows, MuxloadError
from .executor import execute
from .paths import resolve_root
from .session import SessionLoader, SessionState

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "ConfigError",
    "DriverCallError",
    "MalformedWindow",
    "MissingWindows",
    "MuxloadError",
    "Pane",
    "SessionLoader",
    "SessionState",
    "Window",
    "compile_config",
    "execute",
    "parse",
    "resolve_root",
    "temp_window_name",
]
