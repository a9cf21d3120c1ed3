"""
config.py

Project configuration: the typed model of a project file and the loader that
builds it from YAML.

A project file looks like:

    name: my-project
    root: ~/src/my-project
    pre: docker compose up -d db
    pre_window: source .venv/bin/activate
    windows:
      - editor:
          layout: main-vertical
          panes: [vim, guard, ~]
      - server: make run
      - logs

Windows come in three shapes (bare scalar, `{name: command}`,
`{name: {layout, panes, root}}`); they are all normalized here so nothing past
the parser has to care which one was used.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigError, MalformedWindow, MissingWindows, ProjectNotFound

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "muxload"
DEFAULT_PROJECT_DIR = "~/.muxload"
PROJECT_DIR_ENV = "MUXLOAD_PROJECT_DIR"
PROJECT_SUFFIXES = (".yml", ".yaml")

_SCALARS = (str, int, float, bool)


# ---------------------------
# Model
# ---------------------------

@dataclass(frozen=True)
class Pane:
    exec: Optional[str] = None
    root: Optional[str] = None


@dataclass(frozen=True)
class Window:
    name: str
    panes: Tuple[Pane, ...] = (Pane(),)
    layout: Optional[str] = None
    root: Optional[str] = None


@dataclass(frozen=True)
class Configuration:
    name: str
    windows: Tuple[Window, ...]
    root: Optional[str] = None
    pre: Tuple[str, ...] = ()
    pre_window: Tuple[str, ...] = ()

    @staticmethod
    def from_yaml(path: Path) -> "Configuration":
        """! @brief Load and parse a project file.

        The file stem is used as the session name when the document has none.

        @param path Path to the YAML project file.
        @return Parsed configuration.
        @throws ConfigError on YAML syntax errors or an unusable document.
        """
        try:
            data = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        logger.debug("Loaded project file %s", path)
        return parse(data, default_name=path.stem)


class WindowShape(enum.Enum):
    SCALAR = "scalar"          # - vim
    COMMAND = "command"        # - editor: vim
    EXPLICIT = "explicit"      # - editor: {layout: ..., panes: [...]}


# ---------------------------
# Parsing
# ---------------------------

def _scalar_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, _SCALARS):
        return str(value)
    raise ConfigError(f"Expected a scalar, got {value!r}")


def _command_list(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    """Normalize `pre` / `pre_window`: a scalar becomes a one-element list."""
    raw = data.get(key)
    if raw is None:
        return ()
    if isinstance(raw, list):
        return tuple(_scalar_text(item) for item in raw if item is not None)
    return (_scalar_text(raw),)


def classify_window(entry: Any) -> Tuple[WindowShape, str, Any]:
    """! @brief Work out which of the accepted shapes a window entry has.

    @param entry One item of the `windows:` list.
    @return (shape, window name, body) where body is the command (COMMAND),
            the nested mapping (EXPLICIT) or the scalar itself (SCALAR).
    @throws MalformedWindow if the entry matches no shape.
    """
    if isinstance(entry, _SCALARS):
        return WindowShape.SCALAR, str(entry), entry

    if isinstance(entry, dict) and len(entry) == 1:
        (name, body), = entry.items()
        if name is None or not isinstance(name, _SCALARS):
            raise MalformedWindow(f"Window name must be a scalar, got {name!r}")
        if body is None or isinstance(body, _SCALARS):
            return WindowShape.COMMAND, str(name), body
        if isinstance(body, dict):
            return WindowShape.EXPLICIT, str(name), body

    raise MalformedWindow(f"Unsupported window entry: {entry!r}")


def _pane(window_name: str, entry: Any) -> Pane:
    if entry is None or isinstance(entry, _SCALARS):
        return Pane(exec=_scalar_text(entry))
    if isinstance(entry, dict):
        try:
            return Pane(exec=_scalar_text(entry.get("exec")), root=_scalar_text(entry.get("root")))
        except ConfigError as e:
            raise MalformedWindow(f"Window '{window_name}' has a bad pane {entry!r}: {e}") from e
    raise MalformedWindow(f"Window '{window_name}' has a bad pane: {entry!r}")


def parse_window(entry: Any) -> Window:
    """Turn one `windows:` entry into a Window."""
    shape, name, body = classify_window(entry)

    if shape is WindowShape.SCALAR:
        return Window(name=name, panes=(Pane(exec=str(body)),))

    if shape is WindowShape.COMMAND:
        return Window(name=name, panes=(Pane(exec=_scalar_text(body)),))

    raw_panes = body.get("panes")
    if raw_panes is None:
        raw_panes = []
    elif not isinstance(raw_panes, list):
        raw_panes = [raw_panes]
    panes = tuple(_pane(name, p) for p in raw_panes) or (Pane(),)

    try:
        # Older project files spelled the window root `path`.
        root = _scalar_text(body.get("root", body.get("path")))
        layout = _scalar_text(body.get("layout"))
    except ConfigError as e:
        raise MalformedWindow(f"Window '{name}': {e}") from e

    return Window(name=name, panes=panes, layout=layout or None, root=root)


def parse(document: Any, default_name: str = DEFAULT_SESSION) -> Configuration:
    """! @brief Build a Configuration from a parsed YAML document.

    @param document Result of yaml.safe_load.
    @param default_name Session name used when the document has no `name`.
    @return Immutable configuration.
    @throws MissingWindows if there are no windows.
    @throws MalformedWindow if a window entry has an unsupported shape.
    @throws ConfigError if the document is not a mapping.
    """
    if document is None:
        raise MissingWindows("Project has no windows. Expected a 'windows:' list.")
    if not isinstance(document, dict):
        raise ConfigError(f"Project must be a mapping, got {type(document).__name__}")

    raw_windows = document.get("windows")
    if raw_windows is None or raw_windows == [] or raw_windows == {}:
        raise MissingWindows("Project has no windows. Expected a 'windows:' list.")
    if not isinstance(raw_windows, list):
        raw_windows = [raw_windows]

    windows = tuple(parse_window(w) for w in raw_windows)

    name = _scalar_text(document.get("name")) or default_name or DEFAULT_SESSION

    return Configuration(
        name=name,
        windows=windows,
        root=_scalar_text(document.get("root")),
        pre=_command_list(document, "pre"),
        pre_window=_command_list(document, "pre_window"),
    )


# ---------------------------
# Project files
# ---------------------------

def project_dir(override: Optional[str] = None) -> Path:
    """Directory holding project files: CLI override, then env, then default."""
    raw = override or os.environ.get(PROJECT_DIR_ENV) or DEFAULT_PROJECT_DIR
    return Path(raw).expanduser()


def find_project(name: str, directory: Path) -> Path:
    """! @brief Locate the project file for @p name.

    @param name Project name (file stem).
    @param directory Project directory.
    @return Path to the first existing `<name>.yml` / `<name>.yaml`.
    @throws ProjectNotFound if neither exists.
    """
    for suffix in PROJECT_SUFFIXES:
        candidate = directory / f"{name}{suffix}"
        if candidate.is_file():
            return candidate
    raise ProjectNotFound(f"No project '{name}' in {directory}")


def list_projects(directory: Path) -> List[str]:
    if not directory.is_dir():
        return []
    names = {p.stem for p in directory.iterdir() if p.suffix in PROJECT_SUFFIXES and p.is_file()}
    return sorted(names)
