"""
commands.py

The operations a compiled project is made of. Each command maps onto exactly
one tmux call; window and pane fields hold 0-based positions as declared in
the project file, not tmux indices.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class CreateSession:
    session: str
    temp_window: str


@dataclass(frozen=True)
class SessionHook:
    """A `pre` command, run to completion once before any window exists."""

    session: str
    command: str


@dataclass(frozen=True)
class CreateWindow:
    session: str
    window: int
    name: str
    root: Path


@dataclass(frozen=True)
class WindowHook:
    """A `pre_window` command, run in a window before its panes are filled."""

    session: str
    window: int
    command: str


@dataclass(frozen=True)
class SplitPane:
    session: str
    window: int
    pane: int  # pane being split
    root: Path


@dataclass(frozen=True)
class SetLayout:
    session: str
    window: int
    layout: str


@dataclass(frozen=True)
class SendKeys:
    session: str
    window: int
    pane: int
    command: str  # empty: leave the shell alone


@dataclass(frozen=True)
class SelectWindow:
    session: str
    window: int


@dataclass(frozen=True)
class SelectPane:
    session: str
    window: int
    pane: int


@dataclass(frozen=True)
class KillWindow:
    session: str
    name: str


Command = Union[
    CreateSession,
    SessionHook,
    CreateWindow,
    WindowHook,
    SplitPane,
    SetLayout,
    SendKeys,
    SelectWindow,
    SelectPane,
    KillWindow,
]
