"""
compiler.py

Turns a Configuration into the ordered list of commands that builds the
session. Nothing here talks to tmux, so the whole sequence can be checked
without a server.

`new-session` cannot set a working directory, so the session is opened with a
throwaway window; every project window is then created the same way with its
own root, and the throwaway window is killed once focus is back on window 0.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional

from .commands import (
    Command,
    CreateSession,
    CreateWindow,
    KillWindow,
    SelectPane,
    SelectWindow,
    SendKeys,
    SessionHook,
    SetLayout,
    SplitPane,
    WindowHook,
)
from .config import Configuration, Window
from .paths import pick_root, resolve_root

DEFAULT_LAYOUT = "main-vertical"
TEMP_WINDOW_PREFIX = "muxload-"


def temp_window_name(rng: Optional[random.Random] = None) -> str:
    """Random name for the throwaway first window."""
    rng = rng or random
    return f"{TEMP_WINDOW_PREFIX}{rng.randint(0, 0xFFFF)}"


def _compile_window(
    config: Configuration, index: int, window: Window, cwd: Path, home: Optional[Path]
) -> List[Command]:
    session = config.name
    out: List[Command] = []

    # The window is born with pane 0, so a pane 0 root is the window's cwd.
    window_root = pick_root(window.panes[0].root, window.root, config.root)
    out.append(CreateWindow(session, index, window.name, resolve_root(window_root, cwd, home)))

    for hook in config.pre_window:
        out.append(WindowHook(session, index, hook))

    # Pane 0 comes with the window; every later pane splits the one before it.
    for pane_index in range(1, len(window.panes)):
        pane = window.panes[pane_index]
        root = resolve_root(pick_root(pane.root, window.root, config.root), cwd, home)
        out.append(SplitPane(session, index, pane_index - 1, root))

    if len(window.panes) > 1:
        out.append(SetLayout(session, index, window.layout or DEFAULT_LAYOUT))

    for pane_index, pane in enumerate(window.panes):
        out.append(SendKeys(session, index, pane_index, pane.exec or ""))

    return out


def compile_config(
    config: Configuration,
    temp_window: str,
    cwd: Path,
    home: Optional[Path],
) -> List[Command]:
    """! @brief Compile a configuration into tmux operations.

    Order:
      1) create the session with @p temp_window
      2) `pre` hooks, session wide
      3) per window: create, `pre_window` hooks, splits, layout, pane commands
      4) focus window 0, pane 0
      5) kill @p temp_window

    @param config Parsed project.
    @param temp_window Name of the throwaway first window.
    @param cwd Fallback root when neither pane, window nor project sets one.
    @param home Home directory used for "~" and "$HOME" roots.
    @return Commands in execution order.
    """
    session = config.name
    commands: List[Command] = [CreateSession(session, temp_window)]

    commands.extend(SessionHook(session, hook) for hook in config.pre)

    for index, window in enumerate(config.windows):
        commands.extend(_compile_window(config, index, window, cwd, home))

    commands.append(SelectWindow(session, 0))
    commands.append(SelectPane(session, 0, 0))
    commands.append(KillWindow(session, temp_window))
    return commands
