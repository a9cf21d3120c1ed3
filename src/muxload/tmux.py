"""
tmux.py

The multiplexer driver: one method per tmux operation the session builder
needs. `MultiplexerDriver` is the interface the executor and orchestrator are
written against; `TmuxDriver` implements it on top of libtmux.

Requires:
- tmux >= 2.0 (`-c` on new-window / split-window)
- libtmux (Python)
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import libtmux
from libtmux import exc as tmux_exc
from libtmux.common import tmux_cmd

from .errors import DriverCallError

logger = logging.getLogger(__name__)


# ---------------------------
# Global options
# ---------------------------

@dataclass(frozen=True)
class TmuxOptions:
    base_index: int = 0
    pane_base_index: int = 0


def parse_options(text: str) -> TmuxOptions:
    """! @brief Pick the index bases out of `tmux show-options -g` / `-gw` output.

    Lines look like `base-index 1`. Missing or non-numeric values fall back
    to tmux's default of 0.

    @param text Raw option listing.
    @return Parsed options.
    """
    values = {}
    for line in text.splitlines():
        parts = line.split(None, 1)
        if len(parts) != 2:
            continue
        key, value = parts
        if key in ("base-index", "pane-base-index"):
            try:
                values[key] = int(value.strip().strip('"'))
            except ValueError:
                logger.warning("Ignoring non-numeric tmux option %s=%r", key, value)
    return TmuxOptions(
        base_index=values.get("base-index", 0),
        pane_base_index=values.get("pane-base-index", 0),
    )


# ---------------------------
# Driver interface
# ---------------------------

class MultiplexerDriver(ABC):
    """Synchronous tmux operations. Failing calls raise DriverCallError."""

    @abstractmethod
    def new_session(self, session: str, window_name: str) -> None:
        """Create a detached session whose first window is @p window_name."""

    @abstractmethod
    def new_window(self, session: str, window_name: str, root: Path) -> None:
        ...

    @abstractmethod
    def split_window(self, target: str, root: Path) -> None:
        ...

    @abstractmethod
    def set_layout(self, target: str, layout: str) -> None:
        ...

    @abstractmethod
    def send_keys(self, target: str, keys: str) -> None:
        """Type @p keys into @p target and press Enter."""

    @abstractmethod
    def run_shell(self, target: str, command: str) -> None:
        """Run @p command in the background shell of @p target and wait for it."""

    @abstractmethod
    def select_window(self, target: str) -> None:
        ...

    @abstractmethod
    def select_pane(self, target: str) -> None:
        ...

    @abstractmethod
    def kill_window(self, target: str) -> None:
        ...

    @abstractmethod
    def has_session(self, session: str) -> bool:
        ...

    @abstractmethod
    def attach(self, session: str) -> None:
        ...

    @abstractmethod
    def get_config(self) -> str:
        """Global session and window options, as printed by `show-options -g` and `-gw`."""


# ---------------------------
# libtmux implementation
# ---------------------------

class TmuxDriver(MultiplexerDriver):
    """! @brief Driver backed by a libtmux Server.

    Every call goes through @ref _call so it can be logged in one place.

    @param server Existing libtmux server; a new one on the default (or
                  @p socket_name) socket is created if omitted.
    @param socket_name tmux `-L` socket name.
    """

    def __init__(self, server: Optional[libtmux.Server] = None, socket_name: Optional[str] = None) -> None:
        self.socket_name = socket_name
        self.server = server if server is not None else libtmux.Server(socket_name=socket_name)

    def _run(self, *args: str) -> tmux_cmd:
        logger.debug("tmux %s", " ".join(args))
        try:
            return self.server.cmd(*args)
        except (tmux_exc.LibTmuxException, OSError) as e:
            raise DriverCallError(args, str(e)) from e

    def _call(self, *args: str) -> List[str]:
        result = self._run(*args)
        if result.returncode != 0:
            raise DriverCallError(args, "\n".join(result.stderr or []))
        return list(result.stdout or [])

    def new_session(self, session: str, window_name: str) -> None:
        self._call("new-session", "-d", "-s", session, "-n", window_name)

    def new_window(self, session: str, window_name: str, root: Path) -> None:
        # "session:" lets tmux pick the next free index.
        self._call("new-window", "-t", f"{session}:", "-n", window_name, "-c", str(root))

    def split_window(self, target: str, root: Path) -> None:
        self._call("split-window", "-t", target, "-c", str(root))

    def set_layout(self, target: str, layout: str) -> None:
        self._call("select-layout", "-t", target, layout)

    def send_keys(self, target: str, keys: str) -> None:
        self._call("send-keys", "-t", target, keys, "Enter")

    def run_shell(self, target: str, command: str) -> None:
        # Unlike send-keys, run-shell returns only once the command has finished.
        self._call("run-shell", "-t", target, command)

    def select_window(self, target: str) -> None:
        self._call("select-window", "-t", target)

    def select_pane(self, target: str) -> None:
        self._call("select-pane", "-t", target)

    def kill_window(self, target: str) -> None:
        self._call("kill-window", "-t", target)

    def kill_session(self, session: str) -> None:
        self._call("kill-session", "-t", f"={session}")

    def has_session(self, session: str) -> bool:
        # "=" asks tmux for an exact match instead of a prefix match.
        return self._run("has-session", "-t", f"={session}").returncode == 0

    def get_config(self) -> str:
        # pane-base-index is a window option, so `-g` alone never lists it.
        return "\n".join(self._call("start-server", ";", "show-options", "-g", ";", "show-options", "-gw"))

    def attach(self, session: str) -> None:
        """! @brief Put the user's terminal on @p session.

        Inside tmux this switches the current client; outside it replaces the
        process with `tmux attach-session` (more reliable than libtmux attach
        for terminals).

        @param session Session name.
        @throws DriverCallError if tmux cannot be switched to or executed.
        """
        if os.environ.get("TMUX"):
            self._call("switch-client", "-t", f"={session}")
            return

        argv = ["tmux"]
        if self.socket_name:
            argv += ["-L", self.socket_name]
        argv += ["attach-session", "-t", f"={session}"]
        logger.debug("exec %s", " ".join(argv))
        try:
            os.execvp("tmux", argv)
        except OSError as e:
            raise DriverCallError(argv[1:], str(e)) from e
