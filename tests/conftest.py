"""Shared test fixtures."""
from pathlib import Path
from typing import List, Optional, Set, Tuple

import pytest

from muxload.errors import DriverCallError
from muxload.tmux import MultiplexerDriver


class RecordingDriver(MultiplexerDriver):
    """Driver that records calls instead of talking to tmux."""

    def __init__(self, sessions: Optional[Set[str]] = None, fail: Optional[Set[str]] = None,
                 config: str = ""):
        self.calls: List[Tuple] = []
        self.sessions = set(sessions or ())
        self.fail = set(fail or ())
        self.config = config

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise DriverCallError([name] + [str(a) for a in args], "boom")

    def new_session(self, session, window_name):
        self._record("new_session", session, window_name)
        self.sessions.add(session)

    def new_window(self, session, window_name, root):
        self._record("new_window", session, window_name, root)

    def split_window(self, target, root):
        self._record("split_window", target, root)

    def set_layout(self, target, layout):
        self._record("set_layout", target, layout)

    def send_keys(self, target, keys):
        self._record("send_keys", target, keys)

    def run_shell(self, target, command):
        self._record("run_shell", target, command)

    def select_window(self, target):
        self._record("select_window", target)

    def select_pane(self, target):
        self._record("select_pane", target)

    def kill_window(self, target):
        self._record("kill_window", target)

    def has_session(self, session):
        self.calls.append(("has_session", session))
        return session in self.sessions

    def attach(self, session):
        self._record("attach", session)

    def get_config(self):
        self._record("get_config")
        return self.config

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def driver():
    return RecordingDriver()


@pytest.fixture
def cwd():
    return Path("/work/dir")


@pytest.fixture
def home():
    return Path("/home/user")
