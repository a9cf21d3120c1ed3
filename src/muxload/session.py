"""
session.py

Top-level sequencing for `muxload load`: reuse a running session if there is
one, otherwise compile the project, build the session and attach to it.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .commands import Command
from .compiler import compile_config, temp_window_name
from .config import Configuration
from .errors import DriverCallError
from .executor import Executor
from .paths import home_dir
from .tmux import MultiplexerDriver

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    UNCHECKED = "unchecked"
    EXISTS = "exists"
    ABSENT = "absent"
    COMPILED = "compiled"
    EXECUTED = "executed"
    ATTACHED = "attached"


@dataclass
class LoadResult:
    state: SessionState
    commands: List[Command] = field(default_factory=list)
    failures: List[DriverCallError] = field(default_factory=list)


class SessionLoader:
    """! @brief Builds (or reuses) a tmux session for a configuration.

    @param driver Multiplexer driver.
    @param cwd Fallback root for windows and panes; defaults to the process cwd.
    @param home Home directory for "~" / "$HOME" roots; looked up if omitted.
    @param rng Randomness source for the throwaway window name.
    """

    def __init__(
        self,
        driver: MultiplexerDriver,
        cwd: Optional[Path] = None,
        home: Optional[Path] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.driver = driver
        self.cwd = cwd if cwd is not None else Path.cwd()
        self.home = home if home is not None else home_dir()
        self.rng = rng
        self.state = SessionState.UNCHECKED

    def load(self, config: Configuration, attach: bool = True) -> LoadResult:
        """! @brief Bring up @p config and optionally attach to it.

        @param config Parsed project.
        @param attach Attach once the session is ready; False leaves it detached.
        @return Final state plus the commands run and the calls that failed.
        @throws DriverCallError if the session cannot be created or attached to.
        """
        self.state = SessionState.UNCHECKED

        if self.driver.has_session(config.name):
            self.state = SessionState.EXISTS
            logger.info("Session '%s' is already running", config.name)
            if attach:
                self.driver.attach(config.name)
            return LoadResult(self.state)

        self.state = SessionState.ABSENT
        commands = compile_config(config, temp_window_name(self.rng), self.cwd, self.home)
        self.state = SessionState.COMPILED
        logger.debug("Compiled %d commands for session '%s'", len(commands), config.name)

        failures = Executor(self.driver).run(commands)
        self.state = SessionState.EXECUTED
        if failures:
            logger.warning("Session '%s' started with %d failed tmux call(s)", config.name, len(failures))

        if attach:
            self.driver.attach(config.name)
            self.state = SessionState.ATTACHED

        return LoadResult(self.state, commands, failures)
