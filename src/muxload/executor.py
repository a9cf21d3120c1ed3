"""
executor.py

Runs compiled commands against a multiplexer driver, strictly in order.

Targets follow tmux's `{session}:{window}.{pane}` form. Project window `i`
lives at tmux index `base-index + 1 + i` because the throwaway window created
with the session holds `base-index`; panes are offset by `pane-base-index`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

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
from .errors import DriverCallError
from .tmux import MultiplexerDriver, TmuxOptions, parse_options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Targets:
    """Formats tmux targets for project windows and panes."""

    options: TmuxOptions = field(default_factory=TmuxOptions)

    def window_index(self, window: int) -> int:
        return self.options.base_index + 1 + window

    def pane_index(self, pane: int) -> int:
        return self.options.pane_base_index + pane

    def session(self, session: str) -> str:
        return session

    def window(self, session: str, window: int) -> str:
        return f"{session}:{self.window_index(window)}"

    def pane(self, session: str, window: int, pane: int) -> str:
        return f"{self.window(session, window)}.{self.pane_index(pane)}"

    def named_window(self, session: str, name: str) -> str:
        return f"{session}:{name}"


class Executor:
    """! @brief Issues one driver call per command.

    @param driver Multiplexer driver.
    @param targets Target formatter; built from the driver's global options
                   when omitted.
    """

    def __init__(self, driver: MultiplexerDriver, targets: Optional[Targets] = None) -> None:
        self.driver = driver
        self.targets = targets if targets is not None else self._load_targets()

    def _load_targets(self) -> Targets:
        try:
            options = parse_options(self.driver.get_config())
        except DriverCallError as e:
            logger.warning("Could not read tmux options, assuming index bases of 0: %s", e)
            options = TmuxOptions()
        logger.debug("tmux index bases: window=%d pane=%d", options.base_index, options.pane_base_index)
        return Targets(options)

    def run(self, commands: Iterable[Command]) -> List[DriverCallError]:
        """! @brief Execute @p commands in order.

        A failing CreateSession aborts (nothing else can work without the
        session). Any other failure is logged and execution continues.

        @param commands Compiled commands.
        @return Errors from the calls that failed.
        @throws DriverCallError if the session could not be created.
        """
        failures: List[DriverCallError] = []
        for command in commands:
            try:
                self.apply(command)
            except DriverCallError as e:
                if isinstance(command, CreateSession):
                    raise
                logger.warning("%s failed, continuing: %s", type(command).__name__, e)
                failures.append(e)
        return failures

    def apply(self, command: Command) -> None:
        """Issue the driver call for a single command."""
        t = self.targets

        if isinstance(command, CreateSession):
            self.driver.new_session(command.session, command.temp_window)
            return

        if isinstance(command, SessionHook):
            self.driver.run_shell(t.session(command.session), command.command)
            return

        if isinstance(command, CreateWindow):
            self.driver.new_window(command.session, command.name, command.root)
            return

        if isinstance(command, WindowHook):
            self.driver.send_keys(t.window(command.session, command.window), command.command)
            return

        if isinstance(command, SplitPane):
            self.driver.split_window(t.pane(command.session, command.window, command.pane), command.root)
            return

        if isinstance(command, SetLayout):
            self.driver.set_layout(t.window(command.session, command.window), command.layout)
            return

        if isinstance(command, SendKeys):
            # Empty pane command: the pane keeps its interactive shell.
            if command.command:
                self.driver.send_keys(t.pane(command.session, command.window, command.pane), command.command)
            return

        if isinstance(command, SelectWindow):
            self.driver.select_window(t.window(command.session, command.window))
            return

        if isinstance(command, SelectPane):
            self.driver.select_pane(t.pane(command.session, command.window, command.pane))
            return

        if isinstance(command, KillWindow):
            self.driver.kill_window(t.named_window(command.session, command.name))
            return

        raise TypeError(f"Unknown command: {command!r}")


def execute(
    commands: Iterable[Command], driver: MultiplexerDriver, targets: Optional[Targets] = None
) -> List[DriverCallError]:
    """Run @p commands on @p driver; see Executor.run."""
    return Executor(driver, targets).run(commands)
