"""
cli.py

Command line entry point.

Example:
  muxload load my-project
  muxload load my-project --detach
  muxload edit my-project
  muxload list
  muxload attach my-project
  muxload kill my-project
"""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import subprocess
import sys
from typing import List, Optional

from .config import Configuration, find_project, list_projects, project_dir
from .errors import ConfigError, DriverCallError
from .session import SessionLoader, SessionState
from .tmux import TmuxDriver

EXIT_DRIVER_ERROR = 1
EXIT_CONFIG_ERROR = 2


def cmd_load(args: argparse.Namespace) -> int:
    """! @brief CLI handler: load.

    Finds and parses the project file, then creates the session (or reuses a
    running one) and attaches unless `--detach` was given.

    @param args Parsed argparse args.
    @return Process exit code.
    """
    path = find_project(args.project, project_dir(args.project_dir))
    config = Configuration.from_yaml(path)

    driver = TmuxDriver(socket_name=args.socket_name)
    result = SessionLoader(driver).load(config, attach=not args.detach)

    if result.state is SessionState.EXISTS and args.detach:
        print(f"tmux session '{config.name}' is already running.")
    elif result.state is SessionState.EXECUTED:
        print(
            f"tmux session '{config.name}' started.\n"
            f"Attach with: muxload attach {config.name}\n"
        )
    if result.failures:
        print(f"[warn] {len(result.failures)} tmux call(s) failed while building the session", file=sys.stderr)
    return 0


def cmd_edit(args: argparse.Namespace) -> int:
    """! @brief CLI handler: edit.

    Opens an existing project file in $EDITOR.

    @param args Parsed argparse args.
    @return Editor exit code.
    """
    path = find_project(args.project, project_dir(args.project_dir))
    editor = os.environ.get("EDITOR")
    if not editor:
        print(f"$EDITOR is not set. The project file is {path}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    try:
        return subprocess.run(shlex.split(editor) + [str(path)]).returncode
    except OSError as e:
        print(f"error: could not start $EDITOR ({editor}): {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR


def cmd_list(args: argparse.Namespace) -> int:
    directory = project_dir(args.project_dir)
    projects = list_projects(directory)
    if not projects:
        print(f"(no projects in {directory})")
        return 0
    for name in projects:
        print(name)
    return 0


def cmd_attach(args: argparse.Namespace) -> int:
    driver = TmuxDriver(socket_name=args.socket_name)
    if not driver.has_session(args.session):
        print(f"No such session: {args.session}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    driver.attach(args.session)
    return 0


def cmd_kill(args: argparse.Namespace) -> int:
    driver = TmuxDriver(socket_name=args.socket_name)
    if not driver.has_session(args.session):
        print(f"No such session: {args.session}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    driver.kill_session(args.session)
    print(f"Killed session: {args.session}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="muxload",
        description="Build tmux sessions from YAML project files.",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s).",
    )
    p.add_argument("-L", "--socket-name", help="tmux socket name (tmux -L).")
    sub = p.add_subparsers(dest="cmd", required=True)

    def project_args(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("project", help="Project name (file stem in the project directory).")
        sp.add_argument("-p", "--project-dir", help="Project directory (default: $MUXLOAD_PROJECT_DIR or ~/.muxload).")

    pl = sub.add_parser("load", help="Create the project's session (or reuse it) and attach.")
    project_args(pl)
    pl.add_argument("-d", "--detach", action="store_true", help="Do not attach after creating the session.")
    pl.set_defaults(func=cmd_load)

    pe = sub.add_parser("edit", help="Open a project file in $EDITOR.")
    project_args(pe)
    pe.set_defaults(func=cmd_edit)

    pls = sub.add_parser("list", help="List project files.")
    pls.add_argument("-p", "--project-dir", help="Project directory (default: $MUXLOAD_PROJECT_DIR or ~/.muxload).")
    pls.set_defaults(func=cmd_list)

    pa = sub.add_parser("attach", help="Attach to a running session.")
    pa.add_argument("session", help="Session name.")
    pa.set_defaults(func=cmd_attach)

    pk = sub.add_parser("kill", help="Kill a running session.")
    pk.add_argument("session", help="Session name.")
    pk.set_defaults(func=cmd_kill)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return int(args.func(args))
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except DriverCallError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_DRIVER_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
