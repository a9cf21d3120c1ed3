"""Tests for project parsing and project file lookup."""
from pathlib import Path

import pytest
import yaml

from muxload.config import (
    DEFAULT_SESSION,
    Configuration,
    Pane,
    WindowShape,
    classify_window,
    find_project,
    list_projects,
    parse,
    project_dir,
)
from muxload.errors import ConfigError, MalformedWindow, MissingWindows, ProjectNotFound


def load(text, default_name="project"):
    return parse(yaml.safe_load(text), default_name=default_name)


def test_windows_from_array():
    config = load("windows: ['cargo', 'vim', 'git']")

    assert [w.name for w in config.windows] == ["cargo", "vim", "git"]
    assert all(len(w.panes) == 1 for w in config.windows)
    assert config.windows[1].panes[0].exec == "vim"


def test_integer_window_names_are_stringified():
    config = load("windows: [1, 'vim', 3]")

    assert [w.name for w in config.windows] == ["1", "vim", "3"]
    assert config.windows[0].panes[0].exec == "1"


def test_window_with_command():
    config = load("windows:\n  - server: make run\n")

    window = config.windows[0]
    assert window.name == "server"
    assert window.panes == (Pane(exec="make run"),)


def test_window_with_empty_command_is_valid():
    config = load("windows:\n  - editor:\n")

    window = config.windows[0]
    assert window.name == "editor"
    assert len(window.panes) == 1
    assert not window.panes[0].exec


def test_explicit_window():
    config = load(
        """
windows:
  - editor:
      layout: 'main-vertical'
      root: /tmp
      panes: ['vim', 'guard']
  - stuff: ''
"""
    )

    editor, stuff = config.windows
    assert editor.layout == "main-vertical"
    assert editor.root == "/tmp"
    assert [p.exec for p in editor.panes] == ["vim", "guard"]
    assert stuff.panes[0].exec == ""


def test_panes_with_empty_commands_are_valid():
    config = load(
        """
windows:
  - editor:
      layout: 'main-vertical'
      panes:
        -
        -
"""
    )

    panes = config.windows[0].panes
    assert len(panes) == 2
    assert all(p.exec is None for p in panes)


def test_explicit_window_without_panes_has_one_pane():
    config = load("windows:\n  - editor:\n      layout: tiled\n")

    assert config.windows[0].panes == (Pane(),)


def test_window_path_is_root_alias():
    config = load("windows:\n  - editor:\n      path: /var/log\n")

    assert config.windows[0].root == "/var/log"


def test_pane_mapping_with_root():
    config = load(
        """
windows:
  - editor:
      panes:
        - vim
        - exec: tail -f app.log
          root: /var/log
"""
    )

    assert config.windows[0].panes[1] == Pane(exec="tail -f app.log", root="/var/log")


def test_pre_scalar_becomes_list():
    config = load("pre: touch f1\npre_window: echo hi\nwindows: [a]")

    assert config.pre == ("touch f1",)
    assert config.pre_window == ("echo hi",)


def test_pre_list():
    config = load("pre:\n  - touch f1\n  - touch f2\nwindows: [a]")

    assert config.pre == ("touch f1", "touch f2")
    assert config.pre_window == ()


def test_name_and_root():
    config = load("name: 'Brians Session'\nroot: ~/\nwindows: [a]")

    assert config.name == "Brians Session"
    assert config.root == "~/"


def test_default_name():
    assert load("windows: [a]", default_name="web").name == "web"
    assert parse({"windows": ["a"]}).name == DEFAULT_SESSION


@pytest.mark.parametrize("text", ["name: x", "windows:", "windows: []", ""])
def test_missing_windows(text):
    with pytest.raises(MissingWindows):
        load(text)


@pytest.mark.parametrize(
    "entry",
    [
        {"a": "x", "b": "y"},
        {"a": ["x", "y"]},
        ["a"],
        {},
    ],
)
def test_malformed_window(entry):
    with pytest.raises(MalformedWindow):
        parse({"windows": [entry]})


def test_malformed_pane():
    with pytest.raises(MalformedWindow):
        parse({"windows": [{"editor": {"panes": [["vim"]]}}]})


def test_document_must_be_mapping():
    with pytest.raises(ConfigError):
        parse(["a", "b"])


def test_classify_window():
    assert classify_window("vim")[0] is WindowShape.SCALAR
    assert classify_window({"a": "vim"})[0] is WindowShape.COMMAND
    assert classify_window({"a": None})[0] is WindowShape.COMMAND
    assert classify_window({"a": {"panes": []}})[0] is WindowShape.EXPLICIT


def test_configuration_is_immutable():
    config = load("windows: [a]")
    with pytest.raises(Exception):
        config.name = "other"


def test_from_yaml_uses_file_stem(tmp_path):
    path = tmp_path / "web.yml"
    path.write_text("windows: ['editor', 'server']\n")

    config = Configuration.from_yaml(path)

    assert config.name == "web"
    assert len(config.windows) == 2


def test_from_yaml_syntax_error(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("windows: [a\n")

    with pytest.raises(ConfigError):
        Configuration.from_yaml(path)


def test_find_project(tmp_path):
    (tmp_path / "one.yml").write_text("windows: [a]")
    (tmp_path / "two.yaml").write_text("windows: [a]")

    assert find_project("one", tmp_path) == tmp_path / "one.yml"
    assert find_project("two", tmp_path) == tmp_path / "two.yaml"
    with pytest.raises(ProjectNotFound):
        find_project("three", tmp_path)


def test_list_projects(tmp_path):
    (tmp_path / "b.yml").write_text("")
    (tmp_path / "a.yaml").write_text("")
    (tmp_path / "notes.txt").write_text("")

    assert list_projects(tmp_path) == ["a", "b"]
    assert list_projects(tmp_path / "missing") == []


def test_project_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("MUXLOAD_PROJECT_DIR", str(tmp_path))
    assert project_dir() == tmp_path
    assert project_dir("/elsewhere") == Path("/elsewhere")
