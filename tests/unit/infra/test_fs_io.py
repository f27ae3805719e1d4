from __future__ import annotations

"""
Unit tests for the FileSystem Infrastructure Layer.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from codeatlas.domain.errors import ProjectRootError, ReadError
from codeatlas.infra.fs import (
    ProjectRoot,
    get_user_data_dir,
    normalize_path,
    read_project_file,
    to_posix,
)


def test_project_root_open_validates_directory(tmp_path: Path) -> None:
    root = ProjectRoot.open(str(tmp_path))
    assert root.path == os.path.abspath(str(tmp_path))

    with pytest.raises(ProjectRootError):
        ProjectRoot.open(str(tmp_path / "missing"))

    (tmp_path / "file.txt").write_text("x", encoding="utf-8")
    with pytest.raises(ProjectRootError):
        ProjectRoot.open(str(tmp_path / "file.txt"))


def test_read_project_file_returns_text_and_size(tmp_path: Path) -> None:
    """TC-01: Size is the on-disk byte count, text keeps line endings."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "a.js").write_bytes("const ñ = 1;\r\n".encode("utf-8"))

    content = read_project_file(ProjectRoot.open(str(tmp_path)), "src/a.js")

    assert content.size == len("const ñ = 1;\r\n".encode("utf-8"))
    assert content.text == "const ñ = 1;\r\n"


def test_read_project_file_replaces_undecodable_bytes(tmp_path: Path) -> None:
    (tmp_path / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe")

    content = read_project_file(ProjectRoot.open(str(tmp_path)), "logo.png")

    assert content.size == 10
    assert "�" in content.text


def test_read_project_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ReadError):
        read_project_file(ProjectRoot.open(str(tmp_path)), "nope.js")


def test_path_helpers(tmp_path: Path) -> None:
    assert to_posix(os.path.join("a", "b", "c.js")) == "a/b/c.js"
    assert normalize_path("", str(tmp_path)) == os.path.abspath(str(tmp_path))
    assert normalize_path(str(tmp_path / "x" / ".." / "y"), "/") == os.path.abspath(str(tmp_path / "y"))


@pytest.mark.skipif(os.name == "nt", reason="Windows resolves the data dir from LOCALAPPDATA")
def test_user_data_dir_under_home(tmp_path: Path) -> None:
    with patch("os.path.expanduser", return_value=str(tmp_path)):
        path = get_user_data_dir()

    assert path == os.path.join(str(tmp_path), ".codeatlas")
    assert os.path.isdir(path)


@pytest.mark.skipif(os.name == "nt", reason="Backslash is the path separator on Windows")
def test_backslash_is_a_file_name_character_on_posix(tmp_path: Path) -> None:
    """TC-02: `a\\b.js` names one file in the root, not `b.js` inside `a`."""
    (tmp_path / "a\\b.js").write_text("export const b = 1;\n", encoding="utf-8")

    assert to_posix("a\\b.js") == "a\\b.js"
    content = read_project_file(ProjectRoot.open(str(tmp_path)), to_posix("a\\b.js"))
    assert content.text == "export const b = 1;\n"
