from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and file system side effects.
"""

import json
import os
import subprocess
import sys
import zipfile
from pathlib import Path
from typing import Any, Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "codeatlas" / "main.py"


def run_cli(args: List[str], home: Path, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH to ensure the package
    is resolvable without being installed in site-packages, and points
    HOME at a temporary directory so no real user data is touched.

    Args:
        args: List of command line arguments (excluding 'python' and script path).
        home: Directory used as the user's home.
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["USERPROFILE"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


def test_cli_json_document(sample_project: Path, home_dir: Path) -> None:
    """TC-01: A standard run prints the index document (Exit Code 0)."""
    result = run_cli(["-i", str(sample_project), "--json", "--use-defaults"], home_dir)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"

    try:
        data: Dict[str, Any] = json.loads(result.stdout)
    except json.JSONDecodeError:
        pytest.fail(f"Failed to decode JSON output: {result.stdout}")

    assert data["entryPoints"] == ["server.js"]
    assert data["tags"] == ["eslint", "nextjs", "react", "typescript"]
    assert data["stats"]["totalFiles"] == 8
    assert data["packageInfo"]["manager"] == "yarn"

    src = next(n for n in data["fileTree"] if n["name"] == "src")
    app_node = next(n for n in src["children"] if n["name"] == "App.tsx")
    assert app_node["components"] == ["App"]
    assert app_node["imports"] == ["react", "(local) ./utils/helper"]


def test_cli_human_summary(sample_project: Path, home_dir: Path) -> None:
    """TC-02: Without --json a readable summary goes to stdout."""
    result = run_cli(["-i", str(sample_project), "--use-defaults"], home_dir)

    assert result.returncode == 0
    assert "Files: 8" in result.stdout
    assert "server.js" in result.stdout
    assert "Diagnostics: 1" in result.stdout


def test_cli_handles_missing_input(tmp_path: Path, home_dir: Path) -> None:
    """TC-03: An invalid input path exits with code 2."""
    result = run_cli(["-i", str(tmp_path / "non_existent_folder"), "--use-defaults"], home_dir)

    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_cli_indexes_zip_archive(sample_project: Path, tmp_path: Path, home_dir: Path) -> None:
    """TC-04: --zip extracts the archive and indexes the extracted tree."""
    archive = tmp_path / "upload.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for path in sorted(sample_project.rglob("*")):
            if path.is_file():
                zf.write(path, path.relative_to(sample_project).as_posix())

    output = tmp_path / "index.json"
    result = run_cli([
        "--zip", str(archive),
        "--extract-to", str(tmp_path / "extracted"),
        "--use-defaults",
        "-o", str(output),
    ], home_dir)

    assert result.returncode == 0, result.stderr
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["projectName"] == "upload"
    assert data["stats"]["totalFiles"] == 8
    assert (tmp_path / "extracted" / "server.js").exists()
