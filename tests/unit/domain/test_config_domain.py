from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against missing and corrupted config files.
3. Persistence (Save/Load) without touching real user data.
4. Normalization and warnings of validate_config.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from codeatlas.domain.config import (
    get_config_path,
    get_default_config,
    load_config,
    save_config,
    validate_config,
)
from codeatlas.domain.constants import CURRENT_CONFIG_VERSION


@pytest.fixture
def mock_user_data_dir(tmp_path: Path):
    """
    Fixture to mock the user data directory.
    Prevents tests from reading/writing to the real OS user folder.
    """
    config_dir = tmp_path / "CodeAtlas"
    config_dir.mkdir()

    with patch("codeatlas.domain.config.get_user_data_dir", return_value=str(config_dir)):
        yield config_dir

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def test_load_without_file_returns_defaults(mock_user_data_dir: Path) -> None:
    """TC-01: No config file on disk yields the default configuration."""
    assert not (mock_user_data_dir / "config.json").exists()
    assert load_config() == get_default_config()


def test_save_and_load_roundtrip(mock_user_data_dir: Path) -> None:
    conf = get_default_config()
    conf["read_manifest"] = False
    conf["sink_url"] = "http://localhost:9000/projects"

    save_config(conf)

    raw = json.loads((mock_user_data_dir / "config.json").read_text(encoding="utf-8"))
    assert raw["version"] == CURRENT_CONFIG_VERSION

    loaded = load_config()
    assert loaded["read_manifest"] is False
    assert loaded["sink_url"] == "http://localhost:9000/projects"
    assert "version" not in loaded


def test_corrupted_file_returns_defaults(mock_user_data_dir: Path) -> None:
    """TC-02: Invalid JSON or a non-object root falls back to defaults."""
    path = Path(get_config_path())

    path.write_text("{ broken", encoding="utf-8")
    assert load_config() == get_default_config()

    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config() == get_default_config()


def test_partial_file_is_merged_over_defaults(mock_user_data_dir: Path) -> None:
    Path(get_config_path()).write_text(json.dumps({"log_level": "DEBUG"}), encoding="utf-8")

    conf = load_config()

    assert conf["log_level"] == "DEBUG"
    assert conf["exclude_patterns"] == get_default_config()["exclude_patterns"]

# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def test_validate_defaults_is_clean() -> None:
    clean, warnings = validate_config(get_default_config())

    assert warnings == []
    assert clean == get_default_config()


def test_validate_normalizes_values() -> None:
    clean, warnings = validate_config({
        "exclude_patterns": "dist, build ,",
        "log_level": " debug ",
        "sink_url": "  http://x  ",
        "sink_timeout": "2.5",
    })

    assert warnings == []
    assert clean["exclude_patterns"] == ["dist", "build"]
    assert clean["log_level"] == "DEBUG"
    assert clean["sink_url"] == "http://x"
    assert clean["sink_timeout"] == 2.5


def test_validate_reports_bad_values() -> None:
    """TC-03: Bad types fall back to defaults and are reported."""
    clean, warnings = validate_config({
        "exclude_patterns": [1, 2],
        "read_manifest": "yes",
        "log_level": "LOUD",
        "sink_timeout": -1,
        "mystery": True,
    })

    defaults = get_default_config()
    assert clean["exclude_patterns"] == defaults["exclude_patterns"]
    assert clean["read_manifest"] is True
    assert clean["log_level"] == "INFO"
    assert clean["sink_timeout"] == defaults["sink_timeout"]
    assert len(warnings) == 5
    assert any("mystery" in w for w in warnings)
