from __future__ import annotations

"""
Configuration Domain Management.

Handles the persistent user configuration stored as JSON in the user data
directory, default values, and normalization of raw values coming from
disk or the command line.
"""

import json
import logging
import os
from typing import Any, Dict, List, Tuple

from codeatlas.domain.constants import CURRENT_CONFIG_VERSION
from codeatlas.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Discovery
        "exclude_patterns": [r"^(\.git|node_modules)$"],
        "read_manifest": True,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",

        # Persistence sink
        "sink_url": "",
        "sink_timeout": 10,
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the configuration from disk, merged over the defaults.

    Returns:
        Dict[str, Any]: The stored configuration, or defaults when the
                        file is missing or corrupted.
    """
    config = get_default_config()
    path = get_config_path()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    data.pop("version", None)
    config.update(data)
    return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the configuration to disk.

    Returns:
        bool: False if the file could not be written.
    """
    path = get_config_path()
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False
    return True

# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def validate_config(raw: Dict[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """
    Normalize configuration values, falling back to defaults on bad types.

    Args:
        raw: Configuration as loaded or merged.

    Returns:
        Tuple[Dict[str, Any], List[str]]: (Clean configuration, warnings).
    """
    defaults = get_default_config()
    clean: Dict[str, Any] = {}
    warnings: List[str] = []

    for key in raw:
        if key not in defaults:
            warnings.append(f"Unknown configuration key ignored: '{key}'")

    patterns = raw.get("exclude_patterns", defaults["exclude_patterns"])
    if isinstance(patterns, str):
        patterns = [p.strip() for p in patterns.split(",") if p.strip()]
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        warnings.append("'exclude_patterns' must be a list of strings. Using defaults.")
        patterns = defaults["exclude_patterns"]
    clean["exclude_patterns"] = list(patterns)

    read_manifest = raw.get("read_manifest", defaults["read_manifest"])
    if not isinstance(read_manifest, bool):
        warnings.append("'read_manifest' must be a boolean. Using default.")
        read_manifest = defaults["read_manifest"]
    clean["read_manifest"] = read_manifest

    level = str(raw.get("log_level") or defaults["log_level"]).strip().upper()
    if level not in _VALID_LEVELS:
        warnings.append(f"Invalid log level '{level}'. Using INFO.")
        level = "INFO"
    clean["log_level"] = level

    for key in ("log_file", "sink_url"):
        value = raw.get(key, defaults[key])
        clean[key] = value.strip() if isinstance(value, str) else defaults[key]

    timeout = raw.get("sink_timeout", defaults["sink_timeout"])
    try:
        timeout = float(timeout)
        if timeout <= 0:
            raise ValueError
    except (TypeError, ValueError):
        warnings.append(f"Invalid sink timeout '{timeout}'. Using default.")
        timeout = defaults["sink_timeout"]
    clean["sink_timeout"] = timeout

    return clean, warnings
