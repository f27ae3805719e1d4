from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for a small JavaScript/TypeScript project on disk.
"""

import json
import os
import sys
from pathlib import Path
from typing import Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
SAMPLE_FILES: Dict[str, str] = {
    "package.json": json.dumps({
        "name": "sample-app",
        "version": "0.1.0",
        "scripts": {"dev": "next dev"},
        "dependencies": {"next": "14.0.0", "react": "18.2.0"},
        "devDependencies": {"eslint": "8.0.0"},
    }),
    "yarn.lock": "# yarn lockfile v1\n",
    "server.js": (
        "const express = require('express');\n"
        "const routes = require('./src/routes');\n"
        "// NOTE: port comes from the environment\n"
        "express().listen(3000);\n"
    ),
    "src/App.tsx": (
        "import React from 'react';\n"
        "import { helper } from './utils/helper';\n"
        "\n"
        "// TODO: split into smaller components\n"
        "export default function App() {\n"
        "  return <div>{helper()}</div>;\n"
        "}\n"
    ),
    "src/utils/helper.ts": (
        "/* FIXME: handle empty input */\n"
        "export const helper = () => 'hi';\n"
        "export interface Options { verbose: boolean }\n"
    ),
    "src/routes.js": (
        "function list() { return []; }\n"
        "module.exports = { list };\n"
    ),
    "src/broken.js": "function (\n",
    "README.md": "# Sample\n\nSearch target: Needle here\n",
}


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small mixed JS/TS project.

    Structure:
    /project
      package.json, yarn.lock, server.js, README.md
      /src
        App.tsx, routes.js, broken.js
        /utils
          helper.ts
    """
    root = tmp_path / "project"
    for rel_path, content in SAMPLE_FILES.items():
        target = root / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def sample_rel_paths() -> list:
    """Root-relative paths of every file in `sample_project`, in definition order."""
    return list(SAMPLE_FILES.keys())
