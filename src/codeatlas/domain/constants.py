from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the fixed lookup tables used by the analysis heuristics:
supported source extensions, entry-point allow-lists, bootstrap markers,
technology tag matchers and package-manager lock files.
"""

from typing import Dict, List, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"
USER_AGENT = "CodeAtlas-Client/1.0.0"

# Extensions (without dot) whose content is parsed into a syntax tree
SUPPORTED_EXTENSIONS: Tuple[str, ...] = ("js", "jsx", "ts", "tsx")

LOCAL_IMPORT_PREFIX = "(local) "
LOCAL_SPECIFIER_STARTS: Tuple[str, ...] = (".", "/")

# Marker that makes an uppercase function/class a UI component candidate
COMPONENT_JSX_MARKER = "return <"

# -----------------------------------------------------------------------------
# ENTRY POINT HEURISTICS
# -----------------------------------------------------------------------------

ENTRY_FILE_NAMES: Tuple[str, ...] = (
    "index.js", "index.ts",
    "main.js", "main.ts",
    "app.js", "app.ts",
    "cli.js", "cli.ts",
    "server.js", "server.ts",
)

BOOT_KEYWORDS: Tuple[str, ...] = (
    "listen(",
    "createRoot(",
    "ReactDOM.render(",
    "process.argv",
    "app.use(",
    "render(",
    "nextApp.prepare(",
)

# -----------------------------------------------------------------------------
# COMMENT HIGHLIGHTS
# -----------------------------------------------------------------------------

# Category name -> lowercase marker searched inside comment text
HIGHLIGHT_MARKERS: Dict[str, str] = {
    "todos": "todo",
    "fixmes": "fixme",
    "notes": "note",
}

# -----------------------------------------------------------------------------
# TECHNOLOGY TAGS
# -----------------------------------------------------------------------------

TECH_KEYWORDS: Dict[str, List[str]] = {
    "react": ["react", "react-dom"],
    "nextjs": ["next"],
    "express": ["express"],
    "tailwind": ["tailwindcss", "tailwind.config.js"],
    "typescript": ["typescript", ".ts", ".tsx"],
    "prisma": ["prisma", "prisma/schema.prisma"],
    "firebase": ["firebase", "firebase-admin", "firebaseConfig"],
    "eslint": ["eslint", ".eslintrc", "@eslint"],
    "mongodb": ["mongodb", "mongoose", "mongoClient"],
}

TYPESCRIPT_TAG = "typescript"
TYPESCRIPT_FILE_SUFFIXES: Tuple[str, ...] = (".ts", ".tsx")

# -----------------------------------------------------------------------------
# PROJECT STATISTICS & MANIFESTS
# -----------------------------------------------------------------------------

TOP_LANGUAGES_LIMIT = 5

MANIFEST_FILE_NAME = "package.json"

# Checked in order; the first lock file found decides the manager
LOCK_FILES: Tuple[Tuple[str, str], ...] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)
UNKNOWN_MANAGER = "unknown"
