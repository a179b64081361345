"""Configuration constants for roamjs-docs."""

import os
from pathlib import Path

# Roam graph holding the extension documentation.
ROAM_GRAPH: str = os.environ.get("ROAM_GRAPH", "roamjs")
ROAM_API_URL: str = f"https://api.roamresearch.com/api/graph/{ROAM_GRAPH}/q"

# API token location when ROAM_API_TOKEN is not set. First file found is used.
API_TOKEN_FILES: list[Path] = [
    Path("~/.config/roamjs-docs-token.txt").expanduser(),
    Path("~/.config/secret/roamjs-docs-token.txt").expanduser(),
]

# Cache prefix, used only when --cache is passed.
API_CACHE_PREFIX: str = "/tmp/roamjs-docs-cache/cache-"

REQUEST_TIMEOUT_SECONDS: float = float(os.environ.get("ROAMJS_REQUEST_TIMEOUT", "30"))

# Absolute links to the site are rewritten to the local dev server.
SITE_URL: str = "https://roamjs.com"
DEV_SITE_URL: str = "http://localhost:3000"

GITHUB_RAW_HOST: str = "raw.githubusercontent.com"
README_BRANCH: str = "main"

# Directory holding the extension catalog database. First existing one is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/roamjs-docs").expanduser(),
    Path("~/.roamjs-docs").expanduser(),
]


def is_development() -> bool:
    """Return True when running against the local dev server."""
    return os.environ.get("NODE_ENV") == "development"


def resolve_data_directory() -> Path:
    """Return the first existing data directory, or the first candidate."""
    env_dir = os.environ.get("ROAMJS_DATA_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]


def log_level() -> str:
    """Return the log level used when --verbose is not given."""
    return os.environ.get("ROAMJS_LOG_LEVEL", "INFO").upper()
