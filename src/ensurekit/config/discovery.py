"""Config file discovery and loading.

Settings live in the ``[tool.ensurekit]`` table of the nearest
``pyproject.toml``, found by walking up from the working directory the
way git finds ``.git/``. ``ENSUREKIT_CONFIG`` names a file explicitly;
a file other than ``pyproject.toml`` holds the settings at its top level.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "ENSUREKIT_CONFIG"
TOOL_TABLE = "ensurekit"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for pyproject.toml.

    Returns the path to the config file, or None if not found.
    Checks ENSUREKIT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> dict[str, Any]:
    """Return the ensurekit settings table from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns an empty dict if no file or no ``[tool.ensurekit]`` table is found.

    Raises:
        ValueError: If the file is not valid TOML.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return {}

    raw = path.read_text(encoding="utf-8")
    try:
        data: dict[str, Any] = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ValueError(msg) from exc

    if path.name != CONFIG_FILENAME:
        return data
    table = data.get("tool", {}).get(TOOL_TABLE, {})
    return dict(table) if isinstance(table, dict) else {}
