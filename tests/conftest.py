"""Shared pytest fixtures and test helpers for ensurekit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ensurekit.engine import ValidatorSet, build


@pytest.fixture
def validators() -> ValidatorSet:
    """Validator set with the default error policy."""
    return build()


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run with CWD in an empty temp dir and no ENSUREKIT_* env vars.

    Use via ``@pytest.mark.usefixtures("_isolated_config")`` so settings
    discovery never picks up a pyproject.toml outside the test.
    """
    for name in (
        "ENSUREKIT_CONFIG",
        "ENSUREKIT_VERBOSE",
        "ENSUREKIT_LOG_JSON",
        "ENSUREKIT_WARN_ON_RETURNING_POLICY",
        "ENSUREKIT_LOAD_ENTRY_POINTS",
    ):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "sandbox"\n')
    monkeypatch.chdir(tmp_path)
