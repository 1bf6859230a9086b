"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest

from flint.config.paths import PLUGINS_DIR_ENV


@pytest.fixture(autouse=True)
def plugins_root(tmp_path: Path, monkeypatch) -> Path:
    """Point plugin resolution at a temp dir and run from a temp cwd."""
    root = tmp_path / "plugins"
    monkeypatch.setenv(PLUGINS_DIR_ENV, str(root))
    workdir = tmp_path / "project"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return root


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """The working directory commands run in."""
    return tmp_path / "project"
