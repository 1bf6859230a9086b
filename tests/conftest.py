"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from flint.config.schema import ProjectConfig
from flint.logs import LogStore

DETAILS_TEMPLATE = """
def Details():
    return {{
        "id": {plugin_id!r},
        "extensions": {extensions!r},
        "version": {version!r},
        "author": "tests",
        "category": "lint",
    }}
"""

DEFAULT_PLUGIN = """
def Validate(config):
    return True


def Generate(config):
    return {}
"""


@pytest.fixture
def log() -> LogStore:
    """Provide an empty log store."""
    return LogStore()


@pytest.fixture
def lint_dir(tmp_path: Path) -> Path:
    """Provide an empty lint plugins directory."""
    path = tmp_path / "plugins" / "lint"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_bundle(lint_dir: Path) -> Callable[..., Path]:
    """Factory writing a plugin bundle into the lint directory.

    ``plugin`` writes a combined plugin.py; ``validate``/``generate`` write the
    split layout. ``details`` replaces the generated details.py verbatim.
    """

    def _make(
        name: str,
        plugin_id: str | None = None,
        extensions: list[str] | None = None,
        version: str = "1.0.0",
        plugin: str | None = DEFAULT_PLUGIN,
        validate: str | None = None,
        generate: str | None = None,
        details: str | None = None,
    ) -> Path:
        bundle = lint_dir / name
        bundle.mkdir()
        if details is None:
            details = DETAILS_TEMPLATE.format(
                plugin_id=plugin_id or name,
                extensions=extensions if extensions is not None else [".txt"],
                version=version,
            )
        (bundle / "details.py").write_text(textwrap.dedent(details), encoding="utf-8")
        if validate is not None or generate is not None:
            if validate is not None:
                (bundle / "validate.py").write_text(textwrap.dedent(validate), encoding="utf-8")
            if generate is not None:
                (bundle / "generate.py").write_text(textwrap.dedent(generate), encoding="utf-8")
        elif plugin is not None:
            (bundle / "plugin.py").write_text(textwrap.dedent(plugin), encoding="utf-8")
        return bundle

    return _make


@pytest.fixture
def project_config() -> ProjectConfig:
    """Provide a config with a shared section and two plugin sections."""
    return ProjectConfig.from_document(
        {
            "flint": {"version": 1},
            "common": {"indent": 4},
            "alpha": {"name": "a"},
            "beta": {"name": "b"},
        }
    )
