"""Tests for CLI plugin commands."""

from pathlib import Path

import pytest
import typer

from flint.cli.plugin_cmd import info_plugin, list_plugins

DETAILS = """
def Details():
    return {{
        "id": {plugin_id!r},
        "extensions": [".js"],
        "version": "2.0.0",
        "author": "someone",
        "category": "lint",
    }}
"""


def _install(root: Path, name: str, details: str | None = None) -> Path:
    bundle = root / "lint" / name
    bundle.mkdir(parents=True)
    (bundle / "details.py").write_text(details or DETAILS.format(plugin_id=name))
    (bundle / "plugin.py").write_text(
        "def Validate(c):\n    return True\n\ndef Generate(c):\n    return {}\n"
    )
    return bundle


def test_list_plugins_empty(plugins_root: Path, capsys):
    list_plugins()
    assert "No plugins found" in capsys.readouterr().out
    assert (plugins_root / "lint").is_dir()
    assert (plugins_root / "test").is_dir()


def test_list_plugins_with_plugins(plugins_root: Path, capsys):
    _install(plugins_root, "eslint")
    _install(plugins_root, "prettier")

    list_plugins()

    out = capsys.readouterr().out
    assert "eslint" in out
    assert "prettier" in out
    assert "combined" in out


def test_list_plugins_reports_broken(plugins_root: Path, capsys):
    _install(plugins_root, "good")
    _install(plugins_root, "broken", details="def Details(:\n")

    list_plugins()

    out = capsys.readouterr().out
    assert "[error]:" in out
    assert "good" in out


def test_list_plugins_explicit_dir(tmp_path: Path, capsys):
    root = tmp_path / "custom"
    _install(root, "eslint")

    list_plugins(plugins_dir=str(root))

    assert "eslint" in capsys.readouterr().out


def test_info_plugin(plugins_root: Path, capsys):
    _install(plugins_root, "eslint")

    info_plugin("eslint")

    out = capsys.readouterr().out
    assert "eslint" in out
    assert "v2.0.0" in out
    assert "someone" in out
    assert ".js" in out


def test_info_plugin_not_found(capsys):
    with pytest.raises(typer.Exit):
        info_plugin("missing")
    assert "not found" in capsys.readouterr().out
