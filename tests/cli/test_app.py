"""Tests for CLI app entry point."""

from unittest.mock import patch

from typer.testing import CliRunner

from flint.cli.app import app, main

runner = CliRunner()


def test_version_command():
    """Test 'version' prints flint version string."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "flint version" in result.output


def test_no_args_shows_help():
    """Test invoking with no arguments shows help (no_args_is_help)."""
    result = runner.invoke(app, [])
    assert result.exit_code in (0, 2)
    assert "Usage" in result.output or "flint" in result.output


def test_init_command():
    """Test 'init' delegates to init_command."""
    with patch("flint.cli.init_cmd.init_command") as mock_init:
        result = runner.invoke(app, ["init", "--force"])
        mock_init.assert_called_once_with(config_path=None, force=True)
        assert result.exit_code == 0


def test_generate_command_options():
    """Test 'generate' forwards its options."""
    with patch("flint.cli.generate_cmd.generate_command") as mock_cmd:
        result = runner.invoke(
            app,
            ["generate", "-c", "my.toml", "--plugins-dir", "/p", "-w", "4", "-o", "out"],
        )
        assert result.exit_code == 0
        mock_cmd.assert_called_once_with(
            config_path="my.toml", plugins_dir="/p", workers=4, output_dir="out"
        )


def test_generate_rejects_zero_workers():
    result = runner.invoke(app, ["generate", "-w", "0"])
    assert result.exit_code != 0


def test_plugins_list_command():
    with patch("flint.cli.plugin_cmd.list_plugins") as mock_cmd:
        result = runner.invoke(app, ["plugins", "list"])
        mock_cmd.assert_called_once_with(plugins_dir=None)
        assert result.exit_code == 0


def test_plugins_info_command():
    with patch("flint.cli.plugin_cmd.info_plugin") as mock_cmd:
        result = runner.invoke(app, ["plugins", "info", "eslint"])
        mock_cmd.assert_called_once_with("eslint", plugins_dir=None)
        assert result.exit_code == 0


def test_verbose_flag_configures_logging():
    with patch("flint.cli.app.logging.basicConfig") as mock_basic:
        result = runner.invoke(app, ["--verbose", "version"])
    assert result.exit_code == 0
    mock_basic.assert_called_once()


def test_main_keyboard_interrupt():
    """Test main() handles KeyboardInterrupt with exit code 130."""
    with (
        patch("flint.cli.app.app", side_effect=KeyboardInterrupt),
        patch("flint.cli.app.sys") as mock_sys,
    ):
        main()
        mock_sys.exit.assert_called_with(130)


def test_main_exception():
    """Test main() handles unexpected exceptions with exit code 1."""
    with (
        patch("flint.cli.app.app", side_effect=RuntimeError("test error")),
        patch("flint.cli.app.sys") as mock_sys,
    ):
        main()
        mock_sys.exit.assert_called_with(1)
