"""Tests for cli.py module."""

from unittest.mock import patch

from click.testing import CliRunner

from github_secrets import __version__
from github_secrets.cli import cli
from github_secrets.exceptions import ConfigError


class TestCliVersion:
    """Tests for version command."""

    def test_version_flag(self):
        """Test --version flag prints version."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_short_flag(self):
        """Test -v flag prints version without running anything."""
        runner = CliRunner()
        with patch("github_secrets.cli.App") as mock_app:
            result = runner.invoke(cli, ["-v"])

        assert result.exit_code == 0
        assert __version__ in result.output
        mock_app.run.assert_not_called()


class TestCliHelp:
    """Tests for help output."""

    def test_help_flag(self):
        """Test --help flag shows help text."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Interactively push GitHub Actions secrets" in result.output
        assert "--version" in result.output
        assert "--debug" in result.output
        assert "--config" in result.output
        assert "--configure" in result.output
        assert "--retry-declined" in result.output


class TestCliDispatch:
    """Tests for dispatching to the app."""

    def test_default_runs_update(self):
        """Test no flags runs the interactive update."""
        runner = CliRunner()
        with patch("github_secrets.cli.App") as mock_app:
            result = runner.invoke(cli, [])

        assert result.exit_code == 0
        mock_app.run.assert_called_once_with(config_path=None, retry_declined=False)
        mock_app.configure.assert_not_called()

    def test_config_and_retry_declined(self):
        """Test --config and --retry-declined are passed through."""
        runner = CliRunner()
        with patch("github_secrets.cli.App") as mock_app:
            result = runner.invoke(cli, ["-c", "custom.yaml", "--retry-declined"])

        assert result.exit_code == 0
        mock_app.run.assert_called_once_with(config_path="custom.yaml", retry_declined=True)

    def test_configure(self):
        """Test --configure opens the config editor instead of updating."""
        runner = CliRunner()
        with patch("github_secrets.cli.App") as mock_app:
            result = runner.invoke(cli, ["--configure", "--config", "custom.yaml"])

        assert result.exit_code == 0
        mock_app.configure.assert_called_once_with(config_path="custom.yaml")
        mock_app.run.assert_not_called()

    def test_config_error_exits_nonzero(self):
        """Test configuration errors are reported and exit with status 1."""
        runner = CliRunner()
        with (
            patch("github_secrets.cli.App") as mock_app,
            patch("github_secrets.cli.console.error") as mock_error,
        ):
            mock_app.run.side_effect = ConfigError("No repositories found in config file")
            result = runner.invoke(cli, [])

        assert result.exit_code == 1
        mock_error.assert_called_once_with("No repositories found in config file")

    def test_debug_keeps_icecream_enabled(self):
        """Test debug output is only disabled without --debug."""
        runner = CliRunner()
        with patch("github_secrets.cli.App"), patch("github_secrets.cli.ic") as mock_ic:
            runner.invoke(cli, ["--debug"])
            mock_ic.disable.assert_not_called()

            runner.invoke(cli, [])
            mock_ic.disable.assert_called_once()
