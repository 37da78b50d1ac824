#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution with real command invocation.
"""

import pytest
from click.testing import CliRunner

from lunchreview.cli.main import main


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_help_command_lists_all_subcommands(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Lunch Money Review" in result.output
        for command in ["months", "transactions", "confirm", "config", "version"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "Lunch Money Review v0.1.0" in result.output
        assert "Author:" in result.output

    def test_config_command_redacts_token(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Environment: test" in result.output
        assert "API Base URL: https://lunchmoney.test" in result.output
        assert "***REDACTED***" in result.output
        assert "test-token" not in result.output

    def test_config_without_token(self, monkeypatch):
        monkeypatch.delenv("LUNCHMONEY_API_TOKEN")

        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "API Token: not set" in result.output

    def test_verbose_flag_shows_environment(self):
        result = self.runner.invoke(main, ["--verbose", "version"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output

    def test_config_env_override_changes_environment(self):
        result = self.runner.invoke(main, ["--config-env", "development", "config"])

        assert result.exit_code == 0
        assert "Environment: development" in result.output

    def test_invalid_configuration_is_reported(self, monkeypatch):
        monkeypatch.delenv("LUNCHMONEY_API_TOKEN")

        result = self.runner.invoke(main, ["--config-env", "production", "config"])

        assert result.exit_code == 1
        assert "LUNCHMONEY_API_TOKEN is required" in result.output

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(main, ["invalid-command"])

        assert result.exit_code != 0
        assert "No such command" in result.output
