"""Tests for the triage CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from triage_core.cli.main import app
from triage_core.exceptions import ConfigurationError

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI callback from reconfiguring the root logger."""
    with patch("triage_core.cli.main.configure_logging"):
        yield


class TestCatalogCommands:
    """Tests for read-only catalog commands."""

    def test_categories_lists_specializations(self):
        result = runner.invoke(app, ["categories"])

        assert result.exit_code == 0
        assert "networking" in result.output
        assert "availability" in result.output
        assert "RestartContainer" in result.output

    def test_tools_for_category(self):
        result = runner.invoke(app, ["tools", "database"])

        assert result.exit_code == 0
        assert "TestConnectivity" in result.output
        assert "RestartContainer" not in result.output

    def test_patterns_for_category(self):
        result = runner.invoke(app, ["patterns", "database"])

        assert result.exit_code == 0
        assert "connection pooling errors" in result.output

    def test_patterns_unknown_category(self):
        result = runner.invoke(app, ["patterns", "quantum"])

        assert result.exit_code == 0
        assert "No patterns for category 'quantum'" in result.output


class TestConversationCommands:
    """Tests for ask and chat with a stubbed coordinator."""

    def _coordinator(self, *replies):
        coordinator = MagicMock()
        coordinator.process_user_input = AsyncMock(side_effect=list(replies))
        return coordinator

    def test_ask_prints_reply(self):
        coordinator = self._coordinator("Which port does the app use?")
        with patch("triage_core.cli.chat.build_coordinator", return_value=coordinator):
            result = runner.invoke(app, ["ask", "my app can't reach the database"])

        assert result.exit_code == 0
        assert "Which port does the app use?" in result.output
        assert coordinator.process_user_input.await_args.args[0] == (
            "my app can't reach the database"
        )

    def test_ask_without_api_key_exits(self):
        error = ConfigurationError("ANTHROPIC_API_KEY", "environment variable is not set")
        with patch("triage_core.cli.chat.build_coordinator", side_effect=error):
            result = runner.invoke(app, ["ask", "hello"])

        assert result.exit_code == 1
        assert "ANTHROPIC_API_KEY" in result.output

    def test_chat_loop_until_exit(self):
        coordinator = self._coordinator("First reply", "Second reply")
        with patch("triage_core.cli.chat.build_coordinator", return_value=coordinator):
            result = runner.invoke(app, ["chat"], input="db is down\nfix it\nexit\n")

        assert result.exit_code == 0
        assert "How can I help you with your application today?" in result.output
        assert "First reply" in result.output
        assert "Second reply" in result.output
        assert coordinator.process_user_input.await_count == 2

    def test_chat_ends_on_eof(self):
        coordinator = self._coordinator()
        with patch("triage_core.cli.chat.build_coordinator", return_value=coordinator):
            result = runner.invoke(app, ["chat"], input="")

        assert result.exit_code == 0
        assert "Session ended." in result.output
        coordinator.process_user_input.assert_not_called()
