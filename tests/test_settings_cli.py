"""Tests for settings and the CLI."""
import asyncio
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gemchat.cli.app import app
from gemchat.history import ChatMessage, JsonFileHistoryStore
from gemchat.settings import Settings

from .test_client import FakeServer, make_controller

runner = CliRunner()


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "HOST", "GOOGLE_API_KEY", "GEMINI_API_KEY", "GEMINI_MODEL",
                     "CHAT_HISTORY_PATH", "CHAT_SERVER_URL", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.port == 5000
        assert settings.google_api_key is None
        assert settings.history_path == Path("data/chatHistory.json")
        assert settings.server_url == "http://localhost:5000"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("GOOGLE_API_KEY", "key-1")
        monkeypatch.setenv("CHAT_HISTORY_PATH", "/tmp/h.json")
        monkeypatch.delenv("CHAT_SERVER_URL", raising=False)

        settings = Settings.from_env()

        assert settings.port == 8080
        assert settings.google_api_key == "key-1"
        assert settings.history_path == Path("/tmp/h.json")
        assert settings.server_url == "http://localhost:8080"

    def test_gemini_api_key_fallback(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "key-2")

        assert Settings.from_env().google_api_key == "key-2"

    def test_invalid_port_rejected(self):
        with pytest.raises(ValueError):
            Settings(port=70000)


class TestHistoryCommand:
    """Tests for `gemchat history`."""

    def test_empty_history(self, tmp_path):
        result = runner.invoke(app, ["history", "--path", str(tmp_path / "none.json")])

        assert result.exit_code == 0
        assert "No chat history yet" in result.output

    def test_lists_recent_turns(self, tmp_path):
        path = tmp_path / "chat.json"
        asyncio.run(JsonFileHistoryStore(path).save([
            ChatMessage(text="first question", is_user=True, timestamp="09:00"),
            ChatMessage(text="first answer", is_user=False, timestamp="09:00"),
            ChatMessage(text="second question", is_user=True, timestamp="09:05"),
        ]))

        result = runner.invoke(app, ["history", "--path", str(path), "--limit", "2"])

        assert result.exit_code == 0
        assert "first answer" in result.output
        assert "second question" in result.output
        assert "first question" not in result.output


class TestServeCommand:
    def test_serve_requires_api_key(self, monkeypatch):
        monkeypatch.setattr(
            "gemchat.cli.providers.get_settings",
            lambda: Settings(google_api_key=None),
        )
        monkeypatch.setattr(sys.modules["gemchat.cli.app"], "configure_logging", lambda level: None)

        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 1
        assert "GOOGLE_API_KEY not set" in result.output


class TestAskCommand:
    """Tests for `gemchat ask` against a mocked server."""

    @pytest.fixture
    def use_server(self, monkeypatch):
        delays: list[float | None] = []

        def install(server: FakeServer) -> list[float | None]:
            def factory(server_url=None, reveal_delay=None):
                delays.append(reveal_delay)
                return make_controller(server)

            monkeypatch.setattr(sys.modules["gemchat.cli.app"], "get_controller", factory)
            return delays

        return install

    def test_prints_reply(self, use_server):
        server = FakeServer(reply="hello world foo")
        delays = use_server(server)

        result = runner.invoke(app, ["ask", "hi"])

        assert result.exit_code == 0
        assert "hello world foo" in result.output
        assert [r["message"] for r in server.requests] == ["hi"]
        assert delays == [None]

    def test_no_reveal_uses_zero_delay(self, use_server):
        delays = use_server(FakeServer(reply="ok"))

        result = runner.invoke(app, ["ask", "hi", "--no-reveal"])

        assert result.exit_code == 0
        assert delays == [0.0]

    def test_server_error_exits_1(self, use_server):
        use_server(FakeServer(status_code=500))

        result = runner.invoke(app, ["ask", "hi"])

        assert result.exit_code == 1
        assert "Connection error" in result.output

    def test_blank_message_exits_1(self, use_server):
        server = FakeServer()
        use_server(server)

        result = runner.invoke(app, ["ask", "   "])

        assert result.exit_code == 1
        assert "Nothing to send" in result.output
        assert server.requests == []
