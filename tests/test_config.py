"""config モジュールのテスト."""

import importlib
import logging
import os
from unittest.mock import MagicMock

import pytest
from dotenv import load_dotenv as real_load_dotenv

from hn_scraper import config
from hn_scraper.errors import ConfigError

ENV_KEYS = [
    "HN_URL",
    "HN_USER_AGENT",
    "HN_REQUEST_TIMEOUT",
    "HN_FIXTURE_HTML",
    "HN_LOG_LEVEL",
    "HN_LOG_DIR",
]


@pytest.fixture
def dotenv_mock(monkeypatch):
    """os.environ を複製して HN_* を消し、load_dotenv を差し替える."""
    monkeypatch.setattr(os, "environ", os.environ.copy())
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    mock = MagicMock()
    monkeypatch.setattr("dotenv.load_dotenv", mock)

    yield mock

    # 環境を戻してから読み直す
    monkeypatch.undo()
    importlib.reload(config)


class TestEnvironment:
    """環境変数・.env による上書きのテスト."""

    def test_defaults(self, dotenv_mock):
        importlib.reload(config)

        assert config.HN_URL == "https://news.ycombinator.com/news"
        assert config.USER_AGENT.startswith("Mozilla/5.0")
        assert config.parse_timeout(config.REQUEST_TIMEOUT) == 15.0
        assert config.FIXTURE_PATH is None
        assert config.parse_log_level(config.LOG_LEVEL) == logging.WARNING
        assert config.LOG_DIR is None

    def test_env_overrides(self, dotenv_mock, monkeypatch, tmp_path):
        monkeypatch.setenv("HN_URL", "https://example.com/news")
        monkeypatch.setenv("HN_USER_AGENT", "test-agent/1.0")
        monkeypatch.setenv("HN_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("HN_FIXTURE_HTML", "tests/fixtures/news_p1.html")
        monkeypatch.setenv("HN_LOG_LEVEL", "debug")
        monkeypatch.setenv("HN_LOG_DIR", str(tmp_path))
        importlib.reload(config)

        assert config.HN_URL == "https://example.com/news"
        assert config.USER_AGENT == "test-agent/1.0"
        assert config.parse_timeout(config.REQUEST_TIMEOUT) == 2.5
        assert config.FIXTURE_PATH == "tests/fixtures/news_p1.html"
        assert config.parse_log_level(config.LOG_LEVEL) == logging.DEBUG
        assert config.LOG_DIR == tmp_path

    def test_empty_fixture_is_unset(self, dotenv_mock, monkeypatch):
        monkeypatch.setenv("HN_FIXTURE_HTML", "")
        importlib.reload(config)

        assert config.FIXTURE_PATH is None

    def test_loads_project_dotenv(self, dotenv_mock):
        """プロジェクトルートの .env を読むこと."""
        importlib.reload(config)

        dotenv_mock.assert_called_once_with(config._PROJECT_ROOT / ".env")

    def test_dotenv_values(self, dotenv_mock, monkeypatch, tmp_path):
        """.env の値が反映され、既存の環境変数が優先されること."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "HN_URL=https://dotenv.example.com/news\nHN_USER_AGENT=dotenv-agent\n",
            encoding="utf-8",
        )
        dotenv_mock.side_effect = lambda *args, **kwargs: real_load_dotenv(env_file)
        monkeypatch.setenv("HN_USER_AGENT", "env-agent")
        importlib.reload(config)

        assert config.HN_URL == "https://dotenv.example.com/news"
        assert config.USER_AGENT == "env-agent"

    def test_invalid_values_do_not_break_import(self, dotenv_mock, monkeypatch):
        """不正な値でも import 自体は失敗しないこと（検証は使用時）."""
        monkeypatch.setenv("HN_REQUEST_TIMEOUT", "abc")
        monkeypatch.setenv("HN_LOG_LEVEL", "verbose")
        importlib.reload(config)

        with pytest.raises(ConfigError):
            config.parse_timeout(config.REQUEST_TIMEOUT)
        with pytest.raises(ConfigError):
            config.parse_log_level(config.LOG_LEVEL)


class TestParseTimeout:
    """parse_timeout のテスト."""

    @pytest.mark.parametrize("value, expected", [("15", 15.0), ("0.5", 0.5), (" 3 ", 3.0)])
    def test_valid(self, value, expected):
        assert config.parse_timeout(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "0", "-1", "nan"])
    def test_invalid(self, value):
        with pytest.raises(ConfigError) as exc_info:
            config.parse_timeout(value)

        assert exc_info.value.stage == "config"
        assert "HN_REQUEST_TIMEOUT" in str(exc_info.value)


class TestParseLogLevel:
    """parse_log_level のテスト."""

    @pytest.mark.parametrize(
        "value, expected",
        [("WARNING", logging.WARNING), ("info", logging.INFO), ("Debug", logging.DEBUG)],
    )
    def test_valid(self, value, expected):
        assert config.parse_log_level(value) == expected

    @pytest.mark.parametrize("value", ["verbose", "", "LEVEL 5"])
    def test_invalid(self, value):
        with pytest.raises(ConfigError) as exc_info:
            config.parse_log_level(value)

        assert "HN_LOG_LEVEL" in str(exc_info.value)
