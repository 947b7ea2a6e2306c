"""Tests for environment-driven configuration."""

import io
import json

import pytest

from contextlog.config import LoggingSettings, new_logger
from contextlog.core.context import background
from contextlog.core.encoding.json_lines import JSONRenderer
from contextlog.core.encoding.pretty import PrettyRenderer
from contextlog.core.logs import get_default_logger, set_default_logger, with_fields
from contextlog.core.models import Level

pytestmark = [pytest.mark.core, pytest.mark.tier(1)]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove logging variables from the environment."""
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return monkeypatch


class TestLoggingSettings:
    """Tests for LoggingSettings."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        """JSON at INFO when nothing is configured."""
        settings = LoggingSettings()
        assert settings.log_format == "json"
        assert settings.level is Level.INFO
        assert isinstance(settings.renderer(), JSONRenderer)

    def test_reads_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        """LOG_FORMAT and LOG_LEVEL are read case-insensitively."""
        clean_env.setenv("LOG_FORMAT", "Pretty")
        clean_env.setenv("LOG_LEVEL", "DEBUG")

        settings = LoggingSettings()

        assert settings.log_format == "pretty"
        assert settings.level is Level.DEBUG

    def test_pretty_skips_process_fields(self, clean_env: pytest.MonkeyPatch) -> None:
        """The pretty renderer hides version and app."""
        renderer = LoggingSettings(log_format="pretty").renderer()
        assert isinstance(renderer, PrettyRenderer)
        assert renderer.skip_fields == {"version", "app"}

    @pytest.mark.parametrize(
        ("name", "value", "expected"),
        [
            ("LOG_FORMAT", "xml", "json"),
            ("LOG_LEVEL", "verbose", "info"),
            ("LOG_LEVEL", "warning", "warn"),
        ],
    )
    def test_unknown_values_fall_back(
        self, clean_env: pytest.MonkeyPatch, name: str, value: str, expected: str
    ) -> None:
        """Unknown values fall back to the defaults instead of failing."""
        clean_env.setenv(name, value)
        settings = LoggingSettings()
        assert getattr(settings, name.lower()) == expected


class _Terminal(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestRendererColor:
    """Tests for color selection of the pretty renderer."""

    def test_pretty_is_plain_without_terminal(self, clean_env: pytest.MonkeyPatch) -> None:
        """Redirected output gets no color codes."""
        stream = io.StringIO()
        new_logger(LoggingSettings(log_format="pretty"), stream=stream).info(
            background(), "plain"
        )
        assert stream.getvalue() == "INFO: plain\n"

    def test_pretty_colors_terminals(self, clean_env: pytest.MonkeyPatch) -> None:
        """Terminals are colored unless NO_COLOR is set."""
        clean_env.delenv("NO_COLOR", raising=False)
        renderer = LoggingSettings(log_format="pretty").renderer(_Terminal())
        assert isinstance(renderer, PrettyRenderer)
        assert renderer.color

        clean_env.setenv("NO_COLOR", "1")
        renderer = LoggingSettings(log_format="pretty").renderer(_Terminal())
        assert isinstance(renderer, PrettyRenderer)
        assert not renderer.color


class TestNewLogger:
    """Tests for logger construction."""

    def test_new_logger_writes_json(self, clean_env: pytest.MonkeyPatch) -> None:
        """The default configuration writes JSON lines at INFO."""
        stream = io.StringIO()
        logger = new_logger(stream=stream)

        logger.debug(background(), "hidden")
        logger.info(with_fields(background(), "a", 1), "shown")

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["fields"] == {"a": 1}

    def test_new_logger_pretty(self, clean_env: pytest.MonkeyPatch) -> None:
        """Explicit settings select the pretty renderer and threshold."""
        stream = io.StringIO()
        settings = LoggingSettings(log_format="pretty", log_level="error")
        logger = new_logger(settings, stream=stream)

        logger.warn(background(), "hidden")
        logger.error(background(), "boom")

        assert "ERROR" in stream.getvalue()
        assert "boom" in stream.getvalue()
        assert "hidden" not in stream.getvalue()


class TestDefaultLogger:
    """Tests for the process-wide default logger."""

    def test_default_logger_is_built_from_environment(
        self, clean_env: pytest.MonkeyPatch
    ) -> None:
        """The default logger is created lazily with the configured level."""
        clean_env.setenv("LOG_LEVEL", "warn")
        logger = get_default_logger()
        assert logger.level is Level.WARN
        assert get_default_logger() is logger

    def test_set_default_logger(self) -> None:
        """set_default_logger replaces the default; None rebuilds it."""
        stream = io.StringIO()
        custom = new_logger(LoggingSettings(), stream=stream)

        set_default_logger(custom)
        assert get_default_logger() is custom

        set_default_logger(None)
        assert get_default_logger() is not custom
