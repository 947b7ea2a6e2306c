"""Environment-driven logger configuration.

Settings are read with pydantic-settings from ``LOG_FORMAT`` and
``LOG_LEVEL``. Unrecognized values fall back to the defaults rather than
failing process startup.

Environment Variables:
    LOG_FORMAT: ``json`` (default) or ``pretty``.
    LOG_LEVEL: ``debug``, ``info`` (default), ``warn`` or ``error``.

Example:
    >>> from contextlog.config import LoggingSettings, new_logger
    >>> logger = new_logger(LoggingSettings(log_format="pretty"))
"""

import sys
from typing import IO, Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from contextlog.core.encoding import JSONRenderer, PrettyRenderer
from contextlog.core.encoding.ansi import supports_color
from contextlog.core.logger import Logger
from contextlog.core.models import Level
from contextlog.core.ports import Renderer
from contextlog.core.sink import Sink

LogFormat = Literal["json", "pretty"]
LevelName = Literal["debug", "info", "warn", "error"]

# Fields that identify the process and add nothing when reading a terminal.
PRETTY_SKIP_FIELDS = ("version", "app")


class LoggingSettings(BaseSettings):
    """Logger settings with environment variable support.

    Attributes:
        log_format: Renderer selection, from LOG_FORMAT.
        log_level: Threshold, from LOG_LEVEL.
    """

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    log_format: LogFormat = "json"
    log_level: LevelName = "info"

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> str:
        text = str(value).strip().lower()
        return text if text in ("json", "pretty") else "json"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        text = str(value).strip().lower()
        if text == "warning":
            return "warn"
        return text if text in ("debug", "info", "warn", "error") else "info"

    @property
    def level(self) -> Level:
        return Level.parse(self.log_level)

    def renderer(self, stream: IO[Any] | None = None) -> Renderer:
        """Build the configured renderer.

        Pretty output is colored only when ``stream`` is a terminal and
        ``NO_COLOR`` is unset.
        """
        if self.log_format == "pretty":
            color = stream is not None and supports_color(stream)
            return PrettyRenderer(skip_fields=PRETTY_SKIP_FIELDS, color=color)
        return JSONRenderer()


def new_logger(
    settings: LoggingSettings | None = None,
    stream: IO[Any] | None = None,
) -> Logger:
    """Build a logger from settings.

    Args:
        settings: Settings to apply. Read from the environment when omitted.
        stream: Output stream. Defaults to stderr.

    Returns:
        Logger with the default collectors, the configured renderer and level.
    """
    if settings is None:
        settings = LoggingSettings()
    if stream is None:
        stream = sys.stderr
    sink = Sink(stream, settings.renderer(stream))
    return Logger(sink, level=settings.level)
