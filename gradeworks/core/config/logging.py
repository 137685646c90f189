"""Typed view of ``logging.yaml``; ``model_dump()`` yields a ``dictConfig`` mapping."""

import pathlib
import typing as t

import pydantic as p

from .base import BaseSettings

LogLevel = t.Literal["NOTSET", "TRACE", "DEBUG", "INFO", "WARNING", "WARN", "ERROR", "FATAL", "CRITICAL"]


class FormatterSettings(BaseSettings):
    factory: t.Literal["gradeworks.lib.logging.ExtraFormatter"] = p.Field(alias="()")
    base: str
    format: str | None = None
    datefmt: str | None = None
    log_colors: dict[str, str] = {}
    no_color: bool = False
    indent: bool = True


class _HandlerSettings(BaseSettings):
    formatter: str
    level: LogLevel = "NOTSET"


class StreamHandlerSettings(_HandlerSettings):
    handler: t.Literal["colorlog.StreamHandler", "logging.StreamHandler"] = p.Field(alias="class")
    stream: str = "ext://sys.stderr"


class RotatingFileHandlerSettings(_HandlerSettings):
    handler: t.Literal["logging.handlers.TimedRotatingFileHandler"] = p.Field(alias="class")
    filename: pathlib.Path
    when: str = "midnight"
    backupCount: int = 7


HandlerSettings = t.Annotated[StreamHandlerSettings | RotatingFileHandlerSettings, p.Field(discriminator="handler")]


class LoggerSettings(BaseSettings):
    level: LogLevel = "NOTSET"
    propagate: bool = True
    handlers: list[str] = []


class RootLoggerSettings(BaseSettings):
    handlers: list[str]
    level: LogLevel = "WARNING"


class LoggingSettings(BaseSettings):
    version: t.Literal[1] = 1
    disable_existing_loggers: bool = False
    formatters: dict[str, FormatterSettings]
    handlers: dict[str, HandlerSettings]
    root: RootLoggerSettings
    loggers: dict[str, LoggerSettings] = {}

    @p.model_validator(mode="after")
    def check_references(self) -> t.Self:
        for name, handler in self.handlers.items():
            if handler.formatter not in self.formatters:
                raise ValueError(f"handler {name!r} uses unknown formatter {handler.formatter!r}")
        for handler in self.root.handlers:
            if handler not in self.handlers:
                raise ValueError(f"root logger uses unknown handler {handler!r}")
        return self
