"""Leveled logging wrapper shared by the client, transports and tasks."""

from __future__ import annotations

import logging
from typing import Any, Literal, NamedTuple

LogLevel = Literal["trace", "debug", "info", "warn", "error"]

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

DEFAULT_LOGGER_NAME = "localapi_client"


class _Level(NamedTuple):
    priority: int
    stdlib: int


LEVELS: dict[LogLevel, _Level] = {
    "trace": _Level(0, TRACE_LEVEL),
    "debug": _Level(1, logging.DEBUG),
    "info": _Level(2, logging.INFO),
    "warn": _Level(3, logging.WARNING),
    "error": _Level(4, logging.ERROR),
}


class BoundLogger:
    """Wraps a logging.Logger, or any object with trace/debug/info/warn/error
    methods, and drops messages below ``level``.

    Children of a stdlib logger map onto the logger hierarchy
    (``localapi_client.unix``); children of duck-typed loggers prefix their
    messages with the component name instead.
    """

    def __init__(
        self,
        logger: Any | None = None,
        *,
        level: LogLevel = "info",
        prefix: str = "",
    ) -> None:
        self._logger = logger or _default_logger()
        self._level = level
        self._prefix = prefix

    @property
    def level(self) -> LogLevel:
        return self._level

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("trace", msg, args, kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("debug", msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("info", msg, args, kwargs)

    def warn(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("warn", msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._emit("error", msg, args, kwargs)

    def child(self, name: str) -> "BoundLogger":
        if isinstance(self._logger, logging.Logger):
            return BoundLogger(self._logger.getChild(name), level=self._level)
        return BoundLogger(self._logger, level=self._level, prefix=f"{self._prefix}[{name}] ")

    def _emit(self, level: LogLevel, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        entry = LEVELS[level]
        if entry.priority < LEVELS[self._level].priority:
            return
        msg = self._prefix + msg
        try:
            if hasattr(self._logger, "log"):
                self._logger.log(entry.stdlib, msg, *args, **kwargs)
                return
            handler = getattr(self._logger, level, None)
            if handler:
                handler(msg, *args, **kwargs)
        except Exception:
            # Logging failures never reach client code
            pass


def _default_logger() -> logging.Logger:
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(TRACE_LEVEL)
    return logger


def create_logger(*, logger: Any | None = None, level: LogLevel = "info") -> BoundLogger:
    if isinstance(logger, BoundLogger):
        return logger
    return BoundLogger(logger, level=level)


__all__ = ["BoundLogger", "LEVELS", "LogLevel", "create_logger"]
