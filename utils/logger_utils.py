"""Logging setup shared by the translation service.

The service logs under one namespace ("InfoMedQR" by default). The first LoggerUtils
instance attaches a console handler that only shows warnings, plus an optional rotating
file that receives every record. aiohttp's own server and access loggers are wired to the
same handlers so request failures end up next to the translation log.
"""

from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, Handler, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, NamedTuple, Self, TextIO, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LIBRARY_LOGGERS", "LogLevel", "LoggerUtils"]

LevelType: TypeAlias = Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_NAMESPACE: Final[str] = "InfoMedQR"
DEFAULT_LOG_LEVEL: Final[int] = logging.INFO

# Third-party loggers that share the service handlers.
LIBRARY_LOGGERS: Final[tuple[str, ...]] = ("aiohttp.access", "aiohttp.server", "aiohttp.web")

_ROTATE_BYTES: Final[int] = 2 * 1024 * 1024
_ROTATE_KEEP: Final[int] = 2
_CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"
_FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(process)5d %(name)-36s %(funcName)s\t%(message)s"


class LogLevel(NamedTuple):
    """Effective logging level of the service namespace."""

    name: str
    value: int


def _console_handler(*, silent: bool) -> Handler:
    if silent:
        return NullHandler()
    handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(Formatter(_CONSOLE_FORMAT))
    return handler


def _rotating_file_handler(path: str) -> RotatingFileHandler | None:
    """Open the log file, or return None when it cannot be created."""
    try:
        handler = RotatingFileHandler(path, maxBytes=_ROTATE_BYTES, backupCount=_ROTATE_KEEP, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(Formatter(_FILE_FORMAT))
    return handler


class LoggerUtils:
    """Process-wide logging configuration.

    Instantiating the class is idempotent: the handlers are attached on the first call and
    later calls hand back the same object without touching them.

    Attributes:
        _LOGGER_NAMESPACE (str): Prefix of every logger name handed out by get_logger().
        _configured (bool): Whether handlers have been attached.
        _instance (LoggerUtils | None): The singleton instance.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "", *, use_null_console: bool = False) -> None:
        """Attach the service handlers.

        Args:
            filename (str | Path): Log file path. Empty keeps logging on the console only.
            use_null_console (bool): Discard console output instead of writing to stderr.
        """
        if LoggerUtils._configured:
            return

        self.root_logger: logging.Logger = logging.getLogger(self._LOGGER_NAMESPACE)
        self.root_logger.setLevel(DEFAULT_LOG_LEVEL)

        handlers: list[Handler] = [_console_handler(silent=use_null_console or sys.stderr is None)]
        log_path: str = str(filename).strip()
        if log_path:
            file_handler: RotatingFileHandler | None = _rotating_file_handler(log_path)
            if file_handler is None:
                self.root_logger.error("Cannot open log file '%s'; logging to the console only.", log_path)
            else:
                handlers.append(file_handler)

        for target in self._targets():
            for handler in handlers:
                target.addHandler(handler)

        if len(handlers) == 1:
            self.root_logger.info("No log file in use.")
        warnings.showwarning = self.warning_to_log
        LoggerUtils._configured = True

    @classmethod
    def _targets(cls) -> list[logging.Logger]:
        return [logging.getLogger(cls._LOGGER_NAMESPACE), *(logging.getLogger(name) for name in LIBRARY_LOGGERS)]

    def warning_to_log(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        """Replacement for warnings.showwarning that writes to the service log."""
        _ = file, line
        self.root_logger.warning("%s (%s:%d): %s", category.__name__, filename, lineno, message)

    @classmethod
    def initialize(cls, namespace: str) -> None:
        """Choose a different namespace. Only allowed before the first instantiation.

        Raises:
            RuntimeError: If handlers have already been attached.
        """
        if cls._configured:
            msg = f"Logging already configured under '{cls._LOGGER_NAMESPACE}'; the namespace cannot change now."
            raise RuntimeError(msg)
        cls._LOGGER_NAMESPACE = namespace

    @classmethod
    def reset(cls) -> None:
        """Detach and close every service handler and forget the singleton."""
        closed: set[int] = set()
        for target in cls._targets():
            for handler in list(target.handlers):
                target.removeHandler(handler)
                if id(handler) not in closed:
                    handler.close()
                    closed.add(id(handler))
            target.setLevel(logging.NOTSET)
        cls._configured = False
        cls._instance = None

    def set_level(self, level: LevelType | str) -> None:
        """Set the level of the service namespace and the aiohttp loggers.

        Unknown names fall back to INFO with a warning.
        """
        value: int | None = logging.getLevelNamesMapping().get(level.upper())
        if value is None:
            self.root_logger.warning("Unknown logging level '%s'; using INFO.", level)
            value = DEFAULT_LOG_LEVEL
        for target in self._targets():
            target.setLevel(value)

    def get_level(self) -> LogLevel:
        value: int = self.root_logger.getEffectiveLevel()
        return LogLevel(name=logging.getLevelName(value), value=value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Return the logger for `name` inside the service namespace.

        Args:
            name (str | None): Usually the caller's __name__. None returns the namespace logger.
        """
        namespace: str = LoggerUtils._LOGGER_NAMESPACE
        if not namespace:
            return logging.getLogger(name or None)
        return logging.getLogger(f"{namespace}.{name}" if name else namespace)
