from __future__ import annotations

import logging
import warnings
from logging import NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest

from utils.logger_utils import DEFAULT_NAMESPACE, LIBRARY_LOGGERS, LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    original_showwarning = warnings.showwarning
    LoggerUtils.reset()
    yield
    LoggerUtils.reset()
    warnings.showwarning = original_showwarning


def test_get_logger_uses_namespace() -> None:
    assert LoggerUtils.get_logger("core.trans.manager").name == f"{DEFAULT_NAMESPACE}.core.trans.manager"
    assert LoggerUtils.get_logger().name == DEFAULT_NAMESPACE


def test_singleton_configures_once(tmp_path: Path) -> None:
    first = LoggerUtils(str(tmp_path / "service.log"))
    second = LoggerUtils(str(tmp_path / "other.log"))

    assert first is second
    handlers = logging.getLogger(DEFAULT_NAMESPACE).handlers
    assert sum(isinstance(h, RotatingFileHandler) for h in handlers) == 1
    assert sum(type(h) is StreamHandler for h in handlers) == 1


def test_file_logging_writes_debug(tmp_path: Path) -> None:
    log_file: Path = tmp_path / "service.log"
    utils = LoggerUtils(str(log_file))
    utils.set_level("DEBUG")

    LoggerUtils.get_logger("tests").debug("hello from test")
    for handler in logging.getLogger(DEFAULT_NAMESPACE).handlers:
        handler.flush()

    assert "hello from test" in log_file.read_text(encoding="utf-8")


def test_null_console_and_no_file() -> None:
    LoggerUtils("", use_null_console=True)

    handlers = logging.getLogger(DEFAULT_NAMESPACE).handlers
    assert any(isinstance(h, NullHandler) for h in handlers)
    assert not any(isinstance(h, RotatingFileHandler) for h in handlers)


def test_unwritable_log_file_falls_back_to_console(tmp_path: Path) -> None:
    LoggerUtils(str(tmp_path / "missing_dir" / "service.log"))

    handlers = logging.getLogger(DEFAULT_NAMESPACE).handlers
    assert not any(isinstance(h, RotatingFileHandler) for h in handlers)


def test_set_and_get_level() -> None:
    utils = LoggerUtils("", use_null_console=True)

    utils.set_level("warning")
    assert utils.get_level().name == "WARNING"

    utils.set_level("verbose")
    assert utils.get_level().value == logging.INFO


def test_initialize_after_configuration_raises() -> None:
    LoggerUtils("", use_null_console=True)

    with pytest.raises(RuntimeError):
        LoggerUtils.initialize("Other")


def test_warnings_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    LoggerUtils("", use_null_console=True)
    warnings.simplefilter("always")

    warnings.warn("deprecated thing", UserWarning, stacklevel=1)

    assert any("deprecated thing" in rec.message for rec in caplog.records)


def test_aiohttp_loggers_share_handlers(tmp_path: Path) -> None:
    utils = LoggerUtils(str(tmp_path / "service.log"))
    utils.set_level("ERROR")

    service_handlers = logging.getLogger(DEFAULT_NAMESPACE).handlers
    for name in LIBRARY_LOGGERS:
        library_logger = logging.getLogger(name)
        assert library_logger.handlers == service_handlers
        assert library_logger.level == logging.ERROR

    LoggerUtils.reset()
    assert all(not logging.getLogger(name).handlers for name in LIBRARY_LOGGERS)
