"""Loader for infomed.ini.

Every section and key of the file maps onto a field of `models.config_models.Config`.
Values are coerced to the type of the field default; keys that are absent keep the
default. Problems with the file surface as `ConfigLoaderError` subclasses.
"""

from __future__ import annotations

import ast
import configparser
import logging
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from core.trans.providers import provider_names
from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Callable

__all__: list[str] = [
    "Config",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

PORT_RANGE: Final[range] = range(1, 65536)

# Command-line override name -> (section, key).
_OVERRIDES: Final[dict[str, tuple[str, str]]] = {
    "host": ("SERVER", "HOST"),
    "port": ("SERVER", "PORT"),
    "debug": ("GENERAL", "DEBUG"),
}


class ConfigLoaderError(Exception):
    """Base class for configuration problems."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file cannot be parsed."""


class ConfigValueError(ConfigFormatError):
    """A setting has an unusable value."""


class ConfigTypeError(ConfigFormatError):
    """A setting has the wrong type."""


def _strip_quotes(raw: str) -> str:
    value: str = raw.strip()
    for quote in ("'", '"'):
        value = value.removeprefix(quote).removesuffix(quote)
    return value


def _as_bool(raw: str) -> bool:
    state: bool | None = configparser.ConfigParser.BOOLEAN_STATES.get(_strip_quotes(raw).lower())
    if state is None:
        msg = f"not a boolean: {raw!r}"
        raise ValueError(msg)
    return state


def _split_names(raw: str) -> list[str]:
    return [_strip_quotes(part) for part in raw.split(",") if part.strip()]


_COERCERS: Final[dict[type, Callable[[str], Any]]] = {
    bool: _as_bool,
    int: lambda raw: int(float(_strip_quotes(raw))),
    float: lambda raw: float(_strip_quotes(raw)),
    str: _strip_quotes,
}


def _coerce(name: str, raw: str, default: Any) -> Any:
    """Convert the INI text `raw` to the type of `default`.

    Types without a dedicated coercer (lists) are read as Python literals. A list setting
    that is not a literal is read as comma-separated names, so `PROVIDERS = mymemory`
    and `PROVIDERS = libretranslate, mymemory` both work.

    Raises:
        ConfigValueError: If the text does not represent a value of that type.
        ConfigFormatError: If a literal has invalid syntax.
    """
    coercer: Callable[[str], Any] | None = _COERCERS.get(type(default))
    if coercer is not None:
        try:
            return coercer(raw)
        except ValueError as err:
            msg = f"Invalid value for {name}: {err}"
            raise ConfigValueError(msg) from err

    try:
        return ast.literal_eval(raw)
    except SyntaxError as err:
        msg = f"Invalid literal for {name}: {raw}"
        raise ConfigFormatError(msg) from err
    except ValueError as err:
        if isinstance(default, list):
            return _split_names(raw)
        msg = f"Invalid literal for {name}: {raw}"
        raise ConfigValueError(msg) from err


class ConfigLoader:
    """Reads infomed.ini into a `Config` and validates it.

    Args:
        config_filename (str): INI file to load.
        script_name (str): Name of the running script, used in the not-found message.
        **args: Command-line overrides (`host`, `port`, `debug`). None and False are ignored.

    Raises:
        ConfigFileNotFoundError: If the file does not exist.
        ConfigFormatError: If the file cannot be parsed or a value is invalid.
    """

    def __init__(self, *, config_filename: str, script_name: str, **args) -> None:
        if not Path(config_filename).is_file():
            msg = f"Configuration file '{config_filename}' not found. Create it next to '{script_name}'."
            raise ConfigFileNotFoundError(msg)

        parser = configparser.ConfigParser()
        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self._load_sections(parser)
        self._apply_overrides(args)
        self._validate()

    def _load_sections(self, parser: configparser.ConfigParser) -> None:
        for section_field in fields(self.config):
            section: Any = getattr(self.config, section_field.name)
            if not parser.has_section(section_field.name):
                logger.debug("Section '%s' not present; using defaults", section_field.name)
                continue
            for key_field in fields(section):
                if not parser.has_option(section_field.name, key_field.name):
                    continue
                name: str = f"{section_field.name}.{key_field.name}"
                raw: str = parser.get(section_field.name, key_field.name, raw=True)
                setattr(section, key_field.name, _coerce(name, raw, getattr(section, key_field.name)))

    def _apply_overrides(self, args: dict[str, Any]) -> None:
        for option, (section_name, key) in _OVERRIDES.items():
            value: Any = args.get(option)
            if value is None or value is False:
                continue
            section: Any = getattr(self.config, section_name)
            setattr(section, key, type(getattr(section, key))(value))
            logger.debug("Command line override: %s.%s = %r", section_name, key, value)

    def _validate(self) -> None:
        """Check ranges and types that coercion alone cannot catch.

        Raises:
            ConfigValueError: If a value is out of range.
            ConfigTypeError: If PROVIDERS is not a list of names.
        """
        port: int = self.config.SERVER.PORT
        if port not in PORT_RANGE:
            msg = f"'SERVER.PORT' must be between {PORT_RANGE.start} and {PORT_RANGE.stop - 1}: {port}"
            raise ConfigValueError(msg)

        translation = self.config.TRANSLATION
        if translation.TIMEOUT <= 0:
            msg = f"'TRANSLATION.TIMEOUT' must be positive: {translation.TIMEOUT}"
            raise ConfigValueError(msg)
        if translation.BATCH_DELAY < 0:
            msg = f"'TRANSLATION.BATCH_DELAY' must be zero or positive: {translation.BATCH_DELAY}"
            raise ConfigValueError(msg)

        translation.PROVIDERS = self._provider_list(translation.PROVIDERS)

        level: str = self.config.GENERAL.LOG_LEVEL.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown logging level for 'GENERAL.LOG_LEVEL': {self.config.GENERAL.LOG_LEVEL}"
            raise ConfigValueError(msg)
        self.config.GENERAL.LOG_LEVEL = level

    @staticmethod
    def _provider_list(value: object) -> list[str]:
        """Normalise PROVIDERS to a list, warning about names no provider answers to.

        Raises:
            ConfigTypeError: If the value is neither a name nor a list of names.
        """
        providers: object = [value] if isinstance(value, str) else value
        if not isinstance(providers, list) or not all(isinstance(name, str) for name in providers):
            msg = f"'TRANSLATION.PROVIDERS' must be a list of provider names, got {value!r}"
            raise ConfigTypeError(msg)

        known: list[str] = provider_names()
        for name in providers:
            if name.strip().lower() not in known:
                logger.warning("Unknown value '%s' is set for 'TRANSLATION.PROVIDERS'", name)
        return providers
