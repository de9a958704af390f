"""InfoMed QR translation server.

Loads infomed.ini, configures logging, and serves the translation API with aiohttp.

Example:
    python infomed_server.py --port 8080 --debug
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from aiohttp import web

from api.routes import create_app
from config.loader import ConfigLoader, ConfigLoaderError
from core.version import VERSION
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config

CFG_FILE: Final[str] = "infomed.ini"

logger: logging.Logger = LoggerUtils.get_logger(__name__)


def check_python_version() -> None:
    """Check if Python version is 3.12 or later.

    Raises:
        RuntimeError: If Python version is below 3.12.
    """
    if sys.version_info < (3, 12):
        msg = "Python 3.12 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="Serve the InfoMed QR translation API",
        epilog="Example: python infomed_server.py --port 8080 --debug",
    )
    parser.add_argument("--config", dest="config", metavar="FILE", default=CFG_FILE, help="Configuration file")
    parser.add_argument("--host", dest="host", metavar="HOST", help="Override listen address")
    parser.add_argument("--port", dest="port", metavar="PORT", type=int, help="Override listen port")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply CLI overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).stem
    overrides: dict[str, object] = {"host": args.host, "port": args.port, "debug": args.debug}
    return ConfigLoader(config_filename=args.config, script_name=script_name, **overrides).config


def setup_logging(config: Config) -> None:
    log_file: str = config.GENERAL.LOG_FILE
    log_utils = LoggerUtils(str(Path(log_file).resolve()) if log_file else "")
    log_utils.set_level("DEBUG" if config.GENERAL.DEBUG else config.GENERAL.LOG_LEVEL)


def main(argv: list[str] | None = None) -> int:
    check_python_version()
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 1

    setup_logging(config)
    logger.info("Starting InfoMed QR translation server %s on %s:%d", VERSION, config.SERVER.HOST, config.SERVER.PORT)
    web.run_app(create_app(config), host=config.SERVER.HOST, port=config.SERVER.PORT, print=None)
    logger.info("Server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
