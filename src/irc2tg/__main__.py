"""irc2tg entrypoint. Sets up logging, loads and validates the link configuration."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import yaml
from loguru import logger

from irc2tg import __version__
from irc2tg.config import Config, load_config_with_env
from irc2tg.core.errors import RelayConfigurationError

# Standard-library loggers routed through loguru
_INTERCEPTED_LIBRARIES = ["asyncio"]


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        msg = record.getMessage().replace("{", "{{").replace("}", "}}")
        logger.patch(
            lambda r: r.update(
                name=record.name,
                function=record.funcName,
                line=record.lineno,
            ),
        ).opt(exception=record.exc_info).log(level, msg)


def _intercept_logging(level: str) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for lib in _INTERCEPTED_LIBRARIES:
        lib_logger = logging.getLogger(lib)
        lib_logger.handlers = [InterceptHandler()]
        lib_logger.propagate = False
        lib_logger.setLevel(level)


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru. Level: verbose=True or LOG_LEVEL=DEBUG enables DEBUG; otherwise INFO."""
    level = "INFO"
    if verbose:
        level = "DEBUG"
    else:
        env_level = (os.environ.get("LOG_LEVEL") or "").upper()
        if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = env_level

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}",
    )
    _intercept_logging(level)


def load_and_validate(config_path: Path) -> Config:
    """Load config from path and validate it. Raises RelayConfigurationError."""
    try:
        data = load_config_with_env(config_path)
    except yaml.YAMLError as exc:
        raise RelayConfigurationError(
            f"could not parse config {config_path}",
            code="config_parse_error",
            original_error=exc,
        ) from exc
    config = Config()
    config.reload(data)
    return config


def main(argv: list[str] | None = None) -> None:
    """Check a link configuration and print the resulting link table."""
    parser = argparse.ArgumentParser(description="irc2tg: IRC <-> Telegram group relay")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.config.exists():
        logger.error("Config file not found: {}", args.config)
        sys.exit(1)

    try:
        config = load_and_validate(args.config)
    except RelayConfigurationError as exc:
        logger.error("Invalid config {}: {} ({})", args.config, exc, exc.code)
        sys.exit(1)

    table = config.link_table()
    for link in table:
        logger.info(
            "{}/{} <-> {}/{}",
            link.irc_gateway_id,
            link.irc_channel,
            link.telegram_gateway_id,
            link.telegram_group,
        )
    logger.info(
        "Config OK, {} links, Telegram parse mode {}",
        len(table),
        config.telegram_parse_mode,
    )


if __name__ == "__main__":
    main()
