"""Logging setup."""

import logging

from .config import AppConfig, get_config


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure logging from the logging section of the config.

    basicConfig does nothing once the root logger has handlers, so the
    package logger gets the level as well.
    """
    config = config or get_config()
    level = getattr(logging, config.logging.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.logging.format)
    logging.getLogger("scenario_keeper").setLevel(level)
