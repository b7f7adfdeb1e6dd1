"""
core/logging/logging_setup.py
=============================

Configures the standard library loggers of the application namespaces
('core', 'worldclock') from the [Logging] configuration section.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

from core.config.config_service import ConfigService

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"
NAMESPACES = ("core", "worldclock")


def _level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Optional[str] = None,
    namespaces: Iterable[str] = NAMESPACES,
) -> None:
    """
    Attaches a console handler (and optionally a file handler) to each
    application namespace logger.

    Args:
        level: Logging level, e.g. logging.DEBUG or "DEBUG".
        log_file: Optional path to additionally write logs to.
        namespaces: Top-level logger names to configure.
    """
    lvl = _level(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    for name in namespaces:
        logger = logging.getLogger(name)
        logger.setLevel(lvl)
        # Avoid duplicate handlers when called again (e.g. settings reload)
        if logger.hasHandlers():
            logger.handlers.clear()

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(lvl)
        console.setFormatter(formatter)
        logger.addHandler(console)

        if log_file:
            fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            fh.setLevel(lvl)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

        logger.propagate = False

    logging.getLogger("worldclock").debug("Logging initialized.")


def setup_logging_from_config(config: ConfigService, namespaces: Iterable[str] = NAMESPACES) -> None:
    """
    Reads [Logging] level/file and applies them. An unknown level name
    falls back to INFO.
    """
    cfg = config.logging
    namespaces = tuple(namespaces)
    try:
        lvl = _level(cfg.level)
    except ValueError as ex:
        setup_logging(logging.INFO, cfg.file or None, namespaces)
        logging.getLogger(namespaces[0]).warning("%s in [Logging] level, using INFO", ex)
        return
    setup_logging(lvl, cfg.file or None, namespaces)
