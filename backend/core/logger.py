# core/logger.py
from __future__ import annotations

import logging
import os
import sys


def _level() -> int:
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger with the project-wide format:
      [2025-01-01 12:00:00] INFO [services.route_normalizer] message
    Handlers are attached once per logger name.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        level = _level()
        logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger
