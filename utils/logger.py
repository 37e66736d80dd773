# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

import logging
import os
import sys

_LOGGER_NAME = "iev_sources"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(level: str | None = None) -> logging.Logger:
    """Attach a console handler to the application logger and return it.

    Safe to call more than once; the handler is only installed the first time.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    level_name = (level or os.getenv(_LOG_LEVEL_ENV) or "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(h, "_iev_sources", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handler._iev_sources = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)
