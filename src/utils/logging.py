"""Simple logging utility.

Provides a thin wrapper around Python's standard logging module so that
every part of the lanelet editor core reports with the same format.
Rebuild traces go to DEBUG, structural edits to INFO and best-effort
outcomes (e.g. an orientation that could not be repaired) to WARNING.
"""

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger with a preset format."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='[%(asctime)s] [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def set_level(level: int, prefix: str = "src") -> None:
    """Change the level of every configured logger under `prefix`."""
    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logger = logging.getLogger(name)
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)
