"""
Logging configuration.
"""
import logging
import sys

from aiready.config.settings import settings

logger = logging.getLogger("aiready")
logger.setLevel(settings.log_level)

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(settings.log_level)

formatter = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
console_handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger (e.g. ``aiready.scoring``)."""
    return logger.getChild(name)
