"""
Shared helpers.
"""
import logging
import sys

from docuflow.core import config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_root = logging.getLogger("docuflow")
if not _root.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _root.addHandler(_handler)
    _root.setLevel(config.LOG_LEVEL)


def get_logger(name: str) -> logging.Logger:
    """
    Return a module logger under the ``docuflow`` hierarchy.

    Usage:
        log = get_logger(__name__)
    """
    if name != "docuflow" and not name.startswith("docuflow."):
        name = f"docuflow.{name}"
    return logging.getLogger(name)
