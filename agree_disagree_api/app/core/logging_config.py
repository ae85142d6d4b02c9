"""
Logging configuration for the application.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it runs.  The level of the
``agree_disagree_api`` logger is applied on every call, so
``LOG_LEVEL`` also takes effect when uvicorn or pytest configured the
root logger first.
"""

import logging
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "agree_disagree_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure application logging.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)

    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
