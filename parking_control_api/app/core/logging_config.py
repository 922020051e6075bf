"""
Logging configuration for the application.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the ``parking_control_api`` logger.  Records still
propagate to the root logger, so uvicorn or a test runner capturing
logs sees them as well.  Calling it more than once is harmless.
"""

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "parking_control_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure and return the application logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file to also write records to.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Handlers installed by an earlier call are tagged so they are not
    # added twice when ``create_app`` runs repeatedly.
    if any(getattr(handler, "_parking_control", False) for handler in logger.handlers):
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._parking_control = True
        logger.addHandler(handler)
    return logger
