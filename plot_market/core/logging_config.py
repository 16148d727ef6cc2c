"""
Logging set-up for the ``plot-market`` command.

Console records share stderr with the ``[!] message`` line the command
prints on failure, so they use a short format: the client's request log
and its failure hints ("Resource not found", "Request timed out - please
check your connection") read as context for that line.  The optional log
file keeps full timestamps.

Library code never configures logging; it only creates module-level
loggers.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings


# HTTP libraries that log every connection; held at WARNING.
NOISY_LOGGERS = ("urllib3", "requests")

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger for the command line tool.

    ``level`` and ``logfile`` default to ``settings.log_level`` and
    ``settings.log_file`` (``LOG_LEVEL`` and ``LOG_FILE``).  Unknown level
    names fall back to ``INFO``.  If the root logger already has handlers
    (an embedding application, pytest) they are left alone; the HTTP
    library loggers are quietened either way.
    """
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        return

    level = level or settings.log_level
    logfile = logfile or settings.log_file or None
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)
