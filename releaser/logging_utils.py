from __future__ import annotations

import logging
import os
from typing import Optional


_CONFIGURED = False


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure root logging with a consistent format; encoder threads are tagged by name.

    The first call installs the console handler. Later calls only apply an
    explicit level or add a file handler, so module loggers created at import
    time pick up the CLI's settings.

    Args:
        level: Optional log level name (e.g., "INFO", "DEBUG"). If omitted,
               reads LOG_LEVEL env or defaults to INFO.
        log_file: Optional path; warnings and errors are appended there too.
    """
    global _CONFIGURED
    root = logging.getLogger()

    if not _CONFIGURED:
        log_level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, log_level_name, logging.INFO),
            format="%(asctime)s %(levelname)s [%(threadName)s] [%(name)s] %(message)s",
        )
        _CONFIGURED = True
    elif level:
        root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if log_file:
        fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        fh.setLevel(logging.WARNING)
        fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        root.addHandler(fh)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger with global config ensured."""
    if not _CONFIGURED:
        setup_logging()
    return logging.getLogger(name)
