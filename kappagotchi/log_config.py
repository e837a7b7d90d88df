# kappagotchi/log_config.py
"""
Centralized logging configuration for kappagotchi.

 - Everything at DEBUG and above goes to a rotating log file.
 - Only warnings and errors reach the terminal (stderr), so the status
   panel stays readable.
 - Level comes from KAPPA_LOG_LEVEL unless debug mode is requested.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

DEFAULT_LOG_DIR = Path("~/.kappagotchi/logs")
LOG_FILENAME = "kappagotchi.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_MAX_BYTES = 5_242_880  # 5MB
_BACKUP_COUNT = 3


def resolve_level(debug_mode: bool = False, default: str = "INFO") -> int:
    """DEBUG in debug mode, else KAPPA_LOG_LEVEL, else ``default``."""
    if debug_mode:
        return logging.DEBUG
    name = os.getenv("KAPPA_LOG_LEVEL", default).upper()
    return getattr(logging, name, logging.INFO)


def _writable_log_dir(log_dir: Union[Path, str, None]) -> Path:
    path = Path(log_dir or DEFAULT_LOG_DIR).expanduser()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path("/tmp/kappagotchi/logs")
        path.mkdir(parents=True, exist_ok=True)
    return path


def setup_logging(debug_mode: bool = False, log_dir: Union[Path, str, None] = None,
                  default_level: str = "INFO") -> logging.Logger:
    """Configure project-wide logging with optional debug mode."""
    level = resolve_level(debug_mode, default_level)
    log_file = _writable_log_dir(log_dir) / LOG_FILENAME

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)

    file_handler = RotatingFileHandler(
        log_file,
        mode="a",
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root.addHandler(console_handler)

    logging.captureWarnings(True)

    logger = logging.getLogger("kappagotchi")
    logger.info(f"Logging initialized at {logging.getLevelName(level)}. Writing to {log_file}")
    return logger


def get_log_file(root: Optional[logging.Logger] = None) -> Optional[Path]:
    """Path of the active rotating log file, if logging was set up."""
    for handler in (root or logging.getLogger()).handlers:
        if isinstance(handler, RotatingFileHandler):
            return Path(handler.baseFilename)
    return None
