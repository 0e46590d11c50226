"""Centralized logging configuration for patchcheck."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .utils import get_home_dir

# Prevent multiple configurations
_CONFIGURED = False


def configure_logging(home: Path | None = None, level: int = logging.INFO) -> None:
    """Configure unified patchcheck logging.

    Args:
        home: Directory that receives patchcheck.log. If None, derived from
            PATCHCHECK_HOME or ~/.patchcheck.
        level: Level applied to the ``patchcheck`` logger
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if home is None:
        home = get_home_dir()

    # Ensure directory exists
    home.mkdir(parents=True, exist_ok=True)
    log_file = home / "patchcheck.log"

    root_logger = logging.getLogger("patchcheck")
    root_logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,  # 5MB * 3
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Logging is configured lazily on first use; the CLI configures it
    explicitly at startup.
    """
    if not _CONFIGURED:
        configure_logging()

    return logging.getLogger(f"patchcheck.{name}")
