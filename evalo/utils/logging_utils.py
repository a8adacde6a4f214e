"""Simple logging utilities for evalo.

Standard Logger Initialization Pattern
--------------------------------------
For most modules, use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

Use `setup_tui_logging()` once, when the Textual app starts, so that log
output goes to a rotating file instead of drawing over the terminal UI.

Note: This module uses inline Path construction instead of importing
EVALO_CONFIG_DIR to avoid circular imports, since logging may be needed
before config is fully loaded.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _log_dir() -> Path:
    log_dir = Path(
        os.environ.get("EVALO_CONFIG_DIR", str(Path.home() / ".config" / "evalo"))
    )
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger that writes to evalo.log in the config directory.

    Used by the CLI, where no Textual app is running to own the log output.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = RotatingFileHandler(
            _log_dir() / "evalo.log", maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

        logger.addHandler(handler)

    logger.setLevel(level)

    return logger


def setup_tui_logging(verbose: bool = False) -> logging.Logger:
    """
    Set up logging for the Textual front-end.

    The root logger is set to WARNING to avoid noise from third-party libs.
    evalo's own loggers (evalo.*) are set to INFO, or DEBUG when verbose.

    Returns:
        The "evalo" package logger
    """
    evalo_logger = logging.getLogger("evalo")
    try:
        if not logging.getLogger().handlers:
            handler = RotatingFileHandler(
                _log_dir() / "tui.log", maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
            )
            handler.setFormatter(logging.Formatter(_FORMAT))
            logging.basicConfig(level=logging.WARNING, handlers=[handler])
    except OSError as e:
        # We can't log this failure since logging is what's failing
        print(f"Warning: TUI logging setup failed: {e}", file=sys.stderr)

    evalo_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return evalo_logger
