import os
import sys
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from platformdirs import user_log_dir

from mojang_auth_checker.config import APP_NAME, Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_logger: Optional[logging.Logger] = None


def log_file_path() -> str:
    return os.path.join(user_log_dir(APP_NAME, appauthor=False, ensure_exists=True), "checker.log")


def setup_logger(settings: Settings, *, headless: bool = True) -> logging.Logger:
    """Configures the package logger once and returns it.

    Records go to a rotating file in the user log directory. Headless runs
    also log to stderr; the TUI sends them to the Textual devtools console
    instead, since the terminal belongs to the app.
    """
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger("mojang_auth_checker")
    logger.setLevel(settings.log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    try:
        file_handler = RotatingFileHandler(
            log_file_path(),
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Log file unavailable: {e}", file=sys.stderr)

    if headless:
        console_handler: logging.Handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    else:
        from textual.logging import TextualHandler
        console_handler = TextualHandler()
    logger.addHandler(console_handler)

    _logger = logger
    return logger
