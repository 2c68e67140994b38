from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from code_beautifier.env import env_int, env_truthy

APP_LOGGER = "code_beautifier"

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class AppFileHandler(RotatingFileHandler):
    """Rotating log file owned by the ``code_beautifier`` logger tree."""


def log_level_from_env(default: int = logging.INFO) -> int:
    """Level named by CODE_BEAUTIFIER_LOG_LEVEL; unknown names fall back to ``default``."""
    raw = str(os.getenv("CODE_BEAUTIFIER_LOG_LEVEL", "") or "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def _installed_handler(logger: logging.Logger) -> AppFileHandler | None:
    for h in logger.handlers:
        if isinstance(h, AppFileHandler):
            return h
    return None


def ensure_file_logging(*, log_dir: Path, filename: str = "code-beautifier.log") -> Path:
    """Send the app's own records to a rotating file under ``log_dir``.

    The handler hangs off the ``code_beautifier`` logger rather than the root,
    so uvicorn's access log stays on the console. The env level applies to both
    the logger and the handler; with ``debug`` the dispatcher's per-call lines
    reach the file too. Calling this again only re-applies the level.
    """

    if env_truthy("CODE_BEAUTIFIER_DISABLE_FILE_LOG"):
        return log_dir / filename

    app_logger = logging.getLogger(APP_LOGGER)
    level = log_level_from_env()
    app_logger.setLevel(level)

    handler = _installed_handler(app_logger)
    if handler is None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = AppFileHandler(
            log_dir / filename,
            maxBytes=env_int("CODE_BEAUTIFIER_LOG_MAX_BYTES", 5 * 1024 * 1024),
            backupCount=env_int("CODE_BEAUTIFIER_LOG_BACKUPS", 3),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
        app_logger.addHandler(handler)
    handler.setLevel(level)

    return Path(handler.baseFilename)
