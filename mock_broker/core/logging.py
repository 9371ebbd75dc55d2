"""Logging configuration for the mock brokerage server."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from mock_broker.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "mock-broker.log"
APP_DIR_NAME = "mock-broker"

# Per-platform (environment variable, fallback relative to home) pairs
_PLATFORM_LOG_ROOTS: dict[str, tuple[str, tuple[str, ...]]] = {
    "darwin": ("", ("Library", "Logs")),
    "win32": ("LOCALAPPDATA", ("AppData", "Local")),
    "linux": ("XDG_STATE_HOME", (".local", "state")),
}


def get_default_log_dir() -> Path:
    """Directory for the rotating log file.

    ``settings.LOG_DIR`` wins when set. Otherwise the platform's per-user
    log root is used, honouring ``XDG_STATE_HOME`` on Linux and
    ``LOCALAPPDATA`` on Windows.
    """
    if settings.LOG_DIR:
        return Path(settings.LOG_DIR).expanduser()

    platform_key = "linux" if sys.platform.startswith("linux") else sys.platform
    if platform_key not in _PLATFORM_LOG_ROOTS:
        return Path.home() / f".{APP_DIR_NAME}" / "logs"

    env_var, home_parts = _PLATFORM_LOG_ROOTS[platform_key]
    env_root = os.environ.get(env_var) if env_var else None
    root = Path(env_root) if env_root else Path.home().joinpath(*home_parts)
    if platform_key == "darwin":
        return root / APP_DIR_NAME
    return root / APP_DIR_NAME / "logs"


def setup_logging(log_to_file: bool | None = None) -> None:
    """Configure logging for the application."""
    log_level = settings.LOG_LEVEL.upper()
    effective_level = logging.getLevelNamesMapping().get(log_level, logging.INFO)

    project_logger = logging.getLogger("mock_broker")
    root_logger = logging.getLogger()

    for logger in [project_logger, root_logger]:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(effective_level)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(effective_level)

    if log_to_file is None:
        log_to_file = settings.LOG_TO_FILE

    if log_to_file:
        log_path = get_default_log_dir()
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / LOG_FILE_NAME

        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10_000_000, backupCount=5, encoding="utf-8"
        )
        file_handler.setLevel(effective_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        project_logger.info(f"Log File: {log_file}")

    project_logger.setLevel(effective_level)
    project_logger.propagate = True

    project_logger.info(f"Log Level: {log_level}")


# Export the logger for use in other modules
logger = logging.getLogger("mock_broker")
