# sesame_reporter/core/logging_config.py
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from sesame_reporter.core.config import Settings, settings as default_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]  %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_log_dir(config: Settings) -> Path:
    # Relative LOG_DIR is anchored at BASE_DIR, not the working directory.
    log_dir = Path(config.LOG_DIR)
    if not log_dir.is_absolute():
        log_dir = config.BASE_DIR / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def configure_logging(config: Optional[Settings] = None) -> Path:
    config = config or default_settings
    level = logging.getLevelName(config.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    log_file_path = _resolve_log_dir(config) / "logs.log"
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = TimedRotatingFileHandler(
        log_file_path,
        when="midnight",
        interval=1,
        backupCount=7,
        encoding="utf-8",
        delay=True,
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    for name in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
        log = logging.getLogger(name)
        log.handlers = root_logger.handlers
        log.setLevel(level)
        log.propagate = False

    # httpx logs full request URLs at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized. Writing logs to: {log_file_path}")
    root_logger.info(f"logging start time UTC: {datetime.now(timezone.utc).isoformat()}")
    return log_file_path


__all__ = ["configure_logging", "LOG_FORMAT", "DATE_FORMAT"]
