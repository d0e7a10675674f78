"""Application logging setup"""

from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional
import logging

from ..config.settings import LoggingConfig


DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s: %(name)s: %(message)s"
APPLICATION_LOG = "application.log"
ERROR_LOG = "error.log"


def default_formatter(fmt: Optional[str] = None) -> logging.Formatter:
    return logging.Formatter(fmt or DEFAULT_FORMAT)


def resolve_level(config: LoggingConfig, environment: str) -> int:
    """DEBUG outside production, INFO in production, unless configured"""
    if config.level:
        level = logging.getLevelName(config.level.upper())
        if isinstance(level, int):
            return level
    return logging.INFO if environment == "production" else logging.DEBUG


def configure_logging(config: LoggingConfig, environment: str = "development") -> logging.Logger:
    """Install console and rotating file handlers on the root logger"""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    level = resolve_level(config, environment)
    root.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(default_formatter())
    root.addHandler(console_handler)

    if config.enable_file_logging:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        app_handler = TimedRotatingFileHandler(
            filename=str(log_dir / APPLICATION_LOG),
            when="midnight",
            backupCount=config.application_log_retention_days,
            encoding="utf-8"
        )
        app_handler.setFormatter(default_formatter())
        root.addHandler(app_handler)

        error_handler = TimedRotatingFileHandler(
            filename=str(log_dir / ERROR_LOG),
            when="midnight",
            backupCount=config.error_log_retention_days,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(default_formatter())
        root.addHandler(error_handler)

    # Driver chatter stays at INFO even in development
    logging.getLogger("pymongo").setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).debug(f"Logging configured at {logging.getLevelName(level)}")
    return root
