"""
Logging configuration for the EcoToken API
"""
import logging
import sys
from pathlib import Path

from app.core.config import settings


def setup_logging() -> None:
    """
    Set up logging configuration
    """
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Configure logging level based on environment
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=handlers,
    )

    # Set specific loggers
    logging.getLogger("uvicorn.access").disabled = True
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for a specific module

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
