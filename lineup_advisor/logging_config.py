"""Loguru sink setup."""

from loguru import logger

from config.settings import Settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}"


def configure_logging(settings: Settings) -> int:
    """Add a rotating file sink at the configured level and return its handler id."""
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    handler_id = logger.add(
        settings.log_file,
        rotation="10 MB",
        retention="7 days",
        level=settings.log_level,
        format=LOG_FORMAT,
    )
    logger.info(f"Logging to {settings.log_file} at level {settings.log_level}")
    return handler_id
