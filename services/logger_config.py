# services/logger_config.py
import logging
from logging.handlers import RotatingFileHandler
import os
from config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'

def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

def setup_logging() -> logging.Logger:
    """
    Configure the scanner's logger from settings.

    Console output is always on. The rotating log file (LOG_FILE_PATH,
    LOG_MAX_BYTES, LOG_BACKUP_COUNT) is added when LOG_TO_FILE is set.
    Calling this again replaces the previous handlers.
    """
    logger = logging.getLogger(settings.LOGGER_NAME)
    _close_handlers(logger)
    logger.setLevel(settings.LOG_LEVEL.upper())

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(settings.LOG_CONSOLE_LEVEL.upper())
    logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        try:
            log_dir = os.path.dirname(settings.LOG_FILE_PATH)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = RotatingFileHandler(
                settings.LOG_FILE_PATH,
                maxBytes=settings.LOG_MAX_BYTES,
                backupCount=settings.LOG_BACKUP_COUNT,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logger.level)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.error(f"Could not open log file {settings.LOG_FILE_PATH}: {e}")

    logger.debug(f"Logging configured ({len(logger.handlers)} handlers)")
    return logger
