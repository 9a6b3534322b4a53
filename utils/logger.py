import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FILE_NAME = 'weekly_breach_monitor.log'


def setup_logger(log_dir: str = 'logs', log_level: int = logging.INFO, name: Optional[str] = None) -> logging.Logger:
    """
    Set up the application logger with console and file handlers.

    Module loggers are created with ``logging.getLogger(__name__)``, so by
    default the root logger is configured and every module inherits it.

    Args:
        log_dir: Directory to store log files.
        log_level: Logging level (default: INFO).
        name: Logger to configure (default: the root logger).

    Returns:
        Configured logger instance.
    """
    # Create the logs directory if it doesn't exist
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    log_file = os.path.join(log_dir, LOG_FILE_NAME)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter('%(asctime)s - %(levelname)s: %(message)s')

    # Create file handler (rotating to keep log files manageable)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    # Create console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.info(f"Logging setup complete. Log file: {log_file}")

    return logger


def safe_exception_handler(logger: logging.Logger, message: str, exception: Exception) -> None:
    """
    Log an exception as a single error line, with the traceback at debug level.

    Args:
        logger: Logger instance.
        message: Message to log.
        exception: Exception that was raised.
    """
    tb_lines = traceback.format_exception(type(exception), exception, exception.__traceback__)

    logger.error(f"{message}: {exception}")
    logger.debug(f"Traceback for {message}:\n{''.join(tb_lines)}")
