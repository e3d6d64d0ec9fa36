import os
import logging
import logging.handlers
from typing import Optional

# Console format: one line per record, short timestamp first
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Level names as other libraries (and LOG_LEVEL in the config file) spell them
LEVEL_NAMES = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "information": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}


def resolve_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name such as "Warn" or "Information" into a logging level

    Args:
        name (str): Level name (case-insensitive); unknown or empty names use the default
        default (int): Level returned for unknown names

    Returns:
        int: A logging module level
    """
    if not name:
        return default
    return LEVEL_NAMES.get(name.strip().lower(), default)


def setup_logging(log_level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Configure logging for the demo bot

    Args:
        log_level (int): Logging level (e.g., logging.INFO, logging.DEBUG)
        log_file (str, optional): Also write logs to this file (rotated at 5 MB)
    """
    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # File handler (with rotation)
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    # Create the bot's logger
    bot_logger = logging.getLogger("DemoBot")
    bot_logger.setLevel(log_level)
    bot_logger.propagate = True

    bot_logger.info("Logging system initialized")


def forward_library_logs(log_level: int = logging.INFO) -> logging.Logger:
    """Send discord.py's own log records to the handlers configured by setup_logging()

    discord.py logs under the "discord" logger. Because we start the bot with
    client.start() instead of client.run(), the library does not install its own
    handler, so letting the records propagate to the root logger is enough.

    Args:
        log_level (int): Minimum level for library records

    Returns:
        logging.Logger: The library's logger
    """
    library_logger = logging.getLogger("discord")
    library_logger.setLevel(log_level)
    library_logger.propagate = True

    # The gateway logs every heartbeat/dispatch at DEBUG; keep it quieter than the rest
    logging.getLogger("discord.gateway").setLevel(max(log_level, logging.INFO))
    return library_logger


def get_logger(name: str, log_level: Optional[int] = None) -> logging.Logger:
    """Get a logger with the specified name

    Args:
        name (str): Logger name
        log_level (int, optional): Override default log level for this logger

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(f"DemoBot.{name}")

    if log_level is not None:
        logger.setLevel(log_level)

    return logger
