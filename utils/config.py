import os
import logging
from typing import Dict, Optional
from dotenv import dotenv_values

# Configure logging
logger = logging.getLogger("DemoBot.Utils.Config")

# Default configuration file (key=value lines, see discord_token.txt.example)
DEFAULT_CONFIG_FILE = "discord_token.txt"

# Keys the bot understands. Only DISCORD_TOKEN is required.
CONFIG_KEYS = ("DISCORD_TOKEN", "DEV_GUILD_ID", "DEMO_CHANNEL_ID", "LOG_LEVEL", "LOG_FILE")

# Seconds between ambient snapshot reports when AMBIENT_TICK_SECONDS is missing or invalid
DEFAULT_SNAPSHOT_INTERVAL = 60


def load_config(config_path: str = DEFAULT_CONFIG_FILE) -> Optional[Dict[str, str]]:
    """Load configuration from a key=value file

    Blank lines and lines starting with '#' are skipped; keys and values are trimmed.
    Environment variables with the same name override values from the file.

    Args:
        config_path (str): Path to the configuration file

    Returns:
        dict: Configuration values, or None if the file does not exist
    """
    if not os.path.isfile(config_path):
        logger.warning(f"Configuration file not found: {config_path}")
        return None

    # dotenv_values reads the file without touching os.environ
    config = {}
    for key, value in dotenv_values(config_path).items():
        if not key:
            continue
        config[key.strip()] = (value or "").strip()

    # Override with environment variables if present
    for key in CONFIG_KEYS:
        if os.getenv(key):
            config[key] = os.getenv(key).strip()
            logger.info(f"Using {key} from environment variables")

    logger.info(f"Configuration loaded from {config_path}")
    return config


def get_value(config: Dict[str, str], key: str) -> Optional[str]:
    """Get the value for a key, or None if it is not set"""
    return config.get(key)


def get_value_or_default(config: Dict[str, str], key: str, default: str) -> str:
    """Get the value for a key, or the default if it is missing or blank"""
    value = get_value(config, key)
    if value is None or not value.strip():
        return default
    return value


def has_value(config: Dict[str, str], key: str) -> bool:
    """Check if the configuration contains a non-empty value for a key"""
    value = config.get(key)
    return value is not None and bool(value.strip())


def get_snapshot_interval(environ: Optional[Dict[str, str]] = None) -> int:
    """Read the ambient snapshot interval from AMBIENT_TICK_SECONDS

    Args:
        environ (dict, optional): Environment to read from (defaults to os.environ)

    Returns:
        int: Interval in seconds (DEFAULT_SNAPSHOT_INTERVAL if missing, not a number or not positive)
    """
    environ = os.environ if environ is None else environ
    raw = environ.get("AMBIENT_TICK_SECONDS")
    if raw is None:
        return DEFAULT_SNAPSHOT_INTERVAL

    try:
        seconds = int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring invalid AMBIENT_TICK_SECONDS value: {raw!r}")
        return DEFAULT_SNAPSHOT_INTERVAL

    if seconds <= 0:
        return DEFAULT_SNAPSHOT_INTERVAL
    return seconds
