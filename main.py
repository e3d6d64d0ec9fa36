# Demo Bot - Entry Point
# This file serves as the main entry point for the demo bot.
# It sets up logging, reads the configuration file (discord_token.txt),
# initializes the bot client, and keeps the Discord connection open until Ctrl+C.
#
# How to run:
# 1) Create discord_token.txt (see discord_token.txt.example) with:
#    - DISCORD_TOKEN    : your bot token
#    - DEV_GUILD_ID     : a guild where the bot is installed (commands sync there instantly)
#    - DEMO_CHANNEL_ID  : optional channel to demonstrate sending directly to a channel
# 2) Start the bot: python main.py
# 3) In Discord, try /hello, /demo text, /ambient info, /components show, /roles demo ...
#
# File Interactions:
# - bot/client.py: Imports and instantiates DemoBotClient
# - utils/config.py: Reads discord_token.txt and AMBIENT_TICK_SECONDS
# - utils/logging.py: Console logging and discord.py log forwarding

import asyncio  # For running asynchronous code
import sys

import colorama  # Makes ANSI colors work on Windows consoles too

from bot.client import DemoBotClient
from utils.config import DEFAULT_CONFIG_FILE, get_snapshot_interval, get_value, has_value, load_config
from utils.logging import forward_library_logs, get_logger, resolve_level, setup_logging

logger = get_logger("Main")


async def main(config_path: str = DEFAULT_CONFIG_FILE) -> int:
    """The main function that starts the bot

    Returns:
        int: Process exit code (1 when the configuration is missing)
    """
    config = load_config(config_path)
    if config is None:
        logger.error(f"Configuration file '{config_path}' not found. "
                     f"Please create it based on {DEFAULT_CONFIG_FILE}.example")
        return 1

    if not has_value(config, "DISCORD_TOKEN"):
        logger.error(f"DISCORD_TOKEN not found in {config_path}. Please set your bot token.")
        return 1

    # LOG_LEVEL makes the console more or less chatty; LOG_FILE also writes a rotating log file
    log_level = resolve_level(get_value(config, "LOG_LEVEL"))
    setup_logging(log_level, log_file=get_value(config, "LOG_FILE") or None)
    forward_library_logs(log_level)

    # Create an instance of our Discord bot client
    client = DemoBotClient(
        dev_guild_id=get_value(config, "DEV_GUILD_ID") or None,
        demo_channel_id=get_value(config, "DEMO_CHANNEL_ID") or None,
        snapshot_interval=get_snapshot_interval()
    )

    # Connect to Discord; closing the client also stops the snapshot timer
    async with client:
        await client.start(config["DISCORD_TOKEN"])
    return 0


def run() -> None:
    """Console entry point: set up the console, run the bot, exit on Ctrl+C"""
    colorama.just_fix_windows_console()
    setup_logging()
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        # Ctrl+C: asyncio.run cancels the bot task and the client closes on the way out
        logger.info("Received interrupt; exiting cleanly.")
        exit_code = 0
    sys.exit(exit_code)


# This is the entry point of the program
# It only runs if this file is executed directly (not imported by another file)
if __name__ == "__main__":
    run()
