# Demo Bot - Command Handlers
# This file sets up the slash commands users can type in Discord to try the bot out.
# It covers an ungrouped command (/hello), grouped subcommands (/demo, /messages),
# commands with typed options and choices (/ephemeral), and reading cached data (/ambient).
# The embeds and texts are built by plain functions so they can be checked without Discord.
#
# File Interactions:
# - client.py: Commands are registered here through setup_commands()
# - services/ambient_cache.py: /ambient info reads the cached collections
# - components.py, guild_commands.py, ratelimit.py: The remaining command groups

import logging  # Import the logging module to keep track of what's happening
import math     # NaN marks an invalid calculation
from typing import Optional

import discord
from discord import app_commands

# Set up a logger to record information about command usage
logger = logging.getLogger("DemoBot.Commands")

PUBLIC = "🌍 Public (everyone can see this)"
PRIVATE = "🔒 Private (only you can see this)"


def build_hello_embed() -> discord.Embed:
    return discord.Embed(
        title="Hello from the demo bot",
        description="This is an example embed from the /hello command.",
        color=discord.Color.green()
    )


def build_demo_embed() -> discord.Embed:
    return discord.Embed(
        title="Demo Embed",
        description="This embed was sent from /demo embed.",
        color=discord.Color.blue()
    )


def build_fields_embed() -> discord.Embed:
    """Simple embed with two inline fields and one full-width field"""
    embed = discord.Embed(
        title="📨 Embed Demo",
        description="This is a rich embed message with multiple fields",
        color=discord.Color.blue()
    )
    embed.add_field(name="Field 1", value="Value 1", inline=True)
    embed.add_field(name="Field 2", value="Value 2", inline=True)
    embed.add_field(name="Field 3", value="Value 3", inline=False)
    return embed


def build_complex_embed() -> discord.Embed:
    """Embed showing markdown, inline rows, links and code blocks"""
    embed = discord.Embed(
        title="🎨 Complex Embed Demo",
        description="This embed demonstrates multiple embed features available in discord.py",
        color=discord.Color.purple()
    )
    embed.add_field(name="Text Formatting", value="**Bold**, *italic*, __underline__, ~~strikethrough~~", inline=False)
    embed.add_field(name="Inline Field 1", value="These fields", inline=True)
    embed.add_field(name="Inline Field 2", value="appear side by side", inline=True)
    embed.add_field(name="Inline Field 3", value="in a row", inline=True)
    embed.add_field(name="Links", value="[Click here](https://discord.com)", inline=False)
    embed.add_field(name="Code Blocks", value="`inline code` or ```multiline code```", inline=False)
    return embed


def build_ephemeral_embed(message: str, title: Optional[str], is_ephemeral: bool) -> discord.Embed:
    embed = discord.Embed(
        title=title or "Ephemeral Demo",
        description=message,
        color=discord.Color.yellow() if is_ephemeral else discord.Color.green()
    )
    embed.add_field(name="Visibility", value=PRIVATE if is_ephemeral else PUBLIC, inline=False)
    embed.add_field(name="Ephemeral Parameter", value=str(is_ephemeral), inline=True)

    if title and title.strip():
        embed.add_field(name="Title Provided", value=title, inline=True)
    return embed


def calculate(num1: float, num2: float, operation: str) -> float:
    """Apply a named operation; returns NaN for unknown operations and division by zero"""
    op = operation.lower()
    if op in ("add", "+"):
        return num1 + num2
    if op in ("subtract", "-"):
        return num1 - num2
    if op in ("multiply", "*"):
        return num1 * num2
    if op in ("divide", "/"):
        return num1 / num2 if num2 != 0 else math.nan
    return math.nan


def format_number(value: float) -> str:
    # 3.0 shows as "3", 2.5 stays "2.5"
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return str(value)


def build_calculation_embed(num1: float, num2: float, operation: str, is_ephemeral: bool) -> discord.Embed:
    result = calculate(num1, num2, operation)
    if math.isnan(result):
        result_text = "❌ Invalid operation or division by zero"
    else:
        result_text = f"✅ Result: **{format_number(result)}**"

    embed = discord.Embed(
        title="🧮 Calculator",
        description=result_text,
        color=discord.Color.blue() if is_ephemeral else discord.Color.purple()
    )
    embed.add_field(name="Expression", value=f"{format_number(num1)} {operation} {format_number(num2)}", inline=False)
    embed.add_field(name="Visibility", value="🔒 Private" if is_ephemeral else "🌍 Public", inline=True)
    return embed


def build_greeting(name: str, style: str) -> str:
    style = style.lower()
    if style == "formal":
        return f"Good day, {name}. It is a pleasure to make your acquaintance."
    if style == "casual":
        return f"Hey {name}, what's up?"
    if style == "enthusiastic":
        return f"OMG HI {name.upper()}!!! SO HAPPY TO SEE YOU!!! 🎉🎊✨"
    return f"Hello, {name}!"


def build_greeting_embed(name: str, style: str, is_ephemeral: bool) -> discord.Embed:
    embed = discord.Embed(
        title="👋 Greeting",
        description=build_greeting(name, style),
        color=discord.Color.teal()
    )
    embed.add_field(name="Style", value=style, inline=True)
    embed.add_field(name="Visibility", value="🔒 Private" if is_ephemeral else "🌍 Public", inline=True)
    return embed


def build_ambient_embed(cache) -> discord.Embed:
    """Raw cached counts (duplicates included) as an embed"""
    description = (
        f"Guilds: {len(cache.guilds)}\n"
        f"Channels: {len(cache.channels)}\n"
        f"Members: {len(cache.members)}\n"
        f"Users: {len(cache.users)}"
    )
    return discord.Embed(title="Ambient Data Snapshot", description=description, color=discord.Color.purple())


def setup_commands(bot, ambient_cache):
    """Set up the demo slash commands on the bot's command tree"""
    # This function adds all the commands to the bot when the bot starts up

    # Ungrouped command: users type '/hello'
    @bot.tree.command(name="hello", description="Say hello and send an example embed reply")
    async def hello(interaction: discord.Interaction):
        await interaction.response.send_message("Hello! 👋", embed=build_hello_embed())

    # /demo text and /demo embed
    demo_group = app_commands.Group(name="demo", description="Demo commands for text and embed replies")

    @demo_group.command(name="text", description="Send a plain text reply")
    async def demo_text(interaction: discord.Interaction):
        await interaction.response.send_message("This is a plain text reply from /demo text.")

    @demo_group.command(name="embed", description="Send an embed reply")
    async def demo_embed(interaction: discord.Interaction):
        await interaction.response.send_message("Here is an embed example:", embed=build_demo_embed())

    # /messages text, /messages embed and /messages complex
    messages_group = app_commands.Group(name="messages", description="Message and embed demo commands")

    @messages_group.command(name="text", description="Send a simple text message")
    async def messages_text(interaction: discord.Interaction):
        await interaction.response.send_message("📝 This is a simple text message response.")

    @messages_group.command(name="embed", description="Send a message with an embed")
    async def messages_embed(interaction: discord.Interaction):
        await interaction.response.send_message("Here's an embed:", embed=build_fields_embed())

    @messages_group.command(name="complex", description="Send a complex embed with multiple features")
    async def messages_complex(interaction: discord.Interaction):
        await interaction.response.send_message(
            "Complex embed with multiple features:", embed=build_complex_embed(), ephemeral=False
        )

    # /ephemeral: options decide who can see the reply
    ephemeral_group = app_commands.Group(
        name="ephemeral", description="Demonstrates ephemeral (private) vs public responses"
    )

    @ephemeral_group.command(name="demo", description="Send a message with optional ephemeral flag")
    @app_commands.describe(
        message="The message to send",
        title="Optional title for the embed",
        ephemeral="Make the response visible only to you (default: false)"
    )
    async def ephemeral_demo(interaction: discord.Interaction, message: str,
                             title: Optional[str] = None, ephemeral: Optional[bool] = None):
        is_ephemeral = bool(ephemeral)
        await interaction.response.send_message(
            "Here's your message:", embed=build_ephemeral_embed(message, title, is_ephemeral), ephemeral=is_ephemeral
        )

    @ephemeral_group.command(name="calculate", description="Perform a simple calculation and choose visibility")
    @app_commands.describe(
        number1="First number",
        number2="Second number",
        operation="Operation to perform",
        ephemeral="Make the response visible only to you (default: true)"
    )
    async def ephemeral_calculate(interaction: discord.Interaction, number1: float, number2: float,
                                  operation: Optional[str] = None, ephemeral: Optional[bool] = None):
        # Calculations are private unless the user asks otherwise
        is_ephemeral = True if ephemeral is None else ephemeral
        embed = build_calculation_embed(number1, number2, operation or "add", is_ephemeral)
        await interaction.response.send_message("Calculation result:", embed=embed, ephemeral=is_ephemeral)

    @ephemeral_group.command(name="greet", description="Send a greeting in different styles")
    @app_commands.describe(
        name="Name to greet",
        style="Greeting style",
        ephemeral="Make the response visible only to you (default: false)"
    )
    @app_commands.choices(style=[
        app_commands.Choice(name="Formal", value="formal"),
        app_commands.Choice(name="Casual", value="casual"),
        app_commands.Choice(name="Enthusiastic", value="enthusiastic"),
    ])
    async def ephemeral_greet(interaction: discord.Interaction, name: str,
                              style: Optional[app_commands.Choice[str]] = None, ephemeral: Optional[bool] = None):
        greeting_style = style.value if style is not None else "casual"
        is_ephemeral = bool(ephemeral)
        await interaction.response.send_message(
            "Here's your greeting:", embed=build_greeting_embed(name, greeting_style, is_ephemeral),
            ephemeral=is_ephemeral
        )

    # /ambient info: counts straight from the library's cache
    ambient_group = app_commands.Group(
        name="ambient", description="Demonstrates reading the library's cached data"
    )

    @ambient_group.command(name="info", description="Show cached counts for guilds/channels/members/users")
    async def ambient_info(interaction: discord.Interaction):
        await interaction.response.send_message(
            "Ambient data (cached snapshot):", embed=build_ambient_embed(ambient_cache), ephemeral=True
        )

    for group in (demo_group, messages_group, ephemeral_group, ambient_group):
        bot.tree.add_command(group)

    # Log a message that the commands have been set up successfully
    # This helps with troubleshooting if something goes wrong
    logger.info("Demo slash commands registered")
