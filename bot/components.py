# Demo Bot - Components and Modals
# This file shows interactive message components: buttons, a string select menu, and a
# feedback modal (pop-up form). The views are registered as persistent views, so clicks
# keep working after the bot restarts because they are matched by their custom_id.
#
# File Interactions:
# - client.py: setup_component_commands() registers /components and the persistent views
# - commands.py: Same response style as the other demo commands

import logging
from typing import List

import discord
from discord import app_commands

logger = logging.getLogger("DemoBot.Components")

# Value -> label for the color select menu
COLOR_OPTIONS = {
    "red": "Red",
    "green": "Green",
    "blue": "Blue",
}


def color_label(values: List[str]) -> str:
    """Label for the first selected value ("(none)" when nothing was selected)"""
    if not values:
        return "(none)"
    value = values[0]
    return COLOR_OPTIONS.get(value, value)


def build_feedback_embed(subject: str, message: str) -> discord.Embed:
    return discord.Embed(
        title=f"Feedback: {subject or '(none)'}",
        description=message or "(none)",
        color=discord.Color.yellow()
    )


class FeedbackModal(discord.ui.Modal, title="Feedback"):
    """Two-field feedback form, opened from /components modal or the Open Modal button"""

    subject = discord.ui.TextInput(
        label="Subject",
        custom_id="subject",
        style=discord.TextStyle.short,
        required=True,
        max_length=100
    )
    message = discord.ui.TextInput(
        label="Message",
        custom_id="message",
        style=discord.TextStyle.paragraph,
        required=True,
        max_length=1000,
        placeholder="Type your feedback here"
    )

    def __init__(self):
        super().__init__(custom_id="modal:feedback")

    async def on_submit(self, interaction: discord.Interaction):
        embed = build_feedback_embed(self.subject.value, self.message.value)
        await interaction.response.send_message("Thanks for your feedback!", embed=embed)
        logger.info(f"Feedback received from {interaction.user} ({interaction.user.id})")

    async def on_error(self, interaction: discord.Interaction, error: Exception):
        logger.error(f"Error handling feedback modal: {error}", exc_info=error)
        if not interaction.response.is_done():
            await interaction.response.send_message("❌ Something went wrong with your feedback.", ephemeral=True)


class ButtonsView(discord.ui.View):
    """Ping / Open Modal / Danger buttons"""

    def __init__(self):
        # timeout=None keeps the view alive so it can be registered as persistent
        super().__init__(timeout=None)

    @discord.ui.button(label="Ping", style=discord.ButtonStyle.primary, custom_id="components:ping")
    async def ping(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.edit_message(content="Pong! ✅")

    @discord.ui.button(label="Open Modal", style=discord.ButtonStyle.secondary, custom_id="components:openmodal")
    async def open_modal(self, interaction: discord.Interaction, button: discord.ui.Button):
        # A modal must be the first response to the click
        await interaction.response.send_modal(FeedbackModal())

    @discord.ui.button(label="Danger", style=discord.ButtonStyle.danger, custom_id="components:danger")
    async def danger(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.edit_message(content="You clicked Danger! ⚠️")


class ColorSelectView(discord.ui.View):
    """Single-choice color menu that stays on the message after each pick"""

    def __init__(self):
        super().__init__(timeout=None)

    @discord.ui.select(
        custom_id="components:select",
        placeholder="Pick a color",
        min_values=1,
        max_values=1,
        options=[discord.SelectOption(label=label, value=value) for value, label in COLOR_OPTIONS.items()]
    )
    async def pick_color(self, interaction: discord.Interaction, select: discord.ui.Select):
        # Passing the view again keeps the menu so the user can change their choice
        await interaction.response.edit_message(content=f"Selected color: {color_label(select.values)}", view=self)


def setup_component_commands(bot):
    """Register the /components command group and the persistent views"""

    components_group = app_commands.Group(
        name="components", description="Buttons, select menus and modals demo"
    )

    @components_group.command(name="show", description="Show a message with interactive buttons")
    async def show(interaction: discord.Interaction):
        await interaction.response.send_message("Component demo: click a button.", view=ButtonsView())

    @components_group.command(name="select", description="Show a string select menu")
    async def select(interaction: discord.Interaction):
        await interaction.response.send_message("Select demo: choose a color.", view=ColorSelectView())

    @components_group.command(name="modal", description="Open a modal with text inputs")
    async def modal(interaction: discord.Interaction):
        await interaction.response.send_modal(FeedbackModal())

    bot.tree.add_command(components_group)

    # Persistent views: clicks on old messages are routed by custom_id
    bot.add_view(ButtonsView())
    bot.add_view(ColorSelectView())

    logger.info("Component commands registered")
