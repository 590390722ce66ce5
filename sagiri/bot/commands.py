"""
Bot command handlers.

This module contains all individual command handler functions. Each handler
awaits its collaborators strictly in order; the first failure propagates and
nothing after it runs, so a failed fetch never edits a message and a failed
edit never acknowledges a callback.
"""

import logging

from sagiri.bot.context import BotContext
from sagiri.bot.messages import (
    get_non_registered_alert,
    get_non_registered_message,
    get_unknown_command_message,
    get_update_success_message,
    get_version_message,
)
from sagiri.bot.views import render_entry_detail, render_library_page, render_progress_done
from sagiri.models.ui import HTML

logger = logging.getLogger(__name__)


async def handle_unknown_command(ctx: BotContext, chat_id: int) -> None:
    """Handle unrecognized commands."""
    await ctx.telegram.send_message(chat_id, get_unknown_command_message())


async def handle_version_command(ctx: BotContext, chat_id: int) -> None:
    """Handle the version command."""
    await ctx.telegram.send_message(chat_id, get_version_message(), parse_mode=HTML)


async def handle_list_command(ctx: BotContext, sender_id: int, chat_id: int) -> None:
    """
    Handle the list command - send the first page of the sender's watch list.

    Args:
        ctx: Bot collaborators
        sender_id: Telegram user ID of the sender
        chat_id: Telegram chat ID
    """
    kitsu_id = ctx.users.get_subject_id(sender_id)
    if kitsu_id is None:
        logger.info(f"List requested by non-registered user {sender_id}")
        await ctx.telegram.send_message(chat_id, get_non_registered_message(sender_id))
        return

    page = await ctx.kitsu.fetch_entries(kitsu_id, 0)
    response = render_library_page(kitsu_id, page)
    await ctx.telegram.send_message(
        chat_id, response.text, parse_mode=response.parse_mode, keyboard=response.keyboard
    )


async def handle_update_command(ctx: BotContext, chat_id: int) -> None:
    """Handle the update command - reload all registered users."""
    users = await ctx.users.refresh_all()
    await ctx.telegram.send_message(chat_id, get_update_success_message(len(users)), parse_mode=HTML)


async def handle_offset_query(
    ctx: BotContext,
    message_id: int,
    chat_id: int,
    kitsu_id: int,
    offset: int,
    callback_id: str,
) -> None:
    """
    Handle a page button - show another page of the list in place.

    Args:
        ctx: Bot collaborators
        message_id: Message holding the keyboard
        chat_id: Telegram chat ID
        kitsu_id: Kitsu user id the list belongs to
        offset: Page index
        callback_id: Callback query to acknowledge
    """
    page = await ctx.kitsu.fetch_entries(kitsu_id, offset)
    response = render_library_page(kitsu_id, page)
    await ctx.telegram.edit_inline_keyboard(
        message_id, chat_id, response.text, parse_mode=response.parse_mode, keyboard=response.keyboard
    )
    await ctx.telegram.answer_callback(callback_id)


async def handle_detail_query(
    ctx: BotContext,
    message_id: int,
    chat_id: int,
    kitsu_id: int,
    anime_id: int,
    callback_id: str,
) -> None:
    """Handle an anime button - show the entry detail in place."""
    entry, anime = await ctx.kitsu.get_entry_detail(kitsu_id, anime_id)
    response = render_entry_detail(kitsu_id, entry, anime)
    await ctx.telegram.edit_inline_keyboard(
        message_id, chat_id, response.text, parse_mode=response.parse_mode, keyboard=response.keyboard
    )
    await ctx.telegram.answer_callback(callback_id)


async def handle_progress_query(
    ctx: BotContext,
    message_id: int,
    chat_id: int,
    sender_id: int,
    kitsu_id: int,
    anime_id: str,
    progress: int,
    entry_id: str,
    callback_id: str,
) -> None:
    """
    Handle an episode button - update the entry progress on Kitsu.

    Senders without a stored token get an alert and the message is left as is.
    """
    token = ctx.users.get_token(sender_id, kitsu_id)
    if token is None:
        logger.info(f"Progress update by non-registered user {sender_id} on kitsu user {kitsu_id}")
        await ctx.telegram.answer_callback(callback_id, text=get_non_registered_alert(), show_alert=True)
        return

    await ctx.kitsu.update_entry_progress(token, entry_id, progress, anime_id)
    response = render_progress_done(kitsu_id, anime_id, progress)
    await ctx.telegram.edit_inline_keyboard(
        message_id, chat_id, response.text, parse_mode=response.parse_mode, keyboard=response.keyboard
    )
    await ctx.telegram.answer_callback(callback_id)
