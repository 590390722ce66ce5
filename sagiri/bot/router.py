"""
Command routing logic.

This module routes incoming messages and callback queries to their handlers.
Routing is an exhaustive match over the command types; a new command type
without a handler fails type checking at `assert_never`.
"""

import logging
from typing import Any, Dict, assert_never

from sagiri.bot.commands import (
    handle_detail_query,
    handle_list_command,
    handle_offset_query,
    handle_progress_query,
    handle_unknown_command,
    handle_update_command,
    handle_version_command,
)
from sagiri.bot.context import BotContext
from sagiri.bot.parser import parse_message_command
from sagiri.bot.payload import parse_query_command
from sagiri.errors import InvalidMessageError, ParseError, StaleInteractionError
from sagiri.models.commands import (
    Detail,
    ListCommand,
    Offset,
    Progress,
    UpdateCommand,
    VersionCommand,
)
from sagiri.models.events import CallbackEvent, IncomingMessage, parse_update

logger = logging.getLogger(__name__)


async def process_message(ctx: BotContext, message: IncomingMessage) -> None:
    """
    Process a chat message and route it to the matching command handler.

    Args:
        ctx: Bot collaborators
        message: Incoming chat message

    Raises:
        InvalidMessageError: If the message has no chat or sender
        CollaboratorError: If a Telegram, Kitsu or database call fails
    """
    if message.chat_id is None or message.sender_id is None:
        raise InvalidMessageError("Outdated/Invalid Message")

    chat_id = message.chat_id
    sender_id = message.sender_id
    text = message.text or ""

    logger.info(f"Received message {text!r} from {sender_id} in {chat_id}")

    try:
        command = parse_message_command(text)
    except ParseError:
        await handle_unknown_command(ctx, chat_id)
        return

    match command:
        case ListCommand():
            await handle_list_command(ctx, sender_id, chat_id)
        case UpdateCommand():
            await handle_update_command(ctx, chat_id)
        case VersionCommand():
            await handle_version_command(ctx, chat_id)
        case _:
            assert_never(command)


async def process_callback(ctx: BotContext, query: CallbackEvent) -> None:
    """
    Process an inline button press and route it to the matching query handler.

    Args:
        ctx: Bot collaborators
        query: Incoming callback query

    Raises:
        StaleInteractionError: If the query no longer references its message
        CollaboratorError: If a Telegram, Kitsu or database call fails
    """
    data = query.data or ""

    logger.info(f"Received query {data!r} from {query.sender_id}")

    if query.message is None:
        raise StaleInteractionError("Outdated Message.")

    message_id = query.message.message_id
    chat_id = query.message.chat_id

    try:
        command = parse_query_command(data)
    except ParseError as e:
        logger.warning(f"Unparseable callback data from {query.sender_id}: {e}")
        await handle_unknown_command(ctx, chat_id)
        await ctx.telegram.answer_callback(query.callback_id)
        return

    match command:
        case Offset(list_subject_id=kitsu_id, offset=offset):
            await handle_offset_query(ctx, message_id, chat_id, kitsu_id, offset, query.callback_id)
        case Detail(list_subject_id=kitsu_id, entry_subject_id=anime_id):
            await handle_detail_query(ctx, message_id, chat_id, kitsu_id, anime_id, query.callback_id)
        case Progress(
            list_subject_id=kitsu_id,
            entry_subject_id=anime_id,
            list_entry_id=entry_id,
            progress=progress,
        ):
            await handle_progress_query(
                ctx,
                message_id,
                chat_id,
                query.sender_id,
                kitsu_id,
                anime_id,
                progress,
                entry_id,
                query.callback_id,
            )
        case _:
            assert_never(command)


async def process_update(ctx: BotContext, update: Dict[str, Any]) -> bool:
    """
    Process a raw Telegram update.

    Args:
        ctx: Bot collaborators
        update: Decoded Telegram update JSON

    Returns:
        True if the update was routed, False if it carried nothing to handle
    """
    event = parse_update(update)

    if isinstance(event, IncomingMessage):
        await process_message(ctx, event)
    elif isinstance(event, CallbackEvent):
        await process_callback(ctx, event)
    else:
        logger.info(f"Ignoring update {update.get('update_id')} with no message or callback query")
        return False
    return True
