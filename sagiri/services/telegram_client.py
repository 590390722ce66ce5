"""
Telegram bot client service.

This module provides functionality for sending and editing messages and
answering callback queries via the Telegram Bot API.
"""

import logging
from typing import List, Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Message
from telegram.error import BadRequest, TelegramError
from telegram.request import HTTPXRequest

from sagiri.errors import TransportError
from sagiri.models.ui import Keyboard

logger = logging.getLogger(__name__)


def build_markup(keyboard: Optional[Keyboard]) -> Optional[InlineKeyboardMarkup]:
    """
    Convert keyboard rows into Telegram inline markup.

    Args:
        keyboard: Rows of buttons, or None for no keyboard

    Returns:
        InlineKeyboardMarkup, or None if there is no keyboard
    """
    if keyboard is None:
        return None
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton(button.text, callback_data=button.callback_data) for button in row]
            for row in keyboard
        ]
    )


class TelegramClient:
    """Thin async wrapper over telegram.Bot raising TransportError on failure."""

    def __init__(self, bot_token: str, bot: Optional[Bot] = None):
        # Only connection pools created here are ours to shut down
        self._requests: List[HTTPXRequest] = []
        if bot is None:
            self._requests = [HTTPXRequest(), HTTPXRequest()]
            bot = Bot(
                token=bot_token,
                request=self._requests[0],
                get_updates_request=self._requests[1],
            )
        self._bot = bot

    async def close(self) -> None:
        """Release the HTTP connection pools owned by this client."""
        requests, self._requests = self._requests, []
        for request in requests:
            await request.shutdown()

    async def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        keyboard: Optional[Keyboard] = None,
    ) -> Message:
        """
        Send a new message to a chat.

        Args:
            chat_id: Telegram chat ID
            text: Message text
            parse_mode: None for plain text or "HTML"
            keyboard: Optional inline keyboard rows

        Returns:
            The sent message

        Raises:
            TransportError: If the Bot API call fails
        """
        try:
            message = await self._bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=parse_mode,
                reply_markup=build_markup(keyboard),
            )
        except TelegramError as e:
            logger.error(f"Telegram error sending message to chat {chat_id}: {e}")
            raise TransportError(f"send_message failed: {e}") from e

        logger.info(f"Sent message {message.message_id} to chat {chat_id}")
        return message

    async def edit_inline_keyboard(
        self,
        message_id: int,
        chat_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        keyboard: Optional[Keyboard] = None,
    ) -> Optional[Message]:
        """
        Replace the text and keyboard of a message sent by the bot.

        Returns:
            The edited message, or None if Telegram reported the content as unchanged

        Raises:
            TransportError: If the Bot API call fails
        """
        try:
            result = await self._bot.edit_message_text(
                text=text,
                chat_id=chat_id,
                message_id=message_id,
                parse_mode=parse_mode,
                reply_markup=build_markup(keyboard),
            )
        except BadRequest as e:
            if "not modified" in str(e).lower():
                logger.info(f"Message {message_id} in chat {chat_id} already up to date")
                return None
            logger.error(f"Telegram error editing message {message_id} in chat {chat_id}: {e}")
            raise TransportError(f"edit_message_text failed: {e}") from e
        except TelegramError as e:
            logger.error(f"Telegram error editing message {message_id} in chat {chat_id}: {e}")
            raise TransportError(f"edit_message_text failed: {e}") from e

        logger.info(f"Edited message {message_id} in chat {chat_id}")
        return result if isinstance(result, Message) else None

    async def answer_callback(
        self,
        callback_id: str,
        text: Optional[str] = None,
        show_alert: Optional[bool] = None,
    ) -> None:
        """
        Acknowledge a callback query, optionally with an alert.

        Raises:
            TransportError: If the Bot API call fails
        """
        try:
            await self._bot.answer_callback_query(
                callback_query_id=callback_id,
                text=text,
                show_alert=show_alert,
            )
        except TelegramError as e:
            logger.error(f"Telegram error answering callback {callback_id}: {e}")
            raise TransportError(f"answer_callback_query failed: {e}") from e
