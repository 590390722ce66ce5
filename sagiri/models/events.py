"""
Incoming event models.

This module turns raw Telegram update dictionaries (as delivered to the
webhook) into the two events the router understands.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass
class MessageRef:
    """Reference to a message previously sent by the bot."""
    message_id: int
    chat_id: int


@dataclass
class IncomingMessage:
    """Model for a chat message sent to the bot."""
    chat_id: Optional[int]
    sender_id: Optional[int]
    text: Optional[str] = None


@dataclass
class CallbackEvent:
    """Model for an inline button press."""
    callback_id: str
    sender_id: int
    message: Optional[MessageRef] = None
    data: Optional[str] = None


IncomingEvent = Union[IncomingMessage, CallbackEvent]


def _message_from_dict(message: Dict[str, Any]) -> IncomingMessage:
    chat = message.get("chat") or {}
    sender = message.get("from") or {}
    return IncomingMessage(
        chat_id=chat.get("id"),
        sender_id=sender.get("id"),
        text=message.get("text"),
    )


def _callback_from_dict(query: Dict[str, Any]) -> CallbackEvent:
    message_ref = None
    message = query.get("message")
    # Telegram omits the message when it is too old to be edited
    if message and "message_id" in message and (message.get("chat") or {}).get("id") is not None:
        message_ref = MessageRef(
            message_id=message["message_id"],
            chat_id=message["chat"]["id"],
        )
    return CallbackEvent(
        callback_id=str(query["id"]),
        sender_id=query["from"]["id"],
        message=message_ref,
        data=query.get("data"),
    )


def parse_update(update: Dict[str, Any]) -> Optional[IncomingEvent]:
    """
    Build an incoming event from a Telegram update.

    Args:
        update: Decoded Telegram update JSON

    Returns:
        IncomingMessage, CallbackEvent, or None if the update carries neither

    Raises:
        KeyError: If a callback query lacks its id or sender
    """
    if "callback_query" in update:
        return _callback_from_dict(update["callback_query"])
    if "message" in update:
        return _message_from_dict(update["message"])
    return None
