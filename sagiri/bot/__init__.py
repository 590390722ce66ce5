"""
Bot command handling module.

This module contains all Telegram bot command processing logic including:
- Command and callback payload parsing
- Message templates and views
- Command handlers
- Command routing
"""

from sagiri.bot.context import BotContext
from sagiri.bot.parser import parse_message_command
from sagiri.bot.payload import encode_query_command, parse_query_command
from sagiri.bot.router import process_callback, process_message, process_update

__all__ = [
    "BotContext",
    "encode_query_command",
    "parse_message_command",
    "parse_query_command",
    "process_callback",
    "process_message",
    "process_update",
]
