"""
Command parsing utilities.

This module handles parsing of bot commands from message text.
"""

from typing import Dict, Optional

from sagiri.errors import ParseError
from sagiri.models.commands import ListCommand, MessageCommand, UpdateCommand, VersionCommand

# Exact, case-sensitive command tokens
MESSAGE_COMMANDS: Dict[str, MessageCommand] = {
    "list": ListCommand(),
    "update": UpdateCommand(),
    "version": VersionCommand(),
}


def parse_message_command(message_text: Optional[str]) -> MessageCommand:
    """
    Parse command from message text.

    Args:
        message_text: Message text from Telegram

    Returns:
        The matching command

    Raises:
        ParseError: If the text is not exactly one of the command tokens

    Examples:
        >>> parse_message_command("list")
        ListCommand()
        >>> parse_message_command("version")
        VersionCommand()
    """
    command = MESSAGE_COMMANDS.get(message_text or "")
    if command is None:
        raise ParseError(f"Unrecognized command: {message_text!r}")
    return command
