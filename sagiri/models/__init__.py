"""
Data models for the application.

This module contains all data models used throughout the application.
"""

from sagiri.models.commands import (
    Detail,
    ListCommand,
    MessageCommand,
    Offset,
    Progress,
    QueryCommand,
    UpdateCommand,
    VersionCommand,
)
from sagiri.models.events import CallbackEvent, IncomingMessage, MessageRef, parse_update
from sagiri.models.kitsu import Anime, LibraryEntry, LibraryPage
from sagiri.models.ui import HTML, InlineButton, Keyboard, Response
from sagiri.models.user import User

__all__ = [
    "Anime",
    "CallbackEvent",
    "Detail",
    "HTML",
    "IncomingMessage",
    "InlineButton",
    "Keyboard",
    "LibraryEntry",
    "LibraryPage",
    "ListCommand",
    "MessageCommand",
    "MessageRef",
    "Offset",
    "Progress",
    "QueryCommand",
    "Response",
    "UpdateCommand",
    "User",
    "VersionCommand",
    "parse_update",
]
