"""
Services layer for external collaborators.

This module contains the clients the command handlers talk to:
- Telegram client for sending and editing messages
- Kitsu client for reading and updating watch lists
- User store for registered users and their tokens
"""

from sagiri.services.kitsu_client import KitsuApi
from sagiri.services.telegram_client import TelegramClient
from sagiri.services.user_store import UserStore

__all__ = [
    "KitsuApi",
    "TelegramClient",
    "UserStore",
]
