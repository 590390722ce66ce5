"""
Collaborators shared by the command handlers.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    # Avoid importing the HTTP and database stacks for type hints only
    from sagiri.services.kitsu_client import KitsuApi
    from sagiri.services.telegram_client import TelegramClient
    from sagiri.services.user_store import UserStore


@dataclass
class BotContext:
    """The Telegram client, Kitsu client and user store for one bot."""
    telegram: "TelegramClient"
    kitsu: "KitsuApi"
    users: "UserStore"
