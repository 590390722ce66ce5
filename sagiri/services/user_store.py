"""
Registered user store.

Keeps an in-process cache of registered users, reloaded from the database
on demand. Lookups are synchronous reads of the cache.
"""

import asyncio
import logging
import threading
from typing import Callable, Dict, List, Optional

from sagiri.database.repository import get_users
from sagiri.errors import StoreError
from sagiri.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """Read-through cache of users keyed by Telegram user id."""

    def __init__(self, loader: Callable[[], List[User]] = get_users, users: Optional[List[User]] = None):
        self._loader = loader
        self._lock = threading.Lock()
        self._users: Dict[int, User] = {user.telegram_id: user for user in users or []}

    def _get(self, telegram_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(telegram_id)

    def get_subject_id(self, telegram_id: int) -> Optional[int]:
        """Return the Kitsu user id linked to a Telegram user, if any."""
        user = self._get(telegram_id)
        return user.kitsu_id if user else None

    def get_token(self, telegram_id: int, kitsu_id: int) -> Optional[str]:
        """
        Return the sender's Kitsu token for the given Kitsu account.

        A sender can only act on their own list, so the token is withheld
        when the stored Kitsu id differs from `kitsu_id`.
        """
        user = self._get(telegram_id)
        if user is None or user.kitsu_id != kitsu_id:
            return None
        return user.token

    async def refresh_all(self) -> List[User]:
        """
        Reload every registered user from the database.

        Returns:
            The users now in the cache

        Raises:
            StoreError: If the database cannot be read
        """
        try:
            users = await asyncio.to_thread(self._loader)
        except Exception as e:
            raise StoreError(f"Failed to load users: {e}") from e

        with self._lock:
            self._users = {user.telegram_id: user for user in users}
        logger.info(f"Reloaded {len(users)} registered users")
        return users
