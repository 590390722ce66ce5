"""
User repository.

The `users` table maps a Telegram user to a Kitsu account:

    telegram_id BIGINT PRIMARY KEY, kitsu_id BIGINT NOT NULL, token TEXT
"""

import logging
from typing import List

from sagiri.database.connection import get_cursor
from sagiri.models.user import User

logger = logging.getLogger(__name__)


def get_users() -> List[User]:
    """
    Get all registered users from the database.

    Returns:
        List of users linked to a Kitsu account
    """
    with get_cursor(readonly=True) as cursor:
        cursor.execute("SELECT telegram_id, kitsu_id, token FROM users")
        rows = cursor.fetchall()

    users = [
        User(telegram_id=int(telegram_id), kitsu_id=int(kitsu_id), token=token or None)
        for telegram_id, kitsu_id, token in rows
        if kitsu_id is not None
    ]
    logger.info(f"Retrieved {len(users)} registered users from database")
    return users
