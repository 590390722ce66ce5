"""
User model.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Model for a registered Telegram user linked to a Kitsu account."""
    telegram_id: int
    kitsu_id: int
    token: Optional[str] = None
