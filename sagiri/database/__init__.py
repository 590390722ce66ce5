"""
Database access for registered users.
"""

from sagiri.database.repository import get_users

__all__ = ["get_users"]
