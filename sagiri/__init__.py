"""
Sagiri - a Telegram bot for browsing and updating a Kitsu anime watch list.
"""

__version__ = "0.4.0"
