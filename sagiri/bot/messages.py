"""
Message templates for bot responses.

This module contains the fixed texts used by the bot commands.
"""

from sagiri import __version__


def get_unknown_command_message() -> str:
    """Get message for unknown command."""
    return "Unknown command."


def get_version_message() -> str:
    """Get message for the version command."""
    return (
        f"<pre>Sagiri-{__version__}\n"
        "For more information, please visit the wiki.</pre>"
    )


def get_non_registered_message(user_id: int) -> str:
    """Get message for a sender with no linked Kitsu account."""
    return f"Non-registered user: {user_id}"


def get_non_registered_alert() -> str:
    """Get callback alert for a sender with no stored token."""
    return "Non-registered user"


def get_update_success_message(user_count: int) -> str:
    """Get message after reloading registered users."""
    return f"<pre>Successful update: {user_count} user(s)</pre>"


def get_progress_success_message(progress: int) -> str:
    """Get message after a progress update."""
    return f"Successful update to episode {progress}"


def get_empty_list_message() -> str:
    return "Nothing in your watch list."
