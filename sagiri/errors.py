"""
Error types raised by the bot.

Parse errors are recovered by the router. Everything else propagates to the
caller of the router, which decides whether to log or drop it.
"""


class SagiriError(Exception):
    """Base class for all bot errors."""


class ParseError(SagiriError):
    """Raised when a text command or callback payload does not match the grammar."""


class InvalidMessageError(SagiriError):
    """Raised when an incoming message lacks its chat or sender."""


class StaleInteractionError(SagiriError):
    """Raised when a callback query no longer references its originating message."""


class CollaboratorError(SagiriError):
    """Raised when an external service call fails."""


class TransportError(CollaboratorError):
    """Telegram Bot API call failed."""


class KitsuApiError(CollaboratorError):
    """Kitsu API call failed or returned an unexpected document."""


class StoreError(CollaboratorError):
    """User database could not be read."""
