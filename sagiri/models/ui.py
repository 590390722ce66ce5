"""
Outbound UI models.

Responses are built by the views and handed to the Telegram client.
"""

from dataclasses import dataclass
from typing import List, Optional

HTML = "HTML"


@dataclass(frozen=True)
class InlineButton:
    """Model for an inline keyboard button."""
    text: str
    callback_data: Optional[str] = None


Keyboard = List[List[InlineButton]]


@dataclass
class Response:
    """Model for a message body with optional markup and keyboard."""
    text: str
    parse_mode: Optional[str] = None
    keyboard: Optional[Keyboard] = None
