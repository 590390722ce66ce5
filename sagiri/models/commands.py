"""
Command models.

This module contains the typed commands produced by the text-command parser
and the callback payload codec.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ListCommand:
    """Show the first page of the sender's watch list."""


@dataclass(frozen=True)
class UpdateCommand:
    """Reload every registered user."""


@dataclass(frozen=True)
class VersionCommand:
    """Show the bot version."""


MessageCommand = Union[ListCommand, UpdateCommand, VersionCommand]


@dataclass(frozen=True)
class Offset:
    """Show page `offset` of a user's watch list."""
    list_subject_id: int
    offset: int


@dataclass(frozen=True)
class Detail:
    """Show one anime of a user's watch list."""
    list_subject_id: int
    entry_subject_id: int


@dataclass(frozen=True)
class Progress:
    """Set the watched episode count of a library entry."""
    list_subject_id: int
    entry_subject_id: str
    list_entry_id: str
    progress: int


QueryCommand = Union[Offset, Detail, Progress]
