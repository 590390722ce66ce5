"""
Kitsu data models.

Plain views over the JSON:API resources the bot reads.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Anime:
    """Model for a Kitsu anime resource."""
    id: str
    title: str
    slug: Optional[str] = None
    episode_count: Optional[int] = None
    synopsis: Optional[str] = None
    average_rating: Optional[str] = None
    status: Optional[str] = None


@dataclass
class LibraryEntry:
    """Model for a user's library entry (an anime on the watch list)."""
    id: str
    anime_id: str
    progress: int = 0
    status: Optional[str] = None
    rating: Optional[str] = None


@dataclass
class LibraryPage:
    """Model for one page of library entries with the included anime."""
    entries: List[LibraryEntry]
    anime: Dict[str, Anime] = field(default_factory=dict)
    prev_offset: Optional[int] = None
    next_offset: Optional[int] = None
