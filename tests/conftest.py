"""Shared fixtures: fake collaborators and sample Kitsu data."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sagiri.bot.context import BotContext
from sagiri.models.kitsu import Anime, LibraryEntry, LibraryPage
from sagiri.models.user import User
from sagiri.services.user_store import UserStore


@pytest.fixture
def anime():
    return Anime(
        id="12",
        title="Cowboy Bebop",
        slug="cowboy-bebop",
        episode_count=26,
        synopsis="In the year 2071, humanity has colonized several of the planets.",
        average_rating="82.6",
        status="finished",
    )


@pytest.fixture
def entry():
    return LibraryEntry(id="555", anime_id="12", progress=3, status="current")


@pytest.fixture
def page(anime, entry):
    other = Anime(id="7442", title="Attack on Titan", slug="attack-on-titan", episode_count=25)
    return LibraryPage(
        entries=[entry, LibraryEntry(id="556", anime_id="7442", progress=10, status="current")],
        anime={"12": anime, "7442": other},
        prev_offset=2,
        next_offset=4,
    )


@pytest.fixture
def registered_users():
    return [
        User(telegram_id=1001, kitsu_id=42, token="tok-1001"),
        User(telegram_id=1002, kitsu_id=7, token=None),
    ]


@pytest.fixture
def users(registered_users):
    return UserStore(loader=lambda: list(registered_users), users=registered_users)


@pytest.fixture
def telegram():
    """Fake Telegram client; child mocks share one call log for ordering checks."""
    client = MagicMock()
    client.send_message = AsyncMock(return_value=MagicMock(message_id=900))
    client.edit_inline_keyboard = AsyncMock(return_value=MagicMock(message_id=800))
    client.answer_callback = AsyncMock(return_value=None)
    client.close = AsyncMock(return_value=None)
    return client


@pytest.fixture
def kitsu(page, entry, anime):
    client = MagicMock()
    client.fetch_entries = AsyncMock(return_value=page)
    client.get_entry_detail = AsyncMock(return_value=(entry, anime))
    client.update_entry_progress = AsyncMock(return_value=None)
    return client


@pytest.fixture
def ctx(telegram, kitsu, users):
    return BotContext(telegram=telegram, kitsu=kitsu, users=users)
