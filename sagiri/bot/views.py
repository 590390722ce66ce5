"""
Watch list views.

Pure functions turning Kitsu data into a response body and inline keyboard.
"""

import html
from typing import List, Optional

from sagiri.bot.messages import get_empty_list_message, get_progress_success_message
from sagiri.bot.payload import detail_payload, is_numeric_id, offset_payload, progress_payload
from sagiri.models.kitsu import Anime, LibraryEntry, LibraryPage
from sagiri.models.ui import HTML, InlineButton, Keyboard, Response

KITSU_ANIME_URL = "https://kitsu.io/anime"

# How many "watched episode N" buttons the detail view offers
NEXT_EPISODE_BUTTONS = 3

SYNOPSIS_LIMIT = 300

# Telegram rejects callback_data longer than 64 bytes
MAX_CALLBACK_DATA = 64


def _format_progress(progress: int, episode_count: Optional[int]) -> str:
    return f"{progress}/{episode_count if episode_count else '?'}"


def _anime_title(entry: LibraryEntry, page: LibraryPage) -> str:
    anime = page.anime.get(entry.anime_id)
    return anime.title if anime else f"Anime #{entry.anime_id}"


def _truncate(text: str, limit: int = SYNOPSIS_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


def render_library_page(kitsu_id: int, page: LibraryPage) -> Response:
    """
    Render one page of a watch list.

    Args:
        kitsu_id: Kitsu user id the list belongs to
        page: Entries, included anime and neighbour page offsets

    Returns:
        HTML response with one detail button per entry and a navigation row
    """
    if not page.entries:
        lines = [get_empty_list_message()]
    else:
        lines = ["<b>Currently watching</b>", ""]

    keyboard: Keyboard = []
    for entry in page.entries:
        anime = page.anime.get(entry.anime_id)
        title = _anime_title(entry, page)
        episodes = anime.episode_count if anime else None
        lines.append(f"• <b>{html.escape(title)}</b> [{_format_progress(entry.progress, episodes)}]")
        if is_numeric_id(entry.anime_id):
            keyboard.append([InlineButton(title, detail_payload(kitsu_id, int(entry.anime_id)))])

    nav: List[InlineButton] = []
    if page.prev_offset is not None:
        nav.append(InlineButton("« prev", offset_payload(kitsu_id, page.prev_offset)))
    if page.next_offset is not None:
        nav.append(InlineButton("next »", offset_payload(kitsu_id, page.next_offset)))
    if nav:
        keyboard.append(nav)

    return Response(text="\n".join(lines), parse_mode=HTML, keyboard=keyboard)


def _next_episodes(entry: LibraryEntry, anime: Anime) -> List[int]:
    last = entry.progress + NEXT_EPISODE_BUTTONS
    if anime.episode_count:
        last = min(last, anime.episode_count)
    return list(range(entry.progress + 1, last + 1))


def _progress_callback(kitsu_id: int, anime_id: str, entry_id: str, episode: int) -> Optional[str]:
    """Progress callback data, or None if Telegram could not carry it."""
    try:
        payload = progress_payload(kitsu_id, anime_id, entry_id, episode)
    except ValueError:
        return None
    if len(payload.encode("utf-8")) > MAX_CALLBACK_DATA:
        return None
    return payload


def render_entry_detail(kitsu_id: int, entry: LibraryEntry, anime: Anime) -> Response:
    """
    Render the detail view of one library entry.

    The keyboard offers one button per plausible next episode and a way
    back to the first page of the list.
    """
    title = html.escape(anime.title)
    if anime.slug:
        title = f'<a href="{KITSU_ANIME_URL}/{html.escape(anime.slug, quote=True)}">{title}</a>'

    lines = [f"<b>{title}</b>", ""]
    if anime.status:
        lines.append(f"Status: {html.escape(anime.status)}")
    lines.append(f"Progress: {_format_progress(entry.progress, anime.episode_count)}")
    if entry.status:
        lines.append(f"List: {html.escape(entry.status)}")
    if anime.average_rating:
        lines.append(f"Rating: {html.escape(anime.average_rating)}")
    if anime.synopsis:
        lines.extend(["", html.escape(_truncate(anime.synopsis))])

    keyboard: Keyboard = []
    episodes = [
        InlineButton(f"watched ep {episode}", payload)
        for episode in _next_episodes(entry, anime)
        if (payload := _progress_callback(kitsu_id, anime.id, entry.id, episode))
    ]
    if episodes:
        keyboard.append(episodes)
    keyboard.append([InlineButton("back to list", offset_payload(kitsu_id, 0))])

    return Response(text="\n".join(lines), parse_mode=HTML, keyboard=keyboard)


def render_progress_done(kitsu_id: int, anime_id: str, progress: int) -> Response:
    """Render the confirmation shown after a successful progress update."""
    keyboard: Keyboard = []
    if is_numeric_id(anime_id):
        keyboard.append([InlineButton("back to anime", detail_payload(kitsu_id, int(anime_id)))])
    keyboard.append([InlineButton("back to list", offset_payload(kitsu_id, 0))])
    return Response(text=get_progress_success_message(progress), parse_mode=HTML, keyboard=keyboard)
