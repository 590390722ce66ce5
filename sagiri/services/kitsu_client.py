"""
Kitsu API client using aiohttp.

Reads a user's library (watch list) and updates entry progress through the
Kitsu JSON:API endpoints.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import aiohttp

from sagiri.errors import KitsuApiError
from sagiri.models.kitsu import Anime, LibraryEntry, LibraryPage

logger = logging.getLogger(__name__)

JSON_API = "application/vnd.api+json"


def _parse_anime(resource: Dict[str, Any]) -> Anime:
    attributes = resource.get("attributes") or {}
    titles = attributes.get("titles") or {}
    title = attributes.get("canonicalTitle") or titles.get("en") or titles.get("en_jp") or f"Anime #{resource['id']}"
    return Anime(
        id=str(resource["id"]),
        title=title,
        slug=attributes.get("slug"),
        episode_count=attributes.get("episodeCount"),
        synopsis=attributes.get("synopsis"),
        average_rating=attributes.get("averageRating"),
        status=attributes.get("status"),
    )


def _parse_entry(resource: Dict[str, Any]) -> LibraryEntry:
    attributes = resource.get("attributes") or {}
    anime = ((resource.get("relationships") or {}).get("anime") or {}).get("data") or {}
    if "id" not in anime:
        raise KitsuApiError(f"Library entry {resource.get('id')} has no anime relationship")
    rating = attributes.get("ratingTwenty")
    return LibraryEntry(
        id=str(resource["id"]),
        anime_id=str(anime["id"]),
        progress=attributes.get("progress") or 0,
        status=attributes.get("status"),
        rating=str(rating) if rating is not None else None,
    )


def _included_anime(document: Dict[str, Any]) -> Dict[str, Anime]:
    return {
        str(resource["id"]): _parse_anime(resource)
        for resource in document.get("included") or []
        if resource.get("type") == "anime"
    }


def _link_offset(link: Optional[str]) -> Optional[int]:
    """Extract page[offset] from a JSON:API pagination link."""
    if not link:
        return None
    values = parse_qs(urlsplit(link).query).get("page[offset]")
    if not values:
        return 0
    try:
        return int(values[0])
    except ValueError:
        logger.warning(f"Ignoring malformed pagination link: {link}")
        return None


class KitsuApi:
    """Async Kitsu API client."""

    def __init__(self, base_url: str, page_size: int = 10, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = {"Accept": JSON_API}
        if body is not None:
            headers["Content-Type"] = JSON_API
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(
                    method,
                    url,
                    params=params,
                    data=json.dumps(body) if body is not None else None,
                    headers=headers,
                ) as resp:
                    if resp.status >= 400:
                        text = await resp.text()
                        raise KitsuApiError(f"{method} {path} returned {resp.status}: {text[:200]}")
                    return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise KitsuApiError(f"{method} {path} failed: {e}") from e

    def _page_index(self, offset: Optional[int]) -> Optional[int]:
        return None if offset is None else offset // self.page_size

    async def fetch_entries(self, kitsu_id: int, offset: int) -> LibraryPage:
        """
        Fetch one page of a user's currently watched anime.

        Args:
            kitsu_id: Kitsu user id
            offset: Page index, 0 for the first page

        Returns:
            LibraryPage with neighbour page indices taken from the response links

        Raises:
            KitsuApiError: If the request fails or the document is malformed
        """
        params = {
            "filter[userId]": str(kitsu_id),
            "filter[kind]": "anime",
            "filter[status]": "current",
            "include": "anime",
            "sort": "-updatedAt",
            "page[limit]": str(self.page_size),
            "page[offset]": str(offset * self.page_size),
        }
        logger.info(f"Fetching library page {offset} for kitsu user {kitsu_id}")
        document = await self._request("GET", "/library-entries", params=params)

        try:
            links = document.get("links") or {}
            page = LibraryPage(
                entries=[_parse_entry(resource) for resource in document["data"]],
                anime=_included_anime(document),
                prev_offset=self._page_index(_link_offset(links.get("prev"))),
                next_offset=self._page_index(_link_offset(links.get("next"))),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise KitsuApiError(f"Malformed library document: {e}") from e

        logger.info(f"Fetched {len(page.entries)} library entries for kitsu user {kitsu_id}")
        return page

    async def get_entry_detail(self, kitsu_id: int, anime_id: int) -> Tuple[LibraryEntry, Anime]:
        """
        Fetch a user's library entry for one anime together with the anime.

        Raises:
            KitsuApiError: If the request fails or the anime is not in the library
        """
        params = {
            "filter[userId]": str(kitsu_id),
            "filter[animeId]": str(anime_id),
            "include": "anime",
        }
        logger.info(f"Fetching anime {anime_id} from library of kitsu user {kitsu_id}")
        document = await self._request("GET", "/library-entries", params=params)

        try:
            data = document["data"]
            if not data:
                raise KitsuApiError(f"Anime {anime_id} is not in the library of kitsu user {kitsu_id}")
            entry = _parse_entry(data[0])
            anime = _included_anime(document).get(entry.anime_id)
        except (KeyError, TypeError, AttributeError) as e:
            raise KitsuApiError(f"Malformed library document: {e}") from e

        if anime is None:
            raise KitsuApiError(f"Anime {anime_id} missing from included resources")
        return entry, anime

    async def update_entry_progress(self, token: str, entry_id: str, progress: int, anime_id: str) -> None:
        """
        Set the watched episode count of a library entry.

        Raises:
            KitsuApiError: If Kitsu rejects the update
        """
        body = {
            "data": {
                "id": entry_id,
                "type": "libraryEntries",
                "attributes": {"progress": progress},
                "relationships": {"anime": {"data": {"id": anime_id, "type": "anime"}}},
            }
        }
        logger.info(f"Updating library entry {entry_id} (anime {anime_id}) to episode {progress}")
        await self._request("PATCH", f"/library-entries/{entry_id}", body=body, token=token)
