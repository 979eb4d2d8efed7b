import aiohttp
import asyncio
import dataclasses
import logging
import time
from typing import Optional
from datetime import datetime
from chaptersync.core.config import MANGADEX_API_URL
from chaptersync.core.errors import NotFoundError, SourceError
from chaptersync.core.ids import generate_uid
from chaptersync.models import Chapter, Title
from .base import MangaSource

logger = logging.getLogger(__name__)


class MangaDexSource(MangaSource):
    BASE_URL = MANGADEX_API_URL
    CDN_URL = "https://uploads.mangadex.org"
    REQUEST_DELAY = 0.2
    MAX_RETRIES = 3
    MAX_RETRY_WAIT = 60
    CONTENT_RATINGS = ["safe", "suggestive", "erotica"]

    def __init__(self):
        self._session: Optional[aiohttp.ClientSession] = None
        self._last_request_time = 0
        self._lock = asyncio.Lock()

    @property
    def source_name(self) -> str:
        return "mangadex"

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _rate_limit(self):
        async with self._lock:
            now = asyncio.get_running_loop().time()
            elapsed = now - self._last_request_time
            if elapsed < self.REQUEST_DELAY:
                await asyncio.sleep(self.REQUEST_DELAY - elapsed)
            self._last_request_time = asyncio.get_running_loop().time()

    async def _request(self, endpoint: str, params: dict = None) -> dict:
        url = f"{self.BASE_URL}{endpoint}"
        attempt = 0
        while True:
            await self._rate_limit()
            session = await self._get_session()
            try:
                async with session.get(url, params=params) as response:
                    if response.status == 429:
                        if attempt >= self.MAX_RETRIES:
                            raise SourceError(f"MangaDex request {endpoint} kept being rate limited", self.source_name)
                        attempt += 1
                        retry_after = self._retry_delay(response.headers)
                        logger.warning("Rate limited on %s, retrying in %.0fs", endpoint, retry_after)
                        await asyncio.sleep(retry_after)
                        continue
                    if response.status == 404:
                        raise NotFoundError(f"MangaDex has no resource at {endpoint}", url)
                    response.raise_for_status()
                    return await response.json()
            except aiohttp.ClientError as e:
                raise SourceError(f"MangaDex request {endpoint} failed: {e}", self.source_name) from e

    def _retry_delay(self, headers) -> float:
        # the header holds the UNIX time at which requests are allowed again
        try:
            retry_at = float(headers["X-RateLimit-Retry-After"])
        except (KeyError, ValueError):
            return self.MAX_RETRY_WAIT
        return min(max(0.0, retry_at - time.time()), self.MAX_RETRY_WAIT)

    def _parse_manga(self, title: Title, data: dict) -> Title:
        manga_id = data["id"]
        attributes = data["attributes"]
        title_obj = attributes.get("title", {})
        name = (
            title_obj.get("en") or
            title_obj.get("ja-ro") or
            (list(title_obj.values())[0] if title_obj else title.title)
        )

        desc_obj = attributes.get("description", {})
        description = desc_obj.get("en") or (list(desc_obj.values())[0] if desc_obj else None)

        cover_url = None
        author = None
        for rel in data.get("relationships", []):
            rel_attrs = rel.get("attributes") or {}
            if rel["type"] == "cover_art" and rel_attrs.get("fileName"):
                cover_url = f"{self.CDN_URL}/covers/{manga_id}/{rel_attrs['fileName']}.512.jpg"
            elif rel["type"] == "author" and author is None:
                author = rel_attrs.get("name")

        return dataclasses.replace(
            title,
            title=name,
            cover_url=cover_url or title.cover_url,
            description=description or title.description,
            author=author or title.author,
            status=attributes.get("status") or title.status,
        )

    def _parse_chapter(self, data: dict) -> Chapter:
        attrs = data["attributes"]
        scanlator = None
        for rel in data.get("relationships", []):
            if rel["type"] == "scanlation_group":
                scanlator = (rel.get("attributes") or {}).get("name")
                break

        upload_date = None
        if attrs.get("publishAt"):
            try:
                upload_date = datetime.fromisoformat(attrs["publishAt"].replace("Z", "+00:00"))
            except ValueError:
                logger.debug("Bad publishAt %r on chapter %s", attrs["publishAt"], data["id"])

        try:
            number = float(attrs.get("chapter") or 0)
        except ValueError:
            number = 0.0

        name = attrs.get("title") or (f"Chapter {attrs['chapter']}" if attrs.get("chapter") else "Oneshot")
        return Chapter(
            id=generate_uid(self.source_name, data["id"]),
            name=name,
            number=number,
            url=data["id"],
            source=self.source_name,
            branch=attrs.get("translatedLanguage"),
            scanlator=scanlator,
            upload_date=upload_date,
        )

    async def get_chapters(self, source_id: str) -> list[Chapter]:
        all_chapters = []
        offset = 0
        limit = 100
        while True:
            params = {
                "manga": source_id,
                "limit": limit,
                "offset": offset,
                "order[chapter]": "asc",
                "includes[]": ["scanlation_group"],
                "contentRating[]": self.CONTENT_RATINGS,
            }

            data = await self._request("/chapter", params)
            if not isinstance(data, dict):
                raise SourceError(f"Unexpected MangaDex chapter feed for {source_id}", self.source_name)
            chapters = data.get("data", [])
            if not chapters:
                break
            try:
                all_chapters.extend(self._parse_chapter(chapter) for chapter in chapters)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise SourceError(f"Unexpected MangaDex chapter payload for {source_id}: {e!r}", self.source_name) from e
            offset += limit

            if offset >= data.get("total", 0):
                break

        all_chapters.sort(key=lambda ch: ch.number)
        return all_chapters

    async def get_details(self, title: Title) -> Title:
        params = {
            "includes[]": ["cover_art", "author", "artist"]
        }
        data = await self._request(f"/manga/{title.url}", params)
        try:
            details = self._parse_manga(title, data["data"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SourceError(f"Unexpected MangaDex payload for {title.url}: {e!r}", self.source_name) from e
        chapters = await self.get_chapters(title.url)
        logger.debug("Fetched %d chapters for %s", len(chapters), title.url)
        return dataclasses.replace(details, chapters=tuple(chapters))

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()
