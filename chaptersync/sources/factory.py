import logging
from typing import Callable
from chaptersync.core.errors import SourceError
from chaptersync.models import LOCAL_SOURCE
from .base import MangaSource
from .local import LocalSource
from .mangadex import MangaDexSource

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: dict[str, Callable[[], MangaSource]] = {
    LOCAL_SOURCE: LocalSource,
    "mangadex": MangaDexSource,
}


class SourceFactory:
    def __init__(self, sources: dict[str, Callable[[], MangaSource]] | None = None):
        self._constructors = dict(DEFAULT_SOURCES if sources is None else sources)
        self._sources: dict[str, MangaSource] = {}

    def create(self, source_name: str) -> MangaSource:
        source = self._sources.get(source_name)
        if source is not None:
            return source
        constructor = self._constructors.get(source_name)
        if constructor is None:
            raise SourceError(f"Unknown source: {source_name}", source_name)
        source = constructor()
        self._sources[source_name] = source
        logger.debug("Created source %s", source_name)
        return source

    async def close(self):
        for source in self._sources.values():
            await source.close()
        self._sources.clear()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
