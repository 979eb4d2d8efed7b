from chaptersync.core.errors import NotFoundError
from chaptersync.models import Title, LOCAL_SOURCE
from chaptersync.services import local_library
from .base import MangaSource


class LocalSource(MangaSource):
    @property
    def source_name(self) -> str:
        return LOCAL_SOURCE

    async def get_details(self, title: Title) -> Title:
        local = local_library.load_local_title(title.id)
        if local is None:
            raise NotFoundError(f"Saved copy of title {title.id} not found", title.url or "")
        return local
