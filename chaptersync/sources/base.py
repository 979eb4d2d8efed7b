from abc import ABC, abstractmethod
from chaptersync.models import Title


class MangaSource(ABC):
    @property
    @abstractmethod
    def source_name(self) -> str:
        pass

    @abstractmethod
    async def get_details(self, title: Title) -> Title:
        """Return ``title`` with its metadata refreshed and chapters populated."""
        pass

    async def close(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
