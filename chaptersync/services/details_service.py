import logging
from typing import Optional
from chaptersync.core.branches import select_branch
from chaptersync.core.chapter_list import build_chapter_list
from chaptersync.core.config import PREFERRED_LANGUAGES
from chaptersync.core.errors import NotFoundError
from chaptersync.core.state import StateCell
from chaptersync.models import ChapterListItem, History, Title, TitleIntent
from chaptersync.services import data_service, history_service, local_library
from chaptersync.sources.factory import SourceFactory

logger = logging.getLogger(__name__)


class TitleDetailsLoader:
    """Loads a title and its counterpart copy, publishing each stage as it settles.

    ``title`` first holds the minimal record and later the detailed one,
    ``selected_branch`` holds the default branch and ``related`` the remote
    copy of a saved title or the saved copy of a remote one.
    """

    def __init__(
        self,
        intent: TitleIntent,
        sources: SourceFactory,
        data=data_service,
        history=history_service,
        library=local_library,
        languages=PREFERRED_LANGUAGES,
    ):
        self.intent = intent
        self.sources = sources
        self.data = data
        self.history = history
        self.library = library
        self.languages = tuple(languages)

        self.title: StateCell[Optional[Title]] = StateCell(intent.title)
        self.related: StateCell[Optional[Title]] = StateCell(None)
        self.selected_branch: StateCell[Optional[str]] = StateCell(None)
        self.last_history: Optional[History] = None

    @property
    def title_id(self) -> Optional[int]:
        return self.intent.id

    async def load(self):
        title = self.data.resolve_intent(self.intent)
        if title is None:
            raise NotFoundError("Cannot find manga", "")
        self.title.value = title

        logger.debug("Fetching details of %s from %s", title.id, title.source)
        title = await self.sources.create(title.source).get_details(title)
        self.last_history = self.history.get_history(title)
        self.selected_branch.value = select_branch(title.chapters, self.last_history, self.languages)
        logger.debug("Title %s: %d chapters, branch %r", title.id, len(title.chapters or ()), self.selected_branch.value)
        self.title.value = title

        self.related.value = await self._load_related(title)

    async def _load_related(self, title: Title) -> Optional[Title]:
        try:
            if title.is_local:
                remote = self.library.get_remote_title(title)
                if remote is None:
                    return None
                return await self.sources.create(remote.source).get_details(remote)
            saved = self.library.find_saved(title)
            return saved.title if saved else None
        except Exception:
            logger.warning("Failed to load counterpart of title %s", title.id, exc_info=True)
            return None

    def chapter_list(self, new_count: int) -> list[ChapterListItem]:
        return build_chapter_list(
            self.title.value,
            self.related.value,
            self.last_history,
            new_count,
            self.selected_branch.value,
        )
