from .manga import Manga
from .chapter import LocalChapter
from .history import History
from .title import Chapter, Title, LOCAL_SOURCE
from .chapter_list_item import ChapterListItem
from .intent import TitleIntent
from .local_title import LocalTitle

__all__ = [
    "Manga",
    "LocalChapter",
    "History",
    "Chapter",
    "Title",
    "LOCAL_SOURCE",
    "ChapterListItem",
    "TitleIntent",
    "LocalTitle",
]
