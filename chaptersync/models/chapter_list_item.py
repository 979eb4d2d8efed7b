from dataclasses import dataclass

from .title import Chapter


@dataclass(frozen=True)
class ChapterListItem:
    chapter: Chapter
    is_current: bool = False
    is_unread: bool = False
    is_new: bool = False
    is_missing: bool = False
    is_downloaded: bool = False
