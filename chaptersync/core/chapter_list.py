from typing import Optional, Sequence

from chaptersync.models.chapter_list_item import ChapterListItem
from chaptersync.models.history import History
from chaptersync.models.title import Chapter, Title, LOCAL_SOURCE


def _index_of(chapters: Sequence[Chapter], chapter_id: Optional[int]) -> int:
    if chapter_id is None:
        return -1
    for i, chapter in enumerate(chapters):
        if chapter.id == chapter_id:
            return i
    return -1


def build_chapter_list(
    title: Optional[Title],
    related: Optional[Title],
    history: Optional[History],
    new_count: int,
    branch: Optional[str],
) -> list[ChapterListItem]:
    if title is None or not title.chapters:
        return []
    related_chapters = related.chapters if related is not None else None
    current_id = history.chapter_id if history is not None else None
    if related is not None and related.source != LOCAL_SOURCE and related_chapters:
        return map_chapters_with_source(title.chapters, related_chapters, current_id, new_count, branch)
    return map_chapters(title.chapters, related_chapters, current_id, new_count, branch)


def map_chapters(
    chapters: Sequence[Chapter],
    downloaded_chapters: Optional[Sequence[Chapter]],
    current_id: Optional[int],
    new_count: int,
    branch: Optional[str],
) -> list[ChapterListItem]:
    current_index = _index_of(chapters, current_id)
    first_new_index = len(chapters) - new_count
    downloaded_ids = {c.id for c in downloaded_chapters} if downloaded_chapters is not None else set()

    result = []
    for i, chapter in enumerate(chapters):
        if chapter.branch != branch:
            continue
        result.append(ChapterListItem(
            chapter=chapter,
            is_current=i == current_index,
            is_unread=i > current_index,
            is_new=i >= first_new_index,
            is_missing=False,
            is_downloaded=chapter.id in downloaded_ids,
        ))
    return result


def map_chapters_with_source(
    chapters: Sequence[Chapter],
    source_chapters: Sequence[Chapter],
    current_id: Optional[int],
    new_count: int,
    branch: Optional[str],
) -> list[ChapterListItem]:
    """Merge saved ``chapters`` into the order of the online ``source_chapters``.

    Chapters only known online are flagged missing. Chapters only present on
    the device are appended as unread, sorted by number among themselves.
    """
    local_by_id = {chapter.id: chapter for chapter in chapters}
    current_index = _index_of(source_chapters, current_id)
    first_new_index = len(source_chapters) - new_count

    result = []
    for i, chapter in enumerate(source_chapters):
        local_chapter = local_by_id.pop(chapter.id, None)
        if chapter.branch != branch:
            continue
        result.append(ChapterListItem(
            chapter=local_chapter if local_chapter is not None else chapter,
            is_current=i == current_index,
            is_unread=i > current_index,
            is_new=i >= first_new_index,
            is_missing=local_chapter is None,
            is_downloaded=False,
        ))

    # saved on device but gone from the source
    orphans = [
        ChapterListItem(chapter=chapter, is_unread=True)
        for chapter in local_by_id.values()
        if chapter.branch == branch
    ]
    orphans.sort(key=lambda item: item.chapter.number)
    result.extend(orphans)
    return result
