import dataclasses
from typing import Optional
from chaptersync.core.clock import utc_now
from chaptersync.db.session import get_session
from chaptersync.models import Manga, Title, TitleIntent, LOCAL_SOURCE


def record_to_title(manga: Manga) -> Title:
    return Title(
        id=manga.id,
        source=manga.source,
        url=manga.source_id,
        title=manga.title,
        cover_url=manga.cover_url,
        description=manga.description,
        author=manga.author,
        status=manga.status,
    )


def resolve_intent(intent: TitleIntent) -> Optional[Title]:
    if intent.title is not None:
        return intent.title
    if intent.title_id is None:
        return None
    with get_session() as session:
        manga = session.get(Manga, intent.title_id)
        if manga is None:
            return None
        if not intent.local:
            return record_to_title(manga)
        if not manga.download_path:
            return None
        return dataclasses.replace(record_to_title(manga), source=LOCAL_SOURCE, url=manga.download_path)


def store_title(title: Title) -> Manga:
    with get_session() as session:
        manga = session.get(Manga, title.id)
        if manga is None:
            manga = Manga(id=title.id, title=title.title, source=title.source, source_id=title.url)
            session.add(manga)
        else:
            manga.title = title.title
            manga.updated_at = utc_now()
        manga.cover_url = title.cover_url or manga.cover_url
        manga.description = title.description or manga.description
        manga.author = title.author or manga.author
        manga.status = title.status or manga.status
        session.commit()
        session.refresh(manga)
        return manga


def set_new_chapters(title_id: int, count: int):
    with get_session() as session:
        manga = session.get(Manga, title_id)
        if not manga:
            return
        manga.new_chapters = max(count, 0)
        manga.updated_at = utc_now()
        session.commit()


def get_new_chapters(title_id: int) -> int:
    with get_session() as session:
        manga = session.get(Manga, title_id)
        return manga.new_chapters if manga else 0
