from chaptersync.core.clock import utc_now
from pathlib import Path
from typing import Optional, Sequence
from sqlmodel import select
from chaptersync.db.session import get_session
from chaptersync.models import Chapter, LocalChapter, LocalTitle, Manga, Title, LOCAL_SOURCE
from chaptersync.services.data_service import record_to_title


def _local_chapter(row: LocalChapter) -> Chapter:
    return Chapter(
        id=row.id,
        name=row.name,
        number=row.number,
        url=row.download_path or row.url,
        source=LOCAL_SOURCE,
        branch=row.branch,
        scanlator=row.scanlator,
        upload_date=row.upload_date,
    )


def _local_title(session, manga: Manga) -> Title:
    rows = session.exec(
        select(LocalChapter)
        .where(LocalChapter.manga_id == manga.id)
        .order_by(LocalChapter.position)
    ).all()
    return Title(
        id=manga.id,
        source=LOCAL_SOURCE,
        url=manga.download_path,
        title=manga.title,
        cover_url=manga.cover_url,
        description=manga.description,
        author=manga.author,
        status=manga.status,
        chapters=tuple(_local_chapter(row) for row in rows),
    )


def _saved_row(session, title_id: int) -> Optional[Manga]:
    manga = session.get(Manga, title_id)
    if manga is None or not manga.download_path:
        return None
    return manga


def _clear_chapters(session, title_id: int):
    rows = session.exec(select(LocalChapter).where(LocalChapter.manga_id == title_id)).all()
    for row in rows:
        session.delete(row)
    session.flush()


def find_saved(title: Title) -> Optional[LocalTitle]:
    with get_session() as session:
        manga = _saved_row(session, title.id)
        if manga is None:
            return None
        return LocalTitle(path=Path(manga.download_path), title=_local_title(session, manga))


def load_local_title(title_id: int) -> Optional[Title]:
    with get_session() as session:
        manga = _saved_row(session, title_id)
        return _local_title(session, manga) if manga else None


def get_remote_title(title: Title) -> Optional[Title]:
    with get_session() as session:
        manga = session.get(Manga, title.id)
        if manga is None or manga.source == LOCAL_SOURCE:
            return None
        return record_to_title(manga)


def save_local_copy(title: Title, path: Path, chapters: Optional[Sequence[Chapter]] = None) -> LocalTitle:
    """Record ``title`` as saved under ``path`` with the given downloaded chapters.

    ``title`` is the remote record; its source becomes the origin of the copy.
    """
    if title.source == LOCAL_SOURCE:
        raise ValueError(f"Title {title.id} is already a local copy")
    if chapters is None:
        chapters = title.chapters or ()

    with get_session() as session:
        manga = session.get(Manga, title.id)
        if manga is None:
            manga = Manga(id=title.id, title=title.title, source=title.source, source_id=title.url)
            session.add(manga)
        manga.cover_url = title.cover_url or manga.cover_url
        manga.description = title.description or manga.description
        manga.author = title.author or manga.author
        manga.status = title.status or manga.status
        manga.download_path = str(path)
        manga.updated_at = utc_now()

        _clear_chapters(session, title.id)
        for position, chapter in enumerate(chapters):
            session.add(LocalChapter(
                id=chapter.id,
                manga_id=title.id,
                position=position,
                url=chapter.url,
                name=chapter.name,
                number=chapter.number,
                branch=chapter.branch,
                scanlator=chapter.scanlator,
                upload_date=chapter.upload_date,
                download_path=str(Path(path) / f"{position:04d}"),
            ))
        session.commit()
        session.refresh(manga)
        return LocalTitle(path=Path(path), title=_local_title(session, manga))


def delete_local_copy(title_id: int) -> bool:
    with get_session() as session:
        manga = _saved_row(session, title_id)
        if manga is None:
            return False
        _clear_chapters(session, title_id)
        manga.download_path = None
        manga.updated_at = utc_now()
        session.commit()
        return True
