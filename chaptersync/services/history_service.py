from chaptersync.core.clock import utc_now
from typing import Optional
from chaptersync.db.session import get_session
from chaptersync.models import History, Title


def get_history(title: Title) -> Optional[History]:
    with get_session() as session:
        return session.get(History, title.id)


def save_history(title: Title, chapter_id: int, page: int = 0, scroll: int = 0, percent: float = 0.0):
    with get_session() as session:
        row = session.get(History, title.id)
        if row:
            row.chapter_id = chapter_id
            row.page = page
            row.scroll = scroll
            row.percent = percent
            row.updated_at = utc_now()
        else:
            session.add(History(
                title_id=title.id,
                chapter_id=chapter_id,
                page=page,
                scroll=scroll,
                percent=percent,
            ))
        session.commit()
