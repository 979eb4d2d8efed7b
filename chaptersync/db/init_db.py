from sqlmodel import SQLModel
from chaptersync.core.config import DATA_DIR
from chaptersync.db import session
from chaptersync.models import Manga, LocalChapter, History

def init_db(bind=None):
    if bind is None:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        bind = session.engine
    SQLModel.metadata.create_all(bind)
