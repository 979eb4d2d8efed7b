from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class LocalChapter(SQLModel, table=True):
    __tablename__ = "local_chapter"

    id: int = Field(primary_key=True)
    manga_id: int = Field(foreign_key="manga.id", primary_key=True)
    position: int = Field(default=0)
    url: str
    name: str
    number: float = Field(default=0.0)
    branch: Optional[str] = None
    scanlator: Optional[str] = None
    upload_date: Optional[datetime] = None
    download_path: Optional[str] = None

    def __repr__(self):
        return f"LocalChapter(id={self.id}, manga_id={self.manga_id}, number={self.number})"
