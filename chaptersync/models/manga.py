from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from chaptersync.core.clock import utc_now


class Manga(SQLModel, table=True):
    id: int = Field(primary_key=True)
    title: str
    source: str = Field(index=True)
    source_id: str
    cover_url: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    status: Optional[str] = None
    download_path: Optional[str] = None
    new_chapters: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self):
        return f"Manga(id={self.id}, source={self.source}, title={self.title})"
