from sqlmodel import SQLModel, Field
from datetime import datetime
from chaptersync.core.clock import utc_now


class History(SQLModel, table=True):
    title_id: int = Field(primary_key=True)
    chapter_id: int
    page: int = Field(default=0)
    scroll: int = Field(default=0)
    percent: float = Field(default=0.0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
