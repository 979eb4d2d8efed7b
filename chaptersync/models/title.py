from dataclasses import dataclass
from datetime import datetime
from typing import Optional

LOCAL_SOURCE = "local"


@dataclass(frozen=True)
class Chapter:
    id: int
    name: str
    number: float
    url: str
    source: str
    branch: Optional[str] = None
    scanlator: Optional[str] = None
    upload_date: Optional[datetime] = None


@dataclass(frozen=True)
class Title:
    id: int
    source: str
    url: str
    title: str
    cover_url: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    status: Optional[str] = None
    chapters: Optional[tuple[Chapter, ...]] = None

    @property
    def is_local(self) -> bool:
        return self.source == LOCAL_SOURCE
