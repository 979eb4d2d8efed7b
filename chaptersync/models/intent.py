from dataclasses import dataclass
from typing import Optional

from .title import Title


@dataclass(frozen=True)
class TitleIntent:
    title: Optional[Title] = None
    title_id: Optional[int] = None
    local: bool = False

    @property
    def id(self) -> Optional[int]:
        return self.title.id if self.title is not None else self.title_id
