from dataclasses import dataclass
from pathlib import Path

from .title import Title


@dataclass(frozen=True)
class LocalTitle:
    path: Path
    title: Title
