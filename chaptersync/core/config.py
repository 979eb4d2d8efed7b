import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.environ.get("CHAPTERSYNC_DATA_DIR", BASE_DIR / "data"))
MANGA_DIR = DATA_DIR / "manga"
DB_PATH = DATA_DIR / "app.db"

MANGADEX_API_URL = os.environ.get("CHAPTERSYNC_MANGADEX_URL", "https://api.mangadex.org")
PREFERRED_LANGUAGES = tuple(
    lang.strip()
    for lang in os.environ.get("CHAPTERSYNC_LANGUAGES", "en").split(",")
    if lang.strip()
)
LOG_LEVEL = os.environ.get("CHAPTERSYNC_LOG_LEVEL", "INFO")
