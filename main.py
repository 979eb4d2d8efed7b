import argparse
import asyncio
import sys
from chaptersync.core.config import LOG_LEVEL
from chaptersync.core.errors import ChapterSyncError
from chaptersync.core.log import setup_logging
from chaptersync.db.init_db import init_db
from chaptersync.models import TitleIntent
from chaptersync.services import data_service
from chaptersync.services.details_service import TitleDetailsLoader
from chaptersync.sources.factory import SourceFactory


def _flags(item) -> str:
    marks = [
        ("current", item.is_current),
        ("unread", item.is_unread),
        ("new", item.is_new),
        ("missing", item.is_missing),
        ("downloaded", item.is_downloaded),
    ]
    return ",".join(name for name, on in marks if on)


async def show_title(title_id: int, new_count: int | None, local: bool = False):
    async with SourceFactory() as sources:
        loader = TitleDetailsLoader(TitleIntent(title_id=title_id, local=local), sources)
        await loader.load()

    title = loader.title.value
    if new_count is None:
        new_count = data_service.get_new_chapters(title.id)
    items = loader.chapter_list(new_count)

    related = loader.related.value
    print(f"{title.title} [{title.source}]")
    if related is not None:
        print(f"related: {related.source} ({len(related.chapters or ())} chapters)")
    print(f"branch: {loader.selected_branch.value}")
    for item in items:
        print(f"{item.chapter.number:>8g}  {item.chapter.name}  {_flags(item)}")


def main():
    parser = argparse.ArgumentParser(description="Show the reconciled chapter list of a title")
    parser.add_argument("title_id", type=int)
    parser.add_argument("--new-count", type=int, default=None)
    parser.add_argument("--local", action="store_true", help="open the saved copy instead of the online title")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    args = parser.parse_args()

    setup_logging(args.log_level)
    init_db()
    try:
        asyncio.run(show_title(args.title_id, args.new_count, args.local))
    except ChapterSyncError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
