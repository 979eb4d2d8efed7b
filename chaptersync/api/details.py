from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from chaptersync.core.branches import list_branches
from chaptersync.core.errors import NotFoundError, SourceError
from chaptersync.models import TitleIntent
from chaptersync.services import data_service
from chaptersync.services.details_service import TitleDetailsLoader
from chaptersync.sources.factory import SourceFactory

router = APIRouter(tags=["titles"])


async def get_sources():
    async with SourceFactory() as sources:
        yield sources


def _title_payload(title):
    if title is None:
        return None
    return {
        "id": title.id,
        "source": title.source,
        "url": title.url,
        "title": title.title,
        "cover_url": title.cover_url,
        "description": title.description,
        "author": title.author,
        "status": title.status,
        "chapter_count": len(title.chapters or ()),
    }


@router.get("/{title_id}")
async def get_title_details(
    title_id: int,
    new_count: Optional[int] = None,
    local: bool = False,
    sources: SourceFactory = Depends(get_sources),
):
    loader = TitleDetailsLoader(TitleIntent(title_id=title_id, local=local), sources)
    try:
        await loader.load()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SourceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    title = loader.title.value
    if new_count is None:
        new_count = data_service.get_new_chapters(title.id)
    items = loader.chapter_list(new_count)
    return {
        "title": _title_payload(title),
        "related": _title_payload(loader.related.value),
        "branch": loader.selected_branch.value,
        "branches": [{"name": name, "count": count} for name, count in list_branches(title.chapters)],
        "chapters": [
            {
                "id": item.chapter.id,
                "name": item.chapter.name,
                "number": item.chapter.number,
                "branch": item.chapter.branch,
                "scanlator": item.chapter.scanlator,
                "current": item.is_current,
                "unread": item.is_unread,
                "new": item.is_new,
                "missing": item.is_missing,
                "downloaded": item.is_downloaded,
            }
            for item in items
        ],
    }
