import asyncio
import dataclasses
from pathlib import Path

import pytest

from chaptersync.core.errors import NotFoundError
from chaptersync.models import History, Manga, TitleIntent
from chaptersync.services import data_service, history_service, local_library
from chaptersync.sources.local import LocalSource


def test_resolve_intent_prefers_supplied_title(engine, remote_title):
    assert data_service.resolve_intent(TitleIntent(title=remote_title)) is remote_title


def test_resolve_intent_by_id(engine, remote_title):
    assert data_service.resolve_intent(TitleIntent(title_id=42)) is None

    data_service.store_title(remote_title)
    resolved = data_service.resolve_intent(TitleIntent(title_id=42))

    assert resolved == remote_title
    assert resolved.chapters is None


def test_store_title_updates_existing_record(engine, remote_title):
    data_service.store_title(remote_title)
    manga = data_service.store_title(dataclasses.replace(remote_title, title="Blue Period (new)", author="Tsubasa"))

    assert manga.title == "Blue Period (new)"
    assert manga.author == "Tsubasa"
    assert manga.source == "mangadex"


def test_new_chapters_counter(engine, remote_title):
    assert data_service.get_new_chapters(42) == 0
    data_service.store_title(remote_title)

    data_service.set_new_chapters(42, 3)
    assert data_service.get_new_chapters(42) == 3

    data_service.set_new_chapters(42, -1)
    assert data_service.get_new_chapters(42) == 0


def test_history_round_trip(engine, remote_title):
    assert history_service.get_history(remote_title) is None

    history_service.save_history(remote_title, chapter_id=5, page=3)
    history_service.save_history(remote_title, chapter_id=6, page=1)

    history = history_service.get_history(remote_title)
    assert history.chapter_id == 6
    assert history.page == 1


def test_find_saved_returns_local_copy(engine, remote_title, make_chapter):
    chapters = [make_chapter(2, branch="en"), make_chapter(1, branch="en")]
    title = dataclasses.replace(remote_title, chapters=tuple(chapters))

    assert local_library.find_saved(title) is None
    local_library.save_local_copy(title, Path("/library/blue-period"))
    saved = local_library.find_saved(title)

    assert saved.path == Path("/library/blue-period")
    assert saved.title.source == "local"
    assert saved.title.id == 42
    assert [c.id for c in saved.title.chapters] == [2, 1]
    assert all(c.source == "local" and c.branch == "en" for c in saved.title.chapters)


def test_get_remote_title_of_saved_copy(engine, remote_title, make_chapter):
    saved = local_library.save_local_copy(remote_title, Path("/library/blue-period"), [make_chapter(1)])

    remote = local_library.get_remote_title(saved.title)

    assert remote.source == "mangadex"
    assert remote.url == "a1b2c3"
    assert remote.chapters is None


def test_save_local_copy_rejects_local_titles(engine, remote_title):
    saved = local_library.save_local_copy(remote_title, Path("/library/blue-period"), [])

    with pytest.raises(ValueError):
        local_library.save_local_copy(saved.title, Path("/elsewhere"))


def test_save_local_copy_replaces_chapters(engine, remote_title, make_chapter):
    local_library.save_local_copy(remote_title, Path("/library/bp"), [make_chapter(1), make_chapter(2)])
    local_library.save_local_copy(remote_title, Path("/library/bp"), [make_chapter(3)])

    assert [c.id for c in local_library.load_local_title(42).chapters] == [3]


def test_delete_local_copy(engine, remote_title, make_chapter):
    local_library.save_local_copy(remote_title, Path("/library/bp"), [make_chapter(1)])

    assert local_library.delete_local_copy(42) is True
    assert local_library.find_saved(remote_title) is None
    assert local_library.delete_local_copy(42) is False
    # the record itself stays resolvable
    assert data_service.resolve_intent(TitleIntent(title_id=42)).source == "mangadex"


def test_local_source_details(engine, remote_title, make_chapter):
    saved = local_library.save_local_copy(remote_title, Path("/library/bp"), [make_chapter(1)])

    details = asyncio.run(LocalSource().get_details(saved.title))

    assert details.source == "local"
    assert [c.id for c in details.chapters] == [1]


def test_local_source_missing_copy(engine, remote_title):
    with pytest.raises(NotFoundError):
        asyncio.run(LocalSource().get_details(remote_title))


def test_resolve_intent_for_saved_copy(engine, remote_title, make_chapter):
    data_service.store_title(remote_title)
    assert data_service.resolve_intent(TitleIntent(title_id=42, local=True)) is None

    local_library.save_local_copy(remote_title, Path("/library/bp"), [make_chapter(1)])
    resolved = data_service.resolve_intent(TitleIntent(title_id=42, local=True))

    assert resolved.source == "local"
    assert resolved.url == "/library/bp"
    assert resolved.chapters is None
    assert data_service.resolve_intent(TitleIntent(title_id=42)).source == "mangadex"


def test_default_timestamps_are_timezone_aware(engine, remote_title):
    manga = data_service.store_title(remote_title)
    history = History(title_id=42, chapter_id=1)

    assert Manga(id=1, title="x", source="mangadex", source_id="y").created_at.tzinfo is not None
    assert history.updated_at.tzinfo is not None
    assert manga.created_at is not None
