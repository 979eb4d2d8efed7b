import dataclasses

import pytest
from sqlmodel import create_engine
from sqlmodel.pool import StaticPool

from chaptersync.core.errors import SourceError
from chaptersync.db import session as db_session
from chaptersync.db.init_db import init_db
from chaptersync.models import Chapter, Title


class FakeSource:
    def __init__(self, name, chapters=None, error=None):
        self.source_name = name
        self.chapters = chapters or {}
        self.error = error
        self.calls = []
        self.closed = False

    async def get_details(self, title):
        self.calls.append(title)
        if self.error is not None:
            raise self.error
        return dataclasses.replace(title, chapters=tuple(self.chapters.get(title.id, ())))

    async def close(self):
        self.closed = True


class FakeSources:
    def __init__(self, *sources):
        self.sources = {source.source_name: source for source in sources}

    def create(self, source_name):
        try:
            return self.sources[source_name]
        except KeyError:
            raise SourceError(f"Unknown source: {source_name}", source_name)

    async def close(self):
        for source in self.sources.values():
            await source.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


@pytest.fixture
def engine(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    monkeypatch.setattr(db_session, "engine", engine)
    yield engine
    engine.dispose()


@pytest.fixture
def make_chapter():
    def factory(id, number=None, branch=None, source="mangadex", name=None):
        number = float(id) if number is None else number
        return Chapter(
            id=id,
            name=name or f"Chapter {number:g}",
            number=number,
            url=f"ch-{id}",
            source=source,
            branch=branch,
        )

    return factory


@pytest.fixture
def remote_title():
    return Title(id=42, source="mangadex", url="a1b2c3", title="Blue Period")


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def fake_sources():
    return FakeSources
