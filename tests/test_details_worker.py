from types import SimpleNamespace

import pytest

pytest.importorskip("PySide6")

from PySide6.QtCore import QCoreApplication

from chaptersync.models import TitleIntent
from desktop.workers import DetailsSignals, DetailsWorker


@pytest.fixture(autouse=True)
def qt_app():
    return QCoreApplication.instance() or QCoreApplication([])


def _services(resolved):
    return dict(
        data=SimpleNamespace(resolve_intent=lambda intent: resolved),
        history=SimpleNamespace(get_history=lambda title: None),
        library=SimpleNamespace(find_saved=lambda title: None, get_remote_title=lambda title: None),
        languages=(),
    )


def test_worker_relays_loader_outputs(fake_source, fake_sources, make_chapter, remote_title):
    source = fake_source("mangadex", chapters={42: [make_chapter(1, branch="en")]})
    sources = fake_sources(source)
    signals = DetailsSignals()
    titles, branches, related, failures, finished = [], [], [], [], []
    signals.title_changed.connect(titles.append)
    signals.branch_changed.connect(branches.append)
    signals.related_changed.connect(related.append)
    signals.failed.connect(failures.append)
    signals.finished.connect(lambda: finished.append(True))

    worker = DetailsWorker(TitleIntent(title_id=42), signals, lambda: sources, **_services(remote_title))
    worker.run()

    assert [t.chapters is None for t in titles] == [True, False]
    assert branches == ["en"]
    assert related == [None]
    assert failures == []
    assert finished == [True]
    assert source.closed


def test_worker_reports_failure(fake_sources):
    signals = DetailsSignals()
    failures, finished = [], []
    signals.failed.connect(failures.append)
    signals.finished.connect(lambda: finished.append(True))

    worker = DetailsWorker(TitleIntent(title_id=7), signals, fake_sources, **_services(None))
    worker.run()

    assert failures == ["Cannot find manga"]
    assert finished == [True]
