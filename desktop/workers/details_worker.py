import asyncio
from PySide6.QtCore import QObject, Signal, QRunnable
from chaptersync.services.details_service import TitleDetailsLoader
from chaptersync.sources.factory import SourceFactory


class DetailsSignals(QObject):
    title_changed = Signal(object)
    related_changed = Signal(object)
    branch_changed = Signal(object)
    failed = Signal(str)
    finished = Signal()


class DetailsWorker(QRunnable):
    def __init__(self, intent, signals: DetailsSignals, sources_factory=SourceFactory, **services):
        super().__init__()
        self.intent = intent
        self.signals = signals
        self.sources_factory = sources_factory
        self.services = services

    def run(self):
        try:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            try:
                loop.run_until_complete(self._load())
            finally:
                loop.close()
        except Exception as e:
            self.signals.failed.emit(str(e))
        finally:
            self.signals.finished.emit()

    async def _load(self):
        async with self.sources_factory() as sources:
            loader = TitleDetailsLoader(self.intent, sources, **self.services)
            loader.title.subscribe(self.signals.title_changed.emit)
            loader.related.subscribe(self.signals.related_changed.emit)
            loader.selected_branch.subscribe(self.signals.branch_changed.emit)
            await loader.load()
