class ChapterSyncError(Exception):
    pass


class NotFoundError(ChapterSyncError):
    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class SourceError(ChapterSyncError):
    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source
