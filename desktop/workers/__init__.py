from .details_worker import DetailsSignals, DetailsWorker

__all__ = [
    "DetailsSignals",
    "DetailsWorker",
]
