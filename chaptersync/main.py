from contextlib import asynccontextmanager
from fastapi import FastAPI
from chaptersync.api.details import router as details_router
from chaptersync.core.config import LOG_LEVEL
from chaptersync.core.log import setup_logging
from chaptersync.db.init_db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL)
    init_db()
    yield


app = FastAPI(title="chaptersync", lifespan=lifespan)
app.include_router(details_router, prefix="/titles")
