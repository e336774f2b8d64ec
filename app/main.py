from __future__ import annotations

from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI

from app.api.v1.router import router as api_router
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.db.base import import_models

# Populate Base.metadata
import_models()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(title="EcoToken API", lifespan=lifespan)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")
