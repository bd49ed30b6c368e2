import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import settings
from app.db.database import Base, engine
from app.db import models  # noqa: F401 - registers tables on Base.metadata
from app.api.routes import planner

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="Resource Planner API", version="0.1.0", lifespan=lifespan)

app.include_router(planner.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
