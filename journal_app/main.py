# daily journal api
# fastapi app with async mongodb, jwt auth, prompt answers and daily completion

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journal_app.config import settings
from journal_app.services.db import db
from journal_app.routers import journals, prompts, stats

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: connect to mongodb. shutdown: close connection."""
    logger.info("Starting daily journal API...")
    await db.connect()
    logger.info("Daily journal API ready")
    yield
    logger.info("Shutting down daily journal API...")
    await db.close()


app = FastAPI(
    title="Daily Journal API",
    description="Daily prompt journaling: answer scoring, day completion and journaling stats",
    version="0.1.0",
    lifespan=lifespan,
)

# cors — allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# register routers
app.include_router(journals.router)
app.include_router(prompts.router)
app.include_router(stats.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "daily-journal-api"}
