"""
SEO Analyzer Service - Main Application

A FastAPI service that loads pages in a headless browser using Playwright,
extracts on-page SEO signals, scores them with Claude AI (Anthropic) and
renders the result as an HTML report. Screenshots at fixed viewport sizes
can be captured into a Redis object store.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import settings
from browser_pool import close_browser_session
from redis_client import close_redis_client
from routes import router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_browser_session()
    close_redis_client()


# Initialize FastAPI app
app = FastAPI(title="SEO Analyzer Service", lifespan=lifespan)

# Include all routes from routes.py
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, timeout_keep_alive=60)
