import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from browser_pool import BrowserSession, get_browser_session
from config import settings
from models import ScreenshotResponse
from redis_client import get_redis_client
from utils.page_inspector import collect_network_stats, inspect_page
from utils.report_renderer import render_form, render_report
from utils.seo_analyzer import generate_report

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


def get_screenshot_store():
    """Object store that receives captured screenshots"""
    return get_redis_client()


def _missing_url() -> PlainTextResponse:
    return PlainTextResponse("URL is required", status_code=400)


@router.get("/", response_class=HTMLResponse)
async def root():
    return HTMLResponse(render_form())


@router.post("/screenshot")
async def take_screenshots(
    url: Optional[str] = Form(None),
    session: BrowserSession = Depends(get_browser_session),
):
    """
    Captures the page at five fixed viewport sizes and stores each image
    under a time-bucketed key.

    Returns:
        {"success": true, "screenshots": ["<bucket>/screenshot_1920x1080.jpg", ...]}
    """
    if not url or not url.strip():
        return _missing_url()
    url = url.strip()

    try:
        store = get_screenshot_store()
        screenshots = await session.capture_screenshots(url, store)
        return JSONResponse(ScreenshotResponse(screenshots=screenshots).model_dump())
    except Exception as e:
        logger.exception(f"❌ Screenshot error for {url}: {str(e)}")
        return PlainTextResponse(f"Error taking screenshots: {e}", status_code=500)


@router.post("/analyze", response_class=HTMLResponse)
async def analyze_website(
    url: Optional[str] = Form(None),
    session: BrowserSession = Depends(get_browser_session),
):
    """
    Loads the page, extracts on-page SEO signals, scores them with Claude
    and returns the rendered HTML report.
    """
    if not url or not url.strip():
        return _missing_url()
    url = url.strip()

    try:
        async with session.page() as page:
            await page.goto(url, timeout=settings.NAVIGATION_TIMEOUT_MS)
            signals = await inspect_page(page)
            signals.network = await collect_network_stats(page)

        result = await asyncio.to_thread(generate_report, signals)
        return HTMLResponse(render_report(signals, result))
    except Exception as e:
        logger.exception(f"❌ Analysis error for {url}: {str(e)}")
        return PlainTextResponse(f"Error analyzing URL: {e}", status_code=500)


@router.get("/health")
async def health_check():
    return {"status": "healthy"}


@router.get("/status/detailed")
async def detailed_status_check(session: BrowserSession = Depends(get_browser_session)):
    """
    Status check with object store and browser session health.

    Returns comprehensive system health information for monitoring.
    """
    status_info = {
        "api": "healthy",
        "redis": "unknown",
        "browser_session": await session.health_check(),
        "anthropic_api": "configured" if settings.ANTHROPIC_API_KEY else "missing",
    }

    # Check Redis connection
    try:
        store = get_screenshot_store()
        if store.ping():
            status_info["redis"] = "connected"
            status_info["redis_stats"] = store.get_stats()
        else:
            status_info["redis"] = "disconnected"
    except Exception as e:
        status_info["redis"] = f"error: {str(e)}"

    critical_components = [
        status_info["redis"],
        status_info["anthropic_api"],
    ]

    if any(
        "error" in str(c) or "missing" in str(c) or "disconnected" in str(c)
        for c in critical_components
    ):
        status_info["overall_status"] = "degraded"
    else:
        status_info["overall_status"] = "healthy"

    return status_info
