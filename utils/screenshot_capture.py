"""
Multi-resolution screenshot capture for SEO Analyzer.

Screenshots are written to the object store under a time-bucketed prefix so
repeated captures of the same page within one bucket land in the same folder
(and overwrite each other).
"""

import logging
import math
import time
from datetime import datetime
from typing import List, Optional, Tuple

from config import settings

logger = logging.getLogger(__name__)

# Desktop, laptop and mobile viewports, captured in this order
VIEWPORTS: List[Tuple[int, int]] = [
    (1920, 1080),
    (1366, 768),
    (1536, 864),
    (360, 640),
    (414, 896),
]

BUCKET_FORMAT = "%a %b %d %Y %H:%M:%S"


def time_bucket(
    now: Optional[float] = None,
    bucket_minutes: int = settings.SCREENSHOT_BUCKET_MINUTES,
) -> str:
    """
    Round a wall-clock timestamp to the nearest bucket boundary.

    Args:
        now: POSIX timestamp (defaults to the current time)
        bucket_minutes: Bucket width in minutes

    Returns:
        Local time of the boundary, e.g. "Mon Oct 19 2026 14:35:00"
    """
    if now is None:
        now = time.time()

    coeff = bucket_minutes * 60
    rounded = math.floor(now / coeff + 0.5) * coeff
    return datetime.fromtimestamp(rounded).strftime(BUCKET_FORMAT)


def screenshot_key(bucket: str, width: int, height: int) -> str:
    return f"{bucket}/screenshot_{width}x{height}.jpg"


async def capture_screenshots(session, store, url: str, now: Optional[float] = None) -> List[str]:
    """
    Capture ``url`` at every viewport in VIEWPORTS and store each image.

    Captures run one after another on a single page. A failure aborts the
    remaining viewports and propagates; images already stored are kept.

    Args:
        session: BrowserSession used to acquire the page
        store: Object store exposing ``put(key, data)``
        url: Page to capture
        now: Timestamp used for the bucket (defaults to the current time)

    Returns:
        Storage keys in viewport order
    """
    folder = time_bucket(now)
    screenshots = []

    async with session.page() as page:
        for width, height in VIEWPORTS:
            await page.set_viewport_size({"width": width, "height": height})
            await page.goto(url, timeout=settings.NAVIGATION_TIMEOUT_MS)

            screenshot_bytes = await page.screenshot(type="jpeg")
            key = screenshot_key(folder, width, height)
            store.put(key, screenshot_bytes, ttl=settings.SCREENSHOT_TTL or None)
            screenshots.append(key)

            logger.info(f"📸 Stored {key} ({len(screenshot_bytes)} bytes)")

    return screenshots
