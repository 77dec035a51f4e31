"""
Page inspector for SEO Analyzer

Runs a fixed extraction script inside a loaded page and turns the result
into a PageSignals record.
"""

import logging
from typing import Iterable, Optional, Tuple
from urllib.parse import urlsplit

from playwright.async_api import Page

from models import NetworkStats, PageSignals

logger = logging.getLogger(__name__)


EXTRACTION_SCRIPT = """
() => {
    const timing = window.performance.timing;
    const images = Array.from(document.querySelectorAll('img'));
    const attr = (selector, name) => {
        const el = document.querySelector(selector);
        return el ? el.getAttribute(name) : null;
    };
    const bodyText = document.body ? document.body.innerText.trim() : '';

    return {
        title: document.title,
        metaDescription: attr('meta[name="description"]', 'content'),
        canonicalUrl: attr('link[rel="canonical"]', 'href'),
        h1Count: document.querySelectorAll('h1').length,
        h2Count: document.querySelectorAll('h2').length,
        h3Count: document.querySelectorAll('h3').length,
        imagesWithoutAlt: images.filter(img => !img.getAttribute('alt')).length,
        brokenImages: images.filter(img => !img.complete || !img.naturalWidth).length,
        hostname: window.location.hostname,
        linkHrefs: Array.from(document.querySelectorAll('a')).map(a => a.href),
        performance: {
            loadTime: Math.max(0, timing.loadEventEnd - timing.navigationStart),
            domContentLoaded: Math.max(0, timing.domContentLoadedEventEnd - timing.navigationStart),
            pageSize: document.documentElement.innerHTML.length,
            wordCount: bodyText ? bodyText.split(/\\s+/).length : 0
        },
        security: {
            hasHttps: window.location.protocol === 'https:',
            hasCsp: !!document.querySelector('meta[http-equiv="Content-Security-Policy"]')
        },
        mobile: {
            hasTouchIcons: !!document.querySelector('link[rel*="apple-touch-icon"]'),
            hasManifest: !!document.querySelector('link[rel="manifest"]'),
            smallFontCount: Array.from(document.querySelectorAll('*'))
                .filter(el => parseInt(window.getComputedStyle(el).fontSize) < 12).length,
            viewport: attr('meta[name="viewport"]', 'content')
        },
        meta: {
            keywords: attr('meta[name="keywords"]', 'content'),
            author: attr('meta[name="author"]', 'content'),
            favicons: Array.from(document.querySelectorAll('link[rel*="icon"]'))
                .map(link => link.getAttribute('href'))
                .filter(href => href !== null)
        }
    };
}
"""


def _link_hostname(href: str) -> str:
    """
    Hostname of an absolute link URL.

    Raises:
        ValueError: If the href is empty, relative or malformed
    """
    if not href:
        raise ValueError("empty href")
    parts = urlsplit(href)
    if not parts.scheme:
        raise ValueError(f"not an absolute URL: {href}")
    return parts.hostname or ""


def count_links(hrefs: Iterable[str], hostname: str) -> Tuple[int, int]:
    """
    Partition links into internal and external by hostname.

    A link whose URL cannot be parsed counts as internal, so every link is
    classified exactly once.

    Returns:
        (internal, external)
    """
    internal = 0
    external = 0
    hostname = (hostname or "").lower()

    for href in hrefs:
        try:
            is_internal = _link_hostname(href) == hostname
        except ValueError:
            is_internal = True

        if is_internal:
            internal += 1
        else:
            external += 1

    return internal, external


async def inspect_page(page: Page) -> PageSignals:
    """
    Extract on-page SEO signals from a loaded page.

    Args:
        page: Playwright Page already navigated to the target URL

    Returns:
        PageSignals record
    """
    data = await page.evaluate(EXTRACTION_SCRIPT)

    hrefs = data.pop("linkHrefs", [])
    internal, external = count_links(hrefs, data.pop("hostname", ""))
    data["internalLinks"] = internal
    data["externalLinks"] = external

    signals = PageSignals.model_validate(data)
    logger.info(
        f"🔎 Extracted signals: title={signals.title!r}, h1={signals.h1_count}, "
        f"links={internal}/{external}"
    )
    return signals


async def collect_network_stats(page: Page) -> Optional[NetworkStats]:
    """
    Read Chromium performance metrics for the page over CDP.

    Returns:
        NetworkStats, or None when the browser does not expose CDP
    """
    try:
        client = await page.context.new_cdp_session(page)
        await client.send("Performance.enable")
        response = await client.send("Performance.getMetrics")
        await client.detach()
    except Exception as e:
        logger.warning(f"⚠️  Performance metrics unavailable: {str(e)}")
        return None

    metrics = {m["name"]: m["value"] for m in response.get("metrics", [])}
    return NetworkStats(
        JSHeapUsedSize=round(metrics.get("JSHeapUsedSize", 0) / 1024 / 1024),
        JSHeapTotalSize=round(metrics.get("JSHeapTotalSize", 0) / 1024 / 1024),
        ScriptDuration=round(metrics.get("ScriptDuration", 0) * 1000),
        TaskDuration=round(metrics.get("TaskDuration", 0) * 1000),
    )
