"""
Shared fixtures for SEO Analyzer tests

Fake Playwright objects stand in for a real browser so tests run without
launching Chromium.
"""

import copy
from contextlib import asynccontextmanager

import pytest

from browser_pool import BrowserSession, LaunchFailure
from utils.screenshot_capture import capture_screenshots


EXAMPLE_PAYLOAD = {
    "title": "Example",
    "metaDescription": None,
    "canonicalUrl": None,
    "h1Count": 1,
    "h2Count": 0,
    "h3Count": 0,
    "imagesWithoutAlt": 0,
    "brokenImages": 0,
    "hostname": "example.com",
    "linkHrefs": [
        "https://example.com/about",
        "https://www.iana.org/domains/example",
        "",
        "/relative/path",
        "http://[broken",
        "mailto:info@example.com",
    ],
    "performance": {
        "loadTime": 2400,
        "domContentLoaded": 1200,
        "pageSize": 4096,
        "wordCount": 30,
    },
    "security": {"hasHttps": True, "hasCsp": False},
    "mobile": {
        "hasTouchIcons": False,
        "hasManifest": False,
        "smallFontCount": 0,
        "viewport": "width=device-width, initial-scale=1",
    },
    "meta": {"keywords": None, "author": None, "favicons": []},
}


class FakeCDPSession:
    def __init__(self, metrics):
        self.metrics = metrics
        self.sent = []

    async def send(self, method, params=None):
        self.sent.append(method)
        if method == "Performance.getMetrics":
            return {"metrics": [{"name": k, "value": v} for k, v in self.metrics.items()]}
        return {}

    async def detach(self):
        pass


class FakeContext:
    def __init__(self, metrics=None):
        self.metrics = metrics

    async def new_cdp_session(self, page):
        if self.metrics is None:
            raise RuntimeError("CDP session is only available in Chromium")
        return FakeCDPSession(self.metrics)


class FakePage:
    def __init__(self, payload=None, metrics=None, fail_on_viewport=None):
        self.payload = payload if payload is not None else EXAMPLE_PAYLOAD
        self.context = FakeContext(metrics)
        self.fail_on_viewport = fail_on_viewport
        self.viewport = None
        self.visited = []
        self.closed = False

    async def goto(self, url, timeout=None):
        self.visited.append(url)

    async def evaluate(self, script):
        return copy.deepcopy(self.payload)

    async def set_viewport_size(self, size):
        self.viewport = (size["width"], size["height"])

    async def screenshot(self, type="png"):
        if self.viewport == self.fail_on_viewport:
            raise RuntimeError("screenshot failed")
        return f"jpeg-{self.viewport[0]}x{self.viewport[1]}".encode()

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page_factory=FakePage):
        self.page_factory = page_factory
        self.connected = True
        self.pages = []

    def is_connected(self):
        return self.connected

    async def new_page(self):
        page = self.page_factory()
        self.pages.append(page)
        return page

    async def close(self):
        self.connected = False


class FakeBrowserSession(BrowserSession):
    """BrowserSession whose launch returns FakeBrowser instances"""

    def __init__(self, fail_with=None, browser_factory=FakeBrowser, **kwargs):
        super().__init__(ws_endpoint=None, **kwargs)
        self.fail_with = fail_with
        self.browser_factory = browser_factory
        self.browsers = []
        self.launches = 0

    async def _launch(self):
        self.launches += 1
        if self.fail_with is not None:
            raise self.fail_with
        browser = self.browser_factory()
        self.browsers.append(browser)
        return browser


class StubSession:
    """Minimal session for route tests; never starts a keep-alive timer"""

    def __init__(self, page=None, launch_error=None):
        self.fake_page = page or FakePage()
        self.launch_error = launch_error

    @asynccontextmanager
    async def page(self):
        if self.launch_error:
            raise LaunchFailure(self.launch_error)
        try:
            yield self.fake_page
        finally:
            await self.fake_page.close()

    async def capture_screenshots(self, url, store):
        return await capture_screenshots(self, store, url)

    async def health_check(self):
        return {"state": "connected", "connected": True, "pages_in_use": 0}


class FakeStore:
    def __init__(self, fail_after=None):
        self.objects = {}
        self.fail_after = fail_after

    def put(self, key, data, ttl=None):
        if self.fail_after is not None and len(self.objects) >= self.fail_after:
            raise ConnectionError("object store unavailable")
        self.objects[key] = data

    def ping(self):
        return True

    def get_stats(self):
        return {"connected_clients": 1}


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def fake_store():
    return FakeStore()
