"""
Tests for the browser session lifecycle: lazy launch, reuse, keep-alive
and teardown
"""
import asyncio

import pytest

from browser_pool import LaunchFailure, SessionState

from conftest import FakeBrowser, FakeBrowserSession


@pytest.mark.asyncio
async def test_session_starts_absent_and_launches_on_first_use():
    session = FakeBrowserSession()
    assert session.state is SessionState.ABSENT

    browser = await session.ensure_session()

    assert browser.is_connected()
    assert session.state is SessionState.CONNECTED
    assert await session.ensure_session() is browser
    assert session.launches == 1
    await session.cleanup()


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_launch():
    session = FakeBrowserSession()

    browsers = await asyncio.gather(*(session.ensure_session() for _ in range(5)))

    assert session.launches == 1
    assert all(b is browsers[0] for b in browsers)
    await session.cleanup()


@pytest.mark.asyncio
async def test_disconnected_browser_is_replaced():
    session = FakeBrowserSession()
    first = await session.ensure_session()
    first.connected = False

    second = await session.ensure_session()

    assert second is not first
    assert session.launches == 2
    await session.cleanup()


@pytest.mark.asyncio
async def test_launch_failure_carries_provider_message():
    session = FakeBrowserSession(fail_with=RuntimeError("no browser binding"))

    with pytest.raises(LaunchFailure, match="no browser binding"):
        await session.ensure_session()

    assert session.browser is None
    assert session.state is SessionState.ABSENT


@pytest.mark.asyncio
async def test_page_is_closed_on_exit_and_on_error():
    session = FakeBrowserSession()

    async with session.page() as page:
        assert session.pages_in_use == 1
    assert page.closed
    assert session.pages_in_use == 0

    with pytest.raises(ValueError):
        async with session.page() as failing_page:
            raise ValueError("navigation failed")
    assert failing_page.closed
    assert session.pages_in_use == 0
    await session.cleanup()


@pytest.mark.asyncio
async def test_keep_alive_closes_after_idle_budget():
    session = FakeBrowserSession(keep_alive_seconds=60, tick_seconds=10)
    browser = await session.ensure_session()

    for _ in range(5):
        assert await session.alarm() is False
        assert session.state is SessionState.CONNECTED

    assert await session.alarm() is True
    assert session.state is SessionState.CLOSED
    assert not browser.is_connected()

    # Next use relaunches
    await session.ensure_session()
    assert session.state is SessionState.CONNECTED
    assert session.launches == 2
    await session.cleanup()


@pytest.mark.asyncio
async def test_keep_alive_waits_for_pages_in_use():
    session = FakeBrowserSession(keep_alive_seconds=20, tick_seconds=10)

    async with session.page():
        await session.alarm()
        assert await session.alarm() is False
        assert session.is_connected()

    assert await session.alarm() is True
    assert session.state is SessionState.CLOSED
    await session.cleanup()


@pytest.mark.asyncio
async def test_keep_alive_timer_runs_in_background():
    session = FakeBrowserSession(keep_alive_seconds=0.05, tick_seconds=0.01)

    async with session.page():
        pass

    await asyncio.sleep(0.2)
    assert session.state is SessionState.CLOSED
    await session.cleanup()


@pytest.mark.asyncio
async def test_cleanup_closes_browser():
    session = FakeBrowserSession()
    browser = await session.ensure_session()

    await session.cleanup()

    assert not browser.is_connected()
    assert session.state is SessionState.CLOSED
    health = await session.health_check()
    assert health["state"] == "closed"
    assert health["connected"] is False


class SlowClosingBrowser(FakeBrowser):
    async def close(self):
        await asyncio.sleep(0.05)
        self.connected = False


@pytest.mark.asyncio
async def test_page_acquired_during_teardown_gets_fresh_browser():
    session = FakeBrowserSession(
        keep_alive_seconds=10, tick_seconds=10, browser_factory=SlowClosingBrowser
    )
    closing = await session.ensure_session()

    teardown = asyncio.create_task(session.alarm())
    await asyncio.sleep(0.01)

    async with session.page() as page:
        assert session.browser is not closing
        assert session.is_connected()
        assert session.state is SessionState.CONNECTED
        assert page in session.browser.pages
        assert page not in closing.pages

    assert await teardown is True
    assert not closing.is_connected()
    assert session.launches == 2
    await session.cleanup()


@pytest.mark.asyncio
async def test_closing_browser_is_not_returned_by_ensure_session():
    session = FakeBrowserSession(
        keep_alive_seconds=10, tick_seconds=10, browser_factory=SlowClosingBrowser
    )
    closing = await session.ensure_session()

    teardown = asyncio.create_task(session.alarm())
    await asyncio.sleep(0.01)

    browser = await session.ensure_session()

    assert browser is not closing
    assert await teardown is True
    assert browser.is_connected()
    await session.cleanup()
