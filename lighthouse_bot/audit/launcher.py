"""Browser launchers for the Lighthouse auditor."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Protocol

from playwright.async_api import Browser, Playwright, async_playwright

logger = logging.getLogger(__name__)


class BrowserLauncher(Protocol):
    """Protocol for anything that can start a fresh browser."""

    async def launch(self) -> Browser: ...


class ChromiumLauncher:
    """Starts a new Chromium browser per ``launch()`` on one shared Playwright driver.

    The driver is started by the first ``launch()`` inside the ``async with``
    block, so a run with nothing to audit never spawns it. It is stopped on exit.
    """

    def __init__(self, *, headless: bool = True, args: list[str] | None = None) -> None:
        self._headless = headless
        self._args = args if args is not None else ["--no-sandbox", "--disable-dev-shm-usage"]
        self._active = False
        self._playwright: Playwright | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> ChromiumLauncher:
        self._active = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._active = False
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
            logger.debug("playwright driver stopped")

    async def _driver(self) -> Playwright:
        async with self._lock:
            if self._playwright is None:
                self._playwright = await async_playwright().start()
                logger.debug("playwright driver started")
            return self._playwright

    async def launch(self) -> Browser:
        if not self._active:
            raise RuntimeError("ChromiumLauncher must be entered before launching browsers")
        driver = await self._driver()
        return await driver.chromium.launch(headless=self._headless, args=self._args)
