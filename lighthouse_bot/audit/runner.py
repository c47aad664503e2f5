"""Lighthouse auditor — drives web.dev/measure with Playwright.

The sequence against the audit page is:

1. type the target URL into the input
2. dismiss the cookie snackbar
3. click RUN AUDIT and wait until the button is enabled again
4. click View Report, which opens the report in a new tab
5. read the four gauge percentages and the full report markup
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Browser, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lighthouse_bot.models import AuditResult

from .launcher import BrowserLauncher

logger = logging.getLogger(__name__)

URL_INPUT = "input.lh-input"
SNACKBAR_ACTION = "button.web-snackbar__action"
RUN_BUTTON = "button#run-lh-button"
RUN_BUTTON_BUSY = "button#run-lh-button[disabled]"
RUN_BUTTON_READY = "button#run-lh-button:not([disabled])"
VIEW_REPORT = "a.viewreport"
PERFORMANCE_ANCHOR = "a[href='#performance']"

# How long the run button may take to switch to its disabled state.
RUN_START_TIMEOUT_MS = 10_000

_GAUGE = "a[href='#{category}'] div.lh-gauge__percentage"


class AuditError(Exception):
    """A Lighthouse run failed for one URL."""

    def __init__(self, url: str, step: str, message: str = "") -> None:
        self.url = url
        self.step = step
        super().__init__(f"audit of {url} failed at {step}: {message}" if message else f"audit of {url} failed at {step}")


class Auditor(Protocol):
    """Protocol for anything that can audit a URL."""

    async def audit(self, url: str) -> AuditResult: ...


class LighthouseAuditor:
    """Runs one Lighthouse audit per call, each in its own browser."""

    def __init__(
        self,
        launcher: BrowserLauncher,
        *,
        audit_url: str = "https://web.dev/measure/",
        timeout_ms: int = 180_000,
    ) -> None:
        self._launcher = launcher
        self._audit_url = audit_url
        self._timeout_ms = timeout_ms

    async def audit(self, url: str) -> AuditResult:
        """Audit *url* and return its scores. Raises ``AuditError`` on any failure."""
        logger.info("audit started", extra={"url": url})
        started = time.monotonic()
        step = "launch"
        try:
            browser = await self._launcher.launch()
        except PlaywrightError as exc:
            raise AuditError(url, step, str(exc)) from exc

        try:
            step = "open"
            page = await browser.new_page()
            step = "navigate"
            await page.goto(self._audit_url)
            step = "enter url"
            await page.wait_for_selector(URL_INPUT)
            await page.fill(URL_INPUT, url)
            step = "dismiss snackbar"
            await page.click(SNACKBAR_ACTION)
            step = "run audit"
            await page.click(RUN_BUTTON)
            step = "wait for audit"
            await _wait_for_run_start(page, url)
            await page.wait_for_selector(RUN_BUTTON_READY, timeout=self._timeout_ms)
            step = "open report"
            async with page.expect_popup() as popup_info:
                await page.click(VIEW_REPORT)
            report = await popup_info.value
            step = "read report"
            result = await _read_report(report, url)
        except PlaywrightError as exc:
            logger.warning("audit failed", extra={"url": url, "step": step}, exc_info=True)
            raise AuditError(url, step, str(exc)) from exc
        finally:
            await _close_quietly(browser, url)

        logger.info(
            "audit completed",
            extra={
                "url": url,
                "performance": result.performance_score,
                "elapsed_seconds": round(time.monotonic() - started, 1),
            },
        )
        return result


async def _wait_for_run_start(page: Page, url: str) -> None:
    # The button is disabled while an audit runs; a very fast audit may re-enable it before we look.
    try:
        await page.wait_for_selector(RUN_BUTTON_BUSY, timeout=RUN_START_TIMEOUT_MS)
    except PlaywrightTimeoutError:
        logger.debug("run button never reported busy", extra={"url": url})


async def _close_quietly(browser: Browser, url: str) -> None:
    try:
        await browser.close()
    except PlaywrightError:
        logger.warning("browser close failed", extra={"url": url}, exc_info=True)


async def _read_report(report: Page, url: str) -> AuditResult:
    await report.wait_for_selector(PERFORMANCE_ANCHOR)
    performance = await report.inner_html(_GAUGE.format(category="performance"))
    accessibility = await report.inner_html(_GAUGE.format(category="accessibility"))
    best_practices = await report.inner_html(_GAUGE.format(category="best-practices"))
    seo = await report.inner_html(_GAUGE.format(category="seo"))
    html = await report.evaluate("() => document.documentElement.outerHTML")
    return AuditResult(
        url=url,
        performance_score=performance,
        accessibility_score=accessibility,
        best_practices_score=best_practices,
        seo_score=seo,
        report_html=html or "",
    )
