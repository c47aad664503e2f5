"""Format audit results and post them back to the room."""

from __future__ import annotations

import logging
import re
from typing import Protocol

from lighthouse_bot.filtering import ANSWER_MARKER
from lighthouse_bot.models import AuditResult

logger = logging.getLogger(__name__)

REPORT_EXTENSION = ".html"

_UNSAFE_CHARS = re.compile(r"[/?:,]")


class FilePoster(Protocol):
    async def post_file(self, file_name: str, content: str | bytes, message: str = "") -> None: ...


def report_file_name(url: str) -> str:
    """Build the attachment name for *url*, e.g. ``httpa.comxy=1.html``."""
    return _UNSAFE_CHARS.sub("", url) + REPORT_EXTENSION


def format_message(result: AuditResult) -> str:
    # Starts with ANSWER_MARKER so the next run stops scanning here.
    return "\n".join(
        [
            ANSWER_MARKER,
            f"Target URL：{result.url}",
            f"Performance：{result.performance_score}",
            f"Accessibility：{result.accessibility_score}",
            f"Best Practices：{result.best_practices_score}",
            f"SEO：{result.seo_score}",
        ]
    )


async def notify(client: FilePoster, result: AuditResult) -> None:
    """Post *result* with its report attached. Errors propagate to the caller."""
    file_name = report_file_name(result.url)
    await client.post_file(file_name, result.report_html or "", format_message(result))
    logger.info("result posted", extra={"url": result.url, "file_name": file_name})
