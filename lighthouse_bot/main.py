"""Batch entrypoint — one polling run, then exit."""

import asyncio
import logging
import sys

from lighthouse_bot.audit import ChromiumLauncher, LighthouseAuditor
from lighthouse_bot.chatwork import ChatworkClient
from lighthouse_bot.config import Settings, get_settings
from lighthouse_bot.logging_config import setup_logging
from lighthouse_bot.orchestrator import run
from lighthouse_bot.recorder import SpreadsheetRecorder

logger = logging.getLogger(__name__)


async def main(settings: Settings | None = None) -> int:
    settings = settings or get_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info(
        "starting lighthouse bot",
        extra={
            "room_id": settings.cw_room_id,
            "audit_url": settings.audit_url,
            "audit_timeout_ms": settings.audit_timeout_ms,
        },
    )

    recorder = SpreadsheetRecorder(
        spreadsheet_id=settings.spreadsheet_id,
        credentials_path=settings.credentials_path,
        worksheet_id=settings.worksheet_id,
    )

    async with (
        ChatworkClient(
            settings.cw_key,
            settings.cw_room_id,
            base_url=settings.cw_api_url,
            timeout=settings.cw_request_timeout,
        ) as chat,
        ChromiumLauncher(headless=settings.headless) as launcher,
    ):
        auditor = LighthouseAuditor(
            launcher,
            audit_url=settings.audit_url,
            timeout_ms=settings.audit_timeout_ms,
        )
        summary = await run(settings, chat, auditor, recorder)

    return 0 if summary.ok else 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
