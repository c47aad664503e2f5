"""Google Sheets recorder — appends one row per audit result."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import date

import gspread

from lighthouse_bot.models import AuditResult

logger = logging.getLogger(__name__)

COLUMNS = ("Date", "URL", "PerformanceRate", "AccessibilityRate", "BestPracticesRate", "SeoRate")


def format_date(day: date) -> str:
    """Format *day* as ``Y/M/D`` without zero padding."""
    return f"{day.year}/{day.month}/{day.day}"


def build_row(result: AuditResult, day: date, header: Sequence[str] = COLUMNS) -> list[str]:
    """Lay out *result* in the order of *header*; unknown headers get an empty cell."""
    values = {
        "Date": format_date(day),
        "URL": result.url,
        "PerformanceRate": result.performance_score,
        "AccessibilityRate": result.accessibility_score,
        "BestPracticesRate": result.best_practices_score,
        "SeoRate": result.seo_score,
    }
    return [values.get(name, "") for name in header]


class SpreadsheetRecorder:
    """Appends audit results to a worksheet using a service account."""

    def __init__(self, spreadsheet_id: str, credentials_path: str, worksheet_id: int = 0) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._credentials_path = credentials_path
        self._worksheet_id = worksheet_id

    def _open_worksheet(self) -> gspread.Worksheet:
        client = gspread.service_account(filename=self._credentials_path)
        spreadsheet = client.open_by_key(self._spreadsheet_id)
        return spreadsheet.get_worksheet_by_id(self._worksheet_id)

    async def record(self, results: Sequence[AuditResult]) -> None:
        """Append one row per result. A failure part-way leaves earlier rows in place."""
        if not results:
            return

        worksheet = await asyncio.to_thread(self._open_worksheet)
        header = await asyncio.to_thread(worksheet.row_values, 1)
        if not header:
            header = list(COLUMNS)

        today = date.today()
        for result in results:
            row = build_row(result, today, header)
            await asyncio.to_thread(worksheet.append_row, row, value_input_option="USER_ENTERED")
            logger.debug("row appended", extra={"url": result.url})

        logger.info(
            "results recorded",
            extra={"spreadsheet_id": self._spreadsheet_id, "rows": len(results)},
        )
