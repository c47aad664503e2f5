"""Run orchestrator — filter -> (audit -> notify) per URL -> record."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from lighthouse_bot.audit import Auditor
from lighthouse_bot.chatwork.schemas import ChatMessage
from lighthouse_bot.config import Settings
from lighthouse_bot.filtering import extract_targets
from lighthouse_bot.models import AuditResult, TargetRequest
from lighthouse_bot.notifier import notify

logger = logging.getLogger(__name__)


class ChatPort(Protocol):
    """Chat operations required by a run."""

    async def get_messages(self) -> list[ChatMessage] | None: ...

    async def post_message(self, text: str, self_unread: bool = True) -> None: ...

    async def post_file(self, file_name: str, content: str | bytes, message: str = "") -> None: ...


class RecorderPort(Protocol):
    async def record(self, results: Sequence[AuditResult]) -> None: ...


@dataclass(frozen=True)
class TaskOutcome:
    """Result or error of one URL's audit -> notify task."""

    url: str
    result: AuditResult | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunSummary:
    run_id: str
    targets: list[TargetRequest] = field(default_factory=list)
    outcomes: list[TaskOutcome] = field(default_factory=list)
    recorded: bool = False

    @property
    def results(self) -> list[AuditResult]:
        return [o.result for o in self.outcomes if o.result is not None]

    @property
    def failures(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


def format_failure(outcome: TaskOutcome) -> str:
    return f"Lighthouse audit failed\nTarget URL：{outcome.url}\nReason：{outcome.error}"


async def _audit_and_notify(chat: ChatPort, auditor: Auditor, target: TargetRequest) -> AuditResult:
    result = await auditor.audit(target.url)
    await notify(chat, result)
    return result


async def run(
    settings: Settings,
    chat: ChatPort,
    auditor: Auditor,
    recorder: RecorderPort,
) -> RunSummary:
    """Execute one polling run and return what happened.

    A failing URL does not abort the others; its error is logged and listed
    in ``RunSummary.failures``. Only results that were posted get recorded.
    """
    summary = RunSummary(run_id=uuid.uuid4().hex[:12])

    history = await chat.get_messages()
    if history is None:
        logger.warning("no message history, nothing to do", extra={"run_id": summary.run_id})
        history = []

    summary.targets = extract_targets(history, settings.cw_user_id)
    logger.info(
        "run started",
        extra={
            "run_id": summary.run_id,
            "messages": len(history),
            "targets": [t.url for t in summary.targets],
        },
    )

    outcomes = await asyncio.gather(
        *(_audit_and_notify(chat, auditor, target) for target in summary.targets),
        return_exceptions=True,
    )

    for target, outcome in zip(summary.targets, outcomes):
        if isinstance(outcome, AuditResult):
            summary.outcomes.append(TaskOutcome(url=target.url, result=outcome))
            continue
        if not isinstance(outcome, Exception):
            raise outcome
        logger.error(
            "target failed",
            extra={"run_id": summary.run_id, "url": target.url},
            exc_info=outcome,
        )
        summary.outcomes.append(TaskOutcome(url=target.url, error=outcome))

    if settings.notify_failures:
        for failure in summary.failures:
            await chat.post_message(format_failure(failure), self_unread=settings.self_unread)

    results = summary.results
    if results:
        await recorder.record(results)
        summary.recorded = True

    logger.info(
        "run completed",
        extra={
            "run_id": summary.run_id,
            "targets": len(summary.targets),
            "succeeded": len(results),
            "failed": len(summary.failures),
            "recorded": summary.recorded,
        },
    )
    return summary
