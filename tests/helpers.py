"""Test helpers — message and result factories, fake chat and recorder."""

from __future__ import annotations

from collections.abc import Sequence

from lighthouse_bot.chatwork.schemas import Author, ChatMessage
from lighthouse_bot.models import AuditResult

USER_ID = "[To:1234]"


def make_message(body: str, message_id: str = "1", account_id: str = "99") -> ChatMessage:
    return ChatMessage(
        message_id=message_id,
        body=body,
        author=Author(id=account_id, display_name="someone", avatar_url=""),
    )


def make_result(url: str = "https://example.com/", **overrides) -> AuditResult:
    defaults = dict(
        url=url,
        performance_score="87",
        accessibility_score="92",
        best_practices_score="100",
        seo_score="90",
        report_html="<html><body>report</body></html>",
    )
    defaults.update(overrides)
    return AuditResult(**defaults)


class FakeChat:
    """In-memory chat double recording every outbound call."""

    def __init__(self, history: list[ChatMessage] | None = None, fail_files_for: Sequence[str] = ()) -> None:
        self.history = history
        self.fail_files_for = set(fail_files_for)
        self.files: list[tuple[str, str | bytes, str]] = []
        self.messages: list[tuple[str, bool]] = []

    async def get_messages(self) -> list[ChatMessage] | None:
        return self.history

    async def post_message(self, text: str, self_unread: bool = True) -> None:
        self.messages.append((text, self_unread))

    async def post_file(self, file_name: str, content: str | bytes, message: str = "") -> None:
        if file_name in self.fail_files_for:
            raise RuntimeError(f"upload rejected: {file_name}")
        self.files.append((file_name, content, message))


class FakeRecorder:
    def __init__(self) -> None:
        self.calls: list[list[AuditResult]] = []

    async def record(self, results: Sequence[AuditResult]) -> None:
        self.calls.append(list(results))
