"""Pick out audit requests from a room's message history.

A request looks like::

    [To:1234] 性能を教えて https://example.com/ https://example.com/catalog/

Every answer the bot posts starts with ``ANSWER_MARKER``, so the history is
only scanned up to the first answer.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from lighthouse_bot.chatwork.schemas import ChatMessage
from lighthouse_bot.models import TargetRequest

ANSWER_MARKER = "それは、"
PERFORMANCE_KEYWORD = "性能"
REQUEST_KEYWORD = "教えて"

URL_PATTERN = re.compile(r"https?://(?:[\w-]+\.)+[\w-]+(?:/[\w\-./?%&=,]*)?", re.ASCII)


def is_target(body: str, user_id: str) -> bool:
    """True if *body* asks *user_id* for a performance check."""
    return PERFORMANCE_KEYWORD in body and REQUEST_KEYWORD in body and user_id in body


def extract_urls(body: str) -> list[str]:
    return [m.group(0) for m in URL_PATTERN.finditer(body)]


def filter_history(history: Sequence[ChatMessage], user_id: str) -> list[ChatMessage]:
    """Return the request messages scanned before the first answer.

    With no answer in the history, the whole history is scanned.
    """
    scanned = list(reversed(history))
    cutoff = next(
        (i for i, message in enumerate(scanned) if message.body.startswith(ANSWER_MARKER)),
        len(scanned),
    )
    return [message for message in scanned[:cutoff] if is_target(message.body, user_id)]


def extract_targets(history: Sequence[ChatMessage], user_id: str) -> list[TargetRequest]:
    """Turn a newest-first message history into an ordered, de-duplicated URL list."""
    seen: set[str] = set()
    targets: list[TargetRequest] = []
    for message in filter_history(history, user_id):
        for url in extract_urls(message.body):
            if url not in seen:
                seen.add(url)
                targets.append(TargetRequest(url=url))
    return targets
