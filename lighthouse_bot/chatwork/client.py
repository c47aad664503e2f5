"""Chatwork REST client — read room messages, post text and files."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx
from pydantic import TypeAdapter, ValidationError

from .schemas import ChatMessage

logger = logging.getLogger(__name__)

_MESSAGES = TypeAdapter(list[ChatMessage])


class ChatworkClient:
    """Thin async wrapper around the Chatwork v2 API for a single room."""

    def __init__(
        self,
        api_key: str,
        room_id: str,
        *,
        base_url: str = "https://api.chatwork.com/v2",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._room_id = room_id
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"X-ChatWorkToken": api_key, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> ChatworkClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_messages(self) -> list[ChatMessage] | None:
        """Return the room's latest messages, or ``None`` if they could not be read."""
        try:
            resp = await self._client.get(
                f"/rooms/{self._room_id}/messages",
                params={"force": 1},
            )
        except httpx.HTTPError:
            logger.warning("chatwork read failed", extra={"room_id": self._room_id}, exc_info=True)
            return None

        # 204 means the room has nothing to return.
        if resp.status_code == httpx.codes.NO_CONTENT:
            logger.debug("chatwork room empty", extra={"room_id": self._room_id})
            return []
        if resp.status_code != httpx.codes.OK:
            logger.warning(
                "chatwork read returned unexpected status",
                extra={"room_id": self._room_id, "status_code": resp.status_code},
            )
            return None

        try:
            messages = _MESSAGES.validate_json(resp.content)
        except ValidationError:
            logger.warning("chatwork messages payload invalid", extra={"room_id": self._room_id}, exc_info=True)
            return None

        logger.debug("chatwork messages received", extra={"room_id": self._room_id, "count": len(messages)})
        return messages

    async def post_message(self, text: str, self_unread: bool = True) -> None:
        """Post a text message. Failures are logged, never raised."""
        try:
            resp = await self._client.post(
                f"/rooms/{self._room_id}/messages",
                params={"body": text, "self_unread": "1" if self_unread else "0"},
            )
        except httpx.HTTPError:
            logger.warning("chatwork post failed", extra={"room_id": self._room_id}, exc_info=True)
            return
        if resp.status_code != httpx.codes.OK:
            logger.warning(
                "chatwork post returned unexpected status",
                extra={"room_id": self._room_id, "status_code": resp.status_code, "response": resp.text[:200]},
            )

    async def post_file(
        self,
        file_name: str,
        content: str | bytes,
        message: str = "",
        content_type: str = "text/html",
    ) -> None:
        """Upload *content* as a file attachment with an accompanying message.

        Raises ``httpx.HTTPError`` on transport failure or a non-2xx response.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")
        resp = await self._client.post(
            f"/rooms/{self._room_id}/files",
            files={"file": (file_name, content, content_type)},
            data={"message": message},
        )
        resp.raise_for_status()
        logger.debug(
            "chatwork file posted",
            extra={"room_id": self._room_id, "file_name": file_name, "size": len(content)},
        )
