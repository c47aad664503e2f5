"""Chatwork integration: REST client and payload models."""

from .client import ChatworkClient
from .schemas import Author, ChatMessage

__all__ = [
    "Author",
    "ChatMessage",
    "ChatworkClient",
]
