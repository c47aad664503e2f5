"""Chatwork API payload models."""

from pydantic import BaseModel, ConfigDict, Field


class Author(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(alias="account_id")
    display_name: str = Field(default="", alias="name")
    avatar_url: str = Field(default="", alias="avatar_image_url")


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    message_id: str
    body: str = ""
    author: Author = Field(alias="account")
