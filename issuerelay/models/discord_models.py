"""Pydantic models for Discord forum thread creation."""

from typing import Optional
from pydantic import BaseModel, ConfigDict

# 24 hours, in minutes
AUTO_ARCHIVE_DURATION = 1440


class ThreadMessage(BaseModel):
    """Starter message of a forum thread."""
    content: str


class ThreadCreateRequest(BaseModel):
    """Body of a ``POST /channels/{id}/threads`` call on a forum channel."""
    name: str
    message: ThreadMessage
    auto_archive_duration: int = AUTO_ARCHIVE_DURATION


class ThreadRecord(BaseModel):
    """Discord's acknowledgment of a created forum thread."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    type: int
    parent_id: str
    guild_id: Optional[str] = None


def create_thread_request(name: str, content: str) -> ThreadCreateRequest:
    """Create a forum thread request from a title and starter message."""
    return ThreadCreateRequest(name=name, message=ThreadMessage(content=content))
