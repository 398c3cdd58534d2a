"""Delivers formatted issues to a Discord forum with retry and backoff."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from ..discord_client import ForumClient
from ..exceptions import DeliveryError
from ..models import GitHubIssueWebhook, ThreadRecord, create_thread_request
from .formatter import format_event

logger = logging.getLogger(__name__)

# Discord channel type for a thread created in a forum
PUBLIC_THREAD = 11

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff without jitter."""

    max_attempts: int = 3
    base_delay_ms: int = 1000

    def delay_ms(self, attempt: int) -> int:
        """Wait after failed ``attempt`` (1-based): 1s, 2s, 4s, ..."""
        return self.base_delay_ms * 2 ** (attempt - 1)


@dataclass
class RetryState:
    attempt: int = 0
    last_error: Optional[BaseException] = None


class ForumDelivery:
    """Creates one forum thread per delivered issue."""

    def __init__(
        self,
        channel_id: str,
        forum_client: ForumClient,
        policy: Optional[RetryPolicy] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.channel_id = channel_id
        self.forum_client = forum_client
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    async def deliver(self, event: GitHubIssueWebhook) -> ThreadRecord:
        formatted = format_event(event)
        request = create_thread_request(formatted.title, formatted.content)
        issue_number = event.issue.number if event.issue else None
        max_attempts = self.policy.max_attempts
        state = RetryState()

        while state.attempt < max_attempts:
            logger.info(
                f"Attempt {state.attempt + 1}/{max_attempts}: "
                f"Creating Discord forum thread for issue #{issue_number}"
            )
            try:
                data = await self.forum_client.create_thread(self.channel_id, request)
            except Exception as e:
                state.attempt += 1
                state.last_error = e
                logger.error(
                    f"Attempt {state.attempt}/{max_attempts} failed to create Discord forum thread: {e}"
                )
                if state.attempt >= max_attempts:
                    break

                delay_ms = self.policy.delay_ms(state.attempt)
                logger.info(f"Retrying in {delay_ms}ms...")
                await self._sleep(delay_ms / 1000)
                continue

            thread = self._to_record(data, formatted.title, attempts=state.attempt + 1)
            logger.info(f"Successfully created Discord forum thread: {thread.name} (ID: {thread.id})")
            return thread

        error_message = str(state.last_error) if state.last_error else "Unknown error"
        raise DeliveryError(
            f"Failed to create Discord forum thread after {state.attempt} attempts: {error_message}",
            attempts=state.attempt,
            last_error=state.last_error,
        )

    def _to_record(self, data: Any, title: str, attempts: int) -> ThreadRecord:
        # Success responses are never retried
        if not isinstance(data, dict) or not data.get("id"):
            raise DeliveryError(
                f"Discord returned no thread id after {attempts} attempts: {data!r}",
                attempts=attempts,
            )
        guild_id = data.get("guild_id")
        try:
            return ThreadRecord(
                id=str(data["id"]),
                name=data.get("name") or title,
                type=data.get("type", PUBLIC_THREAD),
                parent_id=str(data.get("parent_id") or self.channel_id),
                guild_id=str(guild_id) if guild_id is not None else None,
            )
        except ValidationError as e:
            raise DeliveryError(
                f"Discord returned an unreadable thread after {attempts} attempts: {e}",
                attempts=attempts,
                last_error=e,
            ) from e
