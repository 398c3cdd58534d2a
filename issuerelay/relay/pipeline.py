"""Webhook processing pipeline.

Steps run in a fixed order and stop at the first one that fails or decides
the event should be ignored:

1. configuration check
2. signature verification
3. payload parsing
4. event classification
5. formatting and delivery to Discord
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from ..common import log_error, log_server_message, verify_hmac_signature
from ..config import RelayConfig
from ..discord_client import DiscordClient, ForumClient
from ..exceptions import DeliveryError
from ..models import (
    Delivered,
    ErrorKind,
    Failed,
    GitHubIssueWebhook,
    Ignored,
    PipelineResult,
)
from .classifier import classify
from .delivery import ForumDelivery, RetryPolicy, Sleep

logger = logging.getLogger(__name__)


class WebhookPipeline:
    """Turns a signed GitHub webhook delivery into a Discord forum thread."""

    def __init__(
        self,
        config: RelayConfig,
        forum_client: Optional[ForumClient] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.config = config
        self.forum_client = forum_client or DiscordClient(config)
        policy = RetryPolicy(max_attempts=config.max_attempts, base_delay_ms=config.base_delay_ms)
        self.delivery = ForumDelivery(config.forum_channel_id, self.forum_client, policy, sleep)

    async def process(self, raw_body: bytes, signature: Optional[str]) -> PipelineResult:
        """Process the raw request body exactly as received."""
        # 1. Validate configuration
        missing = self.config.missing_settings()
        if missing:
            detail = f"Missing environment variables: {', '.join(missing)}"
            log_error(f"Server configuration error: {detail}", log_dir=self.config.log_dir)
            return Failed(ErrorKind.CONFIG_ERROR, detail)

        # 2. Verify signature
        if not verify_hmac_signature(raw_body, signature, self.config.webhook_secret):
            log_server_message("Invalid GitHub webhook signature detected")
            log_server_message(f"Received signature: {signature}")
            return Failed(ErrorKind.AUTH_ERROR, "Invalid signature")

        # 3. Parse payload
        try:
            event = GitHubIssueWebhook.model_validate_json(raw_body)
        except ValidationError as e:
            log_error(
                f"Failed to parse webhook payload: {e}",
                raw_body.decode('utf-8', errors='ignore'),
                log_dir=self.config.log_dir,
            )
            return Failed(ErrorKind.PARSE_ERROR, f"Invalid JSON payload: {_first_error(e)}")

        # 4. Check event type
        if not classify(event).actionable:
            log_server_message(f'Ignoring webhook event: {event.action} (only processing "opened" events)')
            return Ignored(event.action)

        # 5. Create Discord thread
        log_server_message(f"Processing new GitHub issue: {event.repository.full_name}#{event.issue.number}")
        try:
            thread = await self.delivery.deliver(event)
        except DeliveryError as e:
            log_error(f"GitHub webhook processing error: {e}", log_dir=self.config.log_dir)
            return Failed(ErrorKind.DELIVERY_ERROR, str(e))

        log_server_message(
            f"Successfully processed GitHub issue #{event.issue.number} -> Discord thread {thread.id}"
        )
        return Delivered(thread)


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]
