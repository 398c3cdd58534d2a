from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .config import RelayConfig
from .exceptions import DiscordAPIError
from .models import ThreadCreateRequest

logger = logging.getLogger(__name__)


class ForumClient(Protocol):
    """Anything that can open a thread in a Discord forum channel."""

    async def create_thread(self, channel_id: str, request: ThreadCreateRequest) -> Dict[str, Any]:
        ...


class DiscordClient:
    """Thin async wrapper around the Discord REST API."""

    def __init__(self, cfg: RelayConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._base_url = cfg.discord_api_base.rstrip("/")
        self._timeout = cfg.request_timeout
        self._headers = {
            "Authorization": f"Bot {cfg.discord_bot_token}",
            "Content-Type": "application/json",
        }
        self._transport = transport

    async def create_thread(self, channel_id: str, request: ThreadCreateRequest) -> Dict[str, Any]:
        url = f"{self._base_url}/channels/{channel_id}/threads"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(url, json=request.model_dump(), headers=self._headers)

        if response.is_error:
            raise DiscordAPIError(response.status_code, _error_message(response))

        # A 2xx means the thread exists even when the body is unreadable
        try:
            return response.json()
        except ValueError:
            logger.error(f"Discord answered {response.status_code} with a non-JSON body")
            return {}


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.text
