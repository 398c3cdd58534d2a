"""Shared fixtures and fakes for relay tests."""

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from issuerelay.common import signature_header
from issuerelay.config import RelayConfig
from issuerelay.models import GitHubIssueWebhook, ThreadCreateRequest

SECRET = "It's a Secret to Everybody"
CHANNEL_ID = "1200000000000000001"

RESOURCES = Path(__file__).parent / "resources"


class FakeForumClient:
    """Records thread requests and replays scripted outcomes."""

    def __init__(self, outcomes: Optional[List[Any]] = None):
        # Each outcome is either an exception to raise or a response dict
        self.outcomes = list(outcomes or [])
        self.calls: List[tuple] = []

    async def create_thread(self, channel_id: str, request: ThreadCreateRequest) -> Dict[str, Any]:
        self.calls.append((channel_id, request))
        outcome = self.outcomes.pop(0) if self.outcomes else {"id": "thread-1", "type": 11}
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def load_sample_payload() -> Dict[str, Any]:
    with open(RESOURCES / "sample_issue_opened.json", "r", encoding="utf-8") as f:
        return json.load(f)


def make_payload(
    action: str = "opened",
    title: str = "Crash when saving a widget with an empty name",
    body: Optional[str] = "Steps to reproduce",
    labels: Optional[List[Dict[str, str]]] = None,
    number: int = 42,
) -> Dict[str, Any]:
    payload = copy.deepcopy(load_sample_payload())
    payload["action"] = action
    payload["issue"]["title"] = title
    payload["issue"]["body"] = body
    payload["issue"]["labels"] = labels if labels is not None else []
    payload["issue"]["number"] = number
    return payload


def make_event(**kwargs) -> GitHubIssueWebhook:
    return GitHubIssueWebhook.model_validate(make_payload(**kwargs))


def encode(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


def sign(body: bytes, secret: str = SECRET) -> str:
    return signature_header(body, secret)


@pytest.fixture
def relay_config(tmp_path) -> RelayConfig:
    return RelayConfig(
        webhook_secret=SECRET,
        discord_bot_token="bot-token",
        forum_channel_id=CHANNEL_ID,
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def forum_client() -> FakeForumClient:
    return FakeForumClient()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
