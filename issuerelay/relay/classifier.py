"""Decides which webhook events the relay acts on."""

from dataclasses import dataclass

from ..models import GitHubIssueWebhook

OPENED_ACTION = "opened"


@dataclass(frozen=True)
class Classification:
    actionable: bool


def classify(event: GitHubIssueWebhook) -> Classification:
    """Only newly opened issues are forwarded; every other action is ignored."""
    return Classification(actionable=event.action == OPENED_ACTION and event.issue is not None)
