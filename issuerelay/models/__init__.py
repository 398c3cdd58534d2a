"""Shared models for webhook ingestion and Discord delivery."""

from .github_models import (
    GitHubIssueWebhook,
    GitHubIssue,
    GitHubUser,
    GitHubLabel,
    GitHubRepository,
)

from .discord_models import (
    AUTO_ARCHIVE_DURATION,
    ThreadCreateRequest,
    ThreadMessage,
    ThreadRecord,
    create_thread_request,
)

from .results import (
    ErrorKind,
    Ignored,
    Delivered,
    Failed,
    PipelineResult,
)

__all__ = [
    # GitHub webhook models
    "GitHubIssueWebhook",
    "GitHubIssue",
    "GitHubUser",
    "GitHubLabel",
    "GitHubRepository",
    # Discord models
    "AUTO_ARCHIVE_DURATION",
    "ThreadCreateRequest",
    "ThreadMessage",
    "ThreadRecord",
    "create_thread_request",
    # Pipeline results
    "ErrorKind",
    "Ignored",
    "Delivered",
    "Failed",
    "PipelineResult",
]
