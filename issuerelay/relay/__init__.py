"""Webhook relay pipeline.

This module handles:
- Deciding which GitHub issue events are forwarded
- Formatting issues for Discord forum threads
- Delivering threads with retry and backoff
- Sequencing the steps for a single webhook delivery
"""

from .classifier import Classification, classify
from .formatter import FormattedIssue, format_event, format_issue_message, format_thread_title
from .delivery import ForumDelivery, RetryPolicy
from .pipeline import WebhookPipeline

__all__ = [
    "Classification",
    "classify",
    "FormattedIssue",
    "format_event",
    "format_issue_message",
    "format_thread_title",
    "ForumDelivery",
    "RetryPolicy",
    "WebhookPipeline",
]
