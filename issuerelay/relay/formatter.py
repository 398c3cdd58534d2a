"""Renders GitHub issues into Discord forum thread titles and messages.

Discord rejects thread names over 100 characters and messages over 2000
characters. The description is capped at 1500 characters so the rest of the
message fits in the remaining headroom.
"""

from dataclasses import dataclass

from ..models import GitHubIssue, GitHubIssueWebhook

MAX_THREAD_NAME_LENGTH = 100
MAX_MESSAGE_LENGTH = 2000
MAX_DESCRIPTION_LENGTH = 1500

ELLIPSIS = "..."
NO_LABELS = "_No labels_"
NO_DESCRIPTION = "_No description provided_"
DESCRIPTION_TRUNCATED = "...\n\n_[Description truncated]_"


@dataclass(frozen=True)
class FormattedIssue:
    title: str
    content: str


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, ending in an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[:limit - len(ELLIPSIS)] + ELLIPSIS


def _issue(event: GitHubIssueWebhook) -> GitHubIssue:
    if event.issue is None:
        raise ValueError(f"Event '{event.action}' carries no issue to format")
    return event.issue


def format_thread_title(event: GitHubIssueWebhook) -> str:
    issue = _issue(event)
    return truncate(f"[#{issue.number}] {issue.title}", MAX_THREAD_NAME_LENGTH)


def format_labels(issue: GitHubIssue) -> str:
    if not issue.labels:
        return NO_LABELS
    return ", ".join(f"`{label.name}`" for label in issue.labels)


def format_description(issue: GitHubIssue) -> str:
    description = issue.body or NO_DESCRIPTION
    if len(description) > MAX_DESCRIPTION_LENGTH:
        description = description[:MAX_DESCRIPTION_LENGTH] + DESCRIPTION_TRUNCATED
    return description


def format_issue_message(event: GitHubIssueWebhook) -> str:
    """Build the starter message for the forum thread."""
    issue = _issue(event)
    repository = event.repository

    message = (
        f"## New Issue in {repository.name}\n"
        f"\n"
        f"**Issue #{issue.number}: {issue.title}**\n"
        f"\n"
        f"**Repository:** {repository.full_name}\n"
        f"**Author:** @{issue.user.login}\n"
        f"**Labels:** {format_labels(issue)}\n"
        f"\n"
        f"**Description:**\n"
        f"{format_description(issue)}\n"
        f"\n"
        f"**View on GitHub:** {issue.html_url}"
    )
    # Only reachable with pathological titles or label lists
    return truncate(message, MAX_MESSAGE_LENGTH)


def format_event(event: GitHubIssueWebhook) -> FormattedIssue:
    return FormattedIssue(
        title=format_thread_title(event),
        content=format_issue_message(event),
    )
