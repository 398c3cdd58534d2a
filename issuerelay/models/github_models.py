"""Pydantic models for GitHub issue webhook payloads."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class GitHubUser(BaseModel):
    """GitHub user who opened the issue."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str
    avatar_url: Optional[str] = None


class GitHubLabel(BaseModel):
    """Label applied to an issue."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    color: str = ""


class GitHubIssue(BaseModel):
    """GitHub issue information."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int
    title: str
    # GitHub sends null for an empty description
    body: Optional[str] = None
    html_url: str
    user: GitHubUser
    labels: List[GitHubLabel] = Field(default_factory=list)


class GitHubRepository(BaseModel):
    """Repository the issue belongs to."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    full_name: str


class GitHubIssueWebhook(BaseModel):
    """Payload of a GitHub ``issues`` webhook delivery."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    action: str
    issue: Optional[GitHubIssue] = None
    repository: GitHubRepository
