"""Configuration for the GitHub to Discord issue relay."""

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_DISCORD_API_BASE = "https://discord.com/api/v10"
DEFAULT_WEBHOOK_ENDPOINT = "/api/github-webhook"


@dataclass(frozen=True)
class RelayConfig:
    """Configuration for webhook ingestion and Discord delivery.

    Built once at startup and never mutated; every request reads the same
    instance.
    """

    # Required settings
    webhook_secret: str = ""
    discord_bot_token: str = ""
    forum_channel_id: str = ""

    # Discord API settings
    discord_api_base: str = DEFAULT_DISCORD_API_BASE
    request_timeout: float = 10.0

    # Retry settings
    max_attempts: int = 3
    base_delay_ms: int = 1000

    # Server settings
    webhook_endpoint: str = DEFAULT_WEBHOOK_ENDPOINT
    host: str = "0.0.0.0"
    port: int = 8080

    # Logging
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "RelayConfig":
        """Create configuration from environment variables."""
        return cls(
            webhook_secret=os.getenv("GITHUB_WEBHOOK_SECRET", ""),
            discord_bot_token=os.getenv("DISCORD_BOT_TOKEN", ""),
            forum_channel_id=os.getenv("DISCORD_FORUM_CHANNEL_ID", ""),
            discord_api_base=os.getenv("DISCORD_API_BASE", DEFAULT_DISCORD_API_BASE),
            request_timeout=float(os.getenv("DISCORD_TIMEOUT_SECONDS", "10")),
            max_attempts=int(os.getenv("RELAY_MAX_ATTEMPTS", "3")),
            base_delay_ms=int(os.getenv("RELAY_BASE_DELAY_MS", "1000")),
            webhook_endpoint=os.getenv("RELAY_WEBHOOK_ENDPOINT", DEFAULT_WEBHOOK_ENDPOINT),
            host=os.getenv("RELAY_HOST", "0.0.0.0"),
            port=int(os.getenv("RELAY_PORT", "8080")),
            log_dir=os.getenv("ISSUERELAY_LOG_DIR", "logs"),
        )

    def missing_settings(self) -> List[str]:
        """Return the environment variable names of unset required settings."""
        missing = []
        if not self.webhook_secret:
            missing.append("GITHUB_WEBHOOK_SECRET")
        if not self.discord_bot_token:
            missing.append("DISCORD_BOT_TOKEN")
        if not self.forum_channel_id:
            missing.append("DISCORD_FORUM_CHANNEL_ID")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_settings()
