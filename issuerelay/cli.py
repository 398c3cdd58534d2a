#!/usr/bin/env python3
"""CLI for the GitHub to Discord issue relay."""

import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .common import signature_header
from .config import RelayConfig
from .models import GitHubIssueWebhook
from .relay import classify, format_event

console = Console()


def _mask(value: str) -> str:
    return '*' * len(value) if value else 'Not set'


@click.group()
def cli():
    """Relay GitHub issue webhooks to a Discord forum channel."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (overrides RELAY_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind to (overrides RELAY_PORT)")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host, port, reload):
    """Start the webhook relay server."""
    try:
        config = RelayConfig.from_env()
        host = host or config.host
        port = port or config.port

        console.print("🚀 Starting issue relay server...")
        console.print(f"📡 Host: {host}")
        console.print(f"🔌 Port: {port}")
        console.print(f"🪝 Endpoint: {config.webhook_endpoint}")
        console.print(f"🔄 Reload: {reload}")

        import uvicorn
        uvicorn.run(
            "issuerelay.server:build_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level="info"
        )

    except KeyboardInterrupt:
        console.print("⏹️  Server stopped by user")
    except Exception as e:
        console.print(f"❌ Server failed: {e}", style="red")
        sys.exit(1)


@cli.command()
def config():
    """Show current configuration."""
    try:
        config = RelayConfig.from_env()

        console.print("📋 Issue Relay Configuration:")
        console.print(f"  Webhook Secret: {_mask(config.webhook_secret)}")
        console.print(f"  Discord Bot Token: {_mask(config.discord_bot_token)}")
        console.print(f"  Forum Channel ID: {config.forum_channel_id or 'Not set'}")
        console.print(f"  Discord API: {config.discord_api_base}")
        console.print(f"  Request Timeout: {config.request_timeout}s")
        console.print(f"  Max Attempts: {config.max_attempts}")
        console.print(f"  Base Delay: {config.base_delay_ms}ms")
        console.print(f"  Webhook Endpoint: {config.webhook_endpoint}")
        console.print(f"  Host: {config.host}")
        console.print(f"  Port: {config.port}")
        console.print(f"  Log Directory: {config.log_dir}")

        missing = config.missing_settings()
        if missing:
            console.print(f"⚠️  Missing: {', '.join(missing)}", style="yellow")

    except Exception as e:
        console.print(f"❌ Failed to load configuration: {e}", style="red")
        sys.exit(1)


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--secret", envvar="GITHUB_WEBHOOK_SECRET", help="Webhook secret (defaults to GITHUB_WEBHOOK_SECRET)")
def sign(payload_file, secret):
    """Print the X-Hub-Signature-256 header for a payload file."""
    if not secret:
        console.print("❌ No webhook secret given", style="red")
        sys.exit(1)

    # Sign the bytes on disk; re-encoding would change the digest
    click.echo(signature_header(payload_file.read_bytes(), secret))


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def preview(payload_file):
    """Show the Discord thread a payload would produce, without sending it."""
    try:
        event = GitHubIssueWebhook.model_validate_json(payload_file.read_bytes())
    except ValidationError as e:
        console.print(f"❌ Invalid payload: {escape(str(e))}", style="red")
        sys.exit(1)

    if not classify(event).actionable:
        console.print(f"⏭️  Event ignored: {event.action}")
        return

    formatted = format_event(event)
    console.print(Panel(escape(formatted.content), title=escape(formatted.title), expand=False))
    console.print(f"📏 Title: {len(formatted.title)} chars, message: {len(formatted.content)} chars")


if __name__ == "__main__":
    cli()
