"""FastAPI server for GitHub issue webhook ingestion."""

from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .common import log_error, log_server_message, setup_logging
from .config import RelayConfig
from .discord_client import ForumClient
from .relay import WebhookPipeline

SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"

METHOD_NOT_ALLOWED = "Method not allowed. This endpoint only accepts POST requests."


def create_app(
    config: Optional[RelayConfig] = None,
    forum_client: Optional[ForumClient] = None,
) -> FastAPI:
    """Build the relay application around a fixed configuration."""
    config = config or RelayConfig.from_env()
    pipeline = WebhookPipeline(config, forum_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_server_message("Server starting up")
        log_server_message(f"Webhook endpoint: {config.webhook_endpoint}")
        log_server_message("Health check: /health")
        if not config.is_complete:
            log_server_message(f"Missing environment variables: {', '.join(config.missing_settings())}")
        log_server_message("Server ready")
        yield
        log_server_message("Server shutting down")

    app = FastAPI(title="Issue Relay", version="1.0.0", lifespan=lifespan)
    app.state.config = config
    app.state.pipeline = pipeline

    @app.get("/health")
    async def health_check() -> Dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "issuerelay"}

    @app.post(config.webhook_endpoint)
    async def github_webhook(request: Request) -> JSONResponse:
        """Handle GitHub issue webhooks with HMAC signature validation."""
        try:
            # Signature is computed over the raw bytes, never a re-serialized body
            body = await request.body()

            event_type = request.headers.get(EVENT_HEADER)
            delivery_id = request.headers.get(DELIVERY_HEADER)
            if event_type or delivery_id:
                log_server_message(f"Webhook received: event={event_type} delivery={delivery_id}")

            result = await pipeline.process(body, request.headers.get(SIGNATURE_HEADER))
            return JSONResponse(status_code=result.status_code, content=result.to_response())

        except Exception as e:
            log_error(f"Unexpected error in GitHub webhook route: {e}", log_dir=config.log_dir)
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "internal_error",
                    "details": "Internal server error",
                },
            )

    @app.api_route(config.webhook_endpoint, methods=["GET", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"])
    async def method_not_allowed() -> JSONResponse:
        return JSONResponse(status_code=405, content={"error": METHOD_NOT_ALLOWED})

    return app


def build_app() -> FastAPI:
    """Application factory used by ``uvicorn --factory`` and the CLI."""
    config = RelayConfig.from_env()
    setup_logging(config.log_dir)
    return create_app(config)


if __name__ == "__main__":
    import uvicorn

    config = RelayConfig.from_env()
    uvicorn.run(
        "issuerelay.server:build_app",
        factory=True,
        host=config.host,
        port=config.port,
        reload=False,
        log_level="info"
    )
