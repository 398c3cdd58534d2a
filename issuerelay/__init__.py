"""Issue Relay - forwards GitHub issues to Discord forum threads.

This package provides:

- issuerelay.relay: Classification, formatting, delivery and the pipeline
- issuerelay.models: GitHub payload, Discord thread and result models
- issuerelay.common: Signature verification and logging utilities
- issuerelay.server: The FastAPI webhook endpoint
"""

__version__ = "1.0.0"

from . import common
from . import models
from . import relay

__all__ = [
    "common",
    "models",
    "relay",
]
