"""Common utilities and shared functionality."""

from .hmac_utils import (
    SIGNATURE_PREFIX,
    compute_hmac_sha256,
    signature_header,
    verify_hmac_signature,
)

from .logging_utils import (
    setup_logging,
    log_server_message,
    log_error,
)

__all__ = [
    # HMAC utilities
    "SIGNATURE_PREFIX",
    "compute_hmac_sha256",
    "signature_header",
    "verify_hmac_signature",
    # Logging utilities
    "setup_logging",
    "log_server_message",
    "log_error",
]
