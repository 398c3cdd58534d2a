"""HMAC utilities for webhook signature validation."""

import hashlib
import hmac
import logging
import string
from typing import Optional

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="
_HEX_DIGITS = frozenset(string.hexdigits)


def compute_hmac_sha256(data: bytes, secret: str) -> str:
    """Compute HMAC-SHA256 signature for given data and secret."""
    try:
        signature = hmac.new(
            secret.encode('utf-8'),
            data,
            hashlib.sha256
        ).hexdigest()
        return signature
    except Exception as e:
        logger.error(f"Error computing HMAC signature: {e}")
        raise


def signature_header(data: bytes, secret: str) -> str:
    """Build the X-Hub-Signature-256 header value for a payload."""
    return f"{SIGNATURE_PREFIX}{compute_hmac_sha256(data, secret)}"


def verify_hmac_signature(data: bytes, signature: Optional[str], secret: str) -> bool:
    """Verify HMAC-SHA256 signature from webhook request.

    Never raises: any failure while decoding or hashing counts as a mismatch.
    """
    try:
        if not signature:
            logger.warning("Missing signature header")
            return False

        # Extract signature from header (format: "sha256=<signature>")
        if not signature.startswith(SIGNATURE_PREFIX):
            logger.warning("Invalid signature header format")
            return False

        received_signature = signature[len(SIGNATURE_PREFIX):]
        if not received_signature or not _HEX_DIGITS.issuperset(received_signature):
            logger.warning("Signature is not a hex digest")
            return False

        computed_signature = compute_hmac_sha256(data, secret)

        if len(received_signature) != len(computed_signature):
            return False

        # Compare signatures (constant-time comparison)
        return hmac.compare_digest(
            computed_signature.encode('ascii'),
            received_signature.lower().encode('ascii'),
        )

    except Exception as e:
        logger.error(f"Error verifying HMAC signature: {e}")
        return False
