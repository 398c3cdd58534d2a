"""Custom exceptions for relay delivery"""

from typing import Optional


class RelayError(Exception):
    """Base exception for relay operations"""
    pass


class DiscordAPIError(RelayError):
    """Raised when the Discord API answers with a non-success status"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Discord API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class DeliveryError(RelayError):
    """Raised when every delivery attempt to Discord has failed"""

    def __init__(self, message: str, attempts: int, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
