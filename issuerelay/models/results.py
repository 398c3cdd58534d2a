"""Outcome of processing a single webhook delivery."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from .discord_models import ThreadRecord


class ErrorKind(str, Enum):
    """Error taxonomy surfaced at the HTTP boundary."""

    CONFIG_ERROR = "config_error"
    AUTH_ERROR = "auth_error"
    PARSE_ERROR = "parse_error"
    DELIVERY_ERROR = "delivery_error"


@dataclass(frozen=True)
class Ignored:
    """The event was valid but not one the relay acts on."""

    reason: str

    @property
    def status_code(self) -> int:
        return 200

    def to_response(self) -> Dict[str, Any]:
        return {"success": True, "message": f"Event ignored: {self.reason}"}


@dataclass(frozen=True)
class Delivered:
    """A Discord forum thread was created for the event."""

    thread: ThreadRecord

    @property
    def status_code(self) -> int:
        return 200

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "thread": {"id": self.thread.id, "name": self.thread.name},
            "message": "Discord forum thread created successfully",
        }


@dataclass(frozen=True)
class Failed:
    """Processing stopped at a step that could not complete."""

    kind: ErrorKind
    detail: str

    @property
    def status_code(self) -> int:
        return 401 if self.kind is ErrorKind.AUTH_ERROR else 500

    def to_response(self) -> Dict[str, Any]:
        return {"success": False, "error": self.kind.value, "details": self.detail}


PipelineResult = Union[Ignored, Delivered, Failed]
