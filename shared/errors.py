"""
Shared error handling for the Roaming Access Gateway.

Every failure in the playurl pipeline is raised as a ``RoamingError`` and
rendered by the service exception handler into the platform's own response
envelope: ``{"code": int, "message": str, "data": null}`` delivered with
HTTP 200.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel


FORBIDDEN_CODE = -1403


class ErrorEnvelope(BaseModel):
    """Platform-compatible error response format."""

    code: int
    message: str
    data: Optional[Any] = None


class RoamingError(Exception):
    """Base exception for gateway failures."""

    code: int = FORBIDDEN_CODE
    message: str = "request failed"

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_response(self) -> ErrorEnvelope:
        """Convert to error envelope."""
        return ErrorEnvelope(code=self.code, message=self.message, data=None)

    def details(self) -> Dict[str, Any]:
        """Structured payload for logging."""
        return {"kind": self.kind}


class BlockRequest(RoamingError):
    """Resolved account is not on the allow-list."""

    def __init__(self, mid: int):
        self.mid = mid
        super().__init__(f"request from {mid} is forbidden")

    def details(self) -> Dict[str, Any]:
        return {"kind": self.kind, "mid": self.mid}


class FailedGetSecretKey(RoamingError):
    """Application key has no known signing secret."""

    message = "cannot resolve secret key"


class FailedMakeRequest(RoamingError):
    """An upstream call could not be completed."""

    message = "cannot issue request"


class FailedParseResponse(RoamingError):
    """Upstream body could not be decoded into the expected envelope."""

    message = "cannot parse response"


class WrongRequest(RoamingError):
    """Inbound request is malformed."""

    message = "invalid request"


class WrongResponse(RoamingError):
    """Upstream reported a failure; code and message pass through unchanged."""

    def __init__(self, code: int, message: str):
        super().__init__(message, code=code)

    def details(self) -> Dict[str, Any]:
        return {"kind": self.kind, "upstream_code": self.code}
