from __future__ import annotations

from typing import Any, Dict, Optional

GENERIC_DETAILS = "Unknown server error"


class RelayError(Exception):
    """
    A failure that ends the relay chain.

    Carries the HTTP status and body the client receives. `reason` is for
    the server log only and never reaches the client.
    """

    status_code = 500
    message = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None,
        reason: str = "",
    ):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.reason = reason
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.reason or self.message

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(RelayError):
    status_code = 500
    message = "Server configuration error"


class BadRequestError(RelayError):
    status_code = 400
    message = "No file uploaded"


class UpstreamError(RelayError):
    """The AI service answered with a non-success status."""

    message = "AI service call failed"

    def __init__(self, status_code: int = 500, details: Any = None, reason: str = ""):
        super().__init__(
            status_code=status_code,
            details=GENERIC_DETAILS if details in (None, "") else details,
            reason=reason,
        )


class TransportError(UpstreamError):
    """No usable upstream response: network failure, timeout or malformed body."""

    def __init__(self, reason: str = ""):
        super().__init__(status_code=500, details=GENERIC_DETAILS, reason=reason)
