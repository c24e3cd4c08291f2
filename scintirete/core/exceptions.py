"""Errors raised by the client itself.

Only failures that can be decided locally use these types. Transport and
service errors (``grpc.aio.AioRpcError``) reach the caller unchanged.
"""
from __future__ import annotations

from typing import Optional


class ScintireteError(Exception):
    """Base class for errors raised by the client itself."""

    def __init__(
        self,
        message: str,
        error_type: str = "ScintireteError",
        details: Optional[dict] = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | {self.details}"
        return self.message


class ConfigurationError(ScintireteError):
    """Invalid client configuration, raised at construction time."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message=message, error_type="ConfigurationError", details=details)


class ClientClosedError(ScintireteError):
    """A call was issued on a client whose channel has been closed."""

    def __init__(self, address: str):
        super().__init__(
            message=f"Client for {address} is closed",
            error_type="ClientClosed",
            details={"address": address},
        )


class RequestEncodingError(ScintireteError):
    """The request does not fit the wire schema of the target RPC."""

    def __init__(self, message_type: str, reason: str):
        super().__init__(
            message=f"Cannot encode {message_type}: {reason}",
            error_type="RequestEncodingError",
            details={"message_type": message_type},
        )
