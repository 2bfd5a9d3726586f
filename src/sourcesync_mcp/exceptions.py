# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

"""
Error taxonomy module.

Every failure raised while resolving configuration, building a request or
talking to the SourceSync API is a `SourceSyncError`. The `kind` field tells
the failure categories apart; the subclasses exist only as constructors.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .config import ConfigKind


class ErrorKind(str, Enum):
    """Enumeration of the failure categories surfaced to callers."""

    MISSING_CONFIG = "missing_config"
    TIMEOUT = "timeout"
    REQUEST_FAILED = "request_failed"
    API_ERROR = "api_error"


STATUS_LABELS: Dict[int, str] = {
    400: "Validation Error",
    401: "Authentication Error",
    403: "Forbidden Error",
    404: "Not Found Error",
    405: "Method Not Allowed Error",
    429: "Too Many Requests Error",
    500: "Server Error",
}


def status_label(status: int) -> str:
    """Returns the human-readable category for an HTTP status code."""
    return STATUS_LABELS.get(status, "Server Error")


class SourceSyncError(Exception):
    """Base error carried unchanged from the transport to the tool boundary.

    Attributes:
        kind: The failure category.
        message: Human-readable description.
        status: HTTP status code, when a response was received.
        error: Raw or parsed error payload returned by the remote side.
        details: Any additional structured context.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status: Optional[int] = None,
        error: Any = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Renders the error as a JSON-compatible record, omitting empty fields."""
        record: Dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.status is not None:
            record["status"] = self.status
        if self.error is not None:
            record["error"] = self.error
        if self.details is not None:
            record["details"] = self.details
        return record

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r}, status={self.status!r})"


class MissingConfigError(SourceSyncError):
    """An identifier was required but neither supplied nor configured."""

    def __init__(self, config_kind: "ConfigKind"):
        self.config_kind = config_kind
        super().__init__(
            ErrorKind.MISSING_CONFIG,
            f"{config_kind.label} is required: pass '{config_kind.param_name}' "
            f"or set the {config_kind.env_var} environment variable",
            details={"parameter": config_kind.param_name, "env_var": config_kind.env_var},
        )


class RequestTimeoutError(SourceSyncError):
    """The remote call did not complete within the configured timeout."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(
            ErrorKind.TIMEOUT,
            f"Request timed out after {timeout_ms}ms",
            details={"timeout_ms": timeout_ms},
        )


class RequestFailedError(SourceSyncError):
    """The request failed before any HTTP response was obtained."""

    def __init__(self, cause: str):
        super().__init__(ErrorKind.REQUEST_FAILED, f"Request failed: {cause}", details=cause)


class ApiError(SourceSyncError):
    """The remote service answered with a failure status or an unreadable body."""

    def __init__(self, status: int, error: Any = None, message: Optional[str] = None, details: Any = None):
        super().__init__(
            ErrorKind.API_ERROR,
            message or status_label(status),
            status=status,
            error=error,
            details=details,
        )
