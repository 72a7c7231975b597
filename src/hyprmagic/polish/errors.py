"""Structured error variants for the polishing pipeline.

Every failure the pipeline can report is one of the dataclass exceptions
below. Each carries its own data (status code, remote message, underlying
cause) and renders the user-facing status text through
:meth:`PolishError.user_message`, so callers can inspect the taxonomy
without parsing strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

__all__ = [
    "ErrorCode",
    "PolishError",
    "ConfigError",
    "TransportError",
    "InvalidResponseJSONError",
    "RemoteAPIError",
    "MalformedResponseError",
    "WorkerDisconnectedError",
    "UNKNOWN_API_ERROR",
]

UNKNOWN_API_ERROR = "Unknown API error"


# -----------------------------------------------------------------------------
# Error Code Constants
# -----------------------------------------------------------------------------

class ErrorCode:
    """Constants for the machine-readable error codes."""

    CONFIG = "config_error"
    TRANSPORT = "transport_error"
    INVALID_JSON = "invalid_response_json"
    REMOTE = "remote_api_error"
    MALFORMED_RESPONSE = "malformed_response"
    WORKER_DISCONNECTED = "worker_disconnected"


# -----------------------------------------------------------------------------
# Base Error Class
# -----------------------------------------------------------------------------

@dataclass
class PolishError(Exception):
    """Base exception class for all polishing errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
    """

    error_code: str
    message: str

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def user_message(self) -> str:
        """Return the text shown to the user for this error."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for logging and diagnostics."""
        return {"error": self.error_code, "message": self.message}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


@dataclass
class ConfigError(PolishError):
    """Raised at startup when the configuration cannot be used."""

    error_code: str = field(default=ErrorCode.CONFIG)
    message: str = field(default="Missing GEMINI_API_KEY. Set it in your shell before starting the app.")


# -----------------------------------------------------------------------------
# Transport Errors
# -----------------------------------------------------------------------------

@dataclass
class TransportError(PolishError):
    """Network, timeout, TLS or serialization failure of the HTTP call."""

    error_code: str = field(default=ErrorCode.TRANSPORT)
    message: str = field(default="Request failed")
    cause: str = field(default="")

    def user_message(self) -> str:
        return f"Request failed: {self.cause}"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["cause"] = self.cause
        return result


@dataclass
class InvalidResponseJSONError(TransportError):
    """The response body was not valid JSON, whatever the status code."""

    error_code: str = field(default=ErrorCode.INVALID_JSON)
    message: str = field(default="invalid response JSON")

    def user_message(self) -> str:
        return f"Invalid API response JSON: {self.cause}"


# -----------------------------------------------------------------------------
# API Errors
# -----------------------------------------------------------------------------

@dataclass
class RemoteAPIError(PolishError):
    """The API answered with a non-success HTTP status."""

    error_code: str = field(default=ErrorCode.REMOTE)
    message: str = field(default=UNKNOWN_API_ERROR)
    status_code: int = field(default=0)

    def user_message(self) -> str:
        return f"Gemini API error ({self.status_code}): {self.message}"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        return result


@dataclass
class MalformedResponseError(PolishError):
    """The success body did not have the expected candidates/parts shape."""

    _DESCRIPTIONS: ClassVar[dict[str, str]] = {
        "missing candidates": "Missing candidates in API response",
        "no candidates": "Gemini returned no candidates",
        "no text parts": "Gemini response contained no text parts",
        "empty text": "Gemini returned empty text",
    }

    error_code: str = field(default=ErrorCode.MALFORMED_RESPONSE)
    message: str = field(default="")
    reason: str = field(default="")

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self._DESCRIPTIONS.get(self.reason, self.reason or "Malformed API response")
        super().__post_init__()

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["reason"] = self.reason
        return result


@dataclass
class WorkerDisconnectedError(PolishError):
    """The background worker ended without delivering an outcome."""

    error_code: str = field(default=ErrorCode.WORKER_DISCONNECTED)
    message: str = field(default="worker thread disconnected")
