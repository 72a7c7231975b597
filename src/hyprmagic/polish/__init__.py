"""Text polishing pipeline: payload, transport, extraction and the UI bridge."""

from .bridge import BridgeState, PolishBridge, PolishView
from .errors import (
    ConfigError,
    ErrorCode,
    InvalidResponseJSONError,
    MalformedResponseError,
    PolishError,
    RemoteAPIError,
    TransportError,
    WorkerDisconnectedError,
)
from .request import SYSTEM_PROMPT, build_payload, escape_xml
from .response import extract_text
from .service import DEFAULT_MODEL, PolishConfig, PolishFailure, PolishOutcome, PolishService, PolishSuccess
from .transport import ENDPOINT_TEMPLATE, REQUEST_TIMEOUT_SECONDS, GeminiTransport, TransportResponse

__all__ = [
    "BridgeState",
    "ConfigError",
    "DEFAULT_MODEL",
    "ENDPOINT_TEMPLATE",
    "ErrorCode",
    "GeminiTransport",
    "InvalidResponseJSONError",
    "MalformedResponseError",
    "PolishBridge",
    "PolishConfig",
    "PolishError",
    "PolishFailure",
    "PolishOutcome",
    "PolishService",
    "PolishSuccess",
    "PolishView",
    "REQUEST_TIMEOUT_SECONDS",
    "RemoteAPIError",
    "SYSTEM_PROMPT",
    "TransportError",
    "TransportResponse",
    "WorkerDisconnectedError",
    "build_payload",
    "escape_xml",
    "extract_text",
]
