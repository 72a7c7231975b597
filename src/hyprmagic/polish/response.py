"""Validation and text extraction for generateContent responses."""

from __future__ import annotations

from typing import Any, Mapping

from .errors import UNKNOWN_API_ERROR, MalformedResponseError, RemoteAPIError

__all__ = ["extract_text", "remote_error_message"]


def extract_text(status_code: int, body: Any) -> str:
    """Return the polished text carried by ``body``.

    Only the first candidate is consulted. Parts without a string ``text``
    field are skipped; the joined text is returned untrimmed.

    Raises:
        RemoteAPIError: ``status_code`` is not a 2xx code.
        MalformedResponseError: the body lacks usable candidates or text.
    """

    if not 200 <= status_code < 300:
        raise RemoteAPIError(status_code=status_code, message=remote_error_message(body))

    candidates = _get(body, "candidates")
    if not isinstance(candidates, list):
        raise MalformedResponseError(reason="missing candidates")
    if not candidates:
        raise MalformedResponseError(reason="no candidates")

    parts = _get(_get(candidates[0], "content"), "parts")
    if not isinstance(parts, list):
        raise MalformedResponseError(reason="no text parts")

    text = "".join(
        part["text"] for part in parts if isinstance(part, Mapping) and isinstance(part.get("text"), str)
    )
    if not text.strip():
        raise MalformedResponseError(reason="empty text")
    return text


def remote_error_message(body: Any) -> str:
    message = _get(_get(body, "error"), "message")
    if isinstance(message, str):
        return message
    return UNKNOWN_API_ERROR


def _get(node: Any, key: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(key)
    return None
