"""Blocking HTTP transport for the Gemini generateContent action."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .errors import InvalidResponseJSONError, TransportError

__all__ = [
    "ENDPOINT_TEMPLATE",
    "REQUEST_TIMEOUT_SECONDS",
    "GeminiTransport",
    "TransportResponse",
    "build_endpoint",
]

LOGGER = logging.getLogger(__name__)

ENDPOINT_TEMPLATE = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
REQUEST_TIMEOUT_SECONDS = 90.0
API_KEY_HEADER = "x-goog-api-key"


@dataclass(slots=True, frozen=True)
class TransportResponse:
    """HTTP status paired with the decoded JSON body."""

    status_code: int
    body: Any


def build_endpoint(model: str, template: str = ENDPOINT_TEMPLATE) -> str:
    return template.format(model=model)


class GeminiTransport:
    """Issue one POST per call with a fixed timeout and no retries."""

    def __init__(
        self,
        *,
        endpoint_template: str = ENDPOINT_TEMPLATE,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._endpoint_template = endpoint_template
        self._timeout = timeout
        self._client = client

    @property
    def timeout(self) -> float:
        return self._timeout

    def send(self, model: str, api_key: str, payload: Mapping[str, Any]) -> TransportResponse:
        """POST ``payload`` to the model endpoint and decode the JSON reply.

        Raises :class:`TransportError` for any network-level failure or a request
        that cannot be encoded (such as a non-ASCII API key in the header), and
        :class:`InvalidResponseJSONError` when the body cannot be decoded.
        """

        endpoint = build_endpoint(model, self._endpoint_template)
        headers = {
            "Content-Type": "application/json",
            API_KEY_HEADER: api_key,
        }
        LOGGER.debug("POST %s (timeout=%ss)", endpoint, self._timeout)
        try:
            response = self._post(endpoint, headers, payload)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            LOGGER.warning("Request to %s failed: %s", endpoint, exc)
            raise TransportError(cause=_describe(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            LOGGER.warning("Response from %s (status %s) is not valid JSON", endpoint, response.status_code)
            raise InvalidResponseJSONError(cause=str(exc)) from exc

        LOGGER.debug("Received status %s from %s", response.status_code, endpoint)
        return TransportResponse(status_code=response.status_code, body=body)

    def _post(self, endpoint: str, headers: Mapping[str, str], payload: Mapping[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(
                endpoint, headers=headers, json=payload, timeout=self._timeout, follow_redirects=True
            )
        with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
            return client.post(endpoint, headers=headers, json=payload)


def _describe(exc: Exception) -> str:
    text = str(exc).strip()
    if text:
        return text
    # Timeout exceptions raised by httpcore often carry no message.
    return type(exc).__name__
