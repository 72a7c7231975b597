"""Polishing service composing payload, transport and extraction."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Union

from .errors import ConfigError, PolishError
from .request import SYSTEM_PROMPT, build_payload
from .response import extract_text
from .transport import GeminiTransport

__all__ = [
    "DEFAULT_MODEL",
    "PolishConfig",
    "PolishFailure",
    "PolishOutcome",
    "PolishService",
    "PolishSuccess",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"


@dataclass(slots=True, frozen=True)
class PolishConfig:
    """Immutable credentials and model selection for the API."""

    api_key: str
    model: str = DEFAULT_MODEL

    def __post_init__(self) -> None:
        if not (self.api_key or "").strip():
            raise ConfigError()
        if not (self.model or "").strip():
            object.__setattr__(self, "model", DEFAULT_MODEL)

    def __repr__(self) -> str:
        return f"PolishConfig(api_key='***', model={self.model!r})"


@dataclass(slots=True, frozen=True)
class PolishSuccess:
    text: str

    ok = True


@dataclass(slots=True, frozen=True)
class PolishFailure:
    error: PolishError

    ok = False

    @property
    def message(self) -> str:
        return self.error.user_message()


PolishOutcome = Union[PolishSuccess, PolishFailure]


class PolishService:
    """Turn raw text into a polished rewrite with a single API call.

    The service holds no mutable state; ``polish`` may run concurrently from
    several worker threads.
    """

    def __init__(
        self,
        config: PolishConfig,
        *,
        transport: GeminiTransport | None = None,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._config = config
        self._transport = transport or GeminiTransport()
        self._system_prompt = system_prompt

    @property
    def config(self) -> PolishConfig:
        return self._config

    def polish(self, raw: str) -> PolishOutcome:
        """Return :class:`PolishSuccess` or a :class:`PolishFailure` for ``raw``."""

        started = time.perf_counter()
        LOGGER.debug("Polishing %s character(s) with %s", len(raw), self._config.model)
        try:
            payload = build_payload(self._system_prompt, raw)
            response = self._transport.send(self._config.model, self._config.api_key, payload)
            text = extract_text(response.status_code, response.body)
        except PolishError as exc:
            LOGGER.warning("Polish failed after %.2fs: %s", time.perf_counter() - started, exc.to_dict())
            return PolishFailure(exc)
        LOGGER.info(
            "Polish succeeded in %.2fs (%s -> %s characters)",
            time.perf_counter() - started,
            len(raw),
            len(text),
        )
        return PolishSuccess(text)
