"""Shared pytest fixtures."""

from __future__ import annotations

import json
import os
from typing import Any, Callable, Iterator

import httpx
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from hyprmagic.polish.service import PolishConfig  # noqa: E402
from hyprmagic.polish.transport import GeminiTransport  # noqa: E402


class RecordingView:
    """In-memory PolishView that records every update in order."""

    def __init__(self) -> None:
        self.statuses: list[str] = []
        self.texts: list[str] = []
        self.trigger_states: list[bool] = []

    @property
    def status(self) -> str:
        return self.statuses[-1] if self.statuses else ""

    @property
    def trigger_enabled(self) -> bool:
        return self.trigger_states[-1] if self.trigger_states else True

    def set_status(self, text: str) -> None:
        self.statuses.append(text)

    def set_trigger_enabled(self, enabled: bool) -> None:
        self.trigger_states.append(enabled)

    def set_text(self, text: str) -> None:
        self.texts.append(text)


class ManualTimer:
    """PollTimer stand-in ticked explicitly by the test."""

    def __init__(self) -> None:
        self.active = False
        self.interval_ms: int | None = None
        self.starts = 0
        self.stops = 0
        self._callback: Callable[[], Any] | None = None

    def start(self, interval_ms: int, callback: Callable[[], Any]) -> None:
        self.active = True
        self.interval_ms = interval_ms
        self.starts += 1
        self._callback = callback

    def stop(self) -> None:
        self.active = False
        self.stops += 1

    def tick(self) -> None:
        if self.active and self._callback is not None:
            self._callback()

    def run_until_idle(self, limit: int = 100) -> int:
        ticks = 0
        while self.active and ticks < limit:
            self.tick()
            ticks += 1
        return ticks


class DeferredSpawner:
    """Collects worker targets so tests decide when (or whether) they run."""

    def __init__(self) -> None:
        self.targets: list[Callable[[], None]] = []

    def __call__(self, target: Callable[[], None]) -> None:
        self.targets.append(target)

    def run_all(self) -> None:
        while self.targets:
            self.targets.pop(0)()


class StubService:
    """PolishService stand-in that counts calls."""

    def __init__(self, outcome: Any = None, *, error: BaseException | None = None) -> None:
        self.outcome = outcome
        self.error = error
        self.calls: list[str] = []

    def polish(self, raw: str) -> Any:
        self.calls.append(raw)
        if self.error is not None:
            raise self.error
        return self.outcome


def json_handler(status_code: int, payload: Any, *, seen: list[httpx.Request] | None = None):
    """Return an httpx.MockTransport handler answering with ``payload``."""

    def _handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return _handler


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def deferred_spawner() -> DeferredSpawner:
    return DeferredSpawner()


@pytest.fixture
def config() -> PolishConfig:
    return PolishConfig(api_key="test-key", model="gemini-test")


@pytest.fixture
def make_transport() -> Iterator[Callable[..., GeminiTransport]]:
    clients: list[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> GeminiTransport:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return GeminiTransport(client=client)

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def stub_service() -> type[StubService]:
    return StubService


@pytest.fixture
def json_response() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    return json_handler
