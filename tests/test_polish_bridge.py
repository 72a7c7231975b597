"""Tests for the event-loop bridge state machine."""

from __future__ import annotations

import threading
from typing import cast

import pytest

from hyprmagic.polish.bridge import POLL_INTERVAL_MS, BridgeState, PolishBridge, spawn_worker_thread
from hyprmagic.polish.errors import RemoteAPIError
from hyprmagic.polish.service import PolishFailure, PolishService, PolishSuccess

TERMINAL_PREFIXES = ("Done", "Error:")


def _bridge(service, view, timer, spawner) -> PolishBridge:
    return PolishBridge(cast(PolishService, service), view, timer=timer, spawn=spawner)


def _terminal_updates(statuses: list[str]) -> list[str]:
    return [status for status in statuses if status.startswith(TERMINAL_PREFIXES)]


@pytest.mark.parametrize("raw", ["", "   ", "\n\t  \n"])
def test_blank_input_never_calls_service(raw, view, manual_timer, deferred_spawner, stub_service) -> None:
    service = stub_service(PolishSuccess("unused"))
    bridge = _bridge(service, view, manual_timer, deferred_spawner)

    bridge.request_polish(raw)

    assert service.calls == []
    assert deferred_spawner.targets == []
    assert bridge.state is BridgeState.IDLE
    assert view.statuses == ["Scratchpad is empty."]
    assert view.trigger_states == []
    assert not manual_timer.active


def test_trigger_enters_pending(view, manual_timer, deferred_spawner, stub_service) -> None:
    bridge = _bridge(stub_service(PolishSuccess("x")), view, manual_timer, deferred_spawner)

    bridge.request_polish("draft")

    assert bridge.state is BridgeState.PENDING
    assert view.status == "Polishing..."
    assert view.trigger_states == [False]
    assert manual_timer.active
    assert manual_timer.interval_ms == POLL_INTERVAL_MS == 50
    assert len(deferred_spawner.targets) == 1


def test_poll_stays_pending_until_worker_sends(view, manual_timer, deferred_spawner, stub_service) -> None:
    bridge = _bridge(stub_service(PolishSuccess("x")), view, manual_timer, deferred_spawner)
    bridge.request_polish("draft")

    for _ in range(5):
        manual_timer.tick()

    assert bridge.state is BridgeState.PENDING
    assert manual_timer.active
    assert view.statuses == ["Polishing..."]


def test_success_replaces_text_exactly_once(view, manual_timer, deferred_spawner, stub_service) -> None:
    service = stub_service(PolishSuccess("Polished draft."))
    bridge = _bridge(service, view, manual_timer, deferred_spawner)

    bridge.request_polish("draft")
    deferred_spawner.run_all()
    manual_timer.tick()
    manual_timer.tick()
    assert bridge.poll() is False

    assert service.calls == ["draft"]
    assert view.texts == ["Polished draft."]
    assert view.statuses == ["Polishing...", "Done"]
    assert view.trigger_states == [False, True]
    assert bridge.state is BridgeState.IDLE
    assert not manual_timer.active


def test_failure_shows_formatted_message(view, manual_timer, deferred_spawner, stub_service) -> None:
    failure = PolishFailure(RemoteAPIError(status_code=429, message="rate limited"))
    bridge = _bridge(stub_service(failure), view, manual_timer, deferred_spawner)

    bridge.request_polish("draft")
    deferred_spawner.run_all()
    manual_timer.run_until_idle()

    assert view.texts == []
    assert view.status == "Error: Gemini API error (429): rate limited"
    assert view.trigger_enabled
    assert bridge.state is BridgeState.IDLE


def test_worker_crash_is_reported_as_disconnect(view, manual_timer, deferred_spawner, stub_service) -> None:
    service = stub_service(error=RuntimeError("boom"))
    bridge = _bridge(service, view, manual_timer, deferred_spawner)

    bridge.request_polish("draft")
    deferred_spawner.run_all()
    manual_timer.run_until_idle()

    assert view.statuses == ["Polishing...", "Error: worker thread disconnected"]
    assert view.trigger_states == [False, True]
    assert bridge.state is BridgeState.IDLE


def test_second_trigger_while_pending_is_ignored(view, manual_timer, deferred_spawner, stub_service) -> None:
    service = stub_service(PolishSuccess("done"))
    bridge = _bridge(service, view, manual_timer, deferred_spawner)

    bridge.request_polish("first")
    bridge.request_polish("second")
    bridge.request_polish("   ")

    assert len(deferred_spawner.targets) == 1
    assert manual_timer.starts == 1
    assert view.statuses == ["Polishing..."]

    deferred_spawner.run_all()
    manual_timer.run_until_idle()

    assert service.calls == ["first"]


@pytest.mark.parametrize("outcome", [PolishSuccess("ok"), PolishFailure(RemoteAPIError(status_code=500))])
def test_each_trigger_yields_one_terminal_update(outcome, view, manual_timer, deferred_spawner, stub_service) -> None:
    bridge = _bridge(stub_service(outcome), view, manual_timer, deferred_spawner)

    for attempt in range(3):
        bridge.request_polish(f"attempt {attempt}")
        deferred_spawner.run_all()
        manual_timer.run_until_idle()
        # Extra polls after resolution must not produce further updates.
        bridge.poll()
        bridge.poll()

    assert len(_terminal_updates(view.statuses)) == 3
    assert view.trigger_states == [False, True] * 3


def test_real_worker_thread_delivers_result(view, manual_timer) -> None:
    release = threading.Event()
    finished = threading.Event()

    class _SlowService:
        def polish(self, raw: str) -> PolishSuccess:
            release.wait(timeout=5)
            return PolishSuccess(raw.upper())

    def _spawn(target) -> None:
        def _run() -> None:
            try:
                target()
            finally:
                finished.set()

        spawn_worker_thread(_run)

    bridge = _bridge(_SlowService(), view, manual_timer, _spawn)
    bridge.request_polish("quiet")
    manual_timer.tick()
    assert bridge.state is BridgeState.PENDING

    release.set()
    assert finished.wait(timeout=5)
    manual_timer.tick()

    assert view.texts == ["QUIET"]
    assert view.status == "Done"
    assert bridge.state is BridgeState.IDLE


def test_worker_that_fails_to_start_is_reported_as_disconnect(view, manual_timer, stub_service) -> None:
    service = stub_service(PolishSuccess("unused"))

    def _failing_spawn(target) -> None:
        raise RuntimeError("can't start new thread")

    bridge = _bridge(service, view, manual_timer, _failing_spawn)
    bridge.request_polish("draft")
    ticks = manual_timer.run_until_idle()

    assert ticks == 1
    assert service.calls == []
    assert view.statuses == ["Polishing...", "Error: worker thread disconnected"]
    assert view.trigger_states == [False, True]
    assert bridge.state is BridgeState.IDLE

    # The bridge accepts the next trigger normally.
    bridge.request_polish("again")
    assert bridge.state is BridgeState.PENDING
