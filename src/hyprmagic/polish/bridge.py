"""Bridge between the Qt event loop and the blocking polish call.

The event loop never waits on the network. A trigger spawns one worker
thread that runs :meth:`PolishService.polish` and writes its outcome into a
one-shot channel; a repeating timer on the event loop polls that channel and
applies the outcome to the view exactly once.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol

from .channel import ChannelDisconnected, ChannelEmpty, Receiver, Sender, oneshot
from .errors import WorkerDisconnectedError
from .service import PolishFailure, PolishOutcome, PolishService, PolishSuccess

__all__ = [
    "POLL_INTERVAL_MS",
    "BridgeState",
    "PendingCall",
    "PolishBridge",
    "PolishView",
    "PollTimer",
    "QtPollTimer",
    "spawn_worker_thread",
]

LOGGER = logging.getLogger(__name__)

POLL_INTERVAL_MS = 50
STATUS_EMPTY = "Scratchpad is empty."
STATUS_WORKING = "Polishing..."
STATUS_DONE = "Done"


class BridgeState(Enum):
    IDLE = "idle"
    PENDING = "pending"


class PolishView(Protocol):
    """Observable state the bridge drives on the event loop thread."""

    def set_status(self, text: str) -> None:
        ...

    def set_trigger_enabled(self, enabled: bool) -> None:
        ...

    def set_text(self, text: str) -> None:
        ...


class PollTimer(Protocol):
    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        ...

    def stop(self) -> None:
        ...


class QtPollTimer:
    """Repeating ``QTimer`` owned by the event loop thread."""

    def __init__(self, parent: Any | None = None) -> None:
        from PySide6.QtCore import QTimer

        self._timer = QTimer(parent)
        self._timer.setSingleShot(False)
        self._callback: Callable[[], None] | None = None
        self._timer.timeout.connect(self._on_timeout)

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start(interval_ms)

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()


def spawn_worker_thread(target: Callable[[], None]) -> None:
    thread = threading.Thread(target=target, name="polish-worker", daemon=True)
    thread.start()


@dataclass(slots=True)
class PendingCall:
    """Correlates one in-flight worker with its receiving end."""

    receiver: Receiver[PolishOutcome]


class PolishBridge:
    """Run polish requests off the event loop and deliver results once."""

    def __init__(
        self,
        service: PolishService,
        view: PolishView,
        *,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        timer: PollTimer | None = None,
        spawn: Callable[[Callable[[], None]], None] | None = None,
    ) -> None:
        self._service = service
        self._view = view
        self._poll_interval_ms = poll_interval_ms
        self._timer = timer if timer is not None else QtPollTimer()
        self._spawn = spawn or spawn_worker_thread
        self._pending: PendingCall | None = None

    @property
    def state(self) -> BridgeState:
        return BridgeState.PENDING if self._pending is not None else BridgeState.IDLE

    @property
    def poll_interval_ms(self) -> int:
        return self._poll_interval_ms

    def request_polish(self, raw: str) -> None:
        """Start polishing ``raw`` unless a call is already in flight."""

        if self._pending is not None:
            LOGGER.debug("Ignoring polish trigger while a request is pending")
            return
        if not raw.strip():
            self._view.set_status(STATUS_EMPTY)
            return

        self._view.set_status(STATUS_WORKING)
        self._view.set_trigger_enabled(False)
        sender, receiver = oneshot()
        self._pending = PendingCall(receiver=receiver)
        LOGGER.debug("Dispatching polish request (%s characters)", len(raw))
        self._timer.start(self._poll_interval_ms, self.poll)
        try:
            self._spawn(lambda: _run_worker(self._service, raw, sender))
        except Exception:
            # The next poll sees a closed, empty channel and reports a disconnect.
            LOGGER.exception("Could not start the polish worker")
            sender.close()

    def poll(self) -> bool:
        """Check the channel once; return ``True`` while still pending."""

        pending = self._pending
        if pending is None:
            self._timer.stop()
            return False
        try:
            outcome = pending.receiver.try_recv()
        except ChannelEmpty:
            return True
        except ChannelDisconnected:
            LOGGER.error("Polish worker exited without delivering a result")
            outcome = PolishFailure(WorkerDisconnectedError())
        self._finish(outcome)
        return False

    def _finish(self, outcome: PolishOutcome) -> None:
        self._pending = None
        self._timer.stop()
        if isinstance(outcome, PolishSuccess):
            self._view.set_text(outcome.text)
            self._view.set_status(STATUS_DONE)
        else:
            self._view.set_status(f"Error: {outcome.message}")
        self._view.set_trigger_enabled(True)


def _run_worker(service: PolishService, raw: str, sender: Sender[PolishOutcome]) -> None:
    try:
        sender.send(service.polish(raw))
    except Exception:
        LOGGER.exception("Polish worker crashed")
    finally:
        sender.close()
