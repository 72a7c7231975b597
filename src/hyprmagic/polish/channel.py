"""One-shot channel handing a single value from a worker thread to the UI."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

__all__ = ["ChannelDisconnected", "ChannelEmpty", "Receiver", "Sender", "oneshot"]

T = TypeVar("T")


class ChannelEmpty(Exception):
    """The sender is still open and has not delivered a value yet."""


class ChannelDisconnected(Exception):
    """The sender closed without a value, or the value was already taken."""


class _Slot(Generic[T]):
    __slots__ = ("lock", "value", "has_value", "closed", "taken")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.value: T | None = None
        self.has_value = False
        self.closed = False
        self.taken = False


class Sender(Generic[T]):
    """Producer half; owned by exactly one worker."""

    def __init__(self, slot: _Slot[T]) -> None:
        self._slot = slot

    def send(self, value: T) -> None:
        slot = self._slot
        with slot.lock:
            if slot.closed:
                raise RuntimeError("send on a closed one-shot channel")
            if slot.has_value:
                raise RuntimeError("one-shot channel already carries a value")
            slot.value = value
            slot.has_value = True
            slot.closed = True

    def close(self) -> None:
        with self._slot.lock:
            self._slot.closed = True

    @property
    def closed(self) -> bool:
        with self._slot.lock:
            return self._slot.closed


class Receiver(Generic[T]):
    """Consumer half; polled without blocking by the event loop."""

    def __init__(self, slot: _Slot[T]) -> None:
        self._slot = slot

    def try_recv(self) -> T:
        """Return the delivered value, at most once.

        Raises :class:`ChannelEmpty` while the sender is open and
        :class:`ChannelDisconnected` once no value can arrive anymore.
        """

        slot = self._slot
        with slot.lock:
            if slot.has_value and not slot.taken:
                slot.taken = True
                value = slot.value
                slot.value = None
                return value  # type: ignore[return-value]
            if slot.closed:
                raise ChannelDisconnected()
            raise ChannelEmpty()


def oneshot() -> tuple[Sender[T], Receiver[T]]:
    slot: _Slot[T] = _Slot()
    return Sender(slot), Receiver(slot)
