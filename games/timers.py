"""Cooperative timer service for delayed engine transitions.

Engines never start real timers. They ask a ``TimerService`` to call them
back later and stay locked until the callback runs. ``SimulatedTimer`` keeps
its own clock that only moves when the owner advances it, which makes every
delayed transition deterministic in tests and lets the terminal front end
decide how long to actually wait.
"""

from abc import ABC, abstractmethod
from typing import Callable


class ScheduledCall:
    """Handle for a callback registered with a timer service."""

    def __init__(self, due_ms: int, callback: Callable[[], None], sequence: int):
        self.due_ms = due_ms
        self.callback = callback
        self.sequence = sequence
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class TimerService(ABC):
    """Abstract interface for scheduling fire-once callbacks."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        """Schedule a callback to run once after a delay.

        Args:
            delay_ms: Delay in milliseconds.
            callback: Zero-argument callable to invoke.

        Returns:
            A handle that can be used to cancel the call.
        """
        pass

    @abstractmethod
    def cancel_all(self) -> None:
        """Cancel every pending callback."""
        pass


class SimulatedTimer(TimerService):
    """Timer service driven by an explicit simulated clock."""

    def __init__(self):
        self.now_ms = 0
        self._sequence = 0
        self._pending: list[ScheduledCall] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.now_ms + max(delay_ms, 0), callback, self._sequence)
        self._sequence += 1
        self._pending.append(call)
        return call

    def cancel_all(self) -> None:
        for call in self._pending:
            call.cancel()
        self._pending.clear()

    @property
    def has_pending(self) -> bool:
        return any(call.pending for call in self._pending)

    def next_delay_ms(self) -> int | None:
        """Milliseconds until the earliest pending callback, or None."""
        calls = [call for call in self._pending if call.pending]
        if not calls:
            return None
        return max(min(call.due_ms for call in calls) - self.now_ms, 0)

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing callbacks that become due.

        Callbacks fire in due order (ties in scheduling order). A callback
        scheduled by another callback fires in the same call if it falls
        inside the window.

        Returns:
            Number of callbacks fired.
        """
        target = self.now_ms + ms
        fired = 0
        while True:
            self._pending = [call for call in self._pending if call.pending]
            due = [call for call in self._pending if call.due_ms <= target]
            if not due:
                break
            call = min(due, key=lambda c: (c.due_ms, c.sequence))
            self.now_ms = max(self.now_ms, call.due_ms)
            call.fired = True
            call.callback()
            fired += 1
        self.now_ms = target
        return fired

    def run_pending(self) -> int:
        """Advance the clock until no callbacks are pending."""
        fired = 0
        delay = self.next_delay_ms()
        while delay is not None:
            fired += self.advance(delay)
            delay = self.next_delay_ms()
        return fired
