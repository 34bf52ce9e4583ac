"""Cancellable timers on top of an event-loop scheduler.

The scheduler is anything with Textual's timer API::

    set_interval(seconds, callback) -> handle with stop()
    set_timer(seconds, callback) -> handle with stop()

The Textual App provides both, so callbacks run on the UI event loop in
order with key and mouse events.
"""
from typing import Any, Callable, Optional, Protocol


class TimerHandle(Protocol):
    def stop(self) -> Any: ...


class Scheduler(Protocol):
    def set_interval(self, interval: float, callback: Callable[[], Any]) -> TimerHandle: ...

    def set_timer(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class RepeatingTask:
    """Runs a callback every ``interval`` seconds until stopped."""

    def __init__(self, scheduler: Scheduler, interval: float, callback: Callable[[], None]):
        self.scheduler = scheduler
        self.interval = interval
        self.callback = callback
        self._handle: Optional[TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Start ticking. Starting a running task does nothing."""
        if self._handle is None:
            self._handle = self.scheduler.set_interval(self.interval, self._tick)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.stop()
            self._handle = None

    def _tick(self) -> None:
        if self._handle is not None:
            self.callback()


class OneShotTimer:
    """Fires a callback once after ``delay`` seconds. Re-arming restarts it."""

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callable[[], None]):
        self.scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self._handle: Optional[TimerHandle] = None
        self._token: Optional[object] = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def arm(self) -> None:
        self.cancel()
        token = self._token = object()
        self._handle = self.scheduler.set_timer(self.delay, lambda: self._fire(token))

    def cancel(self) -> None:
        self._token = None
        if self._handle is not None:
            self._handle.stop()
            self._handle = None

    def _fire(self, token: object) -> None:
        # A timer replaced by arm() may still fire if it was already queued
        if token is not self._token:
            return
        self._token = None
        self._handle = None
        self.callback()
