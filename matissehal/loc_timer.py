"""One-shot timers that call back on a worker thread unless stopped."""

from __future__ import annotations

import enum
import errno
import threading
from typing import Any, Callable, Optional

from matissehal.log_util import LogLevel, get_logger

TimerCallback = Callable[[Any, int], None]


class TimerState(enum.IntEnum):
    """Life cycle of a timer."""

    READY = 100
    WAITING = 101
    DONE = 102
    ABORT = 103


class LocTimer:
    """Calls ``callback(user_data, errno.ETIMEDOUT)`` after ``msec`` milliseconds.

    Calling :meth:`stop` before the delay runs out cancels the callback.
    """

    def __init__(self, msec: int, callback: TimerCallback, user_data: Any = None) -> None:
        if callback is None or msec <= 0:
            get_logger().emit(LogLevel.ERROR, "LocTimer: Error: Wrong parameters")
            raise ValueError("a callback and a positive delay are required")
        self._msec = msec
        self._callback = callback
        self._user_data = user_data
        self._cond = threading.Condition()
        self._state = TimerState.READY
        self._thread: Optional[threading.Thread] = None

    @property
    def msec(self) -> int:
        """The delay in milliseconds."""
        return self._msec

    @property
    def state(self) -> TimerState:
        """The current state of the timer."""
        with self._cond:
            return self._state

    def start(self) -> "LocTimer":
        """Start the timer thread; return the timer."""
        with self._cond:
            if self._thread is not None:
                raise RuntimeError("timer already started")
            self._thread = threading.Thread(
                target=self._run, name="loc_timer", daemon=True
            )
        self._thread.start()
        get_logger().emit(LogLevel.DEBUG, f"start: Created timer thread, delay {self._msec}")
        return self

    def _run(self) -> None:
        timed_out = False
        with self._cond:
            if self._state == TimerState.READY:
                self._state = TimerState.WAITING
                stopped = self._cond.wait_for(
                    lambda: self._state == TimerState.ABORT, self._msec / 1000.0
                )
                self._state = TimerState.DONE
                timed_out = not stopped
                outcome = "timed out" if timed_out else "stopped"
            else:
                outcome = "cancelled"
        get_logger().emit(LogLevel.VERBOSE, f"loc_timer {outcome}")
        if timed_out:
            self._callback(self._user_data, errno.ETIMEDOUT)

    def stop(self) -> None:
        """Cancel the timer if it has not fired yet."""
        with self._cond:
            if self._state in (TimerState.READY, TimerState.WAITING):
                self._state = TimerState.ABORT
                self._cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the timer thread to finish; tell whether it has."""
        if self._thread is None:
            raise RuntimeError("timer not started")
        self._thread.join(timeout)
        return not self._thread.is_alive()


def loc_timer_start(msec: int, callback: TimerCallback, user_data: Any = None) -> LocTimer:
    """Create and start a timer."""
    return LocTimer(msec, callback, user_data).start()