"""A blocking first-in first-out message queue that can be shut down."""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, Optional

from matissehal.linked_list import LinkedList, ListEmptyError
from matissehal.log_util import LogLevel, get_logger

Dealloc = Optional[Callable[[Any], None]]


class MsgQStatus(enum.IntEnum):
    """Result codes of queue operations."""

    SUCCESS = 0
    FAILURE_GENERAL = -1
    INVALID_PARAMETER = -2
    INVALID_HANDLE = -3
    UNAVAILABLE_RESOURCE = -4
    INSUFFICIENT_BUFFER = -5


class QueueUnblockedError(Exception):
    """Raised when a queue is used after it has been unblocked."""

    status = MsgQStatus.UNAVAILABLE_RESOURCE


class MessageQueue:
    """Thread-safe queue whose receivers block until a message arrives.

    Once :meth:`unblock` is called every waiting receiver wakes up, and the
    queue refuses further sends and receives.
    """

    def __init__(self) -> None:
        self._list = LinkedList()
        self._cond = threading.Condition()
        self._unblocked = False

    @property
    def unblocked(self) -> bool:
        """Whether the queue has been shut down."""
        return self._unblocked

    def _refuse(self, operation: str) -> QueueUnblockedError:
        get_logger().emit(
            LogLevel.ERROR, f"{operation}: Message queue has been unblocked."
        )
        return QueueUnblockedError("message queue has been unblocked")

    def send(self, msg: Any, dealloc: Dealloc = None) -> None:
        """Put a message on the queue and wake one waiting receiver."""
        if msg is None:
            raise ValueError("cannot send None")
        with self._cond:
            if self._unblocked:
                raise self._refuse("send")
            self._list.add(msg, dealloc)
            self._cond.notify()
        get_logger().emit(LogLevel.DEBUG, f"send: Finished sending message {msg!r}")

    def receive(self) -> Any:
        """Take the oldest message, waiting until one is available.

        Raises QueueUnblockedError if the queue is, or becomes while waiting
        on an empty queue, unblocked.
        """
        with self._cond:
            if self._unblocked:
                raise self._refuse("receive")
            self._cond.wait_for(lambda: not self._list.is_empty() or self._unblocked)
            try:
                msg = self._list.remove()
            except ListEmptyError:
                raise QueueUnblockedError(
                    "message queue was unblocked while waiting"
                ) from None
        get_logger().emit(LogLevel.DEBUG, f"receive: Received message {msg!r}")
        return msg

    def flush(self) -> None:
        """Drop every queued message, calling each one's release callback."""
        with self._cond:
            self._list.flush()
        get_logger().emit(LogLevel.DEBUG, "flush: Message Queue flushed")

    def unblock(self) -> None:
        """Shut the queue down and wake every waiting receiver."""
        with self._cond:
            if self._unblocked:
                raise self._refuse("unblock")
            self._unblocked = True
            self._cond.notify_all()
        get_logger().emit(LogLevel.DEBUG, "unblock: Message Queue unblocked")

    def __len__(self) -> int:
        with self._cond:
            return len(self._list)