"""
Minimum-interval pacing gate shared by concurrent callers.
"""
import threading
import time
from contextlib import ExitStack
from typing import Callable


class PacingGate:
    """
    Single-server queue with a minimum service interval.

    Each caller reserves the next free slot under the lock, then sleeps until
    that slot outside the lock. The n-th grant is never earlier than
    `interval` seconds after the (n-1)-th grant, nor earlier than the request
    itself. Reservations are handed out in lock order, so waiters are served
    FIFO.
    """

    def __init__(
        self,
        interval: float,
        name: str = "gate",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        if interval < 0:
            raise ValueError(f"Interval must be >= 0, got: {interval}")
        self.interval = float(interval)
        self.name = name
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._nextAllowed = None
        self.grants = 0

    def reserve(self) -> float:
        """
        Reserve the next slot without waiting for it.

        Returns:
            Seconds the caller must wait before its slot
        """
        with self._lock:
            now = self._clock()
            slot = now if self._nextAllowed is None or now >= self._nextAllowed else self._nextAllowed
            self._nextAllowed = slot + self.interval
            self.grants += 1
            return slot - now

    @staticmethod
    def reserveTogether(*gates: 'PacingGate') -> float:
        """
        Reserve one common slot on several gates at once.

        Locks are taken in argument order. The slot is the first instant
        every gate allows, and each gate's next slot is counted from it, so
        a caller never holds a slot on one gate it cannot use on another.

        Returns:
            Seconds the caller must wait before its slot
        """
        with ExitStack() as stack:
            for gate in gates:
                stack.enter_context(gate._lock)

            paced = [gate for gate in gates if gate.interval > 0]
            now = gates[0]._clock()
            slot = max([now] + [gate._nextAllowed for gate in paced if gate._nextAllowed is not None])
            for gate in gates:
                if gate.interval > 0:
                    gate._nextAllowed = slot + gate.interval
                gate.grants += 1
            return slot - now

    def acquire(self) -> float:
        """
        Block until this caller's slot.

        Returns:
            Seconds waited
        """
        if self.interval <= 0:
            with self._lock:
                self.grants += 1
            return 0.0

        delay = self.reserve()
        if delay > 0:
            self._sleep(delay)
        return delay
