"""Wall-clock and monotonic time sources.

SystemTime is the real clock. MockTime is a deterministic clock for tests:
time only moves when the test sleeps, sets it, or reads it with auto-tick
enabled.
"""

import threading
import time
from collections.abc import Callable
from typing import Protocol

NANOS_PER_MILLI = 1_000_000


class Time(Protocol):
    """Source of wall-clock and monotonic time."""

    def milliseconds(self) -> int: ...

    def nanoseconds(self) -> int: ...

    def hi_res_clock_ms(self) -> int: ...

    def sleep(self, ms: int) -> None: ...

    def wait_object(
        self,
        condition: threading.Condition,
        predicate: Callable[[], bool],
        deadline_ms: int,
    ) -> None: ...


class SystemTime:
    """Time backed by the operating system clocks."""

    def milliseconds(self) -> int:
        return time.time_ns() // NANOS_PER_MILLI

    def nanoseconds(self) -> int:
        return time.monotonic_ns()

    def hi_res_clock_ms(self) -> int:
        return self.nanoseconds() // NANOS_PER_MILLI

    def sleep(self, ms: int) -> None:
        time.sleep(ms / 1000)

    def wait_object(
        self,
        condition: threading.Condition,
        predicate: Callable[[], bool],
        deadline_ms: int,
    ) -> None:
        """Wait on ``condition`` until ``predicate`` holds or ``deadline_ms`` passes.

        Raises:
            TimeoutError: If the deadline passes first.
        """
        with condition:
            while not predicate():
                remaining_ms = deadline_ms - self.milliseconds()
                if remaining_ms <= 0:
                    raise TimeoutError("Condition not satisfied before deadline")
                condition.wait(remaining_ms / 1000)


class MockTime:
    """Manually advanced clock.

    Every read advances the clock by ``auto_tick_ms`` first, which lets code
    that polls the clock in a loop make progress without a second thread.
    Listeners run after each advance, outside the internal lock.

    Example:
        clock = MockTime(auto_tick_ms=0, current_time_ms=100, current_high_res_time_ns=200)
        clock.sleep(10)
        clock.milliseconds()  # 110
        clock.nanoseconds()   # 10_000_200
    """

    def __init__(
        self,
        auto_tick_ms: int = 0,
        current_time_ms: int | None = None,
        current_high_res_time_ns: int | None = None,
    ) -> None:
        self.auto_tick_ms = auto_tick_ms
        self._time_ms = (
            time.time_ns() // NANOS_PER_MILLI if current_time_ms is None else current_time_ms
        )
        self._high_res_time_ns = (
            time.monotonic_ns() if current_high_res_time_ns is None else current_high_res_time_ns
        )
        self._auto_ticked_ms = 0
        self._listeners: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        """Unregister ``listener``. Removing one that is not registered does nothing."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def milliseconds(self) -> int:
        self._maybe_sleep(self.auto_tick_ms)
        with self._lock:
            return self._time_ms

    def nanoseconds(self) -> int:
        self._maybe_sleep(self.auto_tick_ms)
        with self._lock:
            return self._high_res_time_ns

    def hi_res_clock_ms(self) -> int:
        return self.nanoseconds() // NANOS_PER_MILLI

    def auto_ticked_ms(self) -> int:
        """Total milliseconds this clock has advanced since the last reset."""
        with self._lock:
            return self._auto_ticked_ms

    def reset_auto_ticked_record(self) -> None:
        with self._lock:
            self._auto_ticked_ms = 0

    def sleep(self, ms: int) -> None:
        with self._lock:
            self._time_ms += ms
            self._high_res_time_ns += ms * NANOS_PER_MILLI
            self._auto_ticked_ms += ms
        self._tick()

    def set_current_time_ms(self, new_ms: int) -> None:
        """Jump the wall clock forward to ``new_ms``.

        Raises:
            ValueError: If ``new_ms`` is earlier than the current time.
        """
        with self._lock:
            old_ms = self._time_ms
            if new_ms < old_ms:
                raise ValueError(
                    f"Setting the time to {new_ms} while current time {old_ms} is newer; "
                    "this is not allowed"
                )
            self._time_ms = new_ms
            self._high_res_time_ns += (new_ms - old_ms) * NANOS_PER_MILLI
        self._tick()

    def wait_object(
        self,
        condition: threading.Condition,
        predicate: Callable[[], bool],
        deadline_ms: int,
    ) -> None:
        """Wait on ``condition`` until ``predicate`` holds or mock time reaches ``deadline_ms``.

        Waiters are woken whenever the clock advances. With auto-tick enabled
        each check reads the clock and so advances it, and the wait never blocks.

        Raises:
            TimeoutError: If the deadline is reached first.
        """
        waiter = threading.get_ident()
        advanced_by_waiter = False

        # Reading the clock or calling the predicate may advance time on the
        # waiting thread, which already holds condition and must not re-acquire it.
        def notify() -> None:
            nonlocal advanced_by_waiter
            if threading.get_ident() == waiter:
                advanced_by_waiter = True
                return
            with condition:
                condition.notify_all()

        self.add_listener(notify)
        try:
            with condition:
                while True:
                    advanced_by_waiter = False
                    if self.milliseconds() >= deadline_ms or predicate():
                        break
                    if not advanced_by_waiter:
                        condition.wait()
                if not predicate():
                    raise TimeoutError("Condition not satisfied before deadline")
        finally:
            self.remove_listener(notify)

    def _maybe_sleep(self, ms: int) -> None:
        if ms != 0:
            self.sleep(ms)

    def _tick(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener()
