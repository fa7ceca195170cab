"""Finding the largest prime below a limit, with progress and cancellation."""

from __future__ import annotations

import math
import threading
from typing import Callable, Optional

DEFAULT_LIMIT = 10_000_000

ProgressCallback = Callable[[float], None]


def is_prime(number: int) -> bool:
    """Trial division by odd divisors up to the square root."""
    if number < 2:
        return False
    if number % 2 == 0:
        return number == 2
    return all(number % divisor for divisor in range(3, math.isqrt(number) + 1, 2))


def find_largest_prime(
    limit: int = DEFAULT_LIMIT,
    on_progress: Optional[ProgressCallback] = None,
    should_exit: Optional[Callable[[], bool]] = None,
) -> Optional[int]:
    """Return the largest prime below ``limit``, or None if asked to stop.

    ``on_progress`` receives a fraction in [0, 1] each time another whole
    percent has been examined, and 1.0 at the end.
    """
    if limit < 3:
        raise ValueError(f"there is no prime below {limit}")
    largest = 2
    percent = 0
    multiplier = 100.0 / limit
    for candidate in range(3, limit, 2):
        if should_exit is not None and should_exit():
            return None
        if is_prime(candidate):
            largest = candidate
        new_percent = int(candidate * multiplier)
        if percent < new_percent:
            percent = new_percent
            if on_progress is not None:
                on_progress(percent / 100.0)
    if on_progress is not None:
        on_progress(1.0)
    return largest


def result_message(limit: int, largest: int) -> str:
    return f"Largest prime number < {limit} found: {largest}"


class PrimeSearchTask:
    """Runs ``find_largest_prime`` on a background thread."""

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        on_progress: Optional[ProgressCallback] = None,
        on_result: Optional[Callable[[int], None]] = None,
    ) -> None:
        if limit < 3:
            raise ValueError(f"there is no prime below {limit}")
        self.limit = limit
        self._on_progress = on_progress
        self._on_result = on_result
        self._stop_requested = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> bool:
        """Start searching; returns False if a search is already running."""
        if self.is_running():
            return False
        self._stop_requested.clear()
        self._thread = threading.Thread(
            target=self._run, name="PrimeSearchTask", daemon=True
        )
        self._thread.start()
        return True

    def stop(self, timeout: Optional[float] = None) -> bool:
        """Ask the search to stop and wait; True if it is no longer running."""
        self._stop_requested.set()
        if self._thread is not None:
            self._thread.join(timeout)
        return not self.is_running()

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        largest = find_largest_prime(
            self.limit, self._on_progress, self._stop_requested.is_set
        )
        if largest is not None and self._on_result is not None:
            self._on_result(largest)