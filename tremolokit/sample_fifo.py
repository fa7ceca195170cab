"""Single-producer, single-consumer queue of mono samples."""

from __future__ import annotations

from collections import deque

import numpy as np


class SampleFifo:
    """Passes one channel of samples from the audio thread to a reader.

    A FIFO of capacity ``n`` holds at most ``n - 1`` samples; samples pushed
    while it is full are dropped.
    """

    _INITIAL_CAPACITY = 1024

    def __init__(self) -> None:
        self._capacity = self._INITIAL_CAPACITY
        self._samples: deque[float] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def prepare(self, sample_rate: float) -> None:
        """Resize to hold one second of samples and discard queued ones."""
        capacity = int(1.0 * sample_rate)
        if capacity < 1:
            raise ValueError(f"sample rate {sample_rate} gives an empty FIFO")
        self._capacity = capacity
        self._samples = deque()

    def push(self, sample: float) -> None:
        """Queue one sample, or drop it if the FIFO is full."""
        if len(self._samples) < self._capacity - 1:
            self._samples.append(float(np.float32(sample)))

    def pop_all(self) -> np.ndarray:
        """Remove and return every queued sample, oldest first."""
        count = len(self._samples)
        return np.fromiter(
            (self._samples.popleft() for _ in range(count)),
            dtype=np.float32,
            count=count,
        )

    def reset(self) -> None:
        """Discard all queued samples."""
        self._samples.clear()