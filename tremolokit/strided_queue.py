"""Fixed-size queue that keeps every n-th sample of a stream."""

from __future__ import annotations

from typing import Any


class StridedQueue:
    """Holds the most recent samples of a stream, decimated by a stride.

    The decimation phase is carried over between calls to ``push_back``, so
    pushing a stream in several chunks keeps the same samples as pushing it
    in one go.  The newest kept sample is always the last element.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"queue size must not be negative, got {size}")
        self._elements: list[Any] = [0.0] * size
        self._element_index = 0
        self._stride = 1

    @property
    def stride(self) -> int:
        """Current decimation stride."""
        return self._stride

    def set_stride(self, stride: int) -> None:
        """Set the decimation stride; values below 1 are raised to 1."""
        self._stride = max(1, int(stride))

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> Any:
        return self.at(index)

    def front(self) -> Any:
        """Return the oldest element."""
        return self.at(0)

    def at(self, index: int) -> Any:
        """Return the element at ``index``, counted from the oldest."""
        if not 0 <= index < len(self._elements):
            raise IndexError(
                f"index {index} out of range for queue of size {len(self._elements)}"
            )
        return self._elements[index]

    def push_back(self, samples: Any) -> None:
        """Append every stride-th sample of ``samples``, dropping the oldest."""
        count = len(samples)
        size = len(self._elements)
        available = self._new_elements_count(count)

        if available < size:
            self._rotate(available)

        added = min(available, size)
        if added > 0:
            end = self._element_index + (available - 1) * self._stride
            start = end - (added - 1) * self._stride
            self._elements[size - added :] = list(samples[start : end + 1 : self._stride])

        self._element_index = (
            self._element_index + (count // self._stride + 1) * self._stride - count
        ) % self._stride

    def push_back_zeros(self, count: int) -> None:
        """Append the strided share of ``count`` zeros and restart the phase."""
        if count < 0:
            raise ValueError(f"zero count must not be negative, got {count}")
        self._element_index = 0

        size = len(self._elements)
        available = self._new_elements_count(count)
        if available < size:
            self._rotate(available)

        begin = max(0, size - available)
        self._elements[begin:] = [0.0] * (size - begin)

    def _rotate(self, shift: int) -> None:
        self._elements = self._elements[shift:] + self._elements[:shift]

    def _new_elements_count(self, sample_count: int) -> int:
        lower_bound = sample_count // self._stride
        if lower_bound * self._stride + self._element_index < sample_count:
            return lower_bound + 1
        return lower_bound