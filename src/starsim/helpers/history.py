import numpy as np
from typing import Iterable, Iterator


class PositionHistory:
    """
    Fixed capacity FIFO of past positions, backed by a preallocated
    (capacity, 3) array used as a ring buffer. Once full, every append
    overwrites the oldest entry.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f'History capacity must be at least 1, got {capacity}')
        self._buffer = np.zeros((capacity, 3), dtype=float)
        self._start = 0
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._buffer.shape[0]

    def append(self, position: Iterable[float]) -> None:
        capacity = self.capacity
        index = (self._start + self._count) % capacity
        self._buffer[index] = position
        if self._count < capacity:
            self._count += 1
        else:
            # slot just written held the oldest position
            self._start = (self._start + 1) % capacity

    def clear(self) -> None:
        self._start = 0
        self._count = 0

    def to_array(self) -> np.ndarray:
        """Stored positions, oldest first, as a new (len, 3) array."""
        indices = (self._start + np.arange(self._count)) % self.capacity
        return self._buffer[indices]

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.to_array())

    def __getitem__(self, item: int) -> np.ndarray:
        if item < 0:
            item += self._count
        if not 0 <= item < self._count:
            raise IndexError('history index out of range')
        return self._buffer[(self._start + item) % self.capacity].copy()

    def __repr__(self):
        return f'PositionHistory({self._count}/{self.capacity})'
