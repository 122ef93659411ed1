"""Double-buffered queue whose appends become visible only after a window slide."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class SlidingQueue(Generic[T]):
    """Fixed-capacity queue; appended items are seen once ``slide_window`` is called."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._shared: list = [None] * capacity
        self._capacity = capacity
        self.reset()

    def append(self, item: T) -> None:
        """Add an item to the pending part of the queue."""
        if self._in >= self._capacity:
            raise OverflowError("sliding queue is full")
        self._shared[self._in] = item
        self._in += 1

    def _extend(self, items: Iterable[T]) -> None:
        batch = list(items)
        start = self._in
        if start + len(batch) > self._capacity:
            raise OverflowError("sliding queue is full")
        self._shared[start:start + len(batch)] = batch
        self._in += len(batch)

    def is_empty(self) -> bool:
        """Return whether the current window holds no items."""
        return self._out_start == self._out_end

    def reset(self) -> None:
        """Drop all items, pending and visible."""
        self._out_start = 0
        self._out_end = 0
        self._in = 0

    def slide_window(self) -> None:
        """Make the items appended since the last slide the current window."""
        self._out_start = self._out_end
        self._out_end = self._in

    def __iter__(self) -> Iterator[T]:
        return iter(self._shared[self._out_start:self._out_end])

    def __len__(self) -> int:
        return self._out_end - self._out_start


class QueueBuffer(Generic[T]):
    """Local buffer that appends to a ``SlidingQueue`` in bulk."""

    def __init__(self, queue: SlidingQueue[T], local_size: int = 16384) -> None:
        if local_size <= 0:
            raise ValueError("local_size must be positive")
        self._queue = queue
        self._local_size = local_size
        self._local: list[T] = []

    def append(self, item: T) -> None:
        """Buffer an item, flushing first if the buffer is full."""
        if len(self._local) == self._local_size:
            self.flush()
        self._local.append(item)

    def flush(self) -> None:
        """Copy buffered items into the queue's pending part."""
        self._queue._extend(self._local)
        self._local.clear()