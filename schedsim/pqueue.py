from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable, Generic, Iterable, List, Tuple, TypeVar

T = TypeVar("T")


class MinPriorityQueue(Generic[T]):
    """
    Heap-backed queue that pops the item with the smallest ``key(item)``.

    Items with equal keys come out in insertion order, so the items themselves
    are never compared.
    """

    def __init__(self, key: Callable[[T], Any], items: Iterable[T] = ()) -> None:
        self._key = key
        self._counter = itertools.count()
        self._heap: List[Tuple[Any, int, T]] = []
        for item in items:
            self.push(item)

    def push(self, item: T) -> None:
        heapq.heappush(self._heap, (self._key(item), next(self._counter), item))

    def pop(self) -> T:
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
