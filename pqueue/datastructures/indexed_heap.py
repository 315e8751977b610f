from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Sequence, TypeVar

from sortedcontainers import SortedSet

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _identity(item: Any) -> Any:
    return item


class IndexedMinHeap(Generic[T]):
    """A binary min-heap that can locate and remove any element by value.

    Alongside the heap array a position index maps every distinct value to the
    sorted set of positions currently holding it, so ``contains`` is O(1) and
    ``remove`` is O(log n) even when the same value was added several times.

    Elements must be hashable and mutually comparable (after ``key``).
    """

    __slots__ = ("_heap", "_size", "_index", "_key")

    def __init__(self, capacity: int = 1, key: Optional[Callable[[T], Any]] = None) -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._heap: List[Optional[T]] = [None] * capacity
        self._size: int = 0
        self._index: Dict[T, SortedSet] = {}
        self._key: Callable[[T], Any] = key or _identity

    @classmethod
    def from_sequence(
        cls, elems: Sequence[T], key: Optional[Callable[[T], Any]] = None
    ) -> IndexedMinHeap[T]:
        """Build a heap from ``elems`` in O(n) (bottom-up heapify)."""
        if any(e is None for e in elems):
            raise ValueError("cannot add None to the heap")
        heap: IndexedMinHeap[T] = cls(0, key)
        heap._heap = list(elems)
        heap._size = len(heap._heap)
        for i, elem in enumerate(heap._heap):
            heap._map_add(elem, i)
        for i in reversed(range(heap._size // 2)):
            heap._sink(i)
        logger.debug("heapified %d elements", heap._size)
        return heap

    @classmethod
    def from_iterable(
        cls, elems: Iterable[T], key: Optional[Callable[[T], Any]] = None
    ) -> IndexedMinHeap[T]:
        """Build a heap by adding ``elems`` one at a time (O(n log n))."""
        heap: IndexedMinHeap[T] = cls(key=key)
        for elem in elems:
            heap.add(elem)
        return heap

    # -----------------------------
    # Public API
    # -----------------------------
    @property
    def capacity(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return self._size == 0

    def size(self) -> int:
        return self._size

    def clear(self) -> None:
        """Drop every element; backing slots are kept for reuse."""
        for i in range(self._size):
            self._heap[i] = None
        self._size = 0
        self._index.clear()
        logger.debug("cleared heap (capacity=%d)", len(self._heap))

    def peek(self) -> Optional[T]:
        """Return the smallest element without removing it, or None if empty."""
        if self.is_empty():
            return None
        return self._heap[0]

    def poll(self) -> Optional[T]:
        """Remove and return the smallest element, or None if empty (O(log n))."""
        return self._remove_at(0)

    def contains(self, elem: Optional[T]) -> bool:
        """Membership test through the position index (O(1))."""
        if elem is None:
            return False
        return elem in self._index

    def add(self, elem: T) -> None:
        """Insert ``elem`` (O(log n)). ``None`` is rejected with ValueError."""
        if elem is None:
            raise ValueError("cannot add None to the heap")

        # Hashing and every comparison swim will make must succeed before any slot
        # or index entry is touched.
        hash(elem)
        self._settle_position(self._size, self._key(elem))

        if self._size < len(self._heap):
            self._heap[self._size] = elem
        else:
            self._heap.append(elem)

        self._map_add(elem, self._size)
        self._swim(self._size)
        self._size += 1

    def remove(self, elem: Optional[T]) -> bool:
        """Remove one occurrence of ``elem``; return whether it was present.

        When the value occurs more than once, the copy at the highest position
        is the one removed.
        """
        if elem is None:
            return False
        index = self._map_get(elem)
        if index is None:
            return False
        self._remove_at(index)
        return True

    def is_min_heap(self, k: int = 0) -> bool:
        """Recursively check the heap property over the subtree rooted at ``k``."""
        if k >= self._size:
            return True

        left = 2 * k + 1
        right = 2 * k + 2

        if left < self._size and not self._less(k, left):
            return False
        if right < self._size and not self._less(k, right):
            return False

        return self.is_min_heap(left) and self.is_min_heap(right)

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _less(self, i: int, j: int) -> bool:
        """True when the element at ``i`` is <= the element at ``j``."""
        return self._key(self._heap[i]) <= self._key(self._heap[j])

    def _swim(self, k: int) -> None:
        # Strictly smaller than the parent: equal keys stay where they are.
        parent = (k - 1) // 2
        while k > 0 and not self._less(parent, k):
            self._swap(parent, k)
            k = parent
            parent = (k - 1) // 2

    def _settle_position(self, k: int, key: Any) -> int:
        """Where an element with ``key`` placed at ``k`` would swim to.

        Makes the same comparisons as ``_swim`` without moving anything.
        """
        heap = self._heap
        while k > 0:
            parent = (k - 1) // 2
            if self._key(heap[parent]) <= key:
                break
            k = parent
        return k

    def _sink(self, k: int) -> int:
        """Move the element at ``k`` down; return the position it settles at."""
        size = self._size
        while True:
            left = 2 * k + 1
            right = 2 * k + 2
            smallest = left

            if right < size and self._less(right, left):
                smallest = right

            if left >= size or self._less(k, smallest):
                return k

            self._swap(smallest, k)
            k = smallest

    def _swap(self, i: int, j: int) -> None:
        if i == j:
            return
        heap = self._heap
        i_elem = heap[i]
        j_elem = heap[j]

        heap[i] = j_elem
        heap[j] = i_elem

        self._map_swap(i_elem, j_elem, i, j)

    def _remove_at(self, i: int) -> Optional[T]:
        """Remove the element at position ``i`` in O(log n)."""
        if self.is_empty():
            return None

        last = self._size - 1
        removed = self._heap[i]
        self._swap(i, last)

        self._size = last
        self._heap[last] = None
        self._map_remove(removed, last)

        if i == last:
            return removed

        # The replacement may belong above or below ``i``; it can only move one way.
        if self._sink(i) == i:
            self._swim(i)
        return removed

    # Position index

    def _map_add(self, value: T, index: int) -> None:
        positions = self._index.get(value)
        if positions is None:
            self._index[value] = SortedSet([index])
        else:
            positions.add(index)

    def _map_remove(self, value: T, index: int) -> None:
        positions = self._index[value]
        positions.remove(index)
        if not positions:
            del self._index[value]

    def _map_get(self, value: T) -> Optional[int]:
        """Highest position holding ``value``, or None."""
        positions = self._index.get(value)
        if positions:
            return positions[-1]
        return None

    def _map_swap(self, val1: T, val2: T, val1_index: int, val2_index: int) -> None:
        set1 = self._index[val1]
        set2 = self._index[val2]

        set1.remove(val1_index)
        set2.remove(val2_index)

        set1.add(val2_index)
        set2.add(val1_index)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size > 0

    def __contains__(self, elem: object) -> bool:
        return self.contains(elem)  # type: ignore[arg-type]

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"IndexedMinHeap({self._heap[:self._size]!r})"
