from .indexed_heap import IndexedMinHeap

__all__ = [
    "IndexedMinHeap",
]
