"""Indexed binary min-heap priority queue."""

from .datastructures import IndexedMinHeap

__version__ = "0.1.0"

__all__ = ["IndexedMinHeap", "__version__"]
