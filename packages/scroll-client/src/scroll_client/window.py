from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Sequence
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

logger = logging.getLogger(__name__)


class WindowView(Protocol[T_contra]):
    """Companion view kept in step with a :class:`SlidingWindowCache`."""

    def on_append(self, items: Sequence[T_contra]) -> None: ...

    def on_evict(self, items: Sequence[T_contra]) -> None: ...

    def on_clear(self) -> None: ...


class SlidingWindowCache(Generic[T]):
    """Keeps at most ``max_items`` of the most recently appended items.

    Appending evicts just enough of the oldest items from the front to make room,
    and every subscribed view hears about the eviction before the append within
    the same call.
    """

    def __init__(self, max_items: int) -> None:
        if max_items < 1:
            raise ValueError("max_items must be >= 1")
        self._max_items = max_items
        self._items: deque[T] = deque()
        self._views: list[WindowView[T]] = []

    @property
    def max_items(self) -> int:
        return self._max_items

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def subscribe(self, view: WindowView[T]) -> None:
        if view not in self._views:
            self._views.append(view)

    def unsubscribe(self, view: WindowView[T]) -> None:
        if view in self._views:
            self._views.remove(view)

    def append(self, items: Iterable[T]) -> list[T]:
        """Append a batch and return the items evicted to make room for it."""
        batch = list(items)
        if not batch:
            return []
        if len(batch) > self._max_items:
            # older entries of an oversized batch would be evicted by the batch itself
            batch = batch[-self._max_items :]

        overflow = len(self._items) + len(batch) - self._max_items
        evicted = [self._items.popleft() for _ in range(max(0, overflow))]
        self._items.extend(batch)

        if evicted:
            logger.debug("window_evicted", extra={"component": "sliding_window", "count": len(evicted)})
            for view in self._views:
                view.on_evict(evicted)
        for view in self._views:
            view.on_append(batch)
        return evicted

    def clear(self) -> None:
        self._items.clear()
        for view in self._views:
            view.on_clear()
