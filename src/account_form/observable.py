"""
Observable list with subscriber notification on mutation.

Subscribers register a handler and optionally a set of change types, the
same way event-bus consumers subscribe to the event types they render:

    records = ObservableList()
    sub_id = records.subscribe(lambda event: print(event.type, event.index))
    records.append("x")          # -> ChangeType.ADDED 0
    records.unsubscribe(sub_id)
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable, MutableSequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar, overload

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChangeType(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"
    RESET = "reset"


@dataclass(frozen=True)
class ChangeEvent:
    """
    A single mutation of an ObservableList.

    Attributes:
        type: What kind of mutation happened
        index: Position affected, or None for whole-list changes
    """

    type: ChangeType
    index: int | None = None


ChangeHandler = Callable[[ChangeEvent], None]


class ObservableList(MutableSequence, Generic[T]):
    """A mutable sequence that notifies subscribers after every mutation."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)
        self._subscribers: dict[str, tuple[ChangeHandler, frozenset[ChangeType] | None]] = {}
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(
        self,
        handler: ChangeHandler,
        change_types: Iterable[ChangeType] | None = None,
    ) -> str:
        """
        Register ``handler`` for changes.

        Args:
            handler: Called with a ChangeEvent after each mutation.
            change_types: Restrict delivery to these types. None means all.

        Returns:
            Subscription id for unsubscribe().
        """
        sub_id = f"sub-{next(self._ids)}"
        types = frozenset(change_types) if change_types is not None else None
        self._subscribers[sub_id] = (handler, types)
        return sub_id

    def unsubscribe(self, subscription_id: str) -> bool:
        return self._subscribers.pop(subscription_id, None) is not None

    def notify(self, index: int | None = None) -> None:
        """Publish an UPDATED event for in-place changes to an item."""
        self._publish(ChangeEvent(ChangeType.UPDATED, index))

    def _publish(self, event: ChangeEvent) -> None:
        for sub_id, (handler, types) in list(self._subscribers.items()):
            if types is not None and event.type not in types:
                continue
            try:
                handler(event)
            except Exception:
                logger.exception("Subscriber %s failed handling %s", sub_id, event.type.value)

    # ------------------------------------------------------------------
    # MutableSequence
    # ------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        self._items[index] = value
        if isinstance(index, slice):
            self._publish(ChangeEvent(ChangeType.RESET))
            return
        position = index + len(self._items) if index < 0 else index
        self._publish(ChangeEvent(ChangeType.UPDATED, position))

    def __delitem__(self, index) -> None:
        if isinstance(index, slice):
            del self._items[index]
            self._publish(ChangeEvent(ChangeType.RESET))
            return
        position = index + len(self._items) if index < 0 else index
        del self._items[index]
        self._publish(ChangeEvent(ChangeType.REMOVED, position))

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: T) -> None:
        size = len(self._items)
        position = max(0, min(index + size if index < 0 else index, size))
        self._items.insert(index, value)
        self._publish(ChangeEvent(ChangeType.ADDED, position))

    def clear(self) -> None:
        self._items.clear()
        self._publish(ChangeEvent(ChangeType.RESET))

    # ------------------------------------------------------------------
    # Plain-list conveniences
    # ------------------------------------------------------------------

    def to_list(self) -> list[T]:
        return list(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"
