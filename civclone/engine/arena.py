"""Handle-keyed collections with stable identities."""

from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Arena(Generic[T]):
    """
    Insertion-ordered collection addressed by integer handles.

    Handles are never reused, so a handle held after removal resolves to
    None instead of a different item.
    """

    def __init__(self) -> None:
        self._items: dict[int, T] = {}
        self._next_handle = 0

    def add(self, item: T) -> int:
        """Store an item and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._items[handle] = item
        return handle

    def get(self, handle: int) -> T | None:
        return self._items.get(handle)

    def remove(self, handle: int) -> T | None:
        """Remove and return the item, or None if the handle is stale."""
        return self._items.pop(handle, None)

    def handles(self) -> list[int]:
        """Snapshot of current handles, safe to iterate while removing."""
        return list(self._items)

    def items(self) -> Iterator[tuple[int, T]]:
        return iter(self._items.items())

    def __contains__(self, handle: object) -> bool:
        return handle in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
