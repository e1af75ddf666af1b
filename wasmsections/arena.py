"""Arena storage with stable ids and tombstoned deletion."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

_arena_counter = itertools.count()


@dataclass(frozen=True, order=True)
class Id:
    """Identifier of an item allocated in an :class:`Arena`."""

    arena: int
    index: int


class Arena(Generic[T]):
    """Append-only storage whose deleted entries leave a tombstone behind.

    Ids stay valid forever: deleting an item never shifts the others. An
    optional ``on_delete`` callback is applied to an item when it is deleted.
    """

    def __init__(self, on_delete: Optional[Callable[[T], None]] = None) -> None:
        self._arena_id = next(_arena_counter)
        self._items: list[T] = []
        self._dead: set[int] = set()
        self._on_delete = on_delete

    def next_id(self) -> Id:
        """Return the id the next allocated item will receive."""
        return Id(self._arena_id, len(self._items))

    def alloc(self, item: T) -> Id:
        """Store ``item`` and return its id."""
        new_id = self.next_id()
        self._items.append(item)
        return new_id

    def alloc_with_id(self, make: Callable[[Id], T]) -> Id:
        """Build an item from its future id with ``make`` and store it."""
        new_id = self.next_id()
        item = make(new_id)
        if self.next_id() != new_id:
            raise RuntimeError("arena was modified while building an item")
        self._items.append(item)
        return new_id

    def _owns(self, id: object) -> bool:
        return (
            isinstance(id, Id)
            and id.arena == self._arena_id
            and 0 <= id.index < len(self._items)
        )

    def __contains__(self, id: object) -> bool:
        return self._owns(id) and id.index not in self._dead  # type: ignore[union-attr]

    def get(self, id: Id) -> Optional[T]:
        """Return the live item for ``id``, or None."""
        if id in self:
            return self._items[id.index]
        return None

    def __getitem__(self, id: Id) -> T:
        if id not in self:
            raise KeyError(id)
        return self._items[id.index]

    def delete(self, id: Id) -> None:
        """Mark the item as deleted; deleting twice has no further effect."""
        if not self._owns(id):
            raise KeyError(id)
        if id.index in self._dead:
            return
        self._dead.add(id.index)
        if self._on_delete is not None:
            self._on_delete(self._items[id.index])

    def __len__(self) -> int:
        return len(self._items) - len(self._dead)

    def items(self) -> Iterator[tuple[Id, T]]:
        """Yield ``(id, item)`` for every live item in allocation order."""
        for index, item in enumerate(self._items):
            if index not in self._dead:
                yield Id(self._arena_id, index), item

    def __iter__(self) -> Iterator[T]:
        for _, item in self.items():
            yield item