"""A minimal tree of debugging information entries with a DFS cursor."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from .arena import Arena, Id

DW_TAG_COMPILE_UNIT = 0x11


class DebuggingInformationEntry:
    """One entry of a unit: a tag, attributes and child entries."""

    def __init__(self, id: Id, tag: int, parent: Optional[Id]) -> None:
        self.id = id
        self.tag = tag
        self.parent = parent
        self._children: list[Id] = []
        self._attributes: dict[Any, Any] = {}

    @property
    def children(self) -> tuple[Id, ...]:
        """Ids of the child entries, in insertion order."""
        return tuple(self._children)

    def set(self, name: Any, value: Any) -> None:
        """Set attribute ``name`` to ``value``, replacing any earlier value."""
        self._attributes[name] = value

    def get(self, name: Any) -> Optional[Any]:
        """Return the value of attribute ``name``, or None."""
        return self._attributes.get(name)


class Unit:
    """A compilation unit holding a tree of entries under a root."""

    def __init__(self, root_tag: int = DW_TAG_COMPILE_UNIT) -> None:
        self._entries: Arena[DebuggingInformationEntry] = Arena()
        self._root = self._entries.alloc_with_id(
            lambda new_id: DebuggingInformationEntry(new_id, root_tag, None)
        )

    def root(self) -> Id:
        """Return the id of the root entry."""
        return self._root

    def add(self, parent: Id, tag: int) -> Id:
        """Add a child entry with ``tag`` under ``parent`` and return its id."""
        parent_entry = self.get(parent)
        child = self._entries.alloc_with_id(
            lambda new_id: DebuggingInformationEntry(new_id, tag, parent)
        )
        parent_entry._children.append(child)
        return child

    def get(self, id: Id) -> DebuggingInformationEntry:
        """Return the entry for ``id``; raises KeyError if unknown."""
        return self._entries[id]


class DebuggingInformationCursor:
    """Walks the entries of a unit in depth-first pre-order."""

    def __init__(self, unit: Unit) -> None:
        self._unit = unit
        self._stack: list[Id] = []
        self._started = False

    def current(self) -> Optional[DebuggingInformationEntry]:
        """Return the entry the cursor is on, or None."""
        if not self._stack:
            return None
        return self._unit.get(self._stack[-1])

    def next_dfs(self) -> Optional[DebuggingInformationEntry]:
        """Advance to the next entry and return it, or None when done."""
        if not self._started:
            self._started = True
            self._stack.append(self._unit.root())
            return self.current()
        if not self._stack:
            return None
        last = self._unit.get(self._stack.pop())
        self._stack.extend(reversed(last.children))
        return self.current()

    def __iter__(self) -> Iterator[DebuggingInformationEntry]:
        while (entry := self.next_dfs()) is not None:
            yield entry