"""Exported items of a WebAssembly module."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Hashable, Iterator, Optional

from .arena import Arena, Id


class ExportKind(enum.Enum):
    """What sort of item an export refers to."""

    FUNCTION = "func"
    TABLE = "table"
    MEMORY = "memory"
    GLOBAL = "global"


@dataclass(frozen=True)
class ExportItem:
    """The kind and id of an exported item."""

    kind: ExportKind
    id: Hashable


@dataclass
class Export:
    """A named entry of the export section."""

    id: Id
    name: str
    item: ExportItem


def _clear_name(export: Export) -> None:
    export.name = ""


class ModuleExports:
    """The set of exports in a module."""

    def __init__(self) -> None:
        self._arena: Arena[Export] = Arena(on_delete=_clear_name)

    def get(self, id: Id) -> Export:
        """Return the export for ``id``; raises KeyError if it is gone."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Delete an export."""
        self._arena.delete(id)

    def add(self, name: str, item: ExportItem) -> Id:
        """Add an export and return its id."""
        if not isinstance(item, ExportItem):
            raise TypeError(f"not an export item: {item!r}")
        return self._arena.alloc_with_id(lambda new_id: Export(new_id, name, item))

    def _find(self, kind: ExportKind, item_id: Hashable) -> Optional[Export]:
        return next(
            (e for e in self if e.item.kind is kind and e.item.id == item_id),
            None,
        )

    def get_exported_func(self, func: Hashable) -> Optional[Export]:
        """Return the export of function ``func``, if any."""
        return self._find(ExportKind.FUNCTION, func)

    def get_func(self, name: str) -> Hashable:
        """Return the id of the function exported under ``name``."""
        for export in self:
            if export.item.kind is ExportKind.FUNCTION and export.name == name:
                return export.item.id
        raise KeyError(f"unable to find function export '{name}'")

    def get_exported_table(self, table: Hashable) -> Optional[Export]:
        """Return the export of table ``table``, if any."""
        return self._find(ExportKind.TABLE, table)

    def get_exported_memory(self, memory: Hashable) -> Optional[Export]:
        """Return the export of memory ``memory``, if any."""
        return self._find(ExportKind.MEMORY, memory)

    def get_exported_global(self, global_id: Hashable) -> Optional[Export]:
        """Return the export of global ``global_id``, if any."""
        return self._find(ExportKind.GLOBAL, global_id)

    def remove(self, name: str) -> None:
        """Delete the first export with the given name."""
        for export in self:
            if export.name == name:
                self.delete(export.id)
                return
        raise KeyError(f"failed to find exported func with name [{name}]")

    def __iter__(self) -> Iterator[Export]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)