"""Data segments of a WebAssembly module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterator, Optional, Union

from .arena import Arena, Id


@dataclass(frozen=True)
class PassiveData:
    """A segment copied into memory on demand by ``memory.init``."""


@dataclass(frozen=True)
class ActiveData:
    """A segment copied into ``memory`` at ``offset`` when instantiated."""

    memory: Hashable
    offset: Any


DataKind = Union[PassiveData, ActiveData]


@dataclass
class Data:
    """A data segment with its payload and optional debug name."""

    id: Id
    kind: DataKind
    value: bytes
    name: Optional[str] = None

    def is_passive(self) -> bool:
        """Whether this is a passive segment."""
        return isinstance(self.kind, PassiveData)


def _clear_value(data: Data) -> None:
    data.value = b""


class ModuleData:
    """All data segments of a module."""

    def __init__(self) -> None:
        self._arena: Arena[Data] = Arena(on_delete=_clear_value)

    def get(self, id: Id) -> Data:
        """Return the segment for ``id``; raises KeyError if it is gone."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Delete a segment; references to it must be removed by the caller."""
        self._arena.delete(id)

    def add(self, kind: DataKind, value: bytes) -> Id:
        """Add a segment and return its id."""
        payload = bytes(value)
        return self._arena.alloc_with_id(lambda new_id: Data(new_id, kind, payload))

    def data_count(self, segments_used_by_code: bool = False) -> Optional[int]:
        """Return the count for a DataCount section, or None if none is needed.

        The section is needed when there are passive segments or when code
        uses data segments (``memory.init``/``data.drop``).
        """
        count = len(self)
        if count == 0:
            return None
        if segments_used_by_code or any(d.is_passive() for d in self):
            return count
        return None

    def __iter__(self) -> Iterator[Data]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)