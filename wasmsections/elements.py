"""Element segments of a WebAssembly module."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator, Optional, Union

from .arena import Arena, Id


class RefType(enum.Enum):
    """Reference type of the expressions in an element segment."""

    FUNCREF = "funcref"
    EXTERNREF = "externref"


@dataclass(frozen=True)
class PassiveElement:
    """A segment applied to a table on demand by ``table.init``."""


@dataclass(frozen=True)
class DeclaredElement:
    """A segment that only declares functions for use by ``ref.func``."""


@dataclass(frozen=True)
class ActiveElement:
    """A segment copied into ``table`` at ``offset`` when instantiated."""

    table: Hashable
    offset: Any


ElementKind = Union[PassiveElement, DeclaredElement, ActiveElement]


@dataclass(frozen=True)
class FunctionItems:
    """Segment items given as function ids."""

    functions: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "functions", tuple(self.functions))

    def __iter__(self) -> Iterator[Any]:
        return iter(self.functions)

    def __len__(self) -> int:
        return len(self.functions)


@dataclass(frozen=True)
class ExpressionItems:
    """Segment items given as constant expressions of one reference type."""

    ref_type: RefType
    expressions: tuple = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.ref_type, RefType):
            raise ValueError(f"unsupported ref type in element segment: {self.ref_type!r}")
        object.__setattr__(self, "expressions", tuple(self.expressions))

    def __iter__(self) -> Iterator[Any]:
        return iter(self.expressions)

    def __len__(self) -> int:
        return len(self.expressions)


ElementItems = Union[FunctionItems, ExpressionItems]


@dataclass
class Element:
    """An element segment with its kind, items and optional debug name."""

    id: Id
    kind: ElementKind
    items: ElementItems
    name: Optional[str] = None


class ModuleElements:
    """All element segments of a module."""

    def __init__(self) -> None:
        self._arena: Arena[Element] = Arena()

    def get(self, id: Id) -> Element:
        """Return the segment for ``id``; raises KeyError if it is gone."""
        return self._arena[id]

    def delete(self, id: Id) -> None:
        """Delete a segment; references to it must be removed by the caller."""
        self._arena.delete(id)

    def add(self, kind: ElementKind, items: ElementItems) -> Id:
        """Add a segment and return its id."""
        if not isinstance(kind, (PassiveElement, DeclaredElement, ActiveElement)):
            raise TypeError(f"not an element kind: {kind!r}")
        if not isinstance(items, (FunctionItems, ExpressionItems)):
            raise TypeError(f"not element items: {items!r}")
        return self._arena.alloc_with_id(lambda new_id: Element(new_id, kind, items))

    def __iter__(self) -> Iterator[Element]:
        return iter(self._arena)

    def __len__(self) -> int:
        return len(self._arena)