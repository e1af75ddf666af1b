"""Custom sections of a WebAssembly module."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, TypeVar

from .arena import Arena, Id

S = TypeVar("S", bound="CustomSection")


class CustomSection(ABC):
    """Base class for custom sections.

    Subclasses provide a ``name`` (for example ``".debug_info"`` or
    ``"name"``) and the payload through :meth:`data`, without the section
    header, name or length.
    """

    name: str

    @abstractmethod
    def data(self, ids_to_indices: Any = None) -> bytes:
        """Return the payload of this section."""

    def add_gc_roots(self, roots: Any) -> None:
        """Add referenced core items to ``roots``; the default adds none."""

    def apply_code_transform(self, transform: Any) -> None:
        """Update code offsets after a code transform; the default does nothing."""


@dataclass
class RawCustomSection(CustomSection):
    """A custom section kept as unparsed bytes."""

    name: str
    payload: bytes = b""

    def data(self, ids_to_indices: Any = None) -> bytes:
        return self.payload


@dataclass(frozen=True)
class CustomSectionId:
    """Id of a section in :class:`ModuleCustomSections`.

    ``section_type`` of None makes an untyped id that matches any section;
    it takes no part in equality or hashing.
    """

    id: Id
    section_type: Optional[type] = field(default=None, compare=False)

    def _accepts(self, section: CustomSection) -> bool:
        return self.section_type is None or isinstance(section, self.section_type)


class ModuleCustomSections:
    """The collection of custom sections in a module."""

    def __init__(self) -> None:
        self._arena: Arena[CustomSection] = Arena()

    def add(self, section: CustomSection) -> CustomSectionId:
        """Add a section and return an id typed with its class."""
        if not isinstance(section, CustomSection):
            raise TypeError(f"not a custom section: {section!r}")
        return CustomSectionId(self._arena.alloc(section), type(section))

    def delete(self, id: CustomSectionId) -> Optional[CustomSection]:
        """Remove a section.

        Returns the section, or None if it was already gone or is not of the
        id's type (it is removed in that case all the same).
        """
        section = self._arena.get(id.id)
        if section is None:
            return None
        self._arena.delete(id.id)
        return section if id._accepts(section) else None

    def remove_raw(self, name: str) -> Optional[RawCustomSection]:
        """Take out the first raw section with the given name."""
        for section_id, section in self._arena.items():
            if type(section) is RawCustomSection and section.name == name:
                self._arena.delete(section_id)
                return section
        return None

    def get(self, id: CustomSectionId) -> Optional[CustomSection]:
        """Return the section for ``id`` if present and of the id's type."""
        section = self._arena.get(id.id)
        if section is None or not id._accepts(section):
            return None
        return section

    def items(self) -> Iterator[tuple[CustomSectionId, CustomSection]]:
        """Yield untyped ids with their sections, in insertion order."""
        for section_id, section in self._arena.items():
            yield CustomSectionId(section_id), section

    def __iter__(self) -> Iterator[CustomSection]:
        return iter(self._arena)

    def delete_typed(self, cls: type[S]) -> Optional[S]:
        """Remove and return the first section that is an instance of ``cls``."""
        for section_id, section in self.items():
            if isinstance(section, cls):
                self._arena.delete(section_id.id)
                return section
        return None

    def get_typed(self, cls: type[S]) -> Optional[S]:
        """Return the first section that is an instance of ``cls``."""
        return next((s for s in self if isinstance(s, cls)), None)