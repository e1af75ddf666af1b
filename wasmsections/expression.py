"""Mapping of input code addresses onto transformed code addresses."""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterable, Optional, Sequence, TypeVar, Union

T = TypeVar("T")


class AddressSearchPreference(enum.Enum):
    """How an address on a function boundary is attributed."""

    EXCLUSIVE_FUNCTION_END = "exclusive"
    """Normal range comparison: inclusive start, exclusive end."""
    INCLUSIVE_FUNCTION_END = "inclusive"
    """A start point is treated as the end point of the previous function."""


@dataclass(frozen=True)
class InstrInFunction:
    """The address is that of an instruction within a function."""

    instr_id: Hashable


@dataclass(frozen=True)
class InstrEdge:
    """The address is one byte before an instruction."""

    instr_id: Hashable


@dataclass(frozen=True)
class OffsetInFunction:
    """The address lies within a function but matches no instruction."""

    id: Hashable
    offset: int


@dataclass(frozen=True)
class FunctionEdge:
    """The address is the end boundary of a function."""

    id: Hashable


@dataclass(frozen=True)
class Unknown:
    """The address could not be attributed to any code."""


CodeAddress = Union[InstrInFunction, InstrEdge, OffsetInFunction, FunctionEdge, Unknown]


@dataclass
class FunctionLayout:
    """Where a local function and its instructions sat in the input binary.

    ``instruction_mapping`` holds ``(address, instr_id)`` pairs.
    """

    id: Hashable
    original_range: Optional[range] = None
    instruction_mapping: list = field(default_factory=list)


@dataclass
class CodeTransform:
    """Where functions and instructions ended up in the emitted binary.

    ``function_ranges`` holds ``(function_id, range)`` pairs and
    ``instruction_map`` holds ``(instr_id, address)`` pairs.
    """

    function_ranges: list = field(default_factory=list)
    instruction_map: list = field(default_factory=list)
    code_section_start: int = 0


def _binary_search(items: Sequence[T], compare: Callable[[T], int]) -> Optional[int]:
    """Find an index whose item compares equal (0); ``compare`` < 0 means go right."""
    lo, hi = 0, len(items)
    while lo < hi:
        mid = (lo + hi) // 2
        order = compare(items[mid])
        if order == 0:
            return mid
        if order < 0:
            lo = mid + 1
        else:
            hi = mid
    return None


class CodeAddressGenerator:
    """Classifies addresses of the input binary as :data:`CodeAddress` values."""

    def __init__(self, functions: Iterable[FunctionLayout]) -> None:
        functions = list(functions)
        self._ranges: list[tuple[range, Hashable]] = sorted(
            ((f.original_range, f.id) for f in functions if f.original_range is not None),
            key=lambda entry: entry[0].start,
        )
        self._instructions: list[tuple[int, Hashable]] = sorted(
            (tuple(pair) for f in functions for pair in f.instruction_mapping),
            key=lambda entry: entry[0],
        )
        self._instruction_addresses = [address for address, _ in self._instructions]

    def find_address(
        self, address: int, search_preference: AddressSearchPreference
    ) -> CodeAddress:
        """Classify ``address``, preferring instruction matches over ranges."""
        position = bisect.bisect_left(self._instruction_addresses, address)
        if position < len(self._instructions):
            instr_address, instr_id = self._instructions[position]
            if instr_address == address:
                return InstrInFunction(instr_id)
            if instr_address - 1 == address:
                return InstrEdge(instr_id)

        if search_preference is AddressSearchPreference.INCLUSIVE_FUNCTION_END:

            def compare(entry: tuple[range, Hashable]) -> int:
                span = entry[0]
                if span.stop < address:
                    return -1
                if address <= span.start:
                    return 1
                return 0

        else:

            def compare(entry: tuple[range, Hashable]) -> int:
                span = entry[0]
                if span.stop <= address:
                    return -1
                if address < span.start:
                    return 1
                return 0

        index = _binary_search(self._ranges, compare)
        if index is None:
            return Unknown()
        span, func_id = self._ranges[index]
        if address == span.stop:
            return FunctionEdge(func_id)
        return OffsetInFunction(func_id, address - span.start)


class CodeAddressConverter:
    """Turns :data:`CodeAddress` values into addresses of the transformed code."""

    def __init__(self, code_transform: CodeTransform) -> None:
        self._instructions = {instr_id: addr for instr_id, addr in code_transform.instruction_map}
        self._functions = {func_id: span for func_id, span in code_transform.function_ranges}

    def find_address(self, code: CodeAddress) -> Optional[int]:
        """Return the new address for ``code``, or None if it is not mapped."""
        if isinstance(code, InstrInFunction):
            return self._instructions.get(code.instr_id)
        if isinstance(code, InstrEdge):
            address = self._instructions.get(code.instr_id)
            return None if address is None else address - 1
        if isinstance(code, OffsetInFunction):
            span = self._functions.get(code.id)
            return None if span is None else span.start + code.offset
        if isinstance(code, FunctionEdge):
            span = self._functions.get(code.id)
            return None if span is None else span.stop
        return None