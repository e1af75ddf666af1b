# wasmsections

An in-memory model of the sections of a WebAssembly module, for tools that
inspect or rewrite modules.

## Modules

- `wasmsections.arena`: `Arena` and `Id`. An arena stores items under ids
  that stay valid for good; `delete` leaves a tombstone, so ids are never
  reused and other items never move. `Arena(on_delete=...)` runs a callback
  on an item when it is deleted. Looking up an unknown or deleted id with
  `arena[id]` raises `KeyError`; `arena.get(id)` returns `None` instead.
- `wasmsections.custom`: `CustomSection` (an abstract base with `name`,
  `data()`, `add_gc_roots()` and `apply_code_transform()`),
  `RawCustomSection` (a name and raw bytes), `CustomSectionId`, and
  `ModuleCustomSections`, which adds sections, finds them by id or by class
  (`get`, `get_typed`), removes them (`delete`, `delete_typed`,
  `remove_raw`) and iterates over them.
- `wasmsections.data`: data segments, `PassiveData`, `ActiveData(memory,
  offset)` and `Data`, held in `ModuleData`. Deleting a segment clears its
  payload. `ModuleData.data_count(segments_used_by_code)` gives the count a
  `DataCount` section needs, or `None` when no such section is needed (no
  segments, or no passive segments and no use of segments by code).
- `wasmsections.elements`: element segments, `PassiveElement`,
  `DeclaredElement`, `ActiveElement(table, offset)`, with items given as
  `FunctionItems` or `ExpressionItems(RefType, ...)`, held in
  `ModuleElements`. `ExpressionItems` raises `ValueError` for a reference
  type that is not a `RefType`; `ModuleElements.add` raises `TypeError` for a
  kind or items of the wrong class.
- `wasmsections.exports`: `ExportKind`, `ExportItem(kind, id)`, `Export`
  and `ModuleExports`, with lookups by exported item
  (`get_exported_func`, `get_exported_table`, `get_exported_memory`,
  `get_exported_global`, which return `None` when nothing matches) and by
  name (`get_func` and `remove`, which raise `KeyError` when nothing
  matches). Deleting an export clears its name.
- `wasmsections.expression`: `CodeAddressGenerator` classifies an address of
  the original code, given `FunctionLayout` records, as `InstrInFunction`,
  `InstrEdge`, `OffsetInFunction`, `FunctionEdge` or `Unknown`, following an
  `AddressSearchPreference` for addresses on function boundaries.
  `CodeAddressConverter` turns such a value into an address of the
  transformed code described by a `CodeTransform`, or `None`.
- `wasmsections.units`: a small tree of debugging information entries
  (`Unit`, `DebuggingInformationEntry` with `set`/`get` for attributes) and
  `DebuggingInformationCursor`, which walks a unit depth first with
  `next_dfs()` or by iteration.

## Install

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Example

    from wasmsections.arena import Arena
    from wasmsections.custom import ModuleCustomSections, RawCustomSection
    from wasmsections.exports import ExportItem, ExportKind, ModuleExports
    from wasmsections.expression import (
        AddressSearchPreference,
        CodeAddressConverter,
        CodeAddressGenerator,
        CodeTransform,
        FunctionLayout,
    )

    customs = ModuleCustomSections()
    customs.add(RawCustomSection("producers", b"\x00"))
    raw = customs.remove_raw("producers")
    print(raw.name, raw.data())

    functions = Arena()
    func_id = functions.alloc("main function")

    exports = ModuleExports()
    exports.add("main", ExportItem(ExportKind.FUNCTION, func_id))
    assert exports.get_func("main") == func_id
    exports.remove("main")

    generator = CodeAddressGenerator([FunctionLayout("f1", range(20, 30))])
    code = generator.find_address(25, AddressSearchPreference.EXCLUSIVE_FUNCTION_END)
    converter = CodeAddressConverter(
        CodeTransform(function_ranges=[("f1", range(50, 80))])
    )
    assert converter.find_address(code) == 55

## What it does not do

The package models sections in memory only. It does not read or write
WebAssembly binaries, evaluate constant expressions, or read, rewrite or
emit DWARF debug sections; callers supply section contents, offsets and
address layouts themselves.