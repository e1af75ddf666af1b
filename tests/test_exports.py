import pytest

from wasmsections.arena import Arena, Id
from wasmsections.exports import Export, ExportItem, ExportKind, ModuleExports


def always_the_same_id():
    return Id(0, 0)


def test_get_exported_func():
    exports = ModuleExports()
    fid = Arena().alloc("func")
    exports.add("dummy", ExportItem(ExportKind.FUNCTION, fid))
    export = exports.get_exported_func(fid)
    assert isinstance(export, Export)
    assert export.name == "dummy"
    assert export.item.kind is ExportKind.FUNCTION
    assert export.item.id == fid


def test_get_exported_func_should_return_none_for_unknown_function_id():
    exports = ModuleExports()
    assert exports.get_exported_func(always_the_same_id()) is None


def test_get_exported_table():
    exports = ModuleExports()
    tid = always_the_same_id()
    exports.add("dummy", ExportItem(ExportKind.TABLE, tid))
    export = exports.get_exported_table(tid)
    assert export.name == "dummy"
    assert export.item == ExportItem(ExportKind.TABLE, tid)


def test_get_exported_table_should_return_none_for_unknown_table_id():
    exports = ModuleExports()
    assert exports.get_exported_table(always_the_same_id()) is None


def test_get_exported_memory():
    exports = ModuleExports()
    mid = always_the_same_id()
    exports.add("dummy", ExportItem(ExportKind.MEMORY, mid))
    export = exports.get_exported_memory(mid)
    assert export.name == "dummy"
    assert export.item == ExportItem(ExportKind.MEMORY, mid)


def test_get_exported_memory_should_return_none_for_unknown_memory_id():
    exports = ModuleExports()
    assert exports.get_exported_memory(always_the_same_id()) is None


def test_get_exported_global():
    exports = ModuleExports()
    gid = always_the_same_id()
    exports.add("dummy", ExportItem(ExportKind.GLOBAL, gid))
    export = exports.get_exported_global(gid)
    assert export.name == "dummy"
    assert export.item == ExportItem(ExportKind.GLOBAL, gid)


def test_get_exported_global_should_return_none_for_unknown_global_id():
    exports = ModuleExports()
    assert exports.get_exported_global(always_the_same_id()) is None


def test_kind_must_match():
    exports = ModuleExports()
    same = always_the_same_id()
    exports.add("dummy", ExportItem(ExportKind.TABLE, same))
    assert exports.get_exported_func(same) is None
    assert exports.get_exported_memory(same) is None


def test_delete():
    exports = ModuleExports()
    fid = always_the_same_id()
    export_id = exports.add("dummy", ExportItem(ExportKind.FUNCTION, fid))
    assert exports.get_exported_func(fid) is not None
    exports.delete(export_id)
    assert exports.get_exported_func(fid) is None
    assert len(exports) == 0


def test_get_func_by_name():
    exports = ModuleExports()
    fid = always_the_same_id()
    export_id = exports.add("dummy", ExportItem(ExportKind.FUNCTION, fid))
    assert exports.get_func("dummy") == fid
    exports.delete(export_id)
    with pytest.raises(KeyError, match="unable to find function export 'dummy'"):
        exports.get_func("dummy")


def test_get_func_ignores_non_function_exports():
    exports = ModuleExports()
    exports.add("mem", ExportItem(ExportKind.MEMORY, always_the_same_id()))
    with pytest.raises(KeyError):
        exports.get_func("mem")


def test_iter_can_update_export_item():
    arena = Arena()
    fn_id0 = arena.alloc("f0")
    fn_id1 = arena.alloc("f1")
    assert fn_id0 != fn_id1

    exports = ModuleExports()
    export_id = exports.add("dummy", ExportItem(ExportKind.FUNCTION, fn_id0))
    assert exports.get_exported_func(fn_id0) is not None

    for export in exports:
        export.item = ExportItem(ExportKind.FUNCTION, fn_id1)

    assert exports.get_exported_func(fn_id0) is None
    actual = exports.get_exported_func(fn_id1)
    assert actual.id == export_id
    assert actual.name == "dummy"
    assert actual.item.id == fn_id1


def test_remove_by_name():
    exports = ModuleExports()
    keep = exports.add("keep", ExportItem(ExportKind.FUNCTION, Id(0, 1)))
    exports.add("drop", ExportItem(ExportKind.FUNCTION, Id(0, 2)))
    exports.remove("drop")
    assert [e.id for e in exports] == [keep]


def test_remove_unknown_name_raises():
    exports = ModuleExports()
    with pytest.raises(KeyError, match=r"failed to find exported func with name \[missing\]"):
        exports.remove("missing")


def test_deleted_export_is_gone_from_get():
    exports = ModuleExports()
    export_id = exports.add("dummy", ExportItem(ExportKind.GLOBAL, Id(0, 0)))
    exports.delete(export_id)
    with pytest.raises(KeyError):
        exports.get(export_id)


def test_add_requires_export_item():
    exports = ModuleExports()
    with pytest.raises(TypeError):
        exports.add("dummy", always_the_same_id())
    assert len(exports) == 0