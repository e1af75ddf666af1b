import pytest

from wasmsections.data import ActiveData, Data, ModuleData, PassiveData


def test_add_and_get():
    module_data = ModuleData()
    data_id = module_data.add(PassiveData(), b"hello")
    data = module_data.get(data_id)
    assert data.id == data_id
    assert data.value == b"hello"
    assert data.name is None


def test_is_passive():
    module_data = ModuleData()
    p = module_data.get(module_data.add(PassiveData(), b""))
    a = module_data.get(module_data.add(ActiveData("mem0", 0), b""))
    assert p.is_passive() is True
    assert a.is_passive() is False


def test_active_kind_keeps_memory_and_offset():
    module_data = ModuleData()
    kind = ActiveData("mem0", ("i32.const", 8))
    data = module_data.get(module_data.add(kind, b"x"))
    assert data.kind == ActiveData("mem0", ("i32.const", 8))


def test_delete_clears_value_and_hides_segment():
    module_data = ModuleData()
    keep = module_data.add(PassiveData(), b"keep")
    gone = module_data.add(PassiveData(), b"gone")
    removed = module_data.get(gone)
    module_data.delete(gone)
    assert removed.value == b""
    assert [d.id for d in module_data] == [keep]
    assert len(module_data) == 1
    with pytest.raises(KeyError):
        module_data.get(gone)


def test_data_count_empty_is_none():
    assert ModuleData().data_count(True) is None


def test_data_count_with_passive():
    module_data = ModuleData()
    module_data.add(ActiveData("mem0", 0), b"a")
    module_data.add(PassiveData(), b"b")
    assert module_data.data_count(False) == len(module_data)


def test_data_count_only_active_not_used():
    module_data = ModuleData()
    module_data.add(ActiveData("mem0", 0), b"a")
    assert module_data.data_count(False) is None


def test_data_count_only_active_used_by_code():
    module_data = ModuleData()
    module_data.add(ActiveData("mem0", 0), b"a")
    module_data.add(ActiveData("mem0", 4), b"b")
    assert module_data.data_count(True) == len(module_data)


def test_data_count_ignores_deleted():
    module_data = ModuleData()
    module_data.add(ActiveData("mem0", 0), b"a")
    passive = module_data.add(PassiveData(), b"b")
    module_data.delete(passive)
    assert module_data.data_count(False) is None


def test_iteration_in_insertion_order():
    module_data = ModuleData()
    ids = [module_data.add(PassiveData(), bytes([n])) for n in range(3)]
    assert [d.id for d in module_data] == ids
    assert all(isinstance(d, Data) for d in module_data)