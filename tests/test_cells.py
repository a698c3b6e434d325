"""Tests for typed cell storage."""

import pytest

from cellstore._cells import CellStorage
from cellstore._slots import SlotTable
from cellstore.errors import MissingStateError


@pytest.fixture
def cells():
    return CellStorage(SlotTable())


class TestCellStorage:
    def test_set_and_clone(self, cells):
        cells.set("x", 1)
        assert cells.clone_value("x") == 1
        assert cells.clone_value("x", int) == 1

    def test_set_overwrites_regardless_of_type(self, cells):
        cells.set("x", 1)
        cells.set("x", "one")
        assert cells.clone_value("x", str) == "one"

    def test_exists_checks_type(self, cells):
        cells.set("x", 1)
        assert cells.exists("x")
        assert cells.exists("x", int)
        assert not cells.exists("x", str)
        assert not cells.exists("nope")

    def test_take_removes(self, cells):
        cells.set("x", [1, 2])
        assert cells.take("x", list) == [1, 2]
        assert not cells.exists("x")
        with pytest.raises(MissingStateError):
            cells.take("x")

    def test_take_wrong_type_leaves_value(self, cells):
        cells.set("x", 1)
        with pytest.raises(MissingStateError) as exc:
            cells.take("x", str)
        assert exc.value.cell_id == "x"
        assert "holds int, not str" in str(exc.value)
        assert cells.clone_value("x") == 1

    def test_clone_is_a_copy(self, cells):
        cells.set("items", [1, 2])
        copied = cells.clone_value("items")
        copied.append(3)
        assert cells.clone_value("items") == [1, 2]

    def test_missing_is_lookup_error(self, cells):
        with pytest.raises(LookupError):
            cells.clone_value("nope")

    def test_clone_copies_nested_values(self, cells):
        cells.set("grid", [[1]])
        cells.clone_value("grid")[0].append(9)
        assert cells.clone_value("grid") == [[1]]
