"""Tests for Store creation, reads and writes."""

import pytest

from cellstore import (
    Atom,
    CellExistsError,
    Computed,
    MissingStateError,
    ReadOnlyCellError,
    Store,
)


class TestCreateAtom:
    def test_create_and_read(self):
        s = Store()
        handle = s.create_atom("x", lambda: 10)
        assert isinstance(handle, Atom)
        assert s.read("x") == 10
        assert handle.get() == 10

    def test_creation_is_idempotent(self):
        s = Store()
        calls = []

        def init():
            calls.append(1)
            return 0

        s.create_atom("x", init)
        s.set("x", 7)
        s.create_atom("x", init)
        s.create_atom("x", lambda: 99)
        assert calls == [1]
        assert s.read("x") == 7

    def test_handles_compare_by_store_and_id(self):
        s = Store()
        assert s.create_atom("x", lambda: 1) == s.create_atom("x", lambda: 2)
        assert s.create_atom("x", lambda: 1) != Store().create_atom("x", lambda: 1)

    def test_create_inside_own_update_keeps_value(self):
        s = Store()
        s.create_atom("x", lambda: 1)
        calls = []

        def init():
            calls.append(1)
            return 100

        def bump(v):
            s.create_atom("x", init)
            return v + 1

        s.update("x", bump)
        assert calls == []
        assert s.read("x") == 2

    def test_computed_cannot_replace_atom(self):
        s = Store()
        s.create_atom("x", lambda: 1)
        with pytest.raises(CellExistsError) as exc:
            s.create_computed("x", lambda ctx: 5)
        assert exc.value.cell_id == "x"
        assert s.read("x") == 1
        assert not s.is_computed("x")
        s.set("x", 2)
        assert s.read("x") == 2

    def test_stores_are_isolated(self):
        a, b = Store(), Store()
        a.create_atom("x", lambda: 1)
        assert "x" in a
        assert "x" not in b


class TestReadWrite:
    def test_set(self):
        s = Store()
        s.create_atom("x", lambda: 0)
        s.set("x", 42)
        assert s.read("x") == 42

    def test_set_unknown_raises(self):
        s = Store()
        with pytest.raises(MissingStateError):
            s.set("nope", 1)

    def test_read_unknown_raises(self):
        s = Store()
        with pytest.raises(MissingStateError):
            s.read("nope")

    def test_typed_read_mismatch(self):
        s = Store()
        s.create_atom("x", lambda: 1)
        assert s.read("x", int) == 1
        with pytest.raises(MissingStateError):
            s.read("x", str)
        assert s.read("x") == 1  # still there

    def test_exists(self):
        s = Store()
        s.create_atom("x", lambda: "text")
        assert s.exists("x", str)
        assert not s.exists("x", int)

    def test_update_returning_value(self):
        s = Store()
        s.create_atom("count", lambda: 0)
        s.update("count", lambda v: v + 5)
        assert s.read("count") == 5

    def test_update_in_place(self):
        s = Store()
        s.create_atom("items", lambda: [1])
        s.update("items", lambda v: v.append(2))
        assert s.read("items") == [1, 2]

    def test_update_failure_restores_value(self):
        s = Store()
        s.create_atom("x", lambda: 1)

        def boom(v):
            raise ValueError("boom")

        with pytest.raises(ValueError):
            s.update("x", boom)
        assert s.read("x") == 1

    def test_value_is_checked_out_during_update(self):
        s = Store()
        s.create_atom("x", lambda: 1)
        with pytest.raises(MissingStateError):
            s.update("x", lambda v: s.read("x"))
        assert s.read("x") == 1

    def test_read_returns_deep_copy(self):
        s = Store()
        s.create_atom("grid", lambda: [[1]])
        s.read("grid")[0].append(9)
        assert s.read("grid") == [[1]]

    def test_read_returns_copy(self):
        s = Store()
        s.create_atom("items", lambda: [1, 2])
        s.read("items").append(3)
        assert s.read("items") == [1, 2]


class TestComputedIsReadOnly:
    def test_set_raises(self):
        s = Store()
        s.create_atom("a", lambda: 1)
        s.create_computed("c", lambda ctx: ctx.get("a") + 1)
        with pytest.raises(ReadOnlyCellError) as exc:
            s.set("c", 5)
        assert exc.value.cell_id == "c"
        with pytest.raises(ReadOnlyCellError):
            s.update("c", lambda v: v + 1)
        assert s.read("c") == 2

    def test_handle_has_no_setter(self):
        s = Store()
        s.create_atom("a", lambda: 1)
        c = s.create_computed("c", lambda ctx: ctx.get("a"))
        assert isinstance(c, Computed)
        assert not hasattr(c, "set")


class TestIntrospection:
    def test_ids_and_edges(self):
        s = Store()
        s.create_atom("a", lambda: 1)
        s.create_atom("b", lambda: 2)
        s.create_computed("sum", lambda ctx: ctx.get("a") + ctx.get("b"))
        assert s.ids() == ["a", "b", "sum"]
        assert s.sources("sum") == ("a", "b")
        assert s.dependents("a") == ("sum",)
        assert s.is_computed("sum")
        assert not s.is_computed("a")
        assert len(s) == 3
        assert repr(s) == "Store(3 cells, 1 computed)"


class TestScenario:
    def test_count_and_double(self):
        s = Store()
        s.create_atom("count", lambda: 0)
        s.update("count", lambda v: v + 5)
        assert s.read("count") == 5

        def double(ctx):
            ctx.set(ctx.get("count") * 2)

        s.create_computed("double", double)
        assert s.read("double") == 10

        s.update("count", lambda v: v + 1)
        assert s.read("count") == 6
        assert s.read("double") == 12


class TestReadWith:
    def test_passes_stored_value(self):
        s = Store()
        s.create_atom("items", lambda: [1, 2, 3])
        assert s.read_with("items", len) == 3
        assert s.read_with("items", sum, list) == 6

    def test_value_is_checked_out_while_reading(self):
        s = Store()
        s.create_atom("x", lambda: 1)
        seen = []
        s.read_with("x", lambda v: seen.append(s.exists("x")))
        assert seen == [False]
        assert s.exists("x")

    def test_restores_when_fn_raises(self):
        s = Store()
        s.create_atom("x", lambda: 1)

        def boom(v):
            raise ValueError("boom")

        with pytest.raises(ValueError):
            s.read_with("x", boom)
        assert s.read("x") == 1

    def test_typed_mismatch(self):
        s = Store()
        s.create_atom("x", lambda: 1)
        with pytest.raises(MissingStateError):
            s.read_with("x", str.upper, str)
        assert s.read("x") == 1
