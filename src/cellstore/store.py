"""Store: the public face of the engine.

A Store owns every piece of reactive state: the slot table, the typed cell
storage, the dependency graph, the computed registry and the undo ledger.
Stores are plain values; two stores never share state.

All access is by identifier. Handles returned by the create_* methods are
thin wrappers that hold an id and the store, nothing else.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from cellstore._cells import CellStorage
from cellstore._graph import DependencyGraph
from cellstore._registry import ComputedRegistry
from cellstore._slots import SlotTable
from cellstore._tracking import Propagator
from cellstore.atom import Atom, UndoAtom
from cellstore.computed import Computed
from cellstore.errors import CellExistsError, MissingStateError, ReadOnlyCellError
from cellstore.undo import UndoLedger

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger("cellstore.store")


class Store:
    """Single-threaded reactive value store."""

    def __init__(self, *, prune_stale_edges: bool = False) -> None:
        self.prune_stale_edges = prune_stale_edges
        self._slots = SlotTable()
        self._cells = CellStorage(self._slots)
        self._graph = DependencyGraph()
        self._registry = ComputedRegistry()
        self._ledger = UndoLedger()
        self._propagator = Propagator(self)

    # --- Creation ---

    def create_atom(self, cell_id: str, init_fn: Callable[[], T]) -> Atom[T]:
        """Create an atom, or return a handle to the existing one.

        init_fn only runs the first time cell_id is seen.
        """
        if cell_id not in self._slots:
            self._cells.set(cell_id, init_fn())
            logger.debug("Created atom %r", cell_id)
        return Atom(self, cell_id)

    def create_atom_with_undo(self, cell_id: str, init_fn: Callable[[], T]) -> UndoAtom[T]:
        if cell_id not in self._slots:
            value = init_fn()
            self._cells.set(cell_id, value)
            self._ledger.start(cell_id, value)
            logger.debug("Created atom %r with undo", cell_id)
        return UndoAtom(self, cell_id)

    def create_computed(self, cell_id: str, rebuild_fn) -> Computed:
        """Create a computed and run its rebuild once to seed value and edges."""
        if cell_id not in self._registry:
            if cell_id in self._slots:
                raise CellExistsError(cell_id)
            self._propagator.rebuild(cell_id, rebuild_fn)
            self._slots.register(cell_id)
            self._registry.register(cell_id, rebuild_fn)
            logger.debug(
                "Created computed %r depending on %s", cell_id, self._graph.sources_of(cell_id)
            )
        return Computed(self, cell_id)

    def computed(self, cell_id: str | None = None):
        """Decorator: register the function as a computed named cell_id.

        Usage:
            store.create_atom("count", lambda: 0)

            @store.computed()
            def double(ctx):
                return ctx.get("count") * 2

            double.get()  # 0
        """

        def decorator(fn) -> Computed:
            return self.create_computed(cell_id or fn.__name__, fn)

        return decorator

    # --- Reads ---

    def read(self, cell_id: str, tp: type[T] = object) -> T:
        """Return a copy of the value. Raises MissingStateError if absent or mistyped."""
        return self._cells.clone_value(cell_id, tp)

    def read_with(self, cell_id: str, fn: Callable[[T], R], tp: type[T] = object) -> R:
        """Pass the stored value itself, uncopied, to fn and return its result.

        The value is checked out while fn runs and put back afterwards, even
        if fn raises. fn must not keep a reference to it.
        """
        value = self._cells.take(cell_id, tp)
        try:
            return fn(value)
        finally:
            self._cells.set(cell_id, value)

    def exists(self, cell_id: str, tp: type = object) -> bool:
        return self._cells.exists(cell_id, tp)

    # --- Writes ---

    def set(self, cell_id: str, value: object) -> None:
        """Replace the value of an existing atom and propagate."""
        self._check_writable(cell_id)
        self._cells.take(cell_id)
        self._commit(cell_id, value)

    def set_with_undo(self, cell_id: str, value: object) -> None:
        self._check_writable(cell_id)
        self._require_ledger(cell_id)
        self._ledger.record_before_write(cell_id, self._cells.take(cell_id))
        self._commit(cell_id, value)

    def update(self, cell_id: str, fn: Callable) -> None:
        """Apply fn to the current value.

        fn's return value replaces the cell's value. If fn returns None the
        object it was given, possibly mutated in place, is kept.
        """
        self._check_writable(cell_id)
        value = self._cells.take(cell_id)
        try:
            result = fn(value)
        except BaseException:
            self._cells.set(cell_id, value)
            raise
        self._commit(cell_id, value if result is None else result)

    def update_with_undo(self, cell_id: str, fn: Callable) -> None:
        self._check_writable(cell_id)
        self._require_ledger(cell_id)
        value = self._cells.take(cell_id)
        self._ledger.record_before_write(cell_id, value)
        try:
            result = fn(value)
        except BaseException:
            self._ledger.pop(cell_id)
            self._cells.set(cell_id, value)
            raise
        self._commit(cell_id, value if result is None else result)

    def undo(self, cell_id: str) -> None:
        """Roll back one write. A no-op once only the baseline remains."""
        if self._ledger.depth(cell_id) <= 1:
            return
        previous = self._ledger.pop(cell_id)
        logger.debug("Undo %r", cell_id)
        self._commit(cell_id, previous)

    def history_depth(self, cell_id: str) -> int:
        return self._ledger.depth(cell_id)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Defer propagation until the outermost transaction exits.

        Usage:
            with store.transaction():
                store.set("first", "Ada")
                store.set("last", "Lovelace")
                # dependents rebuild here, once per written cell
        """
        self._propagator.begin_batch()
        try:
            yield
        finally:
            self._propagator.end_batch()

    def _check_writable(self, cell_id: str) -> None:
        if cell_id in self._registry:
            raise ReadOnlyCellError(cell_id)

    def _require_ledger(self, cell_id: str) -> None:
        if cell_id not in self._ledger:
            raise MissingStateError(cell_id)

    def _commit(self, cell_id: str, value: object) -> None:
        self._cells.set(cell_id, value)
        self._propagator.changed(cell_id)

    # --- Introspection ---

    def ids(self) -> list[str]:
        return list(self._slots)

    def dependents(self, cell_id: str) -> tuple[str, ...]:
        return self._graph.dependents_of(cell_id)

    def sources(self, cell_id: str) -> tuple[str, ...]:
        return self._graph.sources_of(cell_id)

    def is_computed(self, cell_id: str) -> bool:
        return cell_id in self._registry

    def __contains__(self, cell_id: str) -> bool:
        return self._cells.exists(cell_id)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"Store({len(self._slots)} cells, {len(self._registry)} computed)"
