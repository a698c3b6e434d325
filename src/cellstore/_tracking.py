"""Propagation engine: the heart of cellstore.

A write to a cell rebuilds its dependents depth-first, then their dependents,
and so on, before the write returns. There is no topological sort: a
computed reachable along two paths rebuilds once per path. A cycle among
computeds recurses until Python raises RecursionError.

Dependency tracking is explicit. Each rebuild function receives a
RebuildContext naming the computed being rebuilt; reads made through it
record an edge from the cell read to that computed. Nothing is looked up
from global or thread-local state.

Batching: writes inside Store.transaction() commit immediately, but their
propagation is deferred until the outermost batch exits. Each written id is
then propagated once, in first-write order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from cellstore.store import Store

T = TypeVar("T")

logger = logging.getLogger("cellstore.propagation")


class RebuildContext:
    """Handed to a rebuild function for the duration of one rebuild."""

    __slots__ = ("id", "_store", "_assigned")

    def __init__(self, store: Store, cell_id: str) -> None:
        self.id = cell_id
        self._store = store
        self._assigned = False

    def get(self, source: object, tp: type[T] = object) -> T:
        """Read another cell (id or handle) and record it as a dependency."""
        source_id = getattr(source, "id", source)
        value = self._store._cells.clone_value(source_id, tp)
        self._store._graph.add_dependency(source_id, self.id)
        return value

    def set(self, value: object) -> None:
        """Store the computed's own value."""
        self._store._cells.set(self.id, value)
        self._assigned = True

    @property
    def store(self) -> Store:
        return self._store

    def __repr__(self) -> str:
        return f"RebuildContext({self.id!r})"


class Propagator:
    """Runs rebuilds for the dependents of a changed cell."""

    __slots__ = ("_store", "_batch_depth", "_pending")

    def __init__(self, store: Store) -> None:
        self._store = store
        self._batch_depth = 0
        # dict-as-ordered-set of ids written during a batch
        self._pending: dict[str, None] = {}

    def rebuild(self, cell_id: str, rebuild_fn) -> None:
        """Run one rebuild. A non-None return is stored unless ctx.set() was used."""
        store = self._store
        previous_sources = ()
        if store.prune_stale_edges:
            previous_sources = store._graph.sources_of(cell_id)
            store._graph.clear_sources(cell_id)
        ctx = RebuildContext(store, cell_id)
        try:
            result = rebuild_fn(ctx)
        except BaseException:
            if store.prune_stale_edges:
                # A failed rebuild keeps the edges it had before it started.
                store._graph.clear_sources(cell_id)
                for source in previous_sources:
                    store._graph.add_dependency(source, cell_id)
            raise
        if not ctx._assigned and result is not None:
            ctx.set(result)
        logger.debug("Rebuilt %r", cell_id)

    def changed(self, cell_id: str) -> None:
        """Entry point for every committed write."""
        if self._batch_depth > 0:
            self._pending[cell_id] = None
        else:
            self.propagate(cell_id)

    def propagate(self, cell_id: str) -> None:
        store = self._store
        dependents = store._registry.pairs(store._graph.dependents_of(cell_id))
        for dep_id, rebuild_fn in dependents:
            self.rebuild(dep_id, rebuild_fn)
            self.propagate(dep_id)

    def begin_batch(self) -> None:
        """Enter a batching scope. Nested batches are supported."""
        self._batch_depth += 1

    def end_batch(self) -> None:
        """Exit a batching scope. The outermost exit flushes pending writes."""
        self._batch_depth -= 1
        if self._batch_depth == 0:
            self._flush_pending()

    def _flush_pending(self) -> None:
        while self._pending:
            # Snapshot and clear: propagation may write again.
            batch = list(self._pending)
            self._pending.clear()
            logger.debug("Flushing %d batched write(s)", len(batch))
            for cell_id in batch:
                self.propagate(cell_id)

    @property
    def pending_count(self) -> int:
        return len(self._pending)
