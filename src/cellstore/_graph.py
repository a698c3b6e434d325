"""Dependency graph: which computeds read which cells.

Edges point from the cell that was read (source) to the computed that read
it (dependent). Both directions are kept so a dependent's incoming edges can
be dropped without scanning the whole graph.

Edges are additive: a rebuild that stops reading a source does not remove
the old edge unless the store was built with prune_stale_edges=True.
"""

from __future__ import annotations


class DependencyGraph:
    __slots__ = ("_dependents", "_sources")

    def __init__(self) -> None:
        # dict-as-ordered-set: insertion order is propagation order
        self._dependents: dict[str, dict[str, None]] = {}
        self._sources: dict[str, dict[str, None]] = {}

    def add_dependency(self, source: str, dependent: str) -> None:
        """Record that dependent must rebuild whenever source changes."""
        self._dependents.setdefault(source, {})[dependent] = None
        self._sources.setdefault(dependent, {})[source] = None

    def dependents_of(self, cell_id: str) -> tuple[str, ...]:
        """Direct dependents, snapshotted so callers may mutate the graph."""
        return tuple(self._dependents.get(cell_id, ()))

    def sources_of(self, cell_id: str) -> tuple[str, ...]:
        return tuple(self._sources.get(cell_id, ()))

    def clear_sources(self, dependent: str) -> None:
        """Drop every edge that points at dependent."""
        for source in self._sources.pop(dependent, ()):
            self._dependents[source].pop(dependent, None)

    def __len__(self) -> int:
        return sum(len(deps) for deps in self._dependents.values())
