"""Computed handles: derived, read-only cells.

A computed's value comes only from its rebuild function, which receives a
RebuildContext:

    store.create_atom("count", lambda: 0)

    def double(ctx):
        ctx.set(ctx.get("count") * 2)

    store.create_computed("double", double)

Returning the value instead of calling ctx.set() works too.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from cellstore._tracking import RebuildContext
    from cellstore.store import Store

T = TypeVar("T")


class Computed(Generic[T]):
    """Handle to a derived cell. Read-only."""

    __slots__ = ("_store", "id")

    def __init__(self, store: Store, cell_id: str) -> None:
        self._store = store
        self.id = cell_id

    def get(self, tp: type = object) -> T:
        return self._store.read(self.id, tp)

    @property
    def sources(self) -> tuple[str, ...]:
        """Cells this computed has read in any rebuild so far."""
        return self._store.sources(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Computed):
            return NotImplemented
        return self._store is other._store and self.id == other.id

    def __hash__(self) -> int:
        return hash((id(self._store), self.id))

    def __repr__(self) -> str:
        return f"Computed({self.id!r})"


def computed(store: Store, cell_id: str | None = None) -> Callable[[Callable[[RebuildContext], object]], Computed]:
    """Decorator factory: register fn as a computed in store.

    Usage:
        price = store.create_atom("price", lambda: 10)

        @computed(store)
        def with_tax(ctx):
            return ctx.get(price) * 1.2

        with_tax.get()  # 12.0
    """
    return store.computed(cell_id)
