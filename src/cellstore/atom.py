"""Atom handles: readable, directly writable cells.

A handle holds only the store and the identifier; all state lives in the
store. Which methods a handle offers is the capability boundary: an Atom
cannot undo, an UndoAtom records every write so it can.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from cellstore.store import Store

T = TypeVar("T")


class Atom(Generic[T]):
    """Handle to a writable cell."""

    __slots__ = ("_store", "id")

    def __init__(self, store: Store, cell_id: str) -> None:
        self._store = store
        self.id = cell_id

    def get(self, tp: type = object) -> T:
        return self._store.read(self.id, tp)

    def set(self, value: T) -> None:
        self._store.set(self.id, value)

    def update(self, fn: Callable[[T], T | None]) -> None:
        self._store.update(self.id, fn)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Atom):
            return NotImplemented
        return self._store is other._store and self.id == other.id

    def __hash__(self) -> int:
        return hash((id(self._store), self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"


class UndoAtom(Atom[T]):
    """Handle to a writable cell with single-step rollback."""

    __slots__ = ()

    def set(self, value: T) -> None:
        self._store.set_with_undo(self.id, value)

    def update(self, fn: Callable[[T], T | None]) -> None:
        self._store.update_with_undo(self.id, fn)

    def undo(self) -> None:
        self._store.undo(self.id)

    @property
    def can_undo(self) -> bool:
        return self._store.history_depth(self.id) > 1
