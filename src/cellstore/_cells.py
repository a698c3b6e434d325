"""Typed cell storage: type-erased values indexed by SlotKey.

Values are never lent out. A read takes the value out of its slot and puts
it back, so code running in between (a rebuild function re-entering the
store, say) always sees consistent state. While a value is taken it is
"checked out" and reads of it fail.

Downcasting is an isinstance() check against the type the caller expects.
A mismatch is a MissingStateError, the same as an absent value.
"""

from __future__ import annotations

import copy
from typing import TypeVar

from cellstore._slots import SlotKey, SlotTable
from cellstore.errors import MissingStateError

T = TypeVar("T")


class CellStorage:
    """Map of SlotKey -> value with downcast-on-read."""

    __slots__ = ("_slots", "_values")

    def __init__(self, slots: SlotTable) -> None:
        self._slots = slots
        self._values: dict[SlotKey, object] = {}

    def set(self, cell_id: str, value: object) -> None:
        """Store value under cell_id, replacing whatever was there."""
        self._values[self._slots.register(cell_id)] = value

    def exists(self, cell_id: str, tp: type = object) -> bool:
        key = self._slots.resolve(cell_id)
        return key in self._values and isinstance(self._values[key], tp)

    def take(self, cell_id: str, tp: type[T] = object) -> T:
        """Remove and return the value. A value of the wrong type stays put."""
        key = self._slots.resolve(cell_id)
        if key is None or key not in self._values:
            raise MissingStateError(cell_id, tp)
        value = self._values[key]
        if not isinstance(value, tp):
            raise MissingStateError(cell_id, tp, type(value))
        del self._values[key]
        return value

    def clone_value(self, cell_id: str, tp: type[T] = object) -> T:
        """Return a deep copy of the value, leaving the original stored."""
        value = self.take(cell_id, tp)
        try:
            return copy.deepcopy(value)
        finally:
            self.set(cell_id, value)

    def __len__(self) -> int:
        return len(self._values)
