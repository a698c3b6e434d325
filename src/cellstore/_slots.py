"""Slot table: stable internal keys for string identifiers.

Identifiers are hashed once, on registration. Everything past the store
boundary indexes by SlotKey instead of by string.

The arena is generational: a removed slot is reused with a bumped generation,
so a key held from before the removal never resolves to the new occupant.
"""

from __future__ import annotations

from typing import Generic, Iterator, NamedTuple, TypeVar

T = TypeVar("T")


class SlotKey(NamedTuple):
    index: int
    generation: int


class SlotArena(Generic[T]):
    """Generational arena of values addressed by SlotKey."""

    __slots__ = ("_entries", "_generations", "_free")

    def __init__(self) -> None:
        self._entries: list[T | None] = []
        self._generations: list[int] = []
        self._free: list[int] = []

    def insert(self, value: T) -> SlotKey:
        if self._free:
            index = self._free.pop()
            self._entries[index] = value
            return SlotKey(index, self._generations[index])
        self._entries.append(value)
        self._generations.append(0)
        return SlotKey(len(self._entries) - 1, 0)

    def get(self, key: SlotKey) -> T | None:
        if key not in self:
            return None
        return self._entries[key.index]

    def remove(self, key: SlotKey) -> T | None:
        if key not in self:
            return None
        value = self._entries[key.index]
        self._entries[key.index] = None
        self._generations[key.index] += 1
        self._free.append(key.index)
        return value

    def __contains__(self, key: SlotKey) -> bool:
        index, generation = key
        return (
            0 <= index < len(self._entries)
            and self._generations[index] == generation
        )

    def __len__(self) -> int:
        return len(self._entries) - len(self._free)


class SlotTable:
    """Bidirectional identifier <-> SlotKey mapping."""

    __slots__ = ("_arena", "_keys")

    def __init__(self) -> None:
        self._arena: SlotArena[str] = SlotArena()
        self._keys: dict[str, SlotKey] = {}

    def register(self, cell_id: str) -> SlotKey:
        """Return the key for cell_id, allocating one on first sight."""
        key = self._keys.get(cell_id)
        if key is None:
            key = self._arena.insert(cell_id)
            self._keys[cell_id] = key
        return key

    def resolve(self, cell_id: str) -> SlotKey | None:
        return self._keys.get(cell_id)

    def identifier(self, key: SlotKey) -> str | None:
        return self._arena.get(key)

    def __contains__(self, cell_id: str) -> bool:
        return cell_id in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)
