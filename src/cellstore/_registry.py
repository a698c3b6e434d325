"""Computed registry: identifier -> rebuild function."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from cellstore._tracking import RebuildContext

    RebuildFn = Callable[[RebuildContext], object]


class ComputedRegistry:
    __slots__ = ("_rebuilds",)

    def __init__(self) -> None:
        self._rebuilds: dict[str, RebuildFn] = {}

    def register(self, cell_id: str, rebuild_fn: RebuildFn) -> None:
        self._rebuilds[cell_id] = rebuild_fn

    def get(self, cell_id: str) -> RebuildFn | None:
        return self._rebuilds.get(cell_id)

    def pairs(self, cell_ids: Iterable[str]) -> list[tuple[str, RebuildFn]]:
        """(id, rebuild_fn) for each registered id, in the given order."""
        return [(cid, self._rebuilds[cid]) for cid in cell_ids if cid in self._rebuilds]

    def __contains__(self, cell_id: str) -> bool:
        return cell_id in self._rebuilds

    def __len__(self) -> int:
        return len(self._rebuilds)
