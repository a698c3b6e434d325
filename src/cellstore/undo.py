"""Undo ledger: per-atom history of prior values.

A ledger is started with the atom's initial value as its baseline and only
ever grows by one snapshot per recorded write. pop() never removes the
baseline, so an atom with undo always has at least one entry.
"""

from __future__ import annotations

import copy
import logging

from cellstore.errors import MissingStateError

logger = logging.getLogger("cellstore.undo")


class UndoLedger:
    __slots__ = ("_history",)

    def __init__(self) -> None:
        self._history: dict[str, list] = {}

    def start(self, cell_id: str, baseline: object) -> None:
        self._history[cell_id] = [copy.deepcopy(baseline)]

    def record_before_write(self, cell_id: str, previous: object) -> None:
        self._entries(cell_id).append(copy.deepcopy(previous))

    def pop(self, cell_id: str) -> object | None:
        """Pop the latest snapshot, or return None when only the baseline is left."""
        entries = self._entries(cell_id)
        if len(entries) <= 1:
            logger.debug("Undo on %r ignored: only the baseline remains", cell_id)
            return None
        return entries.pop()

    def depth(self, cell_id: str) -> int:
        return len(self._entries(cell_id))

    def _entries(self, cell_id: str) -> list:
        entries = self._history.get(cell_id)
        if entries is None:
            raise MissingStateError(cell_id)
        return entries

    def __contains__(self, cell_id: str) -> bool:
        return cell_id in self._history
