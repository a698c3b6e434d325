"""cellstore: a single-process reactive value store of atoms and computeds."""

from importlib.metadata import version as _version

__version__ = _version("cellstore")

from cellstore.errors import CellError, CellExistsError, MissingStateError, ReadOnlyCellError
from cellstore._tracking import RebuildContext
from cellstore.atom import Atom, UndoAtom
from cellstore.computed import Computed, computed
from cellstore.action import action
from cellstore.store import Store

__all__ = [
    "Store",
    "Atom",
    "UndoAtom",
    "Computed",
    "computed",
    "action",
    "RebuildContext",
    "CellError",
    "CellExistsError",
    "MissingStateError",
    "ReadOnlyCellError",
]
