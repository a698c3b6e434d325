"""Error hierarchy for cellstore.

Every error here signals a programming mistake at the call site, not a
runtime condition. The engine never catches them or substitutes a default.
"""

from __future__ import annotations


class CellError(Exception):
    def __init__(self, code: str, message: str, cell_id: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.cell_id = cell_id


class MissingStateError(CellError, LookupError):
    """No value of the requested type is stored under the identifier."""

    def __init__(self, cell_id: str, expected: type | None = None, found: type | None = None) -> None:
        if expected is None or expected is object:
            message = f'No state stored for cell "{cell_id}"'
        elif found is None:
            message = f'No {expected.__name__} state stored for cell "{cell_id}"'
        else:
            message = (
                f'Cell "{cell_id}" holds {found.__name__}, not {expected.__name__}'
            )
        super().__init__("MISSING_STATE", message, cell_id)
        self.expected = expected


class ReadOnlyCellError(CellError):
    def __init__(self, cell_id: str) -> None:
        super().__init__(
            "READ_ONLY_CELL",
            f'Cell "{cell_id}" is computed and cannot be written directly',
            cell_id,
        )


class CellExistsError(CellError):
    def __init__(self, cell_id: str) -> None:
        super().__init__(
            "CELL_EXISTS",
            f'Cell "{cell_id}" already holds an atom and cannot become computed',
            cell_id,
        )
