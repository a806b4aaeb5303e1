"""
Table Model
===========

A page is a sequence of independent tables; a table is a grid of text
cells whose rows may differ in length. Tables are read-only once built.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


class CellNotFoundError(IndexError):
    """Raised when a cell outside the table's shape is requested."""

    def __init__(self, col: int, row: int):
        super().__init__(f"No cell at column {col}, row {row}")
        self.col = col
        self.row = row


@dataclass(frozen=True, eq=False)
class Table:
    """An immutable grid of cell text.

    Identity is the object itself (``eq=False``): two tables with the same
    text are still different tables of the page.

    Attributes:
        rows: Cell text per row, top to bottom
        index: Position of the table in its page
    """

    rows: tuple[tuple[str, ...], ...]
    index: int = 0

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]], index: int = 0) -> "Table":
        """Build a table from any nested iterable of cell strings."""
        return cls(rows=tuple(tuple(str(cell) for cell in row) for row in rows), index=index)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column_count(self, row: int) -> int:
        """Number of cells in the given row (0 for a missing row)."""
        if 0 <= row < len(self.rows):
            return len(self.rows[row])
        return 0

    @property
    def max_columns(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def cell(self, col: int, row: int) -> str:
        """Text of the cell at ``(col, row)``.

        Raises:
            CellNotFoundError: If the position lies outside the table
        """
        if 0 <= row < len(self.rows) and 0 <= col < len(self.rows[row]):
            return self.rows[row][col]
        raise CellNotFoundError(col, row)

    def cell_or_none(self, col: int, row: int) -> str | None:
        try:
            return self.cell(col, row)
        except CellNotFoundError:
            return None

    def row(self, row: int) -> tuple[str, ...]:
        if 0 <= row < len(self.rows):
            return self.rows[row]
        raise CellNotFoundError(0, row)

    def __repr__(self) -> str:
        first = self.cell_or_none(0, 0)
        return f"Table(index={self.index}, rows={self.row_count}, first_cell={first!r})"
