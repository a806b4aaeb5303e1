"""Unit tests for the table model."""

import pytest

from slim_autocomplete.grid.table import CellNotFoundError, Table


class TestTable:
    """Tests for Table accessors."""

    def test_ragged_rows(self) -> None:
        """Rows keep their own lengths."""
        table = Table.from_rows([["a", "b", "c"], ["d"]])
        assert table.row_count == 2
        assert table.column_count(0) == 3
        assert table.column_count(1) == 1
        assert table.max_columns == 3

    def test_cell_lookup_is_column_then_row(self) -> None:
        """cell(col, row) addresses the grid column first."""
        table = Table.from_rows([["a", "b"], ["c", "d"]])
        assert table.cell(1, 0) == "b"
        assert table.cell(0, 1) == "c"

    def test_missing_cell_raises(self) -> None:
        """Out-of-range positions raise CellNotFoundError."""
        table = Table.from_rows([["a"]])
        with pytest.raises(CellNotFoundError) as exc_info:
            table.cell(1, 0)
        assert exc_info.value.col == 1
        assert exc_info.value.row == 0
        with pytest.raises(CellNotFoundError):
            table.cell(0, 5)
        with pytest.raises(CellNotFoundError):
            table.row(3)

    def test_cell_or_none(self) -> None:
        """cell_or_none returns None outside the table."""
        table = Table.from_rows([["a"]])
        assert table.cell_or_none(0, 0) == "a"
        assert table.cell_or_none(4, 4) is None

    def test_column_count_of_missing_row(self) -> None:
        """A missing row has no columns."""
        assert Table.from_rows([]).column_count(0) == 0
        assert Table.from_rows([]).max_columns == 0

    def test_identity_not_content_equality(self) -> None:
        """Two tables with equal text are still distinct tables."""
        first = Table.from_rows([["a"]])
        second = Table.from_rows([["a"]])
        assert first != second
        assert first == first

    def test_cells_are_coerced_to_text(self) -> None:
        """Non-string cell values become strings."""
        table = Table.from_rows([[1, 2.5]])
        assert table.row(0) == ("1", "2.5")
