"""HTML previews of tables for the autocomplete popup."""

from collections.abc import Sequence
from html import escape

from slim_autocomplete.grid.table import Table

TD_END = "</td>"


def table_to_html(table: Table) -> str:
    """Render a table as a compact ``<table>`` snippet.

    The last cell of a row shorter than the widest row spans the remaining
    columns so the preview keeps its rectangular shape.
    """
    max_cols = table.max_columns
    parts = ["<table>"]
    for row in table.rows:
        last_col = len(row) - 1
        parts.append("<tr>")
        for col, text in enumerate(row):
            if col == last_col and col < max_cols - 1:
                parts.append(f"<td colspan={max_cols - col}>{escape(text)}{TD_END}")
            else:
                parts.append(f"<td>{escape(text)}{TD_END}")
        parts.append("</tr>")
    parts.append("</table>")
    return "".join(parts)


def row_to_html(cells: Sequence[str]) -> str:
    """Render a single row as a one-row table."""
    body = "".join(f"<td>{escape(cell)}{TD_END}" for cell in cells)
    return f"<table><tr>{body}</tr></table>"
