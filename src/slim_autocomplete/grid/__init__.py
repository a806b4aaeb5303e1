"""
Grid Model
==========

Page tables as immutable grids of cell text, plus the scanners that
produce them from rendered HTML or raw wiki text.
"""

from slim_autocomplete.grid.html import row_to_html, table_to_html
from slim_autocomplete.grid.scanner import scan_html, scan_wiki
from slim_autocomplete.grid.table import CellNotFoundError, Table

__all__ = [
    "Table",
    "CellNotFoundError",
    "scan_html",
    "scan_wiki",
    "table_to_html",
    "row_to_html",
]
