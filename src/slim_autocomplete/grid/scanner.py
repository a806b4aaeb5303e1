"""
Table Scanners
==============

Turn page content into the sequence of tables the declaration extractors
work on. Two sources are supported:

- rendered HTML, where every ``<table>`` element is one table
- raw wiki text, where a run of ``|cell|cell|`` lines is one table
"""

import logging
import re

from bs4 import BeautifulSoup, Tag

from slim_autocomplete.grid.table import Table

logger = logging.getLogger(__name__)

# Optional table prefixes: !| literal, -| hidden, -!| hidden literal, -^| hidden include
_WIKI_ROW = re.compile(r"^\s*-?[!^]?\|")
_LITERAL_OPEN = "!-"
_LITERAL_CLOSE = "-!"
_PREFORMATTED_OPEN = "{{{"
_PREFORMATTED_CLOSE = "}}}"


def normalize_text(text: str) -> str:
    return " ".join(text.split())


def _own_rows(table: Tag) -> list[Tag]:
    """Rows that belong to ``table`` itself, not to a table nested in it."""
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def scan_html(html: str) -> list[Table]:
    """Extract every table from rendered page HTML, in document order.

    Nested tables are returned as separate tables following their parent.
    Cell text is whitespace-normalised; rows without cells are dropped.

    Args:
        html: Rendered page markup

    Returns:
        Tables with ``index`` set to their position in the page
    """
    soup = BeautifulSoup(html, "html.parser")
    tables: list[Table] = []

    for element in soup.find_all("table"):
        rows: list[list[str]] = []
        for tr in _own_rows(element):
            cells = tr.find_all(["td", "th"], recursive=False)
            if cells:
                rows.append([normalize_text(cell.get_text(separator=" ", strip=True)) for cell in cells])
        if rows:
            tables.append(Table.from_rows(rows, index=len(tables)))

    logger.debug("Scanned %d table(s) from HTML", len(tables))
    return tables


def split_wiki_row(line: str) -> list[str]:
    """Split one ``|a|b|`` wiki row into stripped cell texts.

    ``!-literal-!`` sections are unwrapped and may contain pipes. Text before
    the first pipe (the table prefix) is discarded.
    """
    cells: list[str] = []
    buffer: list[str] = []
    i = 0
    while i < len(line):
        if line.startswith(_LITERAL_OPEN, i):
            end = line.find(_LITERAL_CLOSE, i + len(_LITERAL_OPEN))
            if end != -1:
                buffer.append(line[i + len(_LITERAL_OPEN):end])
                i = end + len(_LITERAL_CLOSE)
                continue
        char = line[i]
        if char == "|":
            cells.append("".join(buffer))
            buffer = []
        else:
            buffer.append(char)
        i += 1

    # A row may omit its closing pipe
    tail = "".join(buffer)
    if tail.strip():
        cells.append(tail)

    return [cell.strip() for cell in cells[1:]]


def scan_wiki(text: str) -> list[Table]:
    """Extract pipe tables from raw wiki text.

    Consecutive table rows form one table; any other line (including a blank
    one) closes it. Rows inside ``{{{ ... }}}`` preformatted blocks are
    ignored.

    Args:
        text: Wiki markup of a page

    Returns:
        Tables with ``index`` set to their position in the page
    """
    tables: list[Table] = []
    current: list[list[str]] = []
    preformatted = False

    def close_table() -> None:
        if current:
            tables.append(Table.from_rows(current, index=len(tables)))
            current.clear()

    for line in text.splitlines():
        stripped = line.strip()
        if preformatted:
            if _PREFORMATTED_CLOSE in stripped:
                preformatted = False
            continue
        if stripped.startswith(_PREFORMATTED_OPEN):
            close_table()
            preformatted = _PREFORMATTED_CLOSE not in stripped[len(_PREFORMATTED_OPEN):]
            continue

        if _WIKI_ROW.match(line):
            current.append(split_wiki_row(line))
        else:
            close_table()

    close_table()
    logger.debug("Scanned %d table(s) from wiki text", len(tables))
    return tables
