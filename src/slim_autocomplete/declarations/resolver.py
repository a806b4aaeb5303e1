"""
Cross-Reference Resolution
==========================

Template bodies can call other scenarios and table templates declared
earlier on the page. Those calls contribute parameters that are invisible
to a plain pattern search of the body, so the search follows every call
whose row-reconstructed name matches a registered declaration.
"""

import logging
import re

from slim_autocomplete.declarations.models import Declaration
from slim_autocomplete.grid.table import Table

logger = logging.getLogger(__name__)

# @{name} reads a value, $name= stores one
INPUT_PATTERN = re.compile(r"@\{(.+?)}")
OUTPUT_PATTERN = re.compile(r"\$(.+?)=")

_TRAILING_SEMICOLON = re.compile(r";$")


def normalize_name(name: str) -> str:
    """Lookup key for a declaration name.

    Surrounding whitespace and a single trailing ``;`` are dropped and inner
    whitespace runs collapse to one space.
    """
    return " ".join(_TRAILING_SEMICOLON.sub("", name.strip()).split())


def row_call_name(row: tuple[str, ...]) -> str:
    """Name of the call a body row makes: its even-column cells, space-joined."""
    return normalize_name(" ".join(row[col] for col in range(0, len(row), 2)))


class DeclarationRegistry:
    """Name lookup of the declarations seen so far on a page.

    A later declaration with a colliding name replaces the earlier entry.
    The earlier declaration is only shadowed here; it stays in the page's
    declaration list.
    """

    def __init__(self) -> None:
        self._by_name: dict[str, Declaration] = {}

    def register(self, declaration: Declaration) -> None:
        key = normalize_name(declaration.name)
        if key in self._by_name:
            logger.debug("Declaration '%s' shadows an earlier one with the same name", key)
        self._by_name[key] = declaration

    def get(self, name: str) -> Declaration | None:
        return self._by_name.get(normalize_name(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


def find_parameters(pattern: re.Pattern[str], table: Table, registry: DeclarationRegistry) -> list[str]:
    """Collect every ``pattern`` match in the body of ``table``.

    Body rows (every row after the header) are searched cell by cell. When a
    row calls a registered declaration, that declaration's table is searched
    too, recursively. Each table is visited at most once, so mutually
    referencing templates terminate.

    Args:
        pattern: Regex whose first group is the parameter name
        table: Table whose body is searched
        registry: Declarations callable from the body

    Returns:
        Distinct parameter names in first-seen order
    """
    found: dict[str, None] = {}
    _collect(pattern, table, registry, found, visited=set())
    return list(found)


def _collect(
    pattern: re.Pattern[str],
    table: Table,
    registry: DeclarationRegistry,
    found: dict[str, None],
    visited: set[int],
) -> None:
    visited.add(id(table))

    for row_index in range(1, table.row_count):
        row = table.row(row_index)
        for cell in row:
            for match in pattern.finditer(cell):
                found.setdefault(match.group(1), None)

        called = registry.get(row_call_name(row))
        if called is None:
            continue
        if id(called.source_table) in visited:
            logger.debug("Skipping cyclic reference to '%s'", called.name)
            continue
        _collect(pattern, called.source_table, registry, found, visited)
