"""
Declaration Extractors
======================

One function per declaration idiom. Each reads a single table and returns
the structured declaration together with its insertable call template.

Scenario headers come in two shapes::

    | scenario | login as | user | with password | password |
    | scenario | login as _ with password _ | user, password |

In the first, words and parameters alternate from column 1. In the second,
``_`` markers stand in for the parameters named in the following cell.
"""

import logging
import re

from slim_autocomplete.declarations.models import Declaration, DeclarationKind, VariableAssignment
from slim_autocomplete.declarations.resolver import (
    INPUT_PATTERN,
    OUTPUT_PATTERN,
    DeclarationRegistry,
    find_parameters,
)
from slim_autocomplete.grid.table import Table
from slim_autocomplete.introspection.usage import context_help

logger = logging.getLogger(__name__)

# A non-word character followed by an underscore standing on its own
PARAMETER_MARKER = re.compile(r"\W_(?=\W|$)")
PARAMETER_LIST_SEPARATOR = re.compile(r",\s*")
VARIABLE_ASSIGNMENT = re.compile(r"\$\S+=")
TEMPLATE_ROW_BREAK = "\r\n"


class MalformedTableError(ValueError):
    """A declaration table lacks a header cell its kind requires."""

    def __init__(self, table: Table, reason: str):
        super().__init__(f"Malformed table #{table.index}: {reason}")
        self.table = table


def _header_name_cell(table: Table, kind: str) -> str:
    name = table.cell_or_none(1, 0)
    if name is None:
        raise MalformedTableError(table, f"{kind} header has no name cell")
    return name


def extract_namespaces(table: Table, library: bool = False) -> list[str]:
    """Namespaces listed one per row below an ``import`` or ``library`` header.

    A library row names a fixture class (``pkg.module.Fixture``); its
    namespace is everything before the last dot.
    """
    namespaces: list[str] = []
    for row in range(1, table.row_count):
        entry = (table.cell_or_none(0, row) or "").strip()
        if not entry:
            continue
        if library and "." in entry:
            entry = entry.rsplit(".", 1)[0]
        namespaces.append(entry)
    return namespaces


def extract_scenario(table: Table) -> Declaration:
    """Read a scenario declaration from its header row.

    Raises:
        MalformedTableError: If the header has no name cell
    """
    first = _header_name_cell(table, "scenario")
    if PARAMETER_MARKER.search(first):
        name, parameters, call_template = _inline_marker_header(table, first)
    else:
        name, parameters, call_template = _positional_header(table)

    return Declaration(
        kind=DeclarationKind.SCENARIO,
        name=name,
        parameters=tuple(parameters),
        call_template=call_template,
        context_help=context_help(call_template[2:]),
        source_table=table,
    )


def _positional_header(table: Table) -> tuple[str, list[str], str]:
    words: list[str] = []
    parameters: list[str] = []
    call_template = "|"
    for col in range(1, table.column_count(0)):
        text = table.cell(col, 0)
        if col % 2 == 0:
            parameters.append(text)
            call_template += f" [{text}] |"
        else:
            words.append(text)
            call_template += f" {text} |"
    return " ".join(words), parameters, call_template


def _inline_marker_header(table: Table, text: str) -> tuple[str, list[str], str]:
    names_cell = (table.cell_or_none(2, 0) or "").strip()
    parameters = PARAMETER_LIST_SEPARATOR.split(names_cell) if names_cell else []

    insert_text = text
    for parameter in parameters:
        placeholder = f" | [{parameter}] |"
        insert_text = PARAMETER_MARKER.sub(lambda _, cell=placeholder: cell, insert_text, count=1)
    if not insert_text.endswith("|"):
        insert_text += " |"

    name = " ".join(PARAMETER_MARKER.sub(" ", text).split())
    return name, parameters, f"| {insert_text}"


def extract_table_template(table: Table, registry: DeclarationRegistry) -> Declaration:
    """Read a table template declaration.

    Parameters are the ``@{input}`` names used in the body, then the
    ``$output=`` names, including those contributed by declarations the
    body calls. Outputs are marked with ``?`` in the call template.

    Raises:
        MalformedTableError: If the header has no name cell
    """
    name = _header_name_cell(table, "table template")
    inputs = find_parameters(INPUT_PATTERN, table, registry)
    outputs = find_parameters(OUTPUT_PATTERN, table, registry)

    call_template = f"| {name} |"
    if inputs or outputs:
        cells = "".join(f"{item}|" for item in inputs) + "".join(f"{item}?|" for item in outputs)
        call_template += f"{TEMPLATE_ROW_BREAK}|{cells}"

    return Declaration(
        kind=DeclarationKind.TABLE_TEMPLATE,
        name=name,
        parameters=tuple(inputs + outputs),
        call_template=call_template,
        context_help=name,
        source_table=table,
    )


def extract_variables(table: Table) -> list[VariableAssignment]:
    """Every row whose first cell is exactly ``$name=``, whatever the table kind."""
    variables: list[VariableAssignment] = []
    for row in range(table.row_count):
        first = table.cell_or_none(0, row)
        if first is None or not VARIABLE_ASSIGNMENT.fullmatch(first):
            continue
        variables.append(
            VariableAssignment(
                name=first[1:-1],
                definition_cells=table.row(row),
                host_table=table,
            )
        )
    return variables
