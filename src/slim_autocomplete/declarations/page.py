"""Single pass over a page's tables, collecting every declaration."""

import logging
from collections.abc import Iterable

from slim_autocomplete.core.app_config import DeclarationsConfig
from slim_autocomplete.declarations.classifier import TableClassifier, TableKind
from slim_autocomplete.declarations.extractors import (
    MalformedTableError,
    extract_namespaces,
    extract_scenario,
    extract_table_template,
    extract_variables,
)
from slim_autocomplete.declarations.models import Declaration, PageDeclarations, VariableAssignment
from slim_autocomplete.declarations.resolver import DeclarationRegistry
from slim_autocomplete.grid.table import CellNotFoundError, Table

logger = logging.getLogger(__name__)


class DeclarationScanner:
    """Classifies each table and dispatches it to the matching extractor.

    Every call to :meth:`scan` starts from an empty registry, so scanners
    can be reused across pages.
    """

    def __init__(self, config: DeclarationsConfig | None = None) -> None:
        self._classifier = TableClassifier(config)

    def scan(self, tables: Iterable[Table]) -> PageDeclarations:
        registry = DeclarationRegistry()
        namespaces: dict[str, None] = {}
        declarations: list[Declaration] = []
        variables: list[VariableAssignment] = []

        for table in tables:
            kind = self._classifier.classify(table)
            try:
                if kind in (TableKind.IMPORT, TableKind.LIBRARY):
                    for namespace in extract_namespaces(table, library=kind is TableKind.LIBRARY):
                        namespaces.setdefault(namespace, None)
                elif kind is TableKind.SCENARIO:
                    declaration = extract_scenario(table)
                    declarations.append(declaration)
                    registry.register(declaration)
                elif kind is TableKind.TABLE_TEMPLATE:
                    declaration = extract_table_template(table, registry)
                    declarations.append(declaration)
                    registry.register(declaration)
            except (MalformedTableError, CellNotFoundError) as e:
                logger.warning("Skipping %s table #%d: %s", kind.value, table.index, e)

            variables.extend(extract_variables(table))

        logger.debug(
            "Page scan: %d namespace(s), %d declaration(s), %d variable(s)",
            len(namespaces),
            len(declarations),
            len(variables),
        )
        return PageDeclarations(
            namespaces=tuple(namespaces),
            declarations=tuple(declarations),
            variables=tuple(variables),
        )


def scan_declarations(
    tables: Iterable[Table],
    config: DeclarationsConfig | None = None,
) -> PageDeclarations:
    """Collect namespaces, declarations and variables from a page's tables."""
    return DeclarationScanner(config).scan(tables)
