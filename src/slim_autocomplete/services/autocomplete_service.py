"""Assembles the autocomplete document of a page.

One call builds everything from scratch: the tables are scanned, the
declaration pass collects namespaces, scenarios, table templates and
variables, and the classes of every imported namespace are introspected.
Nothing is shared between calls.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from slim_autocomplete.core.app_config import AppConfig
from slim_autocomplete.declarations import DeclarationScanner, PageDeclarations
from slim_autocomplete.grid import Table, row_to_html, scan_html, scan_wiki, table_to_html
from slim_autocomplete.introspection.catalog import TypeCatalog, create_catalog
from slim_autocomplete.introspection.docs import (
    DocumentationStore,
    JsonDocumentationStore,
    NullDocumentationStore,
)
from slim_autocomplete.introspection.introspector import OperationInfo, TypeInfo, TypeIntrospector
from slim_autocomplete.schemas.autocomplete import (
    AutocompleteResponse,
    ClassSchema,
    OperationSchema,
    ParameterSchema,
    ScenarioSchema,
    VariableSchema,
)

logger = logging.getLogger(__name__)


def _operation_schema(operation: OperationInfo) -> OperationSchema:
    return OperationSchema(
        name=operation.name,
        readable_name=operation.readable_name,
        parameters=[ParameterSchema(type=t) for t in operation.parameter_types],
        exceptions=list(operation.exceptions),
        annotations=list(operation.markers),
        usage=operation.usage,
        wiki_text=operation.wiki_text,
        contexthelp=operation.context_help,
        documentation=operation.documentation,
    )


def _class_schema(info: TypeInfo) -> ClassSchema:
    return ClassSchema(
        qualified_name=info.qualified_name,
        readable_name=info.readable_name,
        methods=[_operation_schema(m) for m in info.methods],
        constructors=[_operation_schema(c) for c in info.constructors],
    )


class AutocompleteService:
    """Builds :class:`AutocompleteResponse` documents from page content.

    Args:
        config: Central application configuration
        catalog: Type catalog to use instead of the configured one
        documentation: Documentation store to use instead of the configured one
    """

    def __init__(
        self,
        config: AppConfig,
        catalog: TypeCatalog | None = None,
        documentation: DocumentationStore | None = None,
    ) -> None:
        self.config = config
        self._catalog = catalog
        self._documentation = documentation
        self._scanner = DeclarationScanner(config.declarations)

    def from_html(self, html: str, classpath: Sequence[str] = ()) -> AutocompleteResponse:
        return self.build(scan_html(html), classpath)

    def from_wiki(self, text: str, classpath: Sequence[str] = ()) -> AutocompleteResponse:
        return self.build(scan_wiki(text), classpath)

    def build(self, tables: Iterable[Table], classpath: Sequence[str] = ()) -> AutocompleteResponse:
        """Collect classes, scenarios and variables for a page's tables.

        Args:
            tables: Tables of the page in document order
            classpath: Page-specific import roots, searched before the configured ones
        """
        page = self._scanner.scan(tables)
        roots = self._classpath(classpath)

        introspector = TypeIntrospector(
            ignored_methods=self.config.introspection.ignored_methods,
            documentation=self._documentation_store(roots),
        )
        types = introspector.describe_namespaces(self._type_catalog(roots), page.namespaces)

        logger.info(
            "Autocomplete: %d class(es), %d scenario(s), %d variable(s) from %d namespace(s)",
            len(types),
            len(page.declarations),
            len(page.variables),
            len(page.namespaces),
        )
        return self._assemble(page, types)

    def _classpath(self, classpath: Sequence[str]) -> list[str]:
        return list(dict.fromkeys([*classpath, *self.config.classpath]))

    def _type_catalog(self, roots: Sequence[str]) -> TypeCatalog:
        if self._catalog is not None:
            return self._catalog
        return create_catalog(
            self.config.introspection.catalog,
            classpath=roots,
            recursive=self.config.introspection.recursive,
        )

    def _documentation_store(self, roots: Sequence[str]) -> DocumentationStore:
        if self._documentation is not None:
            return self._documentation
        if not self.config.documentation.enabled:
            return NullDocumentationStore()
        search_dirs = [Path(d) for d in dict.fromkeys([*self.config.documentation.search_dirs, *roots])]
        return JsonDocumentationStore(search_dirs)

    @staticmethod
    def _assemble(page: PageDeclarations, types: list[TypeInfo]) -> AutocompleteResponse:
        scenarios = [
            ScenarioSchema(
                name=d.name,
                wiki_text=d.wiki_text,
                contexthelp=d.context_help,
                insert_text=d.call_template,
                parameters=list(d.parameters),
                html=table_to_html(d.source_table),
            )
            for d in page.declarations
        ]
        variables = [
            VariableSchema(
                var_name=v.reference,
                html=row_to_html(v.definition_cells),
                full_table=table_to_html(v.host_table),
            )
            for v in page.variables
        ]
        return AutocompleteResponse(
            classes=[_class_schema(t) for t in types],
            scenarios=scenarios,
            variables=variables,
        )
