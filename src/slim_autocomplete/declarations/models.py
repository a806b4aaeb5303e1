"""Declarations extracted from page tables."""

from dataclasses import dataclass, field
from enum import Enum

from slim_autocomplete.grid.table import Table


class DeclarationKind(str, Enum):
    """Kinds of reusable calls a page can declare."""

    SCENARIO = "scenario"
    TABLE_TEMPLATE = "table_template"


@dataclass(frozen=True)
class Declaration:
    """A named, parameterized reusable call declared by a table.

    Attributes:
        kind: Scenario or table template
        name: Display name
        parameters: Parameter names in insertion order
        call_template: Insertable wiki text, starting with ``"|"``
        context_help: Readable one-line form of the call
        source_table: Table the declaration was read from
    """

    kind: DeclarationKind
    name: str
    parameters: tuple[str, ...]
    call_template: str
    context_help: str
    source_table: Table = field(compare=False, repr=False)

    @property
    def wiki_text(self) -> str:
        """Call template without its leading ``"| "``."""
        return self.call_template[2:]


@dataclass(frozen=True)
class VariableAssignment:
    """A ``$name=`` symbol assignment found in the first cell of a row."""

    name: str
    definition_cells: tuple[str, ...]
    host_table: Table = field(compare=False, repr=False)

    @property
    def reference(self) -> str:
        """How the variable is referenced in wiki text."""
        return f"${self.name}"


@dataclass(frozen=True)
class PageDeclarations:
    """Everything the declaration pass found on one page."""

    namespaces: tuple[str, ...] = ()
    declarations: tuple[Declaration, ...] = ()
    variables: tuple[VariableAssignment, ...] = ()
