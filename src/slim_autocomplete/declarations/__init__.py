"""
Declarations
============

Recognizes the declaration idioms of a wiki page:

- ``import`` / ``library`` tables naming fixture namespaces
- ``scenario`` tables (plain, looping and conditional)
- ``table template`` tables
- ``$name=`` variable assignments in any table
"""

from slim_autocomplete.declarations.classifier import TableClassifier, TableKind
from slim_autocomplete.declarations.extractors import (
    MalformedTableError,
    extract_namespaces,
    extract_scenario,
    extract_table_template,
    extract_variables,
)
from slim_autocomplete.declarations.models import (
    Declaration,
    DeclarationKind,
    PageDeclarations,
    VariableAssignment,
)
from slim_autocomplete.declarations.page import DeclarationScanner, scan_declarations
from slim_autocomplete.declarations.resolver import DeclarationRegistry, find_parameters

__all__ = [
    # Classification
    "TableClassifier",
    "TableKind",
    # Models
    "Declaration",
    "DeclarationKind",
    "PageDeclarations",
    "VariableAssignment",
    # Extraction
    "MalformedTableError",
    "extract_namespaces",
    "extract_scenario",
    "extract_table_template",
    "extract_variables",
    # Resolution
    "DeclarationRegistry",
    "find_parameters",
    # Page pass
    "DeclarationScanner",
    "scan_declarations",
]
