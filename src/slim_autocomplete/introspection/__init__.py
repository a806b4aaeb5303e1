"""
Introspection
=============

Turns fixture classes into autocomplete entries: display names, parameter
types, raised exceptions, markers and the usage text to insert, enriched
with stored documentation when available.
"""

from slim_autocomplete.introspection.catalog import (
    ModuleTypeCatalog,
    TypeCatalog,
    TypeResolutionError,
    create_catalog,
    discover_catalogs,
)
from slim_autocomplete.introspection.docs import (
    DocumentationStore,
    JsonDocumentationStore,
    NullDocumentationStore,
    OperationDoc,
)
from slim_autocomplete.introspection.introspector import OperationInfo, TypeInfo, TypeIntrospector
from slim_autocomplete.introspection.naming import split_camel_case
from slim_autocomplete.introspection.usage import constructor_usage, context_help, method_usage, wiki_text

__all__ = [
    # Catalogs
    "TypeCatalog",
    "ModuleTypeCatalog",
    "TypeResolutionError",
    "create_catalog",
    "discover_catalogs",
    # Documentation
    "DocumentationStore",
    "JsonDocumentationStore",
    "NullDocumentationStore",
    "OperationDoc",
    # Introspection
    "OperationInfo",
    "TypeInfo",
    "TypeIntrospector",
    # Usage text
    "split_camel_case",
    "method_usage",
    "constructor_usage",
    "wiki_text",
    "context_help",
]
