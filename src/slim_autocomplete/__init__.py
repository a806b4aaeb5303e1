"""
Slim Autocomplete - autocomplete metadata for FitNesse/Slim wiki pages.

Reads the tables of a test page and produces what an editor needs to
suggest completions: the scenarios and table templates the page declares,
the ``$variables`` it assigns, and the fixture classes reachable through its
``import`` and ``library`` tables.

Quick Start
-----------
Build the metadata for a page written in wiki text:

    from slim_autocomplete import AutocompleteService, get_app_config

    service = AutocompleteService(get_app_config())
    response = service.from_wiki(page_text, classpath=["fixtures"])
    print(response.model_dump_json(by_alias=True, exclude_none=True))

Serve it over HTTP:

    slim-autocomplete

Public API Exports
------------------

Service:
    AutocompleteService: Builds the autocomplete document of a page
    PageRepository: Reads pages from a FitNesseRoot tree

Declarations:
    scan_declarations: Collect namespaces, declarations and variables from tables
    Declaration: A scenario or table template with its call template

Introspection:
    TypeIntrospector: Describes fixture classes and their operations
    ModuleTypeCatalog: Lists the classes of an importable namespace
    method_usage: Interleaved usage text for a fixture method

Configuration:
    AppConfig: Central application configuration
    get_app_config: Get the current app configuration
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy loading of exports to avoid circular imports."""
    # Service
    if name == "AutocompleteService":
        from slim_autocomplete.services.autocomplete_service import AutocompleteService

        return AutocompleteService
    if name == "PageRepository":
        from slim_autocomplete.services.page_repository import PageRepository

        return PageRepository

    # Declarations
    if name == "scan_declarations":
        from slim_autocomplete.declarations.page import scan_declarations

        return scan_declarations
    if name == "Declaration":
        from slim_autocomplete.declarations.models import Declaration

        return Declaration

    # Introspection
    if name == "TypeIntrospector":
        from slim_autocomplete.introspection.introspector import TypeIntrospector

        return TypeIntrospector
    if name == "ModuleTypeCatalog":
        from slim_autocomplete.introspection.catalog import ModuleTypeCatalog

        return ModuleTypeCatalog
    if name == "method_usage":
        from slim_autocomplete.introspection.usage import method_usage

        return method_usage

    # Configuration
    if name == "AppConfig":
        from slim_autocomplete.core.app_config import AppConfig

        return AppConfig
    if name == "get_app_config":
        from slim_autocomplete.core.app_config import get_app_config

        return get_app_config

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# Public API
__all__ = [
    # Version
    "__version__",
    # Service
    "AutocompleteService",
    "PageRepository",
    # Declarations
    "scan_declarations",
    "Declaration",
    # Introspection
    "TypeIntrospector",
    "ModuleTypeCatalog",
    "method_usage",
    # Configuration
    "AppConfig",
    "get_app_config",
]
