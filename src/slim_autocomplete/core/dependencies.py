"""FastAPI dependency injection for shared services."""

from slim_autocomplete.core.app_config import get_app_config
from slim_autocomplete.core.config import get_settings
from slim_autocomplete.services.autocomplete_service import AutocompleteService
from slim_autocomplete.services.page_repository import PageRepository


def get_autocomplete_service() -> AutocompleteService:
    """Get an autocomplete service bound to the central configuration."""
    return AutocompleteService(get_app_config())


def get_page_repository() -> PageRepository:
    """Get the repository of wiki pages under the configured page root."""
    return PageRepository(get_settings().pages_root_path)
