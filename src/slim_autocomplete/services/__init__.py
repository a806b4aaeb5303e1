"""Services package."""

from slim_autocomplete.services.autocomplete_service import AutocompleteService
from slim_autocomplete.services.page_repository import PageRepository, WikiPage

__all__ = [
    "AutocompleteService",
    "PageRepository",
    "WikiPage",
]
