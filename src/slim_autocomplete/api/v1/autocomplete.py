"""Autocomplete endpoints."""

import logging

from fastapi import APIRouter, Depends, Response

from slim_autocomplete.core.dependencies import get_autocomplete_service, get_page_repository
from slim_autocomplete.schemas.autocomplete import AutocompleteRequest, AutocompleteResponse
from slim_autocomplete.services.autocomplete_service import AutocompleteService
from slim_autocomplete.services.page_repository import PageRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=AutocompleteResponse,
    response_model_exclude_none=True,
)
def autocomplete_content(
    request: AutocompleteRequest,
    service: AutocompleteService = Depends(get_autocomplete_service),
) -> AutocompleteResponse:
    """Build autocomplete metadata for posted page content.

    ``format`` selects how tables are read: rendered HTML or raw wiki text.
    """
    if request.format == "html":
        return service.from_html(request.content, request.classpath)
    return service.from_wiki(request.content, request.classpath)


@router.get(
    "/pages/{page_path}",
    response_model=AutocompleteResponse,
    response_model_exclude_none=True,
)
def autocomplete_page(
    page_path: str,
    response: Response,
    repository: PageRepository = Depends(get_page_repository),
    service: AutocompleteService = Depends(get_autocomplete_service),
) -> AutocompleteResponse:
    """Build autocomplete metadata for a stored wiki page.

    The page is scanned together with its inherited scenario libraries,
    set-up and tear-down pages and included pages. The page's own ``!path``
    entries and those of its ancestors extend the configured classpath.
    """
    page = repository.load(page_path)
    logger.debug("Autocomplete for page %s", page.path)
    response.headers["Cache-Control"] = "max-age=0"
    return service.from_wiki(page.content, page.classpath)
