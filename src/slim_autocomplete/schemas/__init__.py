"""Pydantic schemas package."""

from slim_autocomplete.schemas.autocomplete import (
    AutocompleteRequest,
    AutocompleteResponse,
    ClassSchema,
    OperationSchema,
    ParameterSchema,
    ScenarioSchema,
    VariableSchema,
)
from slim_autocomplete.schemas.common import BaseSchema, CamelSchema, ErrorResponse, HealthResponse

__all__ = [
    # Common
    "BaseSchema",
    "CamelSchema",
    "ErrorResponse",
    "HealthResponse",
    # Autocomplete
    "AutocompleteRequest",
    "AutocompleteResponse",
    "ClassSchema",
    "OperationSchema",
    "ParameterSchema",
    "ScenarioSchema",
    "VariableSchema",
]
