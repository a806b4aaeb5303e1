"""Autocomplete request and response schemas.

Field names of the response follow the contract of the editor widget
(``qualifiedName``, ``wikiText``, ``contexthelp`` ...), so responses are
always serialized by alias.
"""

from typing import Literal

from pydantic import Field

from slim_autocomplete.introspection.docs import OperationDoc
from slim_autocomplete.schemas.common import BaseSchema, CamelSchema


class AutocompleteRequest(BaseSchema):
    """Page content to build autocomplete metadata for."""

    content: str
    format: Literal["html", "wiki"] = "wiki"
    classpath: list[str] = Field(default_factory=list)


class ParameterSchema(CamelSchema):
    type: str


class OperationSchema(CamelSchema):
    """A fixture method or constructor."""

    name: str
    readable_name: str
    parameters: list[ParameterSchema] = Field(default_factory=list)
    exceptions: list[str] = Field(default_factory=list)
    annotations: list[str] = Field(default_factory=list)
    usage: str
    wiki_text: str
    contexthelp: str
    documentation: OperationDoc | None = None


class ClassSchema(CamelSchema):
    """A fixture class."""

    qualified_name: str
    readable_name: str
    methods: list[OperationSchema] = Field(default_factory=list)
    constructors: list[OperationSchema] = Field(default_factory=list)


class ScenarioSchema(CamelSchema):
    """A scenario or table template declared on the page."""

    name: str
    wiki_text: str
    contexthelp: str
    insert_text: str
    parameters: list[str] = Field(default_factory=list)
    html: str


class VariableSchema(CamelSchema):
    """A ``$name=`` assignment found on the page."""

    var_name: str
    html: str
    full_table: str


class AutocompleteResponse(CamelSchema):
    """Autocomplete metadata of one page."""

    classes: list[ClassSchema] = Field(default_factory=list)
    scenarios: list[ScenarioSchema] = Field(default_factory=list)
    variables: list[VariableSchema] = Field(default_factory=list)
