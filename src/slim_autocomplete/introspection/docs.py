"""
Fixture Documentation Store
===========================

Looks up pre-collected documentation for a fixture class by its qualified
name. A class is documented by one JSON file mapping operation names to
their documentation::

    {
        "check_total": {
            "body": "Compares the basket total.",
            "params": ["amount: expected total"],
            "return": "True when the totals match",
            "throws": ["ValueError: if amount is negative"]
        }
    }

Files are produced by ``slim-autocomplete-docs`` and found either in an
``apidocs/`` directory under a search root or directly in the root.
Missing or unreadable documentation is never an error.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

APIDOCS_DIR = "apidocs"


class OperationDoc(BaseModel):
    """Stored documentation of one fixture operation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    body: str = ""
    params: list[str] = Field(default_factory=list)
    returns: str | None = Field(default=None, alias="return")
    throws: list[str] = Field(default_factory=list)
    deprecated: str | None = None

    @field_validator("throws", mode="before")
    @classmethod
    def single_throws_entry(cls, v: object) -> object:
        """A plain string is one ``"Name: reason"`` entry."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @property
    def thrown_names(self) -> list[str]:
        """Exception names, the first word of each ``"Name: reason"`` entry."""
        names: list[str] = []
        for entry in self.throws:
            head = entry.split(":", 1)[0].split()
            if head:
                names.append(head[0])
        return names

    @property
    def summary(self) -> str:
        """Help text for the editor; a deprecation notice wins over the body."""
        return (self.deprecated or self.body).strip()


TypeDocumentation = dict[str, OperationDoc]


@runtime_checkable
class DocumentationStore(Protocol):
    """Source of stored documentation, keyed by qualified class name."""

    def lookup(self, qualified_name: str) -> TypeDocumentation | None:
        """Documentation per operation name, or None when the class is undocumented."""
        ...


class NullDocumentationStore:
    """Store that never has documentation (documentation disabled)."""

    def lookup(self, qualified_name: str) -> TypeDocumentation | None:
        return None


class JsonDocumentationStore:
    """Reads ``<root>/apidocs/<qualified name>.json`` or ``<root>/<qualified name>.json``.

    Roots are tried in order and the first readable file wins.
    """

    def __init__(self, search_dirs: Sequence[str | Path]) -> None:
        self._search_dirs = [Path(d) for d in search_dirs]

    @property
    def search_dirs(self) -> list[Path]:
        return list(self._search_dirs)

    def _candidates(self, qualified_name: str) -> list[Path]:
        filename = f"{qualified_name}.json"
        paths: list[Path] = []
        for root in self._search_dirs:
            paths.append(root / APIDOCS_DIR / filename)
            paths.append(root / filename)
        return paths

    def lookup(self, qualified_name: str) -> TypeDocumentation | None:
        for path in self._candidates(qualified_name):
            if not path.is_file():
                continue
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.debug("Ignoring unreadable documentation %s: %s", path, e)
                continue
            if not isinstance(raw, dict):
                logger.debug("Ignoring documentation %s: expected an object", path)
                continue
            return _parse_entries(raw, path)
        return None


def _parse_entries(raw: dict[str, object], path: Path) -> TypeDocumentation:
    docs: TypeDocumentation = {}
    for operation, entry in raw.items():
        if not isinstance(entry, dict) or not entry:
            continue
        try:
            docs[operation] = OperationDoc.model_validate(entry)
        except ValidationError as e:
            logger.debug("Skipping documentation of '%s' in %s: %s", operation, path, e)
    return docs
