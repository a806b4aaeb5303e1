"""Table classification by first-cell keyword."""

import logging
from enum import Enum

from slim_autocomplete.core.app_config import DeclarationsConfig
from slim_autocomplete.grid.table import Table

logger = logging.getLogger(__name__)


class TableKind(str, Enum):
    """Declaration kind of a page table."""

    IMPORT = "import"
    LIBRARY = "library"
    SCENARIO = "scenario"
    TABLE_TEMPLATE = "table_template"
    OTHER = "other"


class TableClassifier:
    """Decides a table's declaration kind from its first cell.

    The first cell is lower-cased and looked up in the configured keyword
    lists. Unknown keywords and empty tables classify as ``OTHER``.
    """

    def __init__(self, config: DeclarationsConfig | None = None) -> None:
        config = config or DeclarationsConfig()
        self._keywords: dict[str, TableKind] = {}
        for keywords, kind in (
            (config.import_keywords, TableKind.IMPORT),
            (config.library_keywords, TableKind.LIBRARY),
            (config.scenario_keywords, TableKind.SCENARIO),
            (config.table_template_keywords, TableKind.TABLE_TEMPLATE),
        ):
            for keyword in keywords:
                self._keywords[keyword] = kind

    def classify(self, table: Table) -> TableKind:
        first = table.cell_or_none(0, 0)
        if first is None:
            return TableKind.OTHER
        return self._keywords.get(first.strip().lower(), TableKind.OTHER)
