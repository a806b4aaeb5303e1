"""Unit tests for table classification."""

import pytest

from slim_autocomplete.core.app_config import DeclarationsConfig
from slim_autocomplete.declarations.classifier import TableClassifier, TableKind
from slim_autocomplete.grid.table import Table


class TestTableClassifier:
    """Tests for TableClassifier.classify."""

    @pytest.mark.parametrize(
        ("first_cell", "kind"),
        [
            ("import", TableKind.IMPORT),
            ("Library", TableKind.LIBRARY),
            ("scenario", TableKind.SCENARIO),
            ("Looping Scenario", TableKind.SCENARIO),
            ("conditional scenario", TableKind.SCENARIO),
            ("Table Template", TableKind.TABLE_TEMPLATE),
            ("  import  ", TableKind.IMPORT),
        ],
    )
    def test_declaration_keywords(self, first_cell: str, kind: TableKind) -> None:
        """Keywords match case-insensitively."""
        table = Table.from_rows([[first_cell, "x"]])
        assert TableClassifier().classify(table) is kind

    def test_unknown_keyword_is_other(self) -> None:
        """Ordinary fixture tables are not declarations."""
        table = Table.from_rows([["script", "basket fixture"]])
        assert TableClassifier().classify(table) is TableKind.OTHER

    def test_empty_table_is_other(self) -> None:
        """A table without cells classifies as OTHER."""
        assert TableClassifier().classify(Table.from_rows([])) is TableKind.OTHER

    def test_configured_keywords(self) -> None:
        """Additional keywords come from configuration."""
        config = DeclarationsConfig(scenario_keywords=["Scenario", "Szenario"])
        table = Table.from_rows([["szenario", "x"]])
        assert TableClassifier(config).classify(table) is TableKind.SCENARIO
