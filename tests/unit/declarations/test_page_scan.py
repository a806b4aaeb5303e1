"""Unit tests for the page declaration pass."""

import logging

import pytest

from slim_autocomplete.declarations.models import DeclarationKind
from slim_autocomplete.declarations.page import DeclarationScanner, scan_declarations
from slim_autocomplete.grid.scanner import scan_wiki

PAGE = """
|import|
|storefront|

|library|
|storefront.payments.gateway.PaymentGateway|
|storefront|

|scenario|fill address|street|
|enter|@street|into|street field|
|$filled=|is filled|

|table template|order|
|add item|@{product}|
|fill address|@{street}|
|$total=|total|

|scenario|

|script|basket fixture|EUR|
|$count=|item count|

|scenario|fill address|zip|
"""


@pytest.fixture
def page_tables():
    return scan_wiki(PAGE)


class TestDeclarationScanner:
    """Tests for DeclarationScanner.scan."""

    def test_namespaces_in_first_seen_order(self, page_tables) -> None:
        """Namespaces are de-duplicated across import and library tables."""
        page = scan_declarations(page_tables)
        assert page.namespaces == ("storefront", "storefront.payments.gateway")

    def test_declarations_in_table_order(self, page_tables) -> None:
        """Scenarios and templates keep page order, colliding names included."""
        page = scan_declarations(page_tables)
        assert [(d.kind, d.name) for d in page.declarations] == [
            (DeclarationKind.SCENARIO, "fill address"),
            (DeclarationKind.TABLE_TEMPLATE, "order"),
            (DeclarationKind.SCENARIO, "fill address"),
        ]

    def test_template_resolves_page_scenarios(self, page_tables) -> None:
        """The template picks up parameters through the scenario it calls."""
        page = scan_declarations(page_tables)
        order = page.declarations[1]
        assert order.parameters == ("product", "street", "filled", "total")

    def test_variables_from_every_table_kind(self, page_tables) -> None:
        """Assignments inside scenarios, templates and scripts are all found."""
        page = scan_declarations(page_tables)
        assert [v.name for v in page.variables] == ["filled", "total", "count"]

    def test_malformed_table_is_skipped(self, page_tables, caplog: pytest.LogCaptureFixture) -> None:
        """A scenario without a name is logged and the scan continues."""
        with caplog.at_level(logging.WARNING, logger="slim_autocomplete.declarations.page"):
            page = scan_declarations(page_tables)
        assert len(page.declarations) == 3
        assert any("Skipping scenario table" in record.getMessage() for record in caplog.records)

    def test_scanner_is_reusable(self, page_tables) -> None:
        """Repeated scans give identical results."""
        scanner = DeclarationScanner()
        first = scanner.scan(page_tables)
        second = scanner.scan(page_tables)
        assert first.namespaces == second.namespaces
        assert [d.call_template for d in first.declarations] == [
            d.call_template for d in second.declarations
        ]
        assert [d.parameters for d in first.declarations] == [d.parameters for d in second.declarations]

    def test_empty_page(self) -> None:
        """No tables, nothing declared."""
        page = scan_declarations([])
        assert page.namespaces == ()
        assert page.declarations == ()
        assert page.variables == ()
