"""Unit tests for the autocomplete and health endpoints."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from slim_autocomplete import __version__
from slim_autocomplete.core.app_config import AppConfig
from slim_autocomplete.core.dependencies import get_autocomplete_service, get_page_repository
from slim_autocomplete.main import app
from slim_autocomplete.services.autocomplete_service import AutocompleteService
from slim_autocomplete.services.page_repository import PageRepository

WIKI_PAGE = """
|import|
|storefront.basket|

|scenario|fill basket|item|
|add item|@item|1|

|script|basket fixture|EUR|
|$total=|total|
"""


@pytest.fixture
def pages_root(tmp_path: Path, fixtures_dir: Path) -> Path:
    """FitNesseRoot with one suite declaring the fixture classpath."""
    root = tmp_path / "FitNesseRoot"
    suite = root / "ShopSuite"
    suite.mkdir(parents=True)
    (suite / "content.txt").write_text(f"!path {fixtures_dir}\n", encoding="utf-8")
    (suite / "CheckoutTest.wiki").write_text(WIKI_PAGE, encoding="utf-8")
    (suite / "ScenarioLibrary.wiki").write_text("|scenario|pay with|card|\n|enter|@card|\n", encoding="utf-8")
    return root


@pytest.fixture
def client(pages_root: Path) -> Iterator[TestClient]:
    """Client whose service has no configured classpath of its own."""
    app.dependency_overrides[get_autocomplete_service] = lambda: AutocompleteService(
        AppConfig.model_validate({"documentation": {"enabled": False}})
    )
    app.dependency_overrides[get_page_repository] = lambda: PageRepository(pages_root)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for the health endpoints."""

    @pytest.mark.parametrize("path", ["/health", "/api/v1/health"])
    def test_health(self, client: TestClient, path: str) -> None:
        """Both health endpoints report the service version."""
        response = client.get(path)
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "slim-autocomplete",
            "version": __version__,
        }


class TestPostContent:
    """Tests for POST /api/v1/autocomplete."""

    def test_wiki_content(self, client: TestClient, fixtures_dir: Path) -> None:
        """Wiki text is scanned and classes come from the request classpath."""
        response = client.post(
            "/api/v1/autocomplete",
            json={"content": WIKI_PAGE, "classpath": [str(fixtures_dir)]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["classes"][0]["qualifiedName"] == "storefront.basket.BasketFixture"
        assert data["scenarios"][0]["insertText"] == "| fill basket | [item] |"
        assert data["variables"][0]["varName"] == "$total"

        method = data["classes"][0]["methods"][0]
        assert "readableName" in method
        assert "wikiText" in method
        assert "documentation" not in method

    def test_html_content(self, client: TestClient) -> None:
        """Rendered pages are read from their tables."""
        html = (
            "<table><tr><td>scenario</td><td>greet</td><td>name</td></tr>"
            "<tr><td>say</td><td>@name</td></tr></table>"
        )
        response = client.post("/api/v1/autocomplete", json={"content": html, "format": "html"})
        assert response.status_code == 200
        data = response.json()
        assert data["classes"] == []
        assert data["scenarios"][0]["name"] == "greet"
        assert data["scenarios"][0]["parameters"] == ["name"]

    def test_unknown_format(self, client: TestClient) -> None:
        """Formats other than html and wiki are rejected."""
        response = client.post("/api/v1/autocomplete", json={"content": "", "format": "pdf"})
        assert response.status_code == 422


class TestGetPage:
    """Tests for GET /api/v1/autocomplete/pages/{page_path}."""

    def test_page_uses_declared_classpath(self, client: TestClient) -> None:
        """!path entries of the suite let the page's imports resolve."""
        response = client.get("/api/v1/autocomplete/pages/ShopSuite.CheckoutTest")
        assert response.status_code == 200
        assert response.headers["Cache-Control"] == "max-age=0"
        data = response.json()
        assert [c["readableName"] for c in data["classes"]] == [
            "basket fixture",
            "confirm order",
            "plain fixture",
            "slim aware fixture",
        ]

    def test_page_includes_suite_scenario_library(self, client: TestClient) -> None:
        """Scenarios declared in the suite's ScenarioLibrary are offered on its pages."""
        response = client.get("/api/v1/autocomplete/pages/ShopSuite.CheckoutTest")
        assert response.status_code == 200
        names = [s["name"] for s in response.json()["scenarios"]]
        assert names == ["pay with", "fill basket"]

    def test_missing_page(self, client: TestClient) -> None:
        """Unknown pages return a NOT_FOUND error body."""
        response = client.get("/api/v1/autocomplete/pages/ShopSuite.Missing")
        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "NOT_FOUND"
        assert body["details"] == {"resource": "Page", "id": "ShopSuite.Missing"}

    def test_invalid_page_path(self, client: TestClient) -> None:
        """Page names outside [A-Za-z0-9] are rejected."""
        response = client.get("/api/v1/autocomplete/pages/Shop-Suite")
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
