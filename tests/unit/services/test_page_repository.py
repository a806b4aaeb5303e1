"""Unit tests for the wiki page repository."""

from pathlib import Path

import pytest

from slim_autocomplete.core.exceptions import PageNotFoundError, ValidationError
from slim_autocomplete.services.page_repository import PageRepository, path_directives


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """A FitNesseRoot with a suite in directory layout and a flat test page."""
    root = tmp_path / "FitNesseRoot"
    _write(root / "content.txt", "!path lib/common\n")
    _write(root / "FrontPage" / "content.txt", "!define TEST_SYSTEM {slim}\n")
    _write(
        root / "FrontPage" / "ShopSuite" / "content.txt",
        "!path fixtures\n!path /opt/shared\n",
    )
    _write(
        root / "FrontPage" / "ShopSuite" / "CheckoutTest.wiki",
        "!path fixtures\n|import|\n|storefront.basket|\n",
    )
    return root


class TestPathDirectives:
    """Tests for path_directives."""

    def test_entries_in_order(self) -> None:
        """Each !path line contributes its trimmed entry."""
        text = "!path fixtures  \nsome text\n!path  /opt/shared\n |import|\n"
        assert path_directives(text) == ["fixtures", "/opt/shared"]

    def test_directive_must_start_the_line(self) -> None:
        """Mentions inside other text are not directives."""
        assert path_directives("use !path fixtures here") == []


class TestRead:
    """Tests for PageRepository.read and exists."""

    def test_directory_layout(self, root: Path) -> None:
        """A page directory holds content.txt."""
        repository = PageRepository(root)
        assert repository.read("FrontPage.ShopSuite").startswith("!path fixtures")

    def test_flat_layout(self, root: Path) -> None:
        """A page can be a ``<name>.wiki`` file beside its siblings."""
        repository = PageRepository(root)
        assert "|storefront.basket|" in repository.read("FrontPage.ShopSuite.CheckoutTest")

    def test_missing_page(self, root: Path) -> None:
        """Unknown pages raise PageNotFoundError."""
        repository = PageRepository(root)
        assert repository.exists("FrontPage.Missing") is False
        with pytest.raises(PageNotFoundError) as exc_info:
            repository.read("FrontPage.Missing")
        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("page_path", ["", "...", "FrontPage.Shop Suite", "FrontPage.../etc"])
    def test_invalid_page_paths(self, root: Path, page_path: str) -> None:
        """Empty paths and names outside [A-Za-z0-9] are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            PageRepository(root).read(page_path)
        assert exc_info.value.details == {"field": "page_path"}


class TestClasspath:
    """Tests for PageRepository.classpath and load."""

    def test_root_first_and_deduplicated(self, root: Path, tmp_path: Path) -> None:
        """Entries are collected from the root page down, each once."""
        classpath = PageRepository(root).classpath("FrontPage.ShopSuite.CheckoutTest")
        assert classpath == [
            str(tmp_path / "lib" / "common"),
            str(tmp_path / "fixtures"),
            "/opt/shared",
        ]

    def test_custom_base_dir(self, root: Path, tmp_path: Path) -> None:
        """Relative entries resolve against the configured base directory."""
        base_dir = tmp_path / "work"
        classpath = PageRepository(root, base_dir=base_dir).classpath("FrontPage")
        assert classpath == [str(base_dir / "lib" / "common")]

    def test_load(self, root: Path, tmp_path: Path) -> None:
        """A loaded page carries its content and classpath."""
        page = PageRepository(root).load("FrontPage.ShopSuite")
        assert page.path == "FrontPage.ShopSuite"
        assert page.content.startswith("!path fixtures")
        assert page.classpath[0] == str(tmp_path / "lib" / "common")


@pytest.fixture
def suite_root(tmp_path: Path) -> Path:
    """A suite whose scenarios live in scenario libraries and included pages."""
    root = tmp_path / "FitNesseRoot"
    _write(root / "ScenarioLibrary" / "content.txt", "|scenario|log in as|user|\n|enter|@user|\n")
    _write(root / "ShopSuite" / "ScenarioLibrary.wiki", "|scenario|fill basket|item|\n|add|@item|\n")
    _write(root / "ShopSuite" / "SetUp.wiki", "|script|basket fixture|EUR|\n")
    _write(root / "ShopSuite" / "TearDown.wiki", "|script|cleanup|\n")
    _write(root / "ShopSuite" / "Shared" / "Addresses.wiki", "|scenario|fill address|street|\n")
    _write(root / "Common" / "Payments.wiki", "!include Cards\n|scenario|pay with|card|\n")
    _write(root / "Common" / "Cards.wiki", "|scenario|pay by card|number|\n")
    _write(
        root / "ShopSuite" / "CheckoutTest" / "content.txt",
        "!include -seamless .Common.Payments\n!include <Shared.Addresses\n|checkout|\n!include Missing\n",
    )
    _write(root / "ShopSuite" / "LoopTest.wiki", "!include LoopTest\n|loop|\n")
    return root


class TestDecoratedContent:
    """Tests for PageRepository.decorated_content."""

    def test_inherited_pages_wrap_the_page(self, suite_root: Path) -> None:
        """Scenario libraries root-most first, then set-up, page, tear-down."""
        text = PageRepository(suite_root).decorated_content("ShopSuite.CheckoutTest")
        order = [
            "|scenario|log in as|user|",
            "|scenario|fill basket|item|",
            "|script|basket fixture|EUR|",
            "|checkout|",
            "|script|cleanup|",
        ]
        positions = [text.index(line) for line in order]
        assert positions == sorted(positions)

    def test_includes_are_expanded(self, suite_root: Path) -> None:
        """Absolute, sibling and backward-search includes are inlined."""
        text = PageRepository(suite_root).decorated_content("ShopSuite.CheckoutTest")
        assert "!include" not in text
        assert "|scenario|pay with|card|" in text
        assert "|scenario|pay by card|number|" in text
        assert text.index("|scenario|pay with|card|") < text.index("|checkout|")
        assert text.count("|scenario|fill address|street|") == 1

    def test_missing_include_is_dropped(self, suite_root: Path, caplog: pytest.LogCaptureFixture) -> None:
        """An include of an unknown page is logged and skipped."""
        with caplog.at_level("WARNING", logger="slim_autocomplete.services.page_repository"):
            PageRepository(suite_root).decorated_content("ShopSuite.CheckoutTest")
        assert any("missing page Missing" in record.getMessage() for record in caplog.records)

    def test_self_include_terminates(self, suite_root: Path) -> None:
        """A page including itself is expanded once."""
        text = PageRepository(suite_root).decorated_content("ShopSuite.LoopTest")
        assert text.count("|loop|") == 1

    def test_library_page_is_not_repeated(self, suite_root: Path) -> None:
        """A scenario library requested directly is not prepended to itself."""
        text = PageRepository(suite_root).decorated_content("ShopSuite.ScenarioLibrary")
        assert text.count("|scenario|fill basket|item|") == 1

    def test_plain_page_is_unchanged(self, root: Path) -> None:
        """Without inherited pages or includes the text is the page itself."""
        repository = PageRepository(root)
        assert repository.decorated_content("FrontPage.ShopSuite") == repository.read("FrontPage.ShopSuite").rstrip("\n")
