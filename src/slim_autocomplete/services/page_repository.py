"""Wiki page repository backed by a FitNesseRoot directory tree."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from slim_autocomplete.core.exceptions import PageNotFoundError, ValidationError

logger = logging.getLogger(__name__)

CONTENT_FILE = "content.txt"
WIKI_SUFFIX = ".wiki"

PAGE_NAME = re.compile(r"^[A-Za-z0-9]+$")
PATH_DIRECTIVE = re.compile(r"^!path\s+(.+?)\s*$", re.MULTILINE)
INCLUDE_DIRECTIVE = re.compile(r"^!include(?:\s+-\w+)*\s+(\S+)\s*$")

SCENARIO_LIBRARY = "ScenarioLibrary"
SUITE_SET_UP = "SuiteSetUp"
SET_UP = "SetUp"
TEAR_DOWN = "TearDown"
SUITE_TEAR_DOWN = "SuiteTearDown"


@dataclass(frozen=True)
class WikiPage:
    """A loaded page with the classpath it declares or inherits.

    ``content`` is the page as FitNesse runs it: inherited scenario
    libraries and set-up pages, the page with its ``!include`` lines
    expanded, then the tear-down pages.
    """

    path: str
    content: str
    classpath: tuple[str, ...]


class PageRepository:
    """Reads pages addressed by dotted paths such as ``FrontPage.ShopSuite.CheckoutTest``.

    A page ``A.B.C`` lives in ``root/A/B/C/content.txt`` or, in the flat
    layout, in ``root/A/B/C.wiki``. ``!path`` entries are collected from the
    root page down to the page itself; relative entries resolve against
    ``base_dir``, the directory FitNesse runs from (the parent of the root
    by default).
    """

    def __init__(self, root: Path, base_dir: Path | None = None) -> None:
        self.root = Path(root)
        self.base_dir = Path(base_dir) if base_dir is not None else self.root.parent

    def _segments(self, page_path: str) -> list[str]:
        segments = [s for s in page_path.strip().strip(".").split(".") if s]
        if not segments:
            raise ValidationError("Page path is empty", field="page_path")
        for segment in segments:
            if not PAGE_NAME.match(segment):
                raise ValidationError(f"Invalid page name: {segment}", field="page_path")
        return segments

    def _content_file(self, segments: list[str]) -> Path | None:
        page_dir = self.root.joinpath(*segments)
        candidates = [page_dir / CONTENT_FILE, page_dir.with_name(page_dir.name + WIKI_SUFFIX)]
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None

    def exists(self, page_path: str) -> bool:
        return self._content_file(self._segments(page_path)) is not None

    def read(self, page_path: str) -> str:
        """Raw wiki text of a page.

        Raises:
            PageNotFoundError: If the page has no content file
        """
        content_file = self._content_file(self._segments(page_path))
        if content_file is None:
            raise PageNotFoundError(page_path)
        return content_file.read_text(encoding="utf-8")

    def classpath(self, page_path: str) -> list[str]:
        """``!path`` entries of the root page, each ancestor and the page itself, root-most first."""
        segments = self._segments(page_path)
        entries: dict[str, None] = {}

        sources = [self.root / CONTENT_FILE]
        for depth in range(1, len(segments) + 1):
            content_file = self._content_file(segments[:depth])
            if content_file is not None:
                sources.append(content_file)

        for source in sources:
            if not source.is_file():
                continue
            for entry in path_directives(source.read_text(encoding="utf-8")):
                entries.setdefault(self._resolve(entry), None)

        return list(entries)

    def _resolve(self, entry: str) -> str:
        path = Path(entry).expanduser()
        if not path.is_absolute():
            path = self.base_dir / path
        return str(path)

    def _uncles(self, segments: list[str], name: str) -> list[list[str]]:
        """Pages called ``name`` that are children of an ancestor, root-most first."""
        found: list[list[str]] = []
        for depth in range(len(segments)):
            candidate = [*segments[:depth], name]
            if candidate != segments and self._content_file(candidate) is not None:
                found.append(candidate)
        return found

    def _nearest_uncle(self, segments: list[str], name: str) -> list[str] | None:
        uncles = self._uncles(segments, name)
        return uncles[-1] if uncles else None

    def decorated_content(self, page_path: str) -> str:
        """Wiki text of a page decorated the way FitNesse runs it.

        Every inherited ``ScenarioLibrary`` comes first, then the nearest
        ``SuiteSetUp`` and ``SetUp``, the page itself, and the nearest
        ``TearDown`` and ``SuiteTearDown``. ``!include`` lines are expanded
        in all of them.

        Raises:
            PageNotFoundError: If the page has no content file
        """
        segments = self._segments(page_path)
        text = self.read(page_path)

        before = self._uncles(segments, SCENARIO_LIBRARY)
        before += [p for p in (self._nearest_uncle(segments, n) for n in (SUITE_SET_UP, SET_UP)) if p]
        after = [p for p in (self._nearest_uncle(segments, n) for n in (TEAR_DOWN, SUITE_TEAR_DOWN)) if p]

        parts = [self._expanded(p, self._read_segments(p), {tuple(p)}) for p in before]
        parts.append(self._expanded(segments, text, {tuple(segments)}))
        parts += [self._expanded(p, self._read_segments(p), {tuple(p)}) for p in after]
        return "\n\n".join(parts)

    def _read_segments(self, segments: list[str]) -> str:
        content_file = self._content_file(segments)
        if content_file is None:
            raise PageNotFoundError(".".join(segments))
        return content_file.read_text(encoding="utf-8")

    def _expanded(self, segments: list[str], text: str, seen: set[tuple[str, ...]]) -> str:
        lines: list[str] = []
        for line in text.splitlines():
            match = INCLUDE_DIRECTIVE.match(line.strip())
            if not match:
                lines.append(line)
                continue

            target = self._include_target(segments, match.group(1))
            if target is None:
                logger.warning("Page %s includes missing page %s", ".".join(segments), match.group(1))
                continue
            if tuple(target) in seen:
                logger.warning("Page %s includes %s recursively", ".".join(segments), ".".join(target))
                continue
            included = self._read_segments(target)
            lines.append(self._expanded(target, included, seen | {tuple(target)}))
        return "\n".join(lines)

    def _include_target(self, segments: list[str], reference: str) -> list[str] | None:
        """Resolve an include reference from the page at ``segments``.

        ``.A.B`` is absolute, ``>A`` a child, ``<A`` the nearest ancestor's
        child called ``A`` and a plain ``A.B`` a sibling.
        """
        if reference.startswith("."):
            candidates = [reference[1:].split(".")]
        elif reference.startswith(">"):
            candidates = [[*segments, *reference[1:].split(".")]]
        elif reference.startswith("<"):
            relative = reference[1:].split(".")
            candidates = [[*segments[:depth], *relative] for depth in range(len(segments) - 1, -1, -1)]
        else:
            candidates = [[*segments[:-1], *reference.split(".")]]

        for candidate in candidates:
            if all(PAGE_NAME.match(s) for s in candidate) and self._content_file(candidate) is not None:
                return candidate
        return None

    def load(self, page_path: str) -> WikiPage:
        content = self.decorated_content(page_path)
        classpath = tuple(self.classpath(page_path))
        logger.debug("Loaded page %s (%d classpath entries)", page_path, len(classpath))
        return WikiPage(path=page_path, content=content, classpath=classpath)


def path_directives(text: str) -> list[str]:
    """Entries of ``!path`` lines in wiki text."""
    return [match.group(1) for match in PATH_DIRECTIVE.finditer(text)]
