"""Google-style and reST docstring parsing for fixture documentation."""

import inspect
import re
from dataclasses import dataclass, field

_SECTIONS = {
    "Args": "params",
    "Arguments": "params",
    "Parameters": "params",
    "Params": "params",
    "Returns": "returns",
    "Return": "returns",
    "Yields": "returns",
    "Raises": "raises",
    "Raise": "raises",
    "Throws": "raises",
    "Deprecated": "deprecated",
    "Example": "skip",
    "Examples": "skip",
    "Note": "skip",
    "Notes": "skip",
    "Attributes": "skip",
    "See Also": "skip",
}

_ENTRY = re.compile(r"^\*{0,2}([\w.]+)\s*(?:\(([^)]*)\))?\s*:\s*(.*)$")
_REST_FIELD = re.compile(r"^:(param|parameter|arg|argument|raises|raise|except|returns|return)\b\s*([^:]*):\s*(.*)$")
_REST_DEPRECATED = re.compile(r"^\.\.\s+deprecated::\s*(.*)$")


@dataclass
class ParsedDocstring:
    """Structured view of a docstring.

    Attributes:
        body: Free text before the first section
        params: ``(name, description)`` per documented parameter
        returns: Description of the return value
        raises: ``(exception name, description)`` per documented exception
        deprecated: Deprecation notice
    """

    body: str = ""
    params: list[tuple[str, str]] = field(default_factory=list)
    returns: str | None = None
    raises: list[tuple[str, str]] = field(default_factory=list)
    deprecated: str | None = None

    @property
    def raised_names(self) -> list[str]:
        return list(dict.fromkeys(name for name, _ in self.raises))


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


def _parse_entries(lines: list[str]) -> list[tuple[str, str]]:
    """``name (type): description`` entries; deeper-indented lines continue the previous one."""
    content = [line for line in lines if line.strip()]
    if not content:
        return []
    entry_indent = min(_indent(line) for line in content)

    entries: list[list[str]] = []
    for line in content:
        stripped = line.strip()
        if _indent(line) == entry_indent or not entries:
            match = _ENTRY.match(stripped)
            if match:
                entries.append([match.group(1), match.group(3)])
            else:
                entries.append([stripped.split()[0], " ".join(stripped.split()[1:])])
        else:
            entries[-1][1] = f"{entries[-1][1]} {stripped}".strip()
    return [(name, desc.strip()) for name, desc in entries]


def _joined(lines: list[str]) -> str | None:
    text = " ".join(line.strip() for line in lines if line.strip())
    return text or None


def parse_docstring(doc: str | None) -> ParsedDocstring:
    """Split a docstring into body, parameters, return, raised exceptions and deprecation."""
    parsed = ParsedDocstring()
    if not doc:
        return parsed

    body: list[str] = []
    sections: dict[str, list[str]] = {"params": [], "returns": [], "raises": [], "deprecated": [], "skip": []}
    current: str | None = None

    for line in inspect.cleandoc(doc).splitlines():
        stripped = line.strip()

        if _indent(line) == 0 and stripped.endswith(":") and stripped[:-1] in _SECTIONS:
            current = _SECTIONS[stripped[:-1]]
            continue

        rest_field = _REST_FIELD.match(stripped)
        if rest_field:
            kind, target, text = rest_field.groups()
            target = target.strip().split()[-1] if target.strip() else ""
            if kind in ("param", "parameter", "arg", "argument"):
                parsed.params.append((target, text.strip()))
            elif kind in ("raises", "raise", "except"):
                parsed.raises.append((target, text.strip()))
            else:
                parsed.returns = text.strip() or None
            current = "skip"
            continue

        deprecated = _REST_DEPRECATED.match(stripped)
        if deprecated:
            sections["deprecated"].append(deprecated.group(1))
            current = "deprecated"
            continue

        if current is None:
            body.append(line)
        else:
            sections[current].append(line)

    parsed.body = "\n".join(body).strip()
    parsed.params.extend(_parse_entries(sections["params"]))
    parsed.raises.extend(_parse_entries(sections["raises"]))
    parsed.returns = parsed.returns or _joined(sections["returns"])
    parsed.deprecated = _joined(sections["deprecated"])
    return parsed
