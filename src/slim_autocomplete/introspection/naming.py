"""Readable names from Python identifiers."""

import re

# camelCase, PascalCase acronyms, letter/digit boundaries
_WORD_BOUNDARY = re.compile(
    r"(?<=[A-Z])(?=[A-Z][a-z])"
    r"|(?<=[^A-Z_])(?=[A-Z])"
    r"|(?<=[A-Za-z])(?=[^A-Za-z_])"
)


def split_camel_case(identifier: str) -> str:
    """Split an identifier into lower-case words.

    Examples:
        >>> split_camel_case("setValue")
        'set value'
        >>> split_camel_case("HTTPServer")
        'http server'
        >>> split_camel_case("check_total_2")
        'check total 2'
    """
    spaced = _WORD_BOUNDARY.sub(" ", identifier).replace("_", " ")
    return " ".join(spaced.split()).lower()
