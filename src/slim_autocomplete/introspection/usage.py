"""
Usage Strings
=============

Builds the wiki text inserted by the editor when a fixture method,
constructor or declaration is picked, and the readable help line shown
next to it.

Placeholders are interleaved with the words of the method name, filling
from the end: with ``n`` parameters the last cell and every second cell
before it hold a placeholder, words fill the remaining cells left to
right. ``checkTotalFor(int)`` therefore reads ``check total for | [int] |``
and ``transferFromTo(str, str)`` reads ``transfer from | [str] | to | [str] |``.
"""

import re
from collections.abc import Sequence

from slim_autocomplete.introspection.naming import split_camel_case

CELL_START = "| "
_PLACEHOLDER_CELL = re.compile(r"\| \[(\w+)] \|")


def method_usage(readable_name: str, parameter_types: Sequence[str]) -> str:
    """Insertable script-table row for a method call.

    When there are more parameters than name words they cannot be
    interleaved; the name is followed by one cell listing every placeholder.

    Args:
        readable_name: Method name split into space-separated words
        parameter_types: Display name of each parameter's type, in order

    Returns:
        Wiki text starting with ``"| "``
    """
    words = readable_name.split() or [readable_name]
    n_words = len(words)
    n_params = len(parameter_types)

    result = [CELL_START]
    if n_params > n_words:
        result.append(f"{readable_name} | ")
        for type_name in parameter_types:
            result.append(f"[{type_name}], ")
        result.append(" |")
        return "".join(result)

    total_cells = n_words + n_params
    placeholder_cells = {total_cells - 1 - 2 * i for i in range(n_params)}

    param_index = 0
    for position in range(total_cells):
        if position in placeholder_cells:
            result.append(f"| [{parameter_types[param_index]}] | ")
            param_index += 1
        else:
            result.append(f"{words[position - param_index]} ")

    if n_params == 0:
        result.append("|")
    return "".join(result)


def constructor_usage(class_name: str, parameter_types: Sequence[str]) -> str:
    """Insertable decision-table header: class name, then one cell per argument."""
    cells = "".join(f" [{type_name}] |" for type_name in parameter_types)
    return f"{CELL_START}{split_camel_case(class_name)} |{cells}"


def wiki_text(usage: str) -> str:
    return usage[len(CELL_START):]


def context_help(text: str) -> str:
    """Readable form of wiki text: ``| [int] |`` cells become ``<int>``, pipes go."""
    return _PLACEHOLDER_CELL.sub(r"&lt;\1&gt;", text).replace("|", "").strip()
