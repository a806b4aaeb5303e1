#!/usr/bin/env python
"""Collect fixture documentation into the JSON documentation store.

Writes one ``<qualified name>.json`` file per fixture class, mapping each
documented operation to its body, parameters, return value, raised
exceptions and deprecation notice. The editor reads these files through
:class:`~slim_autocomplete.introspection.docs.JsonDocumentationStore`.

Usage:
    slim-autocomplete-docs fixtures.shop --classpath fixtures -o fixtures/apidocs
"""

import argparse
import inspect
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from slim_autocomplete.introspection.catalog import (
    ModuleTypeCatalog,
    TypeResolutionError,
    qualified_name,
)
from slim_autocomplete.introspection.docs import APIDOCS_DIR, OperationDoc
from slim_autocomplete.introspection.docstrings import ParsedDocstring, parse_docstring
from slim_autocomplete.middleware.logging import setup_logging

logger = logging.getLogger(__name__)


def _entry(name: str, description: str) -> str:
    return f"{name}: {description}" if description else name


def _operation_doc(parsed: ParsedDocstring) -> OperationDoc:
    return OperationDoc(
        body=parsed.body,
        params=[_entry(name, desc) for name, desc in parsed.params],
        returns=parsed.returns,
        throws=[_entry(name, desc) for name, desc in parsed.raises],
        deprecated=parsed.deprecated,
    )


def collect_class_docs(cls: type) -> dict[str, OperationDoc]:
    """Documentation of the routines a class defines, including ``__init__``.

    Inherited and undocumented routines are left out.
    """
    docs: dict[str, OperationDoc] = {}
    for name, member in vars(cls).items():
        if isinstance(member, (staticmethod, classmethod)):
            member = member.__func__
        elif isinstance(member, property):
            member = member.fget
        if member is None or not inspect.isroutine(member):
            continue
        if name.startswith("_") and name != "__init__":
            continue

        # own docstring only, never one inherited from a base class
        if not member.__doc__:
            continue
        docs[name] = _operation_doc(parse_docstring(member.__doc__))
    return docs


def write_docs(
    modules: Sequence[str],
    output_dir: Path,
    classpath: Sequence[str | Path] = (),
    recursive: bool = False,
) -> list[Path]:
    """Write documentation files for every class in ``modules``.

    Args:
        modules: Fixture namespaces to document
        output_dir: Directory receiving the JSON files
        classpath: Directories to import the namespaces from
        recursive: Include every descendant module of a package

    Returns:
        Paths of the files written
    """
    catalog = ModuleTypeCatalog(classpath=classpath, recursive=recursive)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    for module in modules:
        try:
            classes = catalog.types_in(module)
        except TypeResolutionError as e:
            logger.error("Skipping namespace %s: %s", module, e.reason)
            continue

        for cls in classes:
            docs = collect_class_docs(cls)
            if not docs:
                logger.debug("No documentation on %s", qualified_name(cls))
                continue
            payload = {
                name: doc.model_dump(by_alias=True, exclude_none=True)
                for name, doc in docs.items()
            }
            path = output_dir / f"{qualified_name(cls)}.json"
            path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
            written.append(path)
            logger.info("Wrote %s (%d operations)", path, len(docs))

    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Collect fixture documentation for autocomplete")
    parser.add_argument("modules", nargs="+", help="Fixture modules or packages to document")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path(APIDOCS_DIR),
        help=f"Output directory (default: {APIDOCS_DIR})",
    )
    parser.add_argument(
        "--classpath",
        action="append",
        default=[],
        help="Directory to import fixtures from (repeatable)",
    )
    parser.add_argument("--recursive", action="store_true", help="Include nested packages")
    parser.add_argument("--log-level", default="INFO", help="Log level (default: INFO)")
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level.upper())

    try:
        written = write_docs(args.modules, args.output, args.classpath, args.recursive)
    except OSError as e:
        logger.error("Failed to write documentation: %s", e)
        return 1

    logger.info("Documented %d class(es) in %s", len(written), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
