"""
Type Catalog
============

Resolves a namespace named by an ``import`` or ``library`` table to the
fixture classes it contains.

The built-in :class:`ModuleTypeCatalog` imports Python modules from the
page's classpath. Other catalogs (pre-generated manifests, remote
services) register under the ``slim_autocomplete.catalogs`` entry point
group and are selected by name in ``introspection.catalog``::

    [project.entry-points."slim_autocomplete.catalogs"]
    manifest = "mypackage.catalog:ManifestCatalog"

A catalog class is constructed with ``classpath`` and ``recursive`` keyword
arguments.
"""

import importlib
import importlib.metadata
import inspect
import logging
import pkgutil
import sys
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

CATALOG_ENTRY_POINT_GROUP = "slim_autocomplete.catalogs"
DEFAULT_CATALOG = "module"

# Guards sys.path and sys.modules while a catalog imports fixture modules
_IMPORT_LOCK = threading.RLock()


class TypeResolutionError(Exception):
    """Raised when a namespace or type cannot be loaded."""

    def __init__(self, namespace: str, reason: str):
        super().__init__(f"Cannot resolve '{namespace}': {reason}")
        self.namespace = namespace
        self.reason = reason


@runtime_checkable
class TypeCatalog(Protocol):
    """Enumerates the concrete classes under a namespace."""

    def types_in(self, namespace: str) -> list[type]:
        """Classes defined in ``namespace``.

        Raises:
            TypeResolutionError: If the namespace cannot be loaded
        """
        ...


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _resolved(entries: Sequence[str | Path]) -> list[Path]:
    return [Path(entry).expanduser().resolve() for entry in entries]


@contextmanager
def search_path(entries: Sequence[str | Path]) -> Iterator[None]:
    """Temporarily put classpath entries in front of ``sys.path``."""
    resolved = [str(entry) for entry in _resolved(entries)]
    with _IMPORT_LOCK:
        added = [entry for entry in dict.fromkeys(resolved) if entry not in sys.path]
        sys.path[0:0] = added
        importlib.invalidate_caches()
        try:
            yield
        finally:
            for entry in added:
                if entry in sys.path:
                    sys.path.remove(entry)


def _locations(module: ModuleType) -> list[Path]:
    paths = [getattr(module, "__file__", None), *(getattr(module, "__path__", None) or [])]
    return [Path(p).resolve() for p in paths if p]


def _is_within(module: ModuleType, roots: Sequence[Path]) -> bool:
    return any(location.is_relative_to(root) for location in _locations(module) for root in roots)


def _in_package(name: str, top: str) -> bool:
    return name == top or name.startswith(f"{top}.")


@contextmanager
def isolated_modules(namespace: str, roots: Sequence[Path]) -> Iterator[None]:
    """Import ``namespace`` afresh from ``roots`` and unload what the imports added.

    A loaded package that the roots would shadow is set aside for the
    duration and put back afterwards, so every call sees the fixture code
    currently on its own classpath.
    """
    top = namespace.split(".", 1)[0]
    shadowed = any((root / top).is_dir() or (root / f"{top}.py").is_file() for root in roots)

    with _IMPORT_LOCK:
        set_aside = {
            name: module
            for name, module in list(sys.modules.items())
            if shadowed and _in_package(name, top) and not _is_within(module, roots)
        }
        for name in set_aside:
            del sys.modules[name]
        before = set(sys.modules)

        try:
            yield
        finally:
            for name in set(sys.modules) - before:
                module = sys.modules.get(name)
                if _in_package(name, top) or (module is not None and _is_within(module, roots)):
                    sys.modules.pop(name, None)
            sys.modules.update(set_aside)


class ModuleTypeCatalog:
    """Imports a namespace as a Python module and lists its classes.

    A module contributes the public, non-abstract classes it defines (not
    the ones it merely imports). A package also contributes its direct
    submodules, or every descendant module when ``recursive`` is set.
    Submodules that fail to import are logged and skipped.

    Each call imports from its own classpath and unloads the modules it
    loaded, so no fixture module outlives the call that imported it.
    """

    def __init__(self, classpath: Sequence[str | Path] = (), recursive: bool = False) -> None:
        self.classpath = list(classpath)
        self.recursive = recursive

    def types_in(self, namespace: str) -> list[type]:
        with search_path(self.classpath), isolated_modules(namespace, _resolved(self.classpath)):
            try:
                module = importlib.import_module(namespace)
            except Exception as e:
                raise TypeResolutionError(namespace, f"{type(e).__name__}: {e}") from e

            classes: dict[int, type] = {}
            for mod in [module, *self._submodules(module)]:
                for cls in _defined_classes(mod):
                    classes.setdefault(id(cls), cls)

        found = sorted(classes.values(), key=qualified_name)
        logger.debug("Namespace %s: %d class(es)", namespace, len(found))
        return found

    def _submodules(self, package: ModuleType) -> list[ModuleType]:
        path = getattr(package, "__path__", None)
        if path is None:
            return []

        prefix = f"{package.__name__}."
        if self.recursive:
            infos = pkgutil.walk_packages(path, prefix=prefix, onerror=_log_walk_error)
        else:
            infos = pkgutil.iter_modules(path, prefix=prefix)

        modules: list[ModuleType] = []
        for info in infos:
            try:
                modules.append(importlib.import_module(info.name))
            except Exception as e:
                logger.warning("Skipping module %s: %s", info.name, e)
        return modules


def _log_walk_error(name: str) -> None:
    logger.warning("Skipping package %s: import failed", name)


def _defined_classes(module: ModuleType) -> list[type]:
    return [
        obj
        for name, obj in vars(module).items()
        if inspect.isclass(obj)
        and obj.__module__ == module.__name__
        and not name.startswith("_")
        and not inspect.isabstract(obj)
    ]


def discover_catalogs() -> dict[str, type[Any]]:
    """
    Discover catalog classes registered via entry points.

    Returns:
        Catalog classes by entry point name.
        Failed loads are logged and skipped.
    """
    catalogs: dict[str, type[Any]] = {}

    try:
        entry_points = importlib.metadata.entry_points(group=CATALOG_ENTRY_POINT_GROUP)
    except Exception as e:
        logger.warning("Failed to get catalog entry points: %s", e)
        return catalogs

    for ep in entry_points:
        try:
            catalogs[ep.name] = ep.load()
            logger.debug("Discovered catalog: %s from %s", ep.name, ep.value)
        except ImportError as e:
            logger.warning("Failed to import catalog '%s' from '%s': %s", ep.name, ep.value, e)
        except Exception as e:
            logger.error("Error loading catalog '%s': %s", ep.name, e)

    return catalogs


def create_catalog(
    name: str = DEFAULT_CATALOG,
    classpath: Sequence[str | Path] = (),
    recursive: bool = False,
) -> TypeCatalog:
    """Instantiate the catalog registered as ``name``.

    Falls back to :class:`ModuleTypeCatalog` when no such catalog is
    registered or it cannot be constructed.
    """
    catalog_cls = discover_catalogs().get(name)
    if catalog_cls is None:
        if name != DEFAULT_CATALOG:
            logger.warning("Catalog '%s' is not registered, using '%s'", name, DEFAULT_CATALOG)
        return ModuleTypeCatalog(classpath=classpath, recursive=recursive)

    try:
        catalog: TypeCatalog = catalog_cls(classpath=classpath, recursive=recursive)
    except Exception as e:
        logger.error("Failed to create catalog '%s': %s", name, e)
        return ModuleTypeCatalog(classpath=classpath, recursive=recursive)
    return catalog
