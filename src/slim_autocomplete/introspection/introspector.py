"""
Type Introspection
==================

Describes fixture classes for the editor: every invocable method and the
constructor, with parameter types, raised exceptions, decorator markers and
the usage text to insert.

Methods are the public routines reachable on the class. Names on the ignore
list (``object`` plumbing such as ``__eq__`` and the Slim lifecycle hook
``around_slim_invoke``) are only listed when the class defines them itself.
"""

import inspect
import logging
import typing
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from slim_autocomplete.core.app_config import DEFAULT_IGNORED_METHODS
from slim_autocomplete.introspection.catalog import TypeCatalog, TypeResolutionError, qualified_name
from slim_autocomplete.introspection.docs import DocumentationStore, OperationDoc, TypeDocumentation
from slim_autocomplete.introspection.docstrings import parse_docstring
from slim_autocomplete.introspection.naming import split_camel_case
from slim_autocomplete.introspection.usage import constructor_usage, context_help, method_usage, wiki_text

logger = logging.getLogger(__name__)

CONSTRUCTOR = "__init__"
MARKERS_ATTRIBUTE = "__markers__"


@dataclass(frozen=True)
class OperationInfo:
    """A method or constructor of a fixture class."""

    name: str
    readable_name: str
    parameter_types: tuple[str, ...]
    exceptions: tuple[str, ...]
    markers: tuple[str, ...]
    usage: str
    context_help: str
    documentation: OperationDoc | None = None

    @property
    def wiki_text(self) -> str:
        return wiki_text(self.usage)


@dataclass(frozen=True)
class TypeInfo:
    """A fixture class with its invocable operations."""

    qualified_name: str
    readable_name: str
    methods: tuple[OperationInfo, ...] = field(default_factory=tuple)
    constructors: tuple[OperationInfo, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class _Routine:
    func: Callable[..., Any]
    takes_receiver: bool
    markers: tuple[str, ...]


def type_display_name(annotation: Any, fallback: str) -> str:
    """Short name of a parameter annotation; ``fallback`` when unannotated."""
    if annotation is inspect.Parameter.empty:
        return fallback
    if isinstance(annotation, str):
        return annotation
    name = getattr(annotation, "__name__", None)
    if isinstance(name, str):
        return name
    return str(annotation).replace("typing.", "")


def _unwrap(member: Any) -> _Routine | None:
    """The callable behind a raw class attribute, or None if it is not invocable."""
    markers: list[str] = []
    if isinstance(member, staticmethod):
        markers.append("staticmethod")
        func, takes_receiver = member.__func__, False
    elif isinstance(member, classmethod):
        markers.append("classmethod")
        func, takes_receiver = member.__func__, True
    elif isinstance(member, property):
        if member.fget is None:
            return None
        markers.append("property")
        func, takes_receiver = member.fget, True
    elif inspect.isroutine(member):
        func, takes_receiver = member, True
    else:
        return None

    if getattr(func, "__isabstractmethod__", False):
        markers.append("abstractmethod")
    if getattr(func, "__deprecated__", None) is not None:
        markers.append("deprecated")
    markers.extend(str(marker) for marker in getattr(func, MARKERS_ATTRIBUTE, ()))
    return _Routine(func=func, takes_receiver=takes_receiver, markers=tuple(dict.fromkeys(markers)))


def parameter_types(func: Callable[..., Any], takes_receiver: bool = True) -> list[str]:
    """Display names of a callable's parameter types, in declaration order.

    The receiver (``self``/``cls``) and ``*args``/``**kwargs`` are left out.
    String annotations are resolved where possible.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return []

    try:
        hints = typing.get_type_hints(func)
    except Exception as e:
        logger.debug("Unresolved annotations on %r: %s", func, e)
        hints = {}

    params = list(signature.parameters.values())
    if takes_receiver and params and params[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        params = params[1:]

    return [
        type_display_name(hints.get(p.name, p.annotation), p.name)
        for p in params
        if p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


class TypeIntrospector:
    """Builds :class:`TypeInfo` descriptors for fixture classes.

    Args:
        ignored_methods: Inherited names hidden unless the class defines them
        documentation: Optional store whose entries supersede docstring help
    """

    def __init__(
        self,
        ignored_methods: Iterable[str] = DEFAULT_IGNORED_METHODS,
        documentation: DocumentationStore | None = None,
    ) -> None:
        self._ignored = frozenset(ignored_methods)
        self._documentation = documentation

    def describe_namespaces(self, catalog: TypeCatalog, namespaces: Sequence[str]) -> list[TypeInfo]:
        """Describe every class under the namespaces, each class once.

        A namespace or class that fails to load is logged and left out.
        """
        seen: set[int] = set()
        types: list[TypeInfo] = []

        for namespace in namespaces:
            try:
                classes = catalog.types_in(namespace)
            except TypeResolutionError as e:
                logger.error("Exception for namespace: %s - %s", namespace, e.reason)
                continue
            except Exception as e:
                logger.error("Catalog failed for namespace %s: %s", namespace, e)
                continue

            for cls in classes:
                if id(cls) in seen:
                    continue
                seen.add(id(cls))
                try:
                    types.append(self.describe_type(cls))
                except Exception as e:
                    logger.warning("Skipping class %s: %s", getattr(cls, "__qualname__", cls), e)

        return types

    def describe_type(self, cls: type) -> TypeInfo:
        docs = self._documentation_for(cls)
        return TypeInfo(
            qualified_name=qualified_name(cls),
            readable_name=split_camel_case(cls.__name__),
            methods=tuple(self._methods(cls, docs)),
            constructors=(self._constructor(cls, docs),),
        )

    def is_listed(self, name: str, cls: type) -> bool:
        if name in self._ignored:
            return name in vars(cls)
        return not name.startswith("_")

    def _methods(self, cls: type, docs: TypeDocumentation) -> list[OperationInfo]:
        methods: list[OperationInfo] = []
        for name, member in inspect.getmembers_static(cls):
            if not self.is_listed(name, cls):
                continue
            routine = _unwrap(member)
            if routine is None:
                continue
            methods.append(self._method(name, routine, docs.get(name)))
        return methods

    def _method(self, name: str, routine: _Routine, doc: OperationDoc | None) -> OperationInfo:
        readable = split_camel_case(name)
        types = parameter_types(routine.func, routine.takes_receiver)
        usage = method_usage(readable, types)
        return OperationInfo(
            name=name,
            readable_name=readable,
            parameter_types=tuple(types),
            exceptions=self._exceptions(routine.func, doc),
            markers=routine.markers,
            usage=usage,
            context_help=self._help(context_help(wiki_text(usage)), doc),
            documentation=doc,
        )

    def _constructor(self, cls: type, docs: TypeDocumentation) -> OperationInfo:
        init = vars(cls).get(CONSTRUCTOR, getattr(cls, CONSTRUCTOR))
        routine = _unwrap(init)
        if routine is None or init is object.__init__:
            types: list[str] = []
            exceptions: tuple[str, ...] = ()
            markers: tuple[str, ...] = ()
        else:
            types = parameter_types(routine.func, takes_receiver=True)
            exceptions = self._exceptions(routine.func, docs.get(CONSTRUCTOR))
            markers = routine.markers

        doc = docs.get(CONSTRUCTOR)
        usage = constructor_usage(cls.__name__, types)
        return OperationInfo(
            name=cls.__name__,
            readable_name=split_camel_case(cls.__name__),
            parameter_types=tuple(types),
            exceptions=exceptions,
            markers=markers,
            usage=usage,
            context_help=self._help(context_help(wiki_text(usage)), doc),
            documentation=doc,
        )

    @staticmethod
    def _exceptions(func: Callable[..., Any], doc: OperationDoc | None) -> tuple[str, ...]:
        if doc is not None and doc.thrown_names:
            return tuple(doc.thrown_names)
        return tuple(parse_docstring(inspect.getdoc(func)).raised_names)

    @staticmethod
    def _help(reflective: str, doc: OperationDoc | None) -> str:
        if doc is not None and doc.summary:
            return doc.summary
        return reflective

    def _documentation_for(self, cls: type) -> TypeDocumentation:
        if self._documentation is None:
            return {}
        try:
            return self._documentation.lookup(qualified_name(cls)) or {}
        except Exception as e:
            logger.debug("No documentation for %s: %s", qualified_name(cls), e)
            return {}
