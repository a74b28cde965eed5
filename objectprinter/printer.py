"""
Object Printer engine.

Renders an object graph into indented text for debugging and logging.
Output is meant for humans and is not parsed back.

Every value is classified into exactly one ValueKind, in this order:
    NULL       None                              -> "null"
    CYCLIC     identity already visited in call  -> "Cyclic reference detected"
    FINAL      atomic value (int, str, ...)      -> str(value)
    KEYED      mapping or items() provider       -> header, then "key : value" per pair
    SEQUENCE   any other iterable                -> header, then one entry per element
    COMPOSITE  anything else                     -> header, then "name = value" per member

Each emitted value ends with the configured newline. Only composite member lines are indented.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
from enum import Enum, unique
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .config import PrintingConfig
from .errors import UnsupportedValueError
from .members import members_of
from .utils import class_name, fmt_type

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ValueKind(str, Enum):
    """Classification of a value encountered while printing."""
    NULL = "null"
    CYCLIC = "cyclic"
    FINAL = "final"
    KEYED = "keyed"
    SEQUENCE = "sequence"
    COMPOSITE = "composite"


class ObjectPrinter:
    """
    Print objects to indented text according to a PrintingConfig.

    The printer holds no per-call state: the visited set is created at every
    print_to_string() call and passed down the recursion, so one printer can be
    reused for unrelated objects and shared between threads.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Person:
        ...     name: str
        ...     age: int
        >>> text = ObjectPrinter(PrintingConfig(newline="\\n")).print_to_string(Person("Neo", 37))
        >>> print(text, end="")
        Person
            name = Neo
            age = 37
    """

    def __init__(self, config: PrintingConfig | None = None) -> None:
        if not isinstance(config, (PrintingConfig, type(None))):
            raise TypeError(f"config must be a PrintingConfig instance, but got {fmt_type(config)}")
        self._config = PrintingConfig() if config is None else config

    @property
    def config(self) -> PrintingConfig:
        return self._config

    def print_to_string(self, obj: Any) -> str:
        """
        Render obj and everything reachable from it.

        Args:
            obj: Root of the object graph.

        Returns:
            The rendered text, terminated by the configured newline.

        Raises:
            UnsupportedValueError: If a collection in the graph fails while being enumerated.
        """
        visited: dict[int, Any] = {}
        return self._print(obj, 0, visited)

    def _print(self, obj: Any, depth: int, visited: dict[int, Any]) -> str:
        cfg = self._config
        kind = classify(obj, visited, cfg)

        if kind is ValueKind.NULL:
            return cfg.null_text + cfg.newline
        if kind is ValueKind.CYCLIC:
            logger.debug("Cyclic reference to %s at depth %d", fmt_type(obj), depth)
            return cfg.cyclic_text + cfg.newline
        if kind is ValueKind.FINAL:
            return str(obj) + cfg.newline

        # Keep the object referenced until the call ends so its id cannot be reused
        visited[id(obj)] = obj

        if kind is ValueKind.KEYED:
            return self._print_keyed(obj, depth, visited)
        if kind is ValueKind.SEQUENCE:
            return self._print_sequence(obj, depth, visited)
        return self._print_composite(obj, depth, visited)

    def _print_keyed(self, obj: Any, depth: int, visited: dict[int, Any]) -> str:
        parts = [self._header(obj)]
        for key, value in _enumerate_pairs(obj):
            parts.append(self._print(key, depth, visited).strip())
            parts.append(" : ")
            parts.append(self._print(value, depth, visited))
        return "".join(parts)

    def _print_sequence(self, obj: Any, depth: int, visited: dict[int, Any]) -> str:
        parts = [self._header(obj)]
        for item in _enumerate_items(obj):
            parts.append(self._print(item, depth, visited))
        return "".join(parts)

    def _print_composite(self, obj: Any, depth: int, visited: dict[int, Any]) -> str:
        cfg = self._config
        indentation = cfg.indent * (depth + 1)
        parts = [self._header(obj)]

        for member in members_of(type(obj)):
            if cfg.is_excluded(member):
                continue
            value = member.read(obj)
            formatter = cfg.resolve_formatter(member)
            if formatter is not None:
                rendered = str(formatter(value)) + cfg.newline
            else:
                rendered = self._print(value, depth + 1, visited)
            parts.append(f"{indentation}{member.name} = {rendered}")

        return "".join(parts)

    def _header(self, obj: Any) -> str:
        return class_name(obj, fully_qualified=self._config.fully_qualified_names) + self._config.newline


# Methods --------------------------------------------------------------------------------------------------------------

def classify(obj: Any, visited: abc.Container[int], config: PrintingConfig) -> ValueKind:
    """
    Classify a value for printing.

    Final types are checked before collections, so strings and bytes are never iterated.
    Types marked keyed or sequence in config take precedence over the items() heuristic,
    which applies to iterables only: a plain object with an items() method is composite.

    Args:
        obj: The value.
        visited: Identities already printed in the current call.
        config: Configuration providing final types and capability markers.

    Returns:
        The ValueKind of obj.

    Examples:
        >>> classify("abc", set(), PrintingConfig())
        <ValueKind.FINAL: 'final'>
        >>> classify({"a": 1}, set(), PrintingConfig())
        <ValueKind.KEYED: 'keyed'>
    """
    if obj is None:
        return ValueKind.NULL
    if id(obj) in visited:
        return ValueKind.CYCLIC
    if config.is_final(obj):
        return ValueKind.FINAL
    if isinstance(obj, (abc.Mapping, *config.keyed_types)):
        return ValueKind.KEYED
    if isinstance(obj, config.sequence_types):
        return ValueKind.SEQUENCE
    if isinstance(obj, abc.Iterable):
        return ValueKind.KEYED if _has_items(obj) else ValueKind.SEQUENCE
    return ValueKind.COMPOSITE


# Private Methods ------------------------------------------------------------------------------------------------------

def _enumerate_items(obj: Any) -> list[Any]:
    try:
        return list(obj)
    except Exception as e:
        raise UnsupportedValueError(f"Cannot iterate {fmt_type(obj)} as a sequence: {e}") from e


def _enumerate_pairs(obj: Any) -> list[tuple[Any, Any]]:
    try:
        return [(key, value) for key, value in obj.items()]
    except Exception as e:
        raise UnsupportedValueError(f"Cannot read key-value pairs of {fmt_type(obj)}: {e}") from e


def _has_items(obj: Any) -> bool:
    """Dict-like iterables expose a callable items() on their class; only checked for iterables."""
    return callable(getattr(type(obj), "items", None))
