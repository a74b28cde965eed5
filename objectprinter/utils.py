"""
Object Printer utilities shared across the package.

Type naming helpers used by the printer for collection/composite headers and by
the configuration layer for error messages.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import reprlib
from typing import Any

_repr = reprlib.Repr()
_repr.maxstring = 80
_repr.maxother = 80


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns the same name whether given an instance or the class itself, so
    `class_name(10)` and `class_name(int)` both return 'int'.
    Builtins are never qualified with their module.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns 'module.QualName' for non-builtin classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class Person: ...
        >>> class_name(Person())
        'Person'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    name = getattr(cls, "__name__", None) or repr(cls)

    module = getattr(cls, "__module__", None)
    if not fully_qualified or module in (None, "builtins"):
        return name
    return f"{module}.{getattr(cls, '__qualname__', name)}"


def fmt_type(obj: Any) -> str:
    """
    Format the type of an object (or a type itself) for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(str)
        '<str>'
    """
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any) -> str:
    """
    Format a value as a type-value pair for exception messages.

    Long reprs are shortened and a broken __repr__ never propagates.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("abc")
        "<str: 'abc'>"
    """
    try:
        value_repr = _repr.repr(obj)
    except Exception as e:
        value_repr = f"<repr failed: {type(e).__name__}>"
    return f"<{class_name(obj)}: {value_repr}>"
