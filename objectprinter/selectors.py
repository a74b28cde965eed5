"""
Object Printer member selectors.

Resolves a selector such as `lambda p: p.name` to the same Member that members_of()
produces for the attribute, so rules registered through a selector match while printing.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ConfigurationError
from .members import Member, get_member, members_of
from .utils import class_name, fmt_type, fmt_value

Selector = str | Member | Callable[[Any], Any]


# Classes --------------------------------------------------------------------------------------------------------------

class _Probe:
    """Value returned for a recorded attribute access; supports nothing else."""
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<attribute {self.name}>"


class _AttributeRecorder:
    """Stand-in instance passed to selectors, records every non-special attribute access."""
    __slots__ = ("_probes",)

    def __init__(self) -> None:
        self._probes: list[_Probe] = []

    def __getattr__(self, name: str) -> _Probe:
        probe = _Probe(name)
        self._probes.append(probe)
        return probe


# Methods --------------------------------------------------------------------------------------------------------------

def resolve_member(owner: type, selector: Selector) -> Member:
    """
    Resolve a member selector against an owner type.

    Accepted selectors:
        - attribute name: "name"
        - Member of owner, as returned by members_of()
        - callable doing one direct attribute access on its argument: lambda p: p.name

    The callable is run once against a recording stand-in, never against a real instance.

    Args:
        owner: Type whose member is selected.
        selector: The selector.

    Returns:
        The Member from members_of(owner), so it compares equal to the one seen while printing.

    Raises:
        TypeError: If owner is not a type.
        ConfigurationError: If the selector is not a direct attribute access,
                            or owner does not expose the selected attribute.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Person:
        ...     name: str
        >>> resolve_member(Person, lambda p: p.name).name
        'name'
        >>> resolve_member(Person, lambda p: p.name.upper())
        Traceback (most recent call last):
        ...
        objectprinter.errors.ConfigurationError: ...
    """
    if not isinstance(owner, type):
        raise TypeError(f"owner must be a type, but got {fmt_type(owner)}")

    if isinstance(selector, Member):
        name = selector.name
        if selector not in members_of(owner):
            raise ConfigurationError(f"Member {selector.qualified_name} does not belong to {class_name(owner)}")
    elif isinstance(selector, str):
        name = selector
    elif callable(selector):
        name = _recorded_attribute(owner, selector)
    else:
        raise ConfigurationError(
            f"Selector for {class_name(owner)} must be an attribute name, a Member or a callable, "
            f"but got {fmt_value(selector)}")

    member = get_member(owner, name)
    if member is None:
        raise ConfigurationError(
            f"{class_name(owner)} has no printable member '{name}'. "
            f"Declare it with a class annotation or a property, or add it with register_members()")
    return member


def _recorded_attribute(owner: type, selector: Callable[[Any], Any]) -> str:
    usage = "must be a direct attribute access like 'lambda x: x.attr'"
    recorder = _AttributeRecorder()
    try:
        result = selector(recorder)
    except Exception as e:
        raise ConfigurationError(f"Selector {fmt_value(selector)} for {class_name(owner)} {usage}") from e

    probes = recorder._probes
    if len(probes) != 1 or result is not probes[0]:
        raise ConfigurationError(f"Selector {fmt_value(selector)} for {class_name(owner)} {usage}")
    return probes[0].name
