"""
Object Printer member introspection.

Derives, once per type, the ordered list of externally readable attributes the printer
renders for composite values. Members come from class annotations (dataclass fields included),
__slots__, public properties and explicit registrations, in declaration order:
base classes first along the reversed MRO, then each class's own declarations as written.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import functools
import inspect
import logging
import types
import typing
from dataclasses import dataclass, field
from typing import Any, Annotated, Callable, ClassVar, Iterable, Union

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, fmt_type, fmt_value

logger = logging.getLogger(__name__)

MemberKind = typing.Literal["field", "slot", "property", "registered"]

# Explicitly registered members: owner type -> {name: Member}, kept in registration order
_registered: dict[type, dict[str, "Member"]] = {}


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Member:
    """
    Stable identity of one named, readable attribute of a type.

    Equality and hashing use (owner, name) only, so a Member is a reliable key for
    exclusion and formatter tables. The owner is the class that first declares the
    attribute, which makes inherited attributes resolve to the same Member from any subclass.

    Attributes:
        owner: Declaring class.
        name: Attribute name.
        type: Declared value type, normalized (Optional[T] -> T, list[int] -> list, unknown -> object).
        kind: Where the member was found: "field", "slot", "property" or "registered".
        accessor: Optional callable reading the value off an instance; defaults to getattr by name.
    """
    owner: type
    name: str
    type: Any = field(default=object, compare=False)
    kind: MemberKind = field(default="field", compare=False)
    accessor: Callable[[Any], Any] | None = field(default=None, compare=False, hash=False, repr=False)

    def read(self, instance: Any) -> Any:
        """
        Read this member's value off an instance.

        A declared field, slot or registered attribute the instance never assigned reads as None.
        Errors raised by properties and custom accessors propagate.
        """
        if self.accessor is not None:
            return self.accessor(instance)
        if self.kind == "property":
            return getattr(instance, self.name)
        return getattr(instance, self.name, None)

    @property
    def qualified_name(self) -> str:
        return f"{class_name(self.owner)}.{self.name}"


# Methods --------------------------------------------------------------------------------------------------------------

def members_of(cls: type) -> tuple[Member, ...]:
    """
    Return the ordered members of a type.

    The result is a pure function of the type and is cached; call clear_cache()
    after redefining classes at runtime. Registering members invalidates the cache.

    Args:
        cls: The type to introspect.

    Returns:
        Tuple of Member in declaration order, inherited members first.

    Raises:
        TypeError: If cls is not a type.

    Examples:
        >>> @dataclass
        ... class Point:
        ...     x: int
        ...     y: int | None = None
        >>> [(m.name, m.type) for m in members_of(Point)]
        [('x', <class 'int'>), ('y', <class 'int'>)]
    """
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a type, but got {fmt_type(cls)}")
    return _derive_members(cls)


def get_member(cls: type, name: str) -> Member | None:
    """Return the member of cls with the given name, or None if cls does not declare it."""
    for member in members_of(cls):
        if member.name == name:
            return member
    return None


def register_members(owner: type, *members: str | tuple[str, Any] | Member) -> tuple[Member, ...]:
    """
    Register members that cannot be derived from the class declaration.

    Use for classes that assign instance attributes dynamically, e.g. in __init__
    without class-level annotations. Registered members follow the derived ones of
    the same class. Registering a name the class already exposes is a no-op.

    Args:
        owner: The class the members belong to.
        *members: Attribute names, (name, declared type) pairs, or Member instances owned by owner.

    Returns:
        The updated members_of(owner).

    Raises:
        TypeError: If owner is not a type or a member spec has an unsupported form.
        ValueError: If a Member is owned by another class or a name is empty.

    Examples:
        >>> class Legacy:
        ...     def __init__(self):
        ...         self.code = 7
        >>> [m.name for m in register_members(Legacy, ("code", int))]
        ['code']
    """
    if not isinstance(owner, type):
        raise TypeError(f"owner must be a type, but got {fmt_type(owner)}")

    table = _registered.setdefault(owner, {})
    for spec in members:
        member = _member_from_spec(owner, spec)
        if member.name in table or any(m.name == member.name for m in _derive_members(owner)):
            logger.debug("Member %s already known, registration ignored", member.qualified_name)
            continue
        table[member.name] = member
        logger.debug("Registered member %s of type %s", member.qualified_name, class_name(member.type))

    clear_cache()
    return members_of(owner)


def clear_cache() -> None:
    """Drop all cached member lists."""
    _derive_members.cache_clear()


@functools.lru_cache(maxsize=None)
def _derive_members(cls: type) -> tuple[Member, ...]:
    """Walk the reversed MRO collecting members by name; the first declaration fixes owner and position."""
    found: dict[str, Member] = {}

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        hints = _own_hints(klass)

        for name, hint in hints.items():
            if _is_private(name) or _is_pseudo_field(hint):
                continue
            _add_member(found, Member(klass, name, _declared_type(hint), "field"), hints)

        for name in _own_slots(klass):
            if _is_private(name):
                continue
            _add_member(found, Member(klass, name, _declared_type(hints.get(name)), "slot"), hints)

        for name, attr in vars(klass).items():
            if _is_private(name) or not isinstance(attr, property):
                continue
            _add_member(found, Member(klass, name, _property_type(attr), "property"), hints)

        for member in _registered.get(klass, {}).values():
            _add_member(found, member, hints)

    logger.debug("Derived %d members for %s", len(found), class_name(cls, fully_qualified=True))
    return tuple(found.values())


def _add_member(found: dict[str, Member], member: Member, hints: dict[str, Any]) -> None:
    previous = found.get(member.name)
    if previous is None:
        found[member.name] = member
    elif member.name in hints and previous.kind != "registered":
        # Redeclared in a subclass: keep identity and position, refresh the declared type
        found[member.name] = dataclasses.replace(previous, type=_declared_type(hints[member.name]))


def _declared_type(hint: Any) -> Any:
    """Normalize a type hint to the runtime type used as a configuration key."""
    if hint is None or hint is Any or isinstance(hint, (str, typing.ForwardRef)):
        return object
    if isinstance(hint, typing.NewType):
        return _declared_type(hint.__supertype__)

    origin = typing.get_origin(hint)
    if origin is Annotated:
        return _declared_type(typing.get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _declared_type(args[0]) if len(args) == 1 else object
    if origin is not None:
        return origin if isinstance(origin, type) else object
    return hint if isinstance(hint, type) else object


def _is_private(name: str) -> bool:
    return name.startswith("_")


def _is_pseudo_field(hint: Any) -> bool:
    """True for annotations that do not describe instance data (ClassVar, InitVar)."""
    if hint is ClassVar or typing.get_origin(hint) is ClassVar:
        return True
    if hint is dataclasses.InitVar or isinstance(hint, dataclasses.InitVar):
        return True
    if isinstance(hint, str):
        return hint.split("[", 1)[0].rsplit(".", 1)[-1] in ("ClassVar", "InitVar")
    return False


def _member_from_spec(owner: type, spec: str | tuple[str, Any] | Member) -> Member:
    if isinstance(spec, Member):
        if spec.owner is not owner:
            raise ValueError(f"Member {spec.qualified_name} is not owned by {class_name(owner)}")
        return dataclasses.replace(spec, kind="registered")
    if isinstance(spec, str):
        name, declared = spec, object
    elif isinstance(spec, tuple) and len(spec) == 2 and isinstance(spec[0], str):
        name, declared = spec
    else:
        raise TypeError(f"member spec must be a name, a (name, type) pair or a Member, but got {fmt_value(spec)}")
    if not name:
        raise ValueError("member name must be a non-empty string")
    return Member(owner, name, _declared_type(declared), "registered")


def _own_slots(klass: type) -> Iterable[str]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [name for name in slots if name not in ("__dict__", "__weakref__")]


def _property_type(prop: property) -> Any:
    if prop.fget is None:
        return object
    try:
        hint = typing.get_type_hints(prop.fget).get("return")
    except Exception:
        hint = getattr(prop.fget, "__annotations__", {}).get("return")
    return _declared_type(hint)


def _own_hints(klass: type) -> dict[str, Any]:
    """Own annotations of klass in source order, resolved against its module; raw annotations if resolution fails."""
    try:
        own = inspect.get_annotations(klass)
    except Exception as e:
        logger.debug("Cannot read annotations of %s: %s", class_name(klass), e)
        return {}
    if not own:
        return {}
    try:
        hints = typing.get_type_hints(klass)
    except Exception as e:
        logger.debug("Cannot resolve annotations of %s: %s", class_name(klass), e)
        return dict(own)
    return {name: hints.get(name, annotation) for name, annotation in own.items()}
