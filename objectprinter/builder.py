"""
Object Printer fluent configuration.

Chained rule registration for a root type, e.g.:

    printer = (
        for_type(Person)
        .excluding(uuid.UUID)
        .printing(int).using(lambda i: format(i, "X"))
        .printing(float).using_format(".2f")
        .printing(lambda p: p.name).trimmed_to_length(6)
        .excluding(lambda p: p.age)
        .build()
    )
    text = printer.print_to_string(person)

Member selectors are resolved when the rule is registered, so a bad selector fails here,
not while printing.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from abc import ABC, abstractmethod
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .config import Formatter, PrintingConfig
from .members import Member
from .printer import ObjectPrinter
from .selectors import Selector, resolve_member
from .utils import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

class PrintingBuilder:
    """
    Fluent builder of a PrintingConfig for objects of an owner type.

    Member selectors are resolved against the owner type. Type rules apply to
    members of that declared type anywhere in the printed graph.
    All methods except printing() return the same builder, to allow chaining.
    """

    def __init__(self, owner: type, config: PrintingConfig | None = None) -> None:
        if not isinstance(owner, type):
            raise TypeError(f"owner must be a type, but got {fmt_type(owner)}")
        if not isinstance(config, (PrintingConfig, type(None))):
            raise TypeError(f"config must be a PrintingConfig instance, but got {fmt_type(config)}")
        self._owner = owner
        self._config = PrintingConfig() if config is None else config

    @property
    def owner(self) -> type:
        return self._owner

    @property
    def config(self) -> PrintingConfig:
        return self._config

    def excluding(self, target: type | Selector) -> "PrintingBuilder":
        """
        Exclude a type or a member of the owner type.

        Args:
            target: A type, excluding every member declared with it,
                    or a member selector, excluding that member only.

        Raises:
            ConfigurationError: If the selector is not a direct attribute access of the owner type.
        """
        if isinstance(target, type):
            self._config.exclude_type(target)
        else:
            self._config.exclude_member(resolve_member(self._owner, target))
        return self

    def printing(self, target: type | Selector) -> "TypePrintingBuilder | MemberPrintingBuilder":
        """
        Start an alternative formatting rule for a type or a member of the owner type.

        Complete the rule with using(), using_format() or trimmed_to_length(),
        which return this builder.

        Raises:
            ConfigurationError: If the selector is not a direct attribute access of the owner type.
        """
        if isinstance(target, type):
            return TypePrintingBuilder(self, target)
        return MemberPrintingBuilder(self, resolve_member(self._owner, target))

    def build(self) -> ObjectPrinter:
        """Return a printer using the configuration built so far."""
        return ObjectPrinter(self._config)

    def print_to_string(self, obj: Any) -> str:
        return self.build().print_to_string(obj)


class _RuleBuilder(ABC):
    """Common completion methods of a pending formatting rule."""

    def __init__(self, parent: PrintingBuilder) -> None:
        self._parent = parent

    @property
    @abstractmethod
    def target_type(self) -> Any:
        """Declared type the rule applies to."""

    def using(self, formatter: Formatter) -> PrintingBuilder:
        """Register formatter for the target; ignored if the target already has one."""
        self._register(formatter)
        return self._parent

    def using_format(self, format_spec: str) -> PrintingBuilder:
        """
        Render the target with format(value, format_spec).

        Examples:
            >>> for_type(Person).printing(float).using_format(".1f")  # doctest: +SKIP
        """
        if not isinstance(format_spec, str):
            raise TypeError(f"format_spec must be a str, but got {fmt_type(format_spec)}")
        return self.using(self._none_safe(lambda value: format(value, format_spec)))

    def trimmed_to_length(self, max_len: int) -> PrintingBuilder:
        """
        Render a string target cut to at most max_len characters.

        Members declared without a type may hold any value: non-string values are cut
        from their str() text.

        Raises:
            TypeError: If max_len is not an int or the target is not declared as str.
            ValueError: If max_len is negative.
        """
        if isinstance(max_len, bool) or not isinstance(max_len, int):
            raise TypeError(f"max_len must be an int, but got {fmt_type(max_len)}")
        if max_len < 0:
            raise ValueError(f"max_len must be >= 0, but got {fmt_value(max_len)}")
        target = self.target_type
        if target is not object and not issubclass(target, str):
            raise TypeError(f"trimmed_to_length() requires a str target, but got {fmt_type(target)}")
        return self.using(self._none_safe(lambda value: _text(value)[:max_len]))

    def _none_safe(self, formatter: Formatter) -> Formatter:
        null_text = self._parent.config.null_text

        def _format(value: Any) -> str:
            return null_text if value is None else formatter(value)

        return _format

    @abstractmethod
    def _register(self, formatter: Formatter) -> None:
        """Store formatter in the parent configuration."""


class TypePrintingBuilder(_RuleBuilder):
    """Pending formatting rule for every member declared with a type."""

    def __init__(self, parent: PrintingBuilder, typ: type) -> None:
        super().__init__(parent)
        self._type = typ

    @property
    def target_type(self) -> type:
        return self._type

    def _register(self, formatter: Formatter) -> None:
        self._parent.config.register_type_formatter(self._type, formatter)


class MemberPrintingBuilder(_RuleBuilder):
    """Pending formatting rule for a single member."""

    def __init__(self, parent: PrintingBuilder, member: Member) -> None:
        super().__init__(parent)
        self._member = member

    @property
    def member(self) -> Member:
        return self._member

    @property
    def target_type(self) -> Any:
        return self._member.type

    def _register(self, formatter: Formatter) -> None:
        self._parent.config.register_member_formatter(self._member, formatter)


# Methods --------------------------------------------------------------------------------------------------------------

def for_type(owner: type, config: PrintingConfig | None = None) -> PrintingBuilder:
    """
    Start configuring a printer for objects of type owner.

    Args:
        owner: Root type; member selectors are resolved against it.
        config: Optional registry to extend in place. A new one is created if None.
    """
    return PrintingBuilder(owner, config)


def print_to_string(obj: Any,
                    configure: Callable[[PrintingBuilder], Any] | None = None,
                    *,
                    config: PrintingConfig | None = None) -> str:
    """
    Print obj in one call.

    Args:
        obj: Root of the object graph.
        configure: Optional callable receiving a PrintingBuilder for type(obj) to add rules,
                   e.g. lambda b: b.excluding(lambda p: p.age). Its return value is ignored.
        config: Optional base configuration; it is copied, never modified.

    Returns:
        The rendered text.

    Examples:
        >>> print_to_string(person)                                       # doctest: +SKIP
        >>> print_to_string(person, lambda b: b.excluding(lambda p: p.age))  # doctest: +SKIP
    """
    if configure is not None and not callable(configure):
        raise TypeError(f"configure must be callable or None, but got {fmt_type(configure)}")

    builder = for_type(type(obj), config.copy() if isinstance(config, PrintingConfig) else config)
    if configure is not None:
        configure(builder)
    return builder.print_to_string(obj)


# Private Methods ------------------------------------------------------------------------------------------------------

def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)
