"""
Object Printer configuration registry.

Holds the exclusion sets, the formatter tables and the classification markers
consulted by the printer. Registrations are idempotent per key: the first formatter
registered for a type or member wins, later ones are ignored.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import logging
import os
import uuid
from dataclasses import dataclass, field, replace as dataclasses_replace
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .members import Member
from .utils import class_name, fmt_type

logger = logging.getLogger(__name__)

Formatter = Callable[[Any], str]

FINAL_TYPES: tuple[type, ...] = (
    int,  # bool included as subclass
    float,
    complex,
    Decimal,
    Fraction,
    str,
    bytes,
    bytearray,
    dt.datetime,
    dt.date,
    dt.time,
    dt.timedelta,
    uuid.UUID,
    Enum,
)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class PrintingConfig:
    """
    Rules and rendering settings for ObjectPrinter.

    Rule Tables:
        excluded_types: Members whose declared type is in this set are omitted.
        excluded_members: Members in this set are omitted.
        type_formatters: Declared type -> formatter, applied to members without a member formatter.
        member_formatters: Member -> formatter, takes precedence over type formatters.

    Classification:
        final_types: Atomic types printed via str() and never decomposed, matched with isinstance.
                     Checked before the sequence check, so str is never iterated.
        keyed_types: Extra types printed as key : value pairs, besides Mappings and objects with items().
        sequence_types: Extra types printed element by element, besides Iterables.

    Rendering:
        newline: Line terminator appended after every emitted value (default: os.linesep).
        indent: Indentation unit for composite member lines (default: tab).
        null_text: Text printed for None.
        cyclic_text: Marker printed in place of an already visited value.
        fully_qualified_names: Use module.QualName in collection and composite headers.

    Registration methods validate their arguments and return self, to allow chaining.
    Rules are expected to be complete before printing starts; the registry is only read while printing.

    Examples:
        >>> config = (
        ...     PrintingConfig()
        ...     .exclude_type(uuid.UUID)
        ...     .register_type_formatter(int, lambda i: format(i, "X"))
        ... )
    """
    excluded_types: set[type] = field(default_factory=set)
    excluded_members: set[Member] = field(default_factory=set)
    type_formatters: dict[type, Formatter] = field(default_factory=dict)
    member_formatters: dict[Member, Formatter] = field(default_factory=dict)

    final_types: tuple[type, ...] = FINAL_TYPES
    keyed_types: tuple[type, ...] = ()
    sequence_types: tuple[type, ...] = ()

    newline: str = os.linesep
    indent: str = "\t"
    null_text: str = "null"
    cyclic_text: str = "Cyclic reference detected"
    fully_qualified_names: bool = False

    # Registration -------------------------------------

    def exclude_type(self, typ: type) -> "PrintingConfig":
        """Omit every member whose declared type is typ."""
        _check_type(typ)
        self.excluded_types.add(typ)
        return self

    def exclude_member(self, member: Member) -> "PrintingConfig":
        """Omit exactly this member."""
        _check_member(member)
        self.excluded_members.add(member)
        return self

    def register_type_formatter(self, typ: type, formatter: Formatter) -> "PrintingConfig":
        """
        Render members of declared type typ with formatter.

        No-op if a formatter is already registered for typ.
        """
        _check_type(typ)
        _check_formatter(formatter)
        if typ in self.type_formatters:
            logger.debug("Formatter for type %s already registered, ignored", class_name(typ))
        else:
            self.type_formatters[typ] = formatter
        return self

    def register_member_formatter(self, member: Member, formatter: Formatter) -> "PrintingConfig":
        """
        Render this member with formatter.

        No-op if a formatter is already registered for member.
        """
        _check_member(member)
        _check_formatter(formatter)
        if member in self.member_formatters:
            logger.debug("Formatter for member %s already registered, ignored", member.qualified_name)
        else:
            self.member_formatters[member] = formatter
        return self

    def add_final_type(self, typ: type) -> "PrintingConfig":
        """Treat instances of typ as atomic values."""
        _check_type(typ)
        if typ not in self.final_types:
            self.final_types = (*self.final_types, typ)
        return self

    def mark_keyed(self, typ: type) -> "PrintingConfig":
        """Print instances of typ as key : value pairs via their items() method."""
        _check_type(typ)
        if typ not in self.keyed_types:
            self.keyed_types = (*self.keyed_types, typ)
        return self

    def mark_sequence(self, typ: type) -> "PrintingConfig":
        """Print instances of typ element by element via iter()."""
        _check_type(typ)
        if typ not in self.sequence_types:
            self.sequence_types = (*self.sequence_types, typ)
        return self

    # Resolution ---------------------------------------

    def is_excluded(self, member: Member) -> bool:
        """True if member or its declared type is excluded."""
        return member.type in self.excluded_types or member in self.excluded_members

    def resolve_formatter(self, member: Member) -> Formatter | None:
        """
        Return the formatter for member: member-specific first, then by exact declared type.

        Returns None when the member should be printed by the default recursive algorithm.
        Exclusion is not checked here, see is_excluded().
        """
        formatter = self.member_formatters.get(member)
        if formatter is not None:
            return formatter
        return self.type_formatters.get(member.type)

    def is_final(self, value: Any) -> bool:
        return isinstance(value, self.final_types)

    def copy(self) -> "PrintingConfig":
        """Return an independent copy; rule tables are copied, formatters are shared."""
        return dataclasses_replace(
            self,
            excluded_types=set(self.excluded_types),
            excluded_members=set(self.excluded_members),
            type_formatters=dict(self.type_formatters),
            member_formatters=dict(self.member_formatters),
        )


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_type(typ: Any) -> None:
    if not isinstance(typ, type):
        raise TypeError(f"typ must be a type, but got {fmt_type(typ)}")


def _check_member(member: Any) -> None:
    if not isinstance(member, Member):
        raise TypeError(f"member must be a Member, but got {fmt_type(member)}")


def _check_formatter(formatter: Any) -> None:
    if not callable(formatter):
        raise TypeError(f"formatter must be callable, but got {fmt_type(formatter)}")
