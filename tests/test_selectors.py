#
# Object Printer - Selectors Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Optional

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objectprinter.errors import ConfigurationError
from objectprinter.members import get_member, register_members
from objectprinter.selectors import resolve_member


# Local Classes --------------------------------------------------------------------------------------------------------

@dataclass
class Person:
    name: str
    age: int


@dataclass
class Child(Person):
    parent: Optional["Child"] = None


@dataclass
class Car:
    model: str


# Tests ----------------------------------------------------------------------------------------------------------------

class TestResolveMember:

    @pytest.mark.parametrize("selector", [
        pytest.param("age", id="name"),
        pytest.param(lambda p: p.age, id="lambda"),
        pytest.param(lambda p: getattr(p, "age"), id="getattr"),
    ])
    def test_valid_selectors(self, selector):
        """Resolve to the member produced by members_of()."""
        assert resolve_member(Person, selector) is get_member(Person, "age")

    def test_member_selector(self):
        age = get_member(Person, "age")
        assert resolve_member(Person, age) is age

    def test_inherited_member(self):
        """Resolve an inherited attribute to the base class member."""
        member = resolve_member(Child, lambda c: c.name)
        assert member == get_member(Person, "name")
        assert member.owner is Person

    def test_base_member_on_subclass(self):
        assert resolve_member(Child, get_member(Person, "age")).owner is Person

    def test_registered_member(self):
        """Resolve attributes added with register_members()."""

        class Legacy:
            def __init__(self) -> None:
                self.code = 7

        register_members(Legacy, ("code", int))
        assert resolve_member(Legacy, lambda x: x.code).type is int

    @pytest.mark.parametrize("selector", [
        pytest.param(lambda p: p.name.upper(), id="method_call_on_attribute"),
        pytest.param(lambda p: p, id="identity"),
        pytest.param(lambda p: p.age + 1, id="arithmetic"),
        pytest.param(lambda p: p.name.first, id="chained_access"),
        pytest.param(lambda p: (p.name, p.age), id="two_accesses"),
        pytest.param(lambda p: "name", id="constant"),
        pytest.param(lambda: None, id="no_arguments"),
        pytest.param(42, id="int"),
        pytest.param(None, id="none"),
    ])
    def test_invalid_selectors(self, selector):
        """Reject anything but a single direct attribute access."""
        with pytest.raises(ConfigurationError, match=r"Person"):
            resolve_member(Person, selector)

    @pytest.mark.parametrize("selector", [
        pytest.param("height", id="name"),
        pytest.param(lambda p: p.height, id="lambda"),
    ])
    def test_unknown_member(self, selector):
        """Reject attributes the type does not declare."""
        with pytest.raises(ConfigurationError, match=r"no printable member 'height'"):
            resolve_member(Person, selector)

    def test_member_of_another_type(self):
        with pytest.raises(ConfigurationError, match=r"does not belong to Person"):
            resolve_member(Person, get_member(Car, "model"))

    def test_subclass_member_on_base(self):
        """Reject a member declared only by a subclass."""
        with pytest.raises(ConfigurationError):
            resolve_member(Person, get_member(Child, "parent"))

    def test_selector_error_chained(self):
        """Chain the error raised inside the selector."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_member(Person, lambda p: p.age + 1)
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_member(Person, "missing")

    def test_owner_not_a_type(self):
        with pytest.raises(TypeError, match=r"owner must be a type"):
            resolve_member(Person("Neo", 37), "name")
