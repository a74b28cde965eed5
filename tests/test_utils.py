#
# Object Printer - Utils Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objectprinter.utils import class_name, fmt_type, fmt_value


# Local Classes --------------------------------------------------------------------------------------------------------

class Person:
    class Address:
        pass


class BrokenRepr:
    def __repr__(self):
        raise RuntimeError("repr exploded")


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassName:

    @pytest.mark.parametrize("obj, expected", [
        pytest.param(10, "int", id="int_instance"),
        pytest.param(int, "int", id="int_type"),
        pytest.param([], "list", id="list"),
        pytest.param(Person(), "Person", id="instance"),
        pytest.param(Person, "Person", id="class"),
        pytest.param(Person.Address(), "Address", id="nested"),
    ])
    def test_short(self, obj, expected):
        assert class_name(obj) == expected

    def test_fully_qualified(self):
        """Qualify with module and qualified name."""
        assert class_name(Person.Address(), fully_qualified=True) == f"{__name__}.Person.Address"

    def test_builtins_never_qualified(self):
        assert class_name({}, fully_qualified=True) == "dict"


class TestFormatters:

    def test_fmt_type(self):
        assert fmt_type(42) == "<int>"
        assert fmt_type(Person) == "<Person>"

    def test_fmt_value(self):
        assert fmt_value(42) == "<int: 42>"
        assert fmt_value("abc") == "<str: 'abc'>"

    def test_fmt_value_long(self):
        """Shorten long reprs."""
        assert len(fmt_value("x" * 1000)) < 100

    def test_fmt_value_broken_repr(self):
        """Never propagate errors from __repr__."""
        text = fmt_value(BrokenRepr())
        assert text.startswith("<BrokenRepr: ")
        assert "repr exploded" not in text
