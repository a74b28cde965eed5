"""
Object Printer exceptions.

Cyclic references are not errors: the printer renders them with a marker line.
"""


# Classes --------------------------------------------------------------------------------------------------------------

class ConfigurationError(ValueError):
    """
    A printing rule cannot be registered.

    Raised at registration time when a member selector does not denote a direct
    attribute access on the owner type, or names an attribute the type does not declare.
    """


class UnsupportedValueError(TypeError):
    """
    A value classified as a keyed collection or sequence could not be enumerated.

    The original exception is chained as __cause__. The whole print call fails,
    since skipping the value would leave the output with a broken shape.
    """
