"""
Error types raised while building or applying edit operations.

Every error subclasses ValueError, so callers that only care about bad input
can keep catching ValueError.
"""


class EditError(ValueError):
    """Base class for invalid edit requests."""


class OutOfRangeError(EditError):
    """A coordinate indexes past the end of the sequence.

    Attributes:
        field: Name of the offending coordinate (e.g. 'end', 'breakpoint')
        value: The 1-based coordinate that was given
        length: Length of the sequence being edited
    """

    def __init__(self, field: str, value: int, length: int, label: str = None):
        self.field = field
        self.value = value
        self.length = length
        label = label or field.replace('_', ' ').capitalize()
        super().__init__(f"{label} {value} is beyond sequence length {length}")


class InvalidBasesError(EditError):
    """Inserted sequence contains characters outside A, T, C, G, N."""

    def __init__(self, sequence: str, bad: str = ''):
        self.sequence = sequence
        self.bad = bad
        message = "Sequence must contain only valid DNA bases (A, T, C, G, N)"
        if bad:
            message += f", found: {bad}"
        super().__init__(message)


class CoordinateOrderError(EditError):
    """Coordinates are non-positive or in the wrong order."""
