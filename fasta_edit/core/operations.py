"""
Edit operation models.

Each operation is a small dataclass carrying 1-based, inclusive coordinates on
the sequence it will be applied to. Together they form a closed set:

- Delete: remove bases start..end
- Insert: insert new bases before position
- Invert: reverse (or reverse complement) bases start..end
- Duplicate: copy bases start..end to position
- TandemDuplicate: copy bases start..end directly after themselves
- Copyback: defective-genome copy-back / snapback from the 5' or 3' end
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import CoordinateOrderError, InvalidBasesError
from ..utils.sequence import invalid_bases


class GenomeEnd(Enum):
    """Genome end a copyback is generated from."""
    FIVE_PRIME = "5"
    THREE_PRIME = "3"

    @property
    def label(self) -> str:
        return f"{self.value}'"

    @classmethod
    def parse(cls, value) -> 'GenomeEnd':
        """Parse 5/3 given as int, "5", "5'", "5prime" or "five_prime"."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace('_', '').replace('-', '')
        aliases = {
            '5': cls.FIVE_PRIME, "5'": cls.FIVE_PRIME, '5prime': cls.FIVE_PRIME,
            'fiveprime': cls.FIVE_PRIME,
            '3': cls.THREE_PRIME, "3'": cls.THREE_PRIME, '3prime': cls.THREE_PRIME,
            'threeprime': cls.THREE_PRIME,
        }
        if text not in aliases:
            raise ValueError(f"gend must be either 5 or 3, got {value!r}")
        return aliases[text]


@dataclass
class Delete:
    """Delete bases start..end (inclusive)."""
    start: int
    end: int


@dataclass
class Insert:
    """Insert sequence so that its first base lands at position."""
    position: int
    sequence: str


@dataclass
class Invert:
    """Reverse bases start..end; reverse complement them if complement is set."""
    start: int
    end: int
    complement: bool = False


@dataclass
class Duplicate:
    """Copy bases start..end and insert the copy at position of the original."""
    start: int
    end: int
    position: int


@dataclass
class TandemDuplicate:
    """Copy bases start..end and insert the copy right after end."""
    start: int
    end: int


@dataclass
class Copyback:
    """
    Copy-back rearrangement of a defective viral genome.

    Attributes:
        gend: Genome end the copyback starts from
        breakpoint: Last kept position (on the reverse complement for 3')
        backstart: Position the polymerase resumes copying back from
    """
    gend: GenomeEnd
    breakpoint: int
    backstart: int

    @property
    def is_snapback(self) -> bool:
        return self.backstart == self.breakpoint


Operation = Union[Delete, Insert, Invert, Duplicate, TandemDuplicate, Copyback]


def _require_positive(**positions: int):
    for name, value in positions.items():
        if value < 1:
            raise CoordinateOrderError(
                f"Positions must be 1-based (starting from 1), got {name}={value}"
            )


def _require_ordered(start: int, end: int):
    if start > end:
        raise CoordinateOrderError(
            f"Start position must be <= end position, got {start} > {end}"
        )


def validate_operation(op: Operation) -> Operation:
    """
    Check the coordinate contract of an operation independent of any sequence.

    Positions must be >= 1 and ranges ordered. For copybacks backstart may not
    exceed breakpoint; equality is the snapback case. Inserted bases must be
    A/T/C/G/N.

    Returns:
        The same operation, for chaining

    Raises:
        CoordinateOrderError: On non-positive or misordered coordinates
        InvalidBasesError: On an insert with invalid characters
        TypeError: If op is not one of the operation types
    """
    if isinstance(op, (Delete, Invert, TandemDuplicate)):
        _require_positive(start=op.start, end=op.end)
        _require_ordered(op.start, op.end)
    elif isinstance(op, Duplicate):
        _require_positive(start=op.start, end=op.end, position=op.position)
        _require_ordered(op.start, op.end)
    elif isinstance(op, Insert):
        _require_positive(position=op.position)
        bad = invalid_bases(op.sequence)
        if bad:
            raise InvalidBasesError(op.sequence, bad)
    elif isinstance(op, Copyback):
        _require_positive(breakpoint=op.breakpoint, backstart=op.backstart)
        if op.backstart > op.breakpoint:
            raise CoordinateOrderError(
                f"For {op.gend.label} end, backstart must not be greater than breakpoint "
                f"({op.backstart} > {op.breakpoint})"
            )
    else:
        raise TypeError(f"Unknown operation type: {type(op).__name__}")
    return op
