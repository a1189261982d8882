"""
Edit engine: applies a single operation to a header + sequence pair.

All coordinates arrive 1-based and inclusive. A 1-based position p maps to
index p - 1 and a range [start, end] maps to the slice [start - 1:end].

The engine never mutates its inputs and never exits the process. Coordinates
that run past the sequence raise OutOfRangeError; everything else about the
request is checked by validate_operation before any slicing.
"""

import logging
from typing import Iterable, Tuple

from .errors import OutOfRangeError
from .operations import (
    Copyback,
    Delete,
    Duplicate,
    GenomeEnd,
    Insert,
    Invert,
    Operation,
    TandemDuplicate,
    validate_operation,
)
from ..utils.sequence import reverse_complement

logger = logging.getLogger(__name__)


def _check_end(end: int, length: int, field: str = 'end', label: str = 'End position'):
    """Range ends and copyback coordinates may reach the last base, not beyond."""
    if end > length:
        raise OutOfRangeError(field, end, length, label)


def _check_insert_position(position: int, length: int):
    """Insert points may be one past the last base (append)."""
    if position - 1 > length:
        raise OutOfRangeError('position', position, length, 'Insert position')


def _annotate(header: str, description: str) -> str:
    return f"{header} [{description}]"


def delete(header: str, sequence: str, op: Delete) -> Tuple[str, str]:
    """Remove bases op.start..op.end."""
    _check_end(op.end, len(sequence))
    start_idx = op.start - 1

    new_sequence = sequence[:start_idx] + sequence[op.end:]
    deleted_length = op.end - start_idx
    new_header = _annotate(
        header, f"deleted {deleted_length}bp at positions {op.start}-{op.end}"
    )
    return new_header, new_sequence


def insert(header: str, sequence: str, op: Insert) -> Tuple[str, str]:
    """Insert op.sequence (uppercased) before op.position."""
    _check_insert_position(op.position, len(sequence))
    insert_idx = op.position - 1
    bases = op.sequence.upper()

    new_sequence = sequence[:insert_idx] + bases + sequence[insert_idx:]
    new_header = _annotate(
        header, f"inserted {len(bases)}bp '{bases}' at position {op.position}"
    )
    return new_header, new_sequence


def invert(header: str, sequence: str, op: Invert) -> Tuple[str, str]:
    """Reverse, or reverse complement, bases op.start..op.end in place."""
    _check_end(op.end, len(sequence))
    start_idx = op.start - 1

    region = sequence[start_idx:op.end]
    if op.complement:
        processed = reverse_complement(region)
        action = "reverse complemented"
    else:
        processed = region[::-1]
        action = "inverted"

    new_sequence = sequence[:start_idx] + processed + sequence[op.end:]
    new_header = _annotate(
        header, f"{action} {len(region)}bp at positions {op.start}-{op.end}"
    )
    return new_header, new_sequence


def duplicate(header: str, sequence: str, op: Duplicate) -> Tuple[str, str]:
    """Copy op.start..op.end and insert it at op.position of the original."""
    _check_end(op.end, len(sequence))
    _check_insert_position(op.position, len(sequence))

    segment = sequence[op.start - 1:op.end]
    insert_idx = op.position - 1

    new_sequence = sequence[:insert_idx] + segment + sequence[insert_idx:]
    new_header = _annotate(
        header,
        f"duplicated {len(segment)}bp from positions {op.start}-{op.end} "
        f"to position {op.position}",
    )
    return new_header, new_sequence


def tandem_duplicate(header: str, sequence: str, op: TandemDuplicate) -> Tuple[str, str]:
    """Copy op.start..op.end and place the copy directly after the original."""
    _check_end(op.end, len(sequence))
    start_idx = op.start - 1

    segment = sequence[start_idx:op.end]
    new_sequence = sequence[:start_idx] + segment + segment + sequence[op.end:]
    new_header = _annotate(
        header, f"tandem duplicated {len(segment)}bp at positions {op.start}-{op.end}"
    )
    return new_header, new_sequence


def _copyback_5prime(sequence: str, breakpoint: int, backstart: int) -> str:
    # Keep bases 1..breakpoint, then read back from backstart to base 1
    return sequence[:breakpoint] + reverse_complement(sequence[:backstart])


def copyback(header: str, sequence: str, op: Copyback) -> Tuple[str, str]:
    """
    Build a copy-back defective genome.

    For the 5' end the product keeps bases 1..breakpoint and appends the
    reverse complement of bases 1..backstart. For the 3' end the same
    construction runs on the reverse complement of the whole sequence, so
    breakpoint and backstart count from the 3' end of the reference.

    A snapback (backstart == breakpoint) is computed the same way; it only
    changes the header wording.
    """
    _check_end(op.breakpoint, len(sequence), 'breakpoint', 'Breakpoint')
    _check_end(op.backstart, len(sequence), 'backstart', 'Backstart')

    if op.gend is GenomeEnd.FIVE_PRIME:
        new_sequence = _copyback_5prime(sequence, op.breakpoint, op.backstart)
        reference = ""
    else:
        new_sequence = _copyback_5prime(
            reverse_complement(sequence), op.breakpoint, op.backstart
        )
        reference = " of reference revcomp"

    if op.is_snapback:
        description = f"{op.gend.label} copyback (snapback) at position {op.breakpoint}{reference}"
    else:
        description = (
            f"{op.gend.label} copyback up to position {op.breakpoint}{reference} "
            f"then reverse complement of position {op.backstart} on"
        )
    return _annotate(header, description), new_sequence


_HANDLERS = {
    Delete: delete,
    Insert: insert,
    Invert: invert,
    Duplicate: duplicate,
    TandemDuplicate: tandem_duplicate,
    Copyback: copyback,
}


def apply(header: str, sequence: str, op: Operation) -> Tuple[str, str]:
    """
    Apply one edit operation.

    Args:
        header: FASTA header line (kept verbatim, description appended)
        sequence: Uppercase sequence to edit
        op: Operation with 1-based coordinates

    Returns:
        Tuple of (new_header, new_sequence)

    Raises:
        OutOfRangeError: If a coordinate lies past the end of the sequence
        CoordinateOrderError: If coordinates are non-positive or misordered
        InvalidBasesError: If an insert carries non-DNA characters
    """
    validate_operation(op)
    handler = _HANDLERS[type(op)]
    new_header, new_sequence = handler(header, sequence, op)
    logger.debug(
        f"Applied {type(op).__name__}: {len(sequence)}bp -> {len(new_sequence)}bp"
    )
    return new_header, new_sequence


def apply_all(
    header: str,
    sequence: str,
    operations: Iterable[Operation],
) -> Tuple[str, str]:
    """
    Apply operations in order, each to the result of the previous one.

    Coordinates of every operation refer to the sequence it receives, the
    same as piping one edit into the next on the command line.
    """
    for op in operations:
        header, sequence = apply(header, sequence, op)
    return header, sequence
