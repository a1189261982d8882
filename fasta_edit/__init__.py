"""
fasta-edit - positional edits on single-sequence DNA FASTA records.

Deletion, insertion, inversion, duplication and copy-back/snapback
rearrangements with 1-based coordinates and header provenance.
"""

__version__ = "0.2.0"

from .core.engine import apply, apply_all
from .core.errors import (
    CoordinateOrderError,
    EditError,
    InvalidBasesError,
    OutOfRangeError,
)
from .core.operations import (
    Copyback,
    Delete,
    Duplicate,
    GenomeEnd,
    Insert,
    Invert,
    Operation,
    TandemDuplicate,
)
from .io.fasta import FastaRecord, read_fasta, write_fasta

__all__ = [
    "apply",
    "apply_all",
    "Operation",
    "Delete",
    "Insert",
    "Invert",
    "Duplicate",
    "TandemDuplicate",
    "Copyback",
    "GenomeEnd",
    "EditError",
    "OutOfRangeError",
    "InvalidBasesError",
    "CoordinateOrderError",
    "FastaRecord",
    "read_fasta",
    "write_fasta",
    "__version__",
]
