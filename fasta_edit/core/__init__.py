"""
Core edit modules for fasta-edit.
"""

from .engine import (
    apply,
    apply_all,
)
from .errors import (
    CoordinateOrderError,
    EditError,
    InvalidBasesError,
    OutOfRangeError,
)
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

__all__ = [
    # Operations
    'Operation',
    'Delete',
    'Insert',
    'Invert',
    'Duplicate',
    'TandemDuplicate',
    'Copyback',
    'GenomeEnd',
    'validate_operation',
    # Engine
    'apply',
    'apply_all',
    # Errors
    'EditError',
    'OutOfRangeError',
    'InvalidBasesError',
    'CoordinateOrderError',
]
