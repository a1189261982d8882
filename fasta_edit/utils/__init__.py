"""
Utility modules for fasta-edit.
"""

from .sequence import (
    VALID_BASES,
    complement_base,
    gc_content,
    invalid_bases,
    reverse_complement,
)

__all__ = [
    'VALID_BASES',
    'complement_base',
    'reverse_complement',
    'invalid_bases',
    'gc_content',
]
