"""
I/O modules for fasta-edit.
"""

from .fasta import (
    FASTA_LINE_WIDTH,
    FastaFormatError,
    FastaRecord,
    format_fasta,
    parse_fasta_lines,
    read_fasta,
    write_fasta,
)

__all__ = [
    'FASTA_LINE_WIDTH',
    'FastaFormatError',
    'FastaRecord',
    'parse_fasta_lines',
    'read_fasta',
    'format_fasta',
    'write_fasta',
]
