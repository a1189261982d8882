"""
Sequence manipulation utilities.

Provides the base-level DNA helpers used by the edit engine.
"""

# Alphabet accepted for inserted sequences
VALID_BASES = frozenset('ATCGN')

_COMPLEMENT = {
    'A': 'T', 'T': 'A', 'G': 'C', 'C': 'G', 'N': 'N',
}


def complement_base(base: str) -> str:
    """Return the Watson-Crick complement of a single base.

    Matching is case-insensitive and the complement is uppercase. Characters
    outside A/T/C/G/N are returned unchanged.
    """
    return _COMPLEMENT.get(base.upper(), base)


def reverse_complement(seq: str) -> str:
    """Return reverse complement of DNA sequence."""
    return ''.join(complement_base(base) for base in reversed(seq))


def invalid_bases(seq: str) -> str:
    """Return the distinct characters of seq that are not valid DNA bases.

    Characters are returned in order of first appearance, e.g. 'XZ' for 'AXCZX'.
    """
    seen = []
    for base in seq:
        if base.upper() not in VALID_BASES and base not in seen:
            seen.append(base)
    return ''.join(seen)


def gc_content(seq: str) -> float:
    """Calculate GC content of a sequence (0.0 to 1.0)."""
    seq = seq.upper()
    gc = sum(1 for base in seq if base in 'GC')
    total = sum(1 for base in seq if base in 'ACGT')
    return gc / total if total > 0 else 0.0
