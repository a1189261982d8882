"""Tests for fasta_edit.utils module."""

import pytest
from fasta_edit.utils.sequence import (
    complement_base,
    gc_content,
    invalid_bases,
    reverse_complement,
)


class TestComplementBase:
    """Test single-base complement."""

    @pytest.mark.parametrize("base,expected", [
        ("A", "T"), ("T", "A"), ("C", "G"), ("G", "C"), ("N", "N"),
    ])
    def test_watson_crick_pairs(self, base, expected):
        """Test each base maps to its complement."""
        assert complement_base(base) == expected

    def test_lowercase_is_case_insensitive(self):
        """Test lowercase bases complement to uppercase."""
        assert complement_base("a") == "T"
        assert complement_base("g") == "C"

    def test_unknown_character_unchanged(self):
        """Test characters outside the alphabet pass through."""
        assert complement_base("X") == "X"
        assert complement_base("-") == "-"
        assert complement_base("r") == "r"


class TestReverseComplement:
    """Test reverse complement function."""

    def test_simple_sequence(self):
        """Test simple sequence reverse complement."""
        assert reverse_complement("ATCG") == "CGAT"

    def test_longer_sequence(self):
        """Test longer sequence reverse complement."""
        seq = "GCTGAAGCACTGCACGCCGT"
        assert reverse_complement(seq) == "ACGGCGTGCAGTGCTTCAGC"

    def test_reverse_complement_is_involutive(self):
        """Test that reverse complement of reverse complement is original."""
        seq = "ATCGATCGATCG"
        assert reverse_complement(reverse_complement(seq)) == seq

    def test_non_palindromic(self):
        """Test a sequence that is not its own reverse complement."""
        assert reverse_complement("AACG") == "CGTT"

    def test_mixed_case_normalized(self):
        """Test mixed case input gives uppercase output."""
        assert reverse_complement("AtCg") == "CGAT"

    def test_pass_through_characters(self):
        """Test unknown characters keep their place in reversed order."""
        assert reverse_complement("AXG") == "CXT"

    def test_empty(self):
        """Test empty sequence."""
        assert reverse_complement("") == ""


class TestAlphabet:
    """Test DNA alphabet helpers."""

    def test_invalid_bases_none(self):
        """Test valid sequence has no invalid characters."""
        assert invalid_bases("acgtnACGTN") == ""

    def test_invalid_bases_distinct_in_order(self):
        """Test invalid characters are reported once each, in order."""
        assert invalid_bases("AXCZX") == "XZ"


class TestGcContent:
    """Test GC content."""

    def test_all_gc(self):
        """Test a GC-only sequence."""
        assert gc_content("GGCC") == 1.0

    def test_half(self):
        """Test equal GC and AT gives one half."""
        assert gc_content("ATGC") == 0.5

    def test_no_acgt(self):
        """Test sequence of only N returns 0."""
        assert gc_content("NNNN") == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
