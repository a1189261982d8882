"""
Pytest configuration and fixtures for fasta-edit tests.
"""

import pytest


# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def write_fasta_file(tmp_path):
    """Factory writing FASTA text into tmp_path and returning its path."""
    def _write(text, name="input.fa"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
