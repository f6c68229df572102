"""Shared test fixtures for alnio tests."""

import pytest

from alnio.sequence import SeqRecord
from alnio.tray import Tray


@pytest.fixture
def write_fasta(tmp_path):
    """Writes the given text to a file and returns its name."""
    def _write(text, name="input.fasta"):
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return str(path)
    return _write


@pytest.fixture
def aligned_tray():
    """Creates a tray whose input and aligned slots hold the same record."""
    def _make(name="seq1", bases="ACGU", attributes=None):
        record = SeqRecord(name, bases, attributes)
        return Tray(record.copy(), record)
    return _make


@pytest.fixture
def sample_fasta():
    """A small FASTA file with junk, comments and wrapped sequences."""
    return (
        "this line is not part of any record\n"
        ">seq1 first sequence\n"
        ";note=hello\n"
        "; align_ident_slv = 0.95 \n"
        ";just a comment\n"
        "ACGU\n"
        "ACGU\n"
        ">seq2\n"
        "GGCCUUAA\n"
        ">seq3 third>sequence\n"
        ";note=bye\n"
        "--ACGU--\n"
        "\n"
        ">seq4 fourth\n"
        "NNNN\n"
        "ACGT\n"
    )
