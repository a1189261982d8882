"""
Single-record FASTA reading and writing.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Optional, Union
import logging

logger = logging.getLogger(__name__)

# Standard FASTA line width for written sequences
FASTA_LINE_WIDTH = 70

STDIN_MARKER = '-'


class FastaFormatError(ValueError):
    """Input is not a single-record FASTA."""


@dataclass
class FastaRecord:
    """A FASTA header line (including '>') and its uppercase sequence."""
    header: str
    sequence: str

    def __len__(self) -> int:
        return len(self.sequence)

    def __repr__(self) -> str:
        return f"FastaRecord(header={self.header!r}, length={len(self.sequence)})"


def parse_fasta_lines(lines: Iterable[str], source: str = "input") -> FastaRecord:
    """
    Parse a single FASTA record from lines of text.

    The first line must be a header starting with '>'. Every following line
    is stripped of whitespace, uppercased and appended to the sequence.

    Args:
        lines: Lines of text, with or without trailing newlines
        source: Name used in error messages ('input' or a file path)

    Returns:
        FastaRecord

    Raises:
        FastaFormatError: If the input is empty, has no header, holds more
            than one record or has no sequence
    """
    iterator = iter(lines)
    first = next(iterator, None)
    if first is None:
        raise FastaFormatError(f"No sequence data in {source}: input is empty")

    header = first.rstrip('\r\n')
    if not header.startswith('>'):
        raise FastaFormatError(
            f"{source} does not appear to be a valid FASTA file (no header starting with '>')"
        )

    chunks = []
    for line in iterator:
        if line.startswith('>'):
            raise FastaFormatError(
                f"{source} contains multiple sequences. Only single-sequence files are supported."
            )
        chunks.append(line.strip().upper())

    sequence = ''.join(chunks)
    if not sequence:
        raise FastaFormatError(f"No sequence found in {source}")

    return FastaRecord(header=header, sequence=sequence)


def read_fasta(source: Union[str, Path, IO[str]] = STDIN_MARKER) -> FastaRecord:
    """
    Read a single-record FASTA from a path, '-' (stdin) or an open text stream.
    """
    if hasattr(source, 'read'):
        name = getattr(source, 'name', 'input')
        return parse_fasta_lines(source, str(name))

    if str(source) == STDIN_MARKER:
        return parse_fasta_lines(sys.stdin, 'input')

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, encoding='utf-8') as f:
        record = parse_fasta_lines(f, str(path))

    logger.debug(f"Read {len(record)}bp from {path}")
    return record


def format_fasta(header: str, sequence: str, line_width: int = FASTA_LINE_WIDTH) -> str:
    """Render a record as FASTA text with the sequence wrapped at line_width."""
    if line_width < 1:
        raise ValueError(f"line_width must be positive, got {line_width}")
    lines = [header]
    lines.extend(
        sequence[i:i + line_width] for i in range(0, len(sequence), line_width)
    )
    return '\n'.join(lines) + '\n'


def write_fasta(
    header: str,
    sequence: str,
    output: Optional[Union[str, Path, IO[str]]] = None,
    line_width: int = FASTA_LINE_WIDTH,
) -> None:
    """
    Write a record as FASTA.

    Args:
        header: Header line, written verbatim
        sequence: Sequence, wrapped at line_width characters per line
        output: Path or writable text stream; stdout when None or '-'
        line_width: Bases per sequence line
    """
    text = format_fasta(header, sequence, line_width)

    if output is None or (not hasattr(output, 'write') and str(output) == STDIN_MARKER):
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    if hasattr(output, 'write'):
        output.write(text)
        return

    path = Path(output)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.debug(f"Wrote {len(sequence)}bp to {path}")
