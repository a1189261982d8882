"""
Operation parsing and batch configuration for fasta-edit.

Turns command-line values or YAML mappings into validated Operation objects,
and loads batch job lists from YAML.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from .core.errors import CoordinateOrderError, InvalidBasesError
from .core.operations import (
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
from .io.fasta import FASTA_LINE_WIDTH
from .utils.sequence import invalid_bases


OPERATION_NAMES = ('delete', 'insert', 'invert', 'duplicate', 'copyback')

_OPERATION_LABELS = {
    Delete: 'delete',
    Insert: 'insert',
    Invert: 'invert',
    Duplicate: 'duplicate',
    TandemDuplicate: 'tandem_duplicate',
    Copyback: 'copyback',
}


def operation_name(op: Operation) -> str:
    """Short name of an operation, e.g. 'tandem_duplicate'."""
    if isinstance(op, Copyback) and op.is_snapback:
        return 'snapback'
    return _OPERATION_LABELS[type(op)]


def _as_position(value: Any, label: str) -> int:
    """Coerce a position to int; bools and non-integers are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number") from None
    if isinstance(value, float) and value != number:
        raise ValueError(f"{label} must be a whole number")
    return number


def _require(value: Any, message: str) -> Any:
    if value is None:
        raise ValueError(message)
    return value


def build_operation(
    kind: str,
    start: Optional[int] = None,
    end: Optional[int] = None,
    position: Optional[int] = None,
    sequence: Optional[str] = None,
    complement: bool = False,
    tandem: bool = False,
    gend: Any = None,
    breakpoint: Optional[int] = None,
    backstart: Optional[int] = None,
    snapback: bool = False,
) -> Operation:
    """
    Build and validate an Operation from loosely typed values.

    Args:
        kind: One of 'delete', 'insert', 'invert', 'duplicate', 'copyback'
        start, end: 1-based inclusive range (delete/invert/duplicate)
        position: 1-based insert position (insert/duplicate)
        sequence: Bases to insert (insert)
        complement: Reverse complement instead of plain reversal (invert)
        tandem: Duplicate right after the source range (duplicate)
        gend: 5 or 3 (copyback)
        breakpoint, backstart: Copyback coordinates
        snapback: Copyback with backstart equal to breakpoint

    Returns:
        Validated Operation

    Raises:
        ValueError: On missing or non-numeric arguments, or unknown kind
        CoordinateOrderError: On misordered or non-positive coordinates
        InvalidBasesError: On an insert with non-DNA characters
    """
    kind = str(kind).strip().lower()

    if kind == 'delete':
        op = Delete(
            start=_as_position(_require(start, "Delete operation requires start and end positions"), "Start position"),
            end=_as_position(_require(end, "Delete operation requires start and end positions"), "End position"),
        )

    elif kind == 'insert':
        _require(position, "Insert operation requires position and sequence")
        _require(sequence, "Insert operation requires position and sequence")
        bases = str(sequence).strip()
        bad = invalid_bases(bases)
        if bad:
            raise InvalidBasesError(bases, bad)
        op = Insert(
            position=_as_position(position, "Position"),
            sequence=bases.upper(),
        )

    elif kind == 'invert':
        op = Invert(
            start=_as_position(_require(start, "Invert operation requires start and end positions"), "Start position"),
            end=_as_position(_require(end, "Invert operation requires start and end positions"), "End position"),
            complement=bool(complement),
        )

    elif kind in ('duplicate', 'tandem_duplicate'):
        tandem = tandem or kind == 'tandem_duplicate'
        if tandem:
            message = "Tandem duplicate operation requires start and end positions"
            if position is not None:
                raise ValueError("Tandem duplicate does not take an insert position")
            op = TandemDuplicate(
                start=_as_position(_require(start, message), "Start position"),
                end=_as_position(_require(end, message), "End position"),
            )
        else:
            message = "Duplicate operation requires start, end, and insert positions"
            op = Duplicate(
                start=_as_position(_require(start, message), "Start position"),
                end=_as_position(_require(end, message), "End position"),
                position=_as_position(_require(position, message), "Insert position"),
            )

    elif kind in ('copyback', 'snapback'):
        snapback = snapback or kind == 'snapback'
        genome_end = GenomeEnd.parse(_require(gend, "Copyback operation requires gend"))
        if snapback:
            if backstart is not None:
                raise ValueError("Snapback copyback takes no backstart (it equals the breakpoint)")
            bp = _as_position(
                _require(breakpoint, "Copyback with snapback requires gend and breakpoint"),
                "Breakpoint",
            )
            op = Copyback(gend=genome_end, breakpoint=bp, backstart=bp)
        else:
            message = "Copyback operation requires gend, breakpoint, and backstart"
            bp = _as_position(_require(breakpoint, message), "Breakpoint")
            bs = _as_position(_require(backstart, message), "Backstart")
            if bp >= 1 and bs >= 1 and bs >= bp:
                raise CoordinateOrderError(
                    f"For {genome_end.label} end, backstart must be less than breakpoint"
                )
            op = Copyback(gend=genome_end, breakpoint=bp, backstart=bs)

    else:
        raise ValueError(
            f"Unknown operation '{kind}'. Use 'delete', 'insert', 'invert', 'duplicate', or 'copyback'"
        )

    return validate_operation(op)


_OPERATION_KEYS = {
    'start', 'end', 'position', 'sequence', 'complement', 'tandem',
    'gend', 'breakpoint', 'backstart', 'snapback',
}


def operation_from_dict(d: Dict[str, Any]) -> Operation:
    """
    Create an Operation from a YAML mapping.

    Example:
        >>> operation_from_dict({'operation': 'delete', 'start': 3, 'end': 5})
        Delete(start=3, end=5)
    """
    if not isinstance(d, dict):
        raise ValueError(f"Operation entry must be a mapping, got {d!r}")
    if 'operation' not in d:
        raise ValueError(f"Operation entry is missing the 'operation' key: {d}")
    unknown = set(d) - _OPERATION_KEYS - {'operation'}
    if unknown:
        raise ValueError(f"Unknown keys for operation '{d['operation']}': {', '.join(sorted(unknown))}")
    params = {k: v for k, v in d.items() if k in _OPERATION_KEYS}
    return build_operation(d['operation'], **params)


@dataclass
class EditJob:
    """One input record plus the ordered edits to apply to it."""
    name: str
    input_path: Path
    operations: List[Operation]
    output_path: Path

    @classmethod
    def from_dict(cls, d: Dict, output_dir: Path, index: int = 0) -> 'EditJob':
        """Create from a YAML job mapping.

        A job holds either a single inline operation ('operation' plus its
        coordinates) or an 'operations' list applied in order.
        """
        if not isinstance(d, dict):
            raise ValueError(f"Job {index + 1} must be a mapping, got {d!r}")
        if 'input' not in d:
            raise ValueError(f"Job {index + 1} has no 'input'")
        input_path = Path(d['input'])
        name = str(d.get('name') or f"{input_path.stem}_{index + 1}")

        if 'operations' in d:
            entries = d['operations']
            if not isinstance(entries, list) or not entries:
                raise ValueError(f"Job '{name}': 'operations' must be a non-empty list")
        elif 'operation' in d:
            entries = [{k: v for k, v in d.items() if k == 'operation' or k in _OPERATION_KEYS}]
        else:
            raise ValueError(f"Job '{name}' has neither 'operation' nor 'operations'")

        operations = []
        for entry in entries:
            try:
                operations.append(operation_from_dict(entry))
            except ValueError as e:
                raise ValueError(f"Job '{name}': {e}") from e

        output = d.get('output')
        if output:
            output_path = Path(output)
            if not output_path.is_absolute():
                output_path = output_dir / output_path
        else:
            output_path = output_dir / f"{name}.fa"

        return cls(
            name=name,
            input_path=input_path,
            operations=operations,
            output_path=output_path,
        )


@dataclass
class BatchConfig:
    """Full batch configuration."""
    jobs: List[EditJob]
    output_dir: Path = field(default_factory=lambda: Path('./edited'))
    threads: int = 4
    line_width: int = FASTA_LINE_WIDTH
    summary_name: str = 'edit_summary.tsv'

    @property
    def summary_path(self) -> Path:
        return self.output_dir / self.summary_name

    @classmethod
    def from_dict(cls, data: Dict, base_dir: Optional[Path] = None) -> 'BatchConfig':
        """Create from a parsed YAML mapping.

        Relative input paths and output_dir are resolved against base_dir
        when given (the directory holding the config file).
        """
        if not isinstance(data, dict):
            raise ValueError("Batch config must be a mapping")

        output_dir = Path(data.get('output_dir', './edited'))
        if base_dir is not None and not output_dir.is_absolute():
            output_dir = base_dir / output_dir

        threads = _as_position(data.get('threads', 4), "threads")
        if threads < 1:
            raise ValueError(f"threads must be at least 1, got {threads}")

        line_width = _as_position(data.get('line_width', FASTA_LINE_WIDTH), "line_width")
        if line_width < 1:
            raise ValueError(f"line_width must be at least 1, got {line_width}")

        job_entries = data.get('jobs') or []
        if not job_entries:
            raise ValueError("Batch config has no jobs")
        if not isinstance(job_entries, list):
            raise ValueError("'jobs' must be a list of job mappings")

        jobs = []
        for i, entry in enumerate(job_entries):
            job = EditJob.from_dict(entry, output_dir, index=i)
            if base_dir is not None and not job.input_path.is_absolute():
                job.input_path = base_dir / job.input_path
            jobs.append(job)

        names = [job.name for job in jobs]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate job names: {', '.join(duplicates)}")

        return cls(
            jobs=jobs,
            output_dir=output_dir,
            threads=threads,
            line_width=line_width,
            summary_name=data.get('summary', 'edit_summary.tsv'),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> 'BatchConfig':
        """Load configuration from YAML file."""
        path = Path(path)
        with open(path, encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Could not parse {path}: {e}") from e
        return cls.from_dict(data, base_dir=path.parent)


CONFIG_TEMPLATE = '''# fasta-edit batch configuration
# Edit this file and run:  fasta-edit batch <this file>

# Output directory for edited FASTA files and the summary table
output_dir: ./edited

# Worker processes (1 = run jobs one after another in-process)
threads: 4

# Bases per line in written FASTA files
line_width: 70

# Summary table written inside output_dir
summary: edit_summary.tsv

# Positions are 1-based and inclusive on the sequence each edit receives
jobs:
  - name: del_10_20
    input: genome.fa
    operation: delete
    start: 10
    end: 20

  - name: ins_15
    input: genome.fa
    operation: insert
    position: 15
    sequence: ATCG

  - name: inv_25_35
    input: genome.fa
    operation: invert
    start: 25
    end: 35
    complement: true          # reverse complement instead of plain reversal

  - name: dup_10_20_50
    input: genome.fa
    operation: duplicate
    start: 10
    end: 20
    position: 50              # or tandem: true without a position

  - name: cb5_50_20
    input: genome.fa
    output: cb5_50_20.fa
    operation: copyback
    gend: 5                   # 5 or 3
    breakpoint: 50
    backstart: 20             # or snapback: true without a backstart

  - name: chained
    input: genome.fa
    operations:               # applied in order
      - {operation: delete, start: 5, end: 10}
      - {operation: insert, position: 20, sequence: GGGG}
'''
