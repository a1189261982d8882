"""
Batch processing of edit jobs.

Each job reads one single-record FASTA, applies its ordered operations and
writes the edited record. Jobs share nothing, so they run independently in a
process pool; a failing job is recorded in its JobResult and never stops the
others.
"""

from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
import logging

import pandas as pd

from .config import BatchConfig, EditJob, operation_name
from .core.engine import apply_all
from .io.fasta import FASTA_LINE_WIDTH, read_fasta, write_fasta
from .utils.sequence import gc_content

logger = logging.getLogger(__name__)


@dataclass
class JobResult:
    """Outcome of a single batch job."""
    name: str
    input_path: Path
    output_path: Optional[Path]
    success: bool
    operations: str = ''
    original_length: int = 0
    edited_length: int = 0
    header: Optional[str] = None
    gc_content: Optional[float] = None
    error: Optional[str] = None

    @property
    def length_change(self) -> int:
        return self.edited_length - self.original_length if self.success else 0

    def to_dict(self) -> Dict:
        """Convert to dictionary for output."""
        return {
            'job': self.name,
            'input': str(self.input_path),
            'output': str(self.output_path) if self.success else 'NA',
            'status': 'ok' if self.success else 'failed',
            'operations': self.operations,
            'original_length': self.original_length,
            'edited_length': self.edited_length if self.success else 'NA',
            'length_change': self.length_change if self.success else 'NA',
            'gc_content': f"{self.gc_content:.4f}" if self.gc_content is not None else 'NA',
            'header': self.header if self.header is not None else 'NA',
            'error': self.error or '',
        }


def run_job(job: EditJob, line_width: int = FASTA_LINE_WIDTH) -> JobResult:
    """
    Run one job, capturing input and edit errors in the result.

    This is a module-level function (not a method) for efficient pickling
    when using ProcessPoolExecutor.
    """
    ops_label = ','.join(operation_name(op) for op in job.operations)
    result = JobResult(
        name=job.name,
        input_path=job.input_path,
        output_path=job.output_path,
        success=False,
        operations=ops_label,
    )

    try:
        record = read_fasta(job.input_path)
    except (OSError, ValueError) as e:
        result.error = str(e)
        return result

    result.original_length = len(record.sequence)

    try:
        header, sequence = apply_all(record.header, record.sequence, job.operations)
    except ValueError as e:
        result.error = str(e)
        return result

    try:
        job.output_path.parent.mkdir(parents=True, exist_ok=True)
        write_fasta(header, sequence, job.output_path, line_width=line_width)
    except OSError as e:
        result.error = f"Could not write {job.output_path}: {e}"
        return result

    result.success = True
    result.header = header
    result.edited_length = len(sequence)
    result.gc_content = gc_content(sequence)
    return result


def run_batch(config: BatchConfig) -> List[JobResult]:
    """
    Run every job in the config.

    Args:
        config: Batch configuration

    Returns:
        JobResults in the same order as config.jobs
    """
    config.output_dir.mkdir(parents=True, exist_ok=True)
    n_jobs = len(config.jobs)
    n_workers = min(config.threads, n_jobs)

    logger.info(f"Processing batch of {n_jobs} jobs using {n_workers} workers")

    results: Dict[int, JobResult] = {}

    if n_workers <= 1:
        for idx, job in enumerate(config.jobs):
            results[idx] = run_job(job, config.line_width)
            _log_result(results[idx], idx, n_jobs)
    else:
        with ProcessPoolExecutor(max_workers=n_workers) as executor:
            future_to_idx = {
                executor.submit(run_job, job, config.line_width): idx
                for idx, job in enumerate(config.jobs)
            }

            for future in as_completed(future_to_idx):
                idx = future_to_idx[future]
                try:
                    results[idx] = future.result()
                except Exception as e:
                    logger.error(f"Job {config.jobs[idx].name} crashed: {e}")
                    raise
                _log_result(results[idx], idx, n_jobs)

    ordered = [results[idx] for idx in range(n_jobs)]
    n_failed = sum(1 for r in ordered if not r.success)
    logger.info(f"Batch complete: {n_jobs - n_failed} succeeded, {n_failed} failed")
    return ordered


def _log_result(result: JobResult, idx: int, n_jobs: int):
    if result.success:
        logger.info(
            f"Completed job {idx + 1}/{n_jobs} ({result.name}): "
            f"{result.original_length}bp -> {result.edited_length}bp"
        )
    else:
        logger.warning(f"Job {idx + 1}/{n_jobs} ({result.name}) failed: {result.error}")


def write_summary_tsv(results: List[JobResult], output_path: Path) -> Path:
    """
    Write one row per job to a TSV file.

    Args:
        results: List of JobResult objects
        output_path: Path for output TSV

    Returns:
        Path to written file
    """
    rows = [r.to_dict() for r in results]
    df = pd.DataFrame(rows)
    df.to_csv(output_path, sep='\t', index=False)

    logger.info(f"Wrote batch summary to {output_path}")

    return output_path
