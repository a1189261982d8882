"""
Command-line interface for fasta-edit.

Every edit command reads one single-record FASTA (a path, or '-' for stdin)
and writes the edited record to --output or to stdout, so edits chain
through pipes:

    fasta-edit delete input.fa 5 10 | fasta-edit insert - 20 GGGG
"""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import CONFIG_TEMPLATE, build_operation

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool):
    # stderr only; stdout carries the FASTA stream
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


input_argument = click.argument(
    'input_file', metavar='INPUT',
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
)
output_option = click.option(
    '--output', '-o', type=click.Path(dir_okay=False),
    help='Output FASTA file (default: stdout)',
)
verbose_option = click.option(
    '--verbose', '-v', is_flag=True, help='Log debug messages to stderr',
)


def _run_edit(input_file: str, output: str, verbose: bool, **params):
    """Build the operation, apply it to the input record and write the result."""
    from .core.engine import apply
    from .io.fasta import read_fasta, write_fasta

    _setup_logging(verbose)

    try:
        op = build_operation(**params)
    except ValueError as e:
        _fail(str(e))

    try:
        record = read_fasta(input_file)
    except (OSError, ValueError) as e:
        _fail(str(e))

    try:
        new_header, new_sequence = apply(record.header, record.sequence, op)
    except ValueError as e:
        _fail(str(e))

    try:
        write_fasta(new_header, new_sequence, output)
    except OSError as e:
        _fail(f"Could not write output: {e}")

    if output:
        logger.info(f"Wrote {len(new_sequence)}bp to {output}")


@click.group()
@click.version_option(version=__version__)
def cli():
    """fasta-edit: positional edits on single-sequence DNA FASTA files.

    Positions are 1-based and inclusive. Use '-' as INPUT to read from stdin.
    """
    pass


@cli.command()
@input_argument
@click.argument('start', type=int)
@click.argument('end', type=int)
@output_option
@verbose_option
def delete(input_file, start, end, output, verbose):
    """
    Delete bases START to END.

    \b
    Example:
      fasta-edit delete input.fa 10 20
    """
    _run_edit(input_file, output, verbose, kind='delete', start=start, end=end)


@cli.command()
@input_argument
@click.argument('position', type=int)
@click.argument('sequence', type=str)
@output_option
@verbose_option
def insert(input_file, position, sequence, output, verbose):
    """
    Insert SEQUENCE so that it starts at POSITION.

    POSITION may be one past the last base to append. SEQUENCE may contain
    only A, T, C, G and N (any case).

    \b
    Example:
      fasta-edit insert input.fa 15 ATCG
    """
    _run_edit(input_file, output, verbose, kind='insert', position=position, sequence=sequence)


@cli.command()
@input_argument
@click.argument('start', type=int)
@click.argument('end', type=int)
@click.option('--complement', is_flag=True,
              help='Reverse complement the region instead of only reversing it')
@output_option
@verbose_option
def invert(input_file, start, end, complement, output, verbose):
    """
    Invert bases START to END.

    \b
    Examples:
      fasta-edit invert input.fa 25 35
      fasta-edit invert --complement input.fa 25 35
    """
    _run_edit(input_file, output, verbose, kind='invert', start=start, end=end,
              complement=complement)


@cli.command()
@input_argument
@click.argument('start', type=int)
@click.argument('end', type=int)
@click.argument('position', type=int, required=False)
@click.option('--tandem', '-td', is_flag=True,
              help='Insert the copy directly after END (no POSITION)')
@output_option
@verbose_option
def duplicate(input_file, start, end, position, tandem, output, verbose):
    """
    Duplicate bases START to END and insert the copy at POSITION.

    \b
    Examples:
      fasta-edit duplicate input.fa 10 20 50
      fasta-edit duplicate -td input.fa 10 20
    """
    _run_edit(input_file, output, verbose, kind='duplicate', start=start, end=end,
              position=position, tandem=tandem)


@cli.command()
@input_argument
@click.argument('gend', type=click.Choice(['5', '3']))
@click.argument('breakpoint', type=int)
@click.argument('backstart', type=int, required=False)
@click.option('--snapback', '-sb', is_flag=True,
              help='Snapback: copy back from the breakpoint itself (no BACKSTART)')
@output_option
@verbose_option
def copyback(input_file, gend, breakpoint, backstart, snapback, output, verbose):
    """
    Generate a copy-back defective genome.

    GEND is 5 or 3. For the 5' end, bases 1 to BREAKPOINT are kept and the
    reverse complement of bases 1 to BACKSTART is appended. For the 3' end the
    whole sequence is reverse complemented first and the same rule applied.
    BACKSTART must be less than BREAKPOINT.

    \b
    Examples:
      fasta-edit copyback input.fa 5 50 20
      fasta-edit copyback input.fa 3 50 30
      fasta-edit copyback -sb input.fa 5 50
    """
    _run_edit(input_file, output, verbose, kind='copyback', gend=gend,
              breakpoint=breakpoint, backstart=backstart, snapback=snapback)


@cli.command()
@click.argument('config_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--threads', '-t', type=int, default=None,
              help='Worker processes (overrides the config file)')
@verbose_option
def batch(config_file, threads, verbose):
    """
    Run a batch of edit jobs described in a YAML config.

    \b
    Example:
      fasta-edit init -o jobs.yaml
      fasta-edit batch jobs.yaml
    """
    from .batch import run_batch, write_summary_tsv
    from .config import BatchConfig

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = BatchConfig.from_yaml(Path(config_file))
    except (OSError, ValueError) as e:
        _fail(f"Invalid batch config: {e}")

    if threads is not None:
        if threads < 1:
            _fail("--threads must be at least 1")
        config.threads = threads

    results = run_batch(config)
    summary = write_summary_tsv(results, config.summary_path)

    n_failed = sum(1 for r in results if not r.success)
    click.echo(f"Processed {len(results)} jobs ({n_failed} failed)")
    click.echo(f"Summary written to: {summary}")

    if n_failed:
        sys.exit(1)


@cli.command()
@click.option('--output', '-o', type=click.Path(), default='fasta_edit_config.yaml',
              help='Output config file path')
def init(output):
    """Generate a template batch configuration file."""
    with open(output, 'w', encoding='utf-8') as f:
        f.write(CONFIG_TEMPLATE)

    click.echo(f"Generated configuration template: {output}")
    click.echo("\nEdit this file and run:")
    click.echo(f"  fasta-edit batch {output}")


if __name__ == '__main__':
    cli()
