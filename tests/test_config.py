"""Tests for fasta_edit.config module."""

from pathlib import Path

import pytest
import yaml
from fasta_edit.config import (
    CONFIG_TEMPLATE,
    BatchConfig,
    EditJob,
    build_operation,
    operation_from_dict,
    operation_name,
)
from fasta_edit.core.errors import CoordinateOrderError, InvalidBasesError
from fasta_edit.core.operations import (
    Copyback,
    Delete,
    Duplicate,
    GenomeEnd,
    Insert,
    Invert,
    TandemDuplicate,
)


class TestBuildOperation:
    """Test building operations from command-line values."""

    def test_delete(self):
        """Test basic delete."""
        assert build_operation('delete', start=3, end=5) == Delete(3, 5)

    def test_string_positions_coerced(self):
        """Test numeric strings are accepted."""
        assert build_operation('delete', start='3', end='5') == Delete(3, 5)

    def test_non_numeric_position(self):
        """Test non-numeric positions raise ValueError."""
        with pytest.raises(ValueError, match="Start position must be a number"):
            build_operation('delete', start='abc', end=5)

    def test_start_after_end(self):
        """Test misordered range is rejected."""
        with pytest.raises(CoordinateOrderError, match="Start position must be <= end position"):
            build_operation('delete', start=6, end=5)

    def test_zero_position(self):
        """Test 0 is not a valid 1-based position."""
        with pytest.raises(CoordinateOrderError, match="1-based"):
            build_operation('invert', start=0, end=5)

    def test_missing_end(self):
        """Test missing coordinates are reported."""
        with pytest.raises(ValueError, match="requires start and end"):
            build_operation('delete', start=1)

    def test_insert_uppercases(self):
        """Test inserted sequence is normalized to uppercase."""
        assert build_operation('insert', position=2, sequence='acgn') == Insert(2, 'ACGN')

    def test_insert_invalid_bases(self):
        """Test RNA or other characters are rejected."""
        with pytest.raises(InvalidBasesError, match="valid DNA bases"):
            build_operation('insert', position=2, sequence='ACGU')

    def test_invert_complement(self):
        """Test complement flag is carried through."""
        assert build_operation('invert', start=1, end=4, complement=True) == Invert(1, 4, True)

    def test_duplicate(self):
        """Test positional duplicate."""
        assert build_operation('duplicate', start=1, end=2, position=9) == Duplicate(1, 2, 9)

    def test_duplicate_requires_position(self):
        """Test duplicate without tandem needs a destination."""
        with pytest.raises(ValueError, match="requires start, end, and insert positions"):
            build_operation('duplicate', start=1, end=2)

    def test_tandem_duplicate(self):
        """Test tandem flag builds a TandemDuplicate."""
        assert build_operation('duplicate', start=2, end=3, tandem=True) == TandemDuplicate(2, 3)

    def test_tandem_rejects_position(self):
        """Test tandem duplicate takes no destination."""
        with pytest.raises(ValueError, match="does not take an insert position"):
            build_operation('duplicate', start=2, end=3, position=5, tandem=True)

    def test_copyback(self):
        """Test regular copyback."""
        op = build_operation('copyback', gend='5', breakpoint=50, backstart=20)
        assert op == Copyback(GenomeEnd.FIVE_PRIME, 50, 20)
        assert not op.is_snapback

    @pytest.mark.parametrize("gend", ['5', '3'])
    def test_copyback_backstart_must_be_less(self, gend):
        """Test backstart >= breakpoint is rejected for both ends."""
        with pytest.raises(CoordinateOrderError, match="backstart must be less than breakpoint"):
            build_operation('copyback', gend=gend, breakpoint=20, backstart=20)

    def test_snapback(self):
        """Test snapback sets backstart to the breakpoint."""
        op = build_operation('copyback', gend=3, breakpoint=40, snapback=True)
        assert op == Copyback(GenomeEnd.THREE_PRIME, 40, 40)
        assert op.is_snapback

    def test_snapback_rejects_backstart(self):
        """Test snapback takes no backstart."""
        with pytest.raises(ValueError, match="takes no backstart"):
            build_operation('copyback', gend=5, breakpoint=40, backstart=10, snapback=True)

    def test_invalid_gend(self):
        """Test gend other than 5 or 3."""
        with pytest.raises(ValueError, match="gend must be either 5 or 3"):
            build_operation('copyback', gend='4', breakpoint=40, backstart=10)

    def test_unknown_operation(self):
        """Test unknown operation names."""
        with pytest.raises(ValueError, match="Unknown operation 'reverse'"):
            build_operation('reverse', start=1, end=2)


class TestOperationFromDict:
    """Test YAML operation mappings."""

    def test_invert_mapping(self):
        """Test the complement flag is carried over."""
        op = operation_from_dict({'operation': 'invert', 'start': 1, 'end': 4, 'complement': True})
        assert op == Invert(1, 4, True)

    def test_snapback_alias(self):
        """Test 'snapback' as an operation name."""
        op = operation_from_dict({'operation': 'snapback', 'gend': "5'", 'breakpoint': 12})
        assert op == Copyback(GenomeEnd.FIVE_PRIME, 12, 12)

    def test_missing_operation_key(self):
        """Test each entry must name its operation."""
        with pytest.raises(ValueError, match="missing the 'operation' key"):
            operation_from_dict({'start': 1, 'end': 2})

    def test_unknown_keys(self):
        """Test misspelled keys are rejected."""
        with pytest.raises(ValueError, match="Unknown keys"):
            operation_from_dict({'operation': 'delete', 'start': 1, 'end': 2, 'stop': 3})

    def test_operation_names(self):
        """Test short names used in batch summaries."""
        assert operation_name(Delete(1, 2)) == 'delete'
        assert operation_name(TandemDuplicate(1, 2)) == 'tandem_duplicate'
        assert operation_name(Copyback(GenomeEnd.FIVE_PRIME, 5, 5)) == 'snapback'
        assert operation_name(Copyback(GenomeEnd.FIVE_PRIME, 5, 2)) == 'copyback'


class TestEditJob:
    """Test EditJob parsing."""

    def test_inline_operation(self, tmp_path):
        """Test a job with a single inline operation."""
        job = EditJob.from_dict(
            {'name': 'del', 'input': 'g.fa', 'operation': 'delete', 'start': 1, 'end': 2},
            output_dir=tmp_path,
        )
        assert job.operations == [Delete(1, 2)]
        assert job.output_path == tmp_path / 'del.fa'

    def test_operation_list(self, tmp_path):
        """Test a job with a chained operation list and explicit output."""
        job = EditJob.from_dict(
            {
                'input': 'g.fa',
                'output': 'out.fa',
                'operations': [
                    {'operation': 'insert', 'position': 1, 'sequence': 'tt'},
                    {'operation': 'duplicate', 'start': 1, 'end': 2, 'tandem': True},
                ],
            },
            output_dir=tmp_path,
            index=2,
        )
        assert job.name == 'g_3'
        assert job.operations == [Insert(1, 'TT'), TandemDuplicate(1, 2)]
        assert job.output_path == tmp_path / 'out.fa'

    def test_job_error_names_job(self, tmp_path):
        """Test operation errors mention the job."""
        with pytest.raises(ValueError, match="Job 'bad'"):
            EditJob.from_dict(
                {'name': 'bad', 'input': 'g.fa', 'operation': 'delete', 'start': 5, 'end': 1},
                output_dir=tmp_path,
            )

    def test_missing_input(self, tmp_path):
        """Test a job must name its input file."""
        with pytest.raises(ValueError, match="has no 'input'"):
            EditJob.from_dict({'operation': 'delete', 'start': 1, 'end': 2}, output_dir=tmp_path)

    def test_non_mapping_job(self, tmp_path):
        """Test a scalar job entry is rejected with its position."""
        with pytest.raises(ValueError, match="Job 2 must be a mapping"):
            EditJob.from_dict(42, output_dir=tmp_path, index=1)

    def test_non_mapping_operation(self, tmp_path):
        """Test a scalar entry in an operations list is rejected."""
        with pytest.raises(ValueError, match="Job 'j': Operation entry must be a mapping"):
            EditJob.from_dict(
                {'name': 'j', 'input': 'g.fa', 'operations': ['delete']},
                output_dir=tmp_path,
            )


class TestBatchConfig:
    """Test BatchConfig loading."""

    def test_from_yaml(self, tmp_path):
        """Test loading a config resolves paths against its directory."""
        config_path = tmp_path / 'jobs.yaml'
        config_path.write_text(
            "output_dir: out\n"
            "threads: 2\n"
            "line_width: 60\n"
            "jobs:\n"
            "  - name: cb\n"
            "    input: genome.fa\n"
            "    operation: copyback\n"
            "    gend: 3\n"
            "    breakpoint: 50\n"
            "    backstart: 20\n",
            encoding="utf-8",
        )

        config = BatchConfig.from_yaml(config_path)

        assert config.threads == 2
        assert config.line_width == 60
        assert config.output_dir == tmp_path / 'out'
        assert config.summary_path == tmp_path / 'out' / 'edit_summary.tsv'
        assert len(config.jobs) == 1
        job = config.jobs[0]
        assert job.input_path == tmp_path / 'genome.fa'
        assert job.output_path == tmp_path / 'out' / 'cb.fa'
        assert job.operations == [Copyback(GenomeEnd.THREE_PRIME, 50, 20)]

    def test_defaults(self):
        """Test default settings."""
        config = BatchConfig.from_dict({
            'jobs': [{'input': 'g.fa', 'operation': 'delete', 'start': 1, 'end': 1}],
        })
        assert config.threads == 4
        assert config.line_width == 70
        assert config.output_dir == Path('./edited')

    def test_no_jobs(self):
        """Test a config must list at least one job."""
        with pytest.raises(ValueError, match="no jobs"):
            BatchConfig.from_dict({'threads': 1})

    def test_duplicate_job_names(self):
        """Test two jobs may not share a name."""
        job = {'name': 'same', 'input': 'g.fa', 'operation': 'delete', 'start': 1, 'end': 1}
        with pytest.raises(ValueError, match="Duplicate job names: same"):
            BatchConfig.from_dict({'jobs': [job, dict(job)]})

    def test_invalid_threads(self):
        """Test zero worker threads are rejected."""
        with pytest.raises(ValueError, match="threads"):
            BatchConfig.from_dict({
                'threads': 0,
                'jobs': [{'input': 'g.fa', 'operation': 'delete', 'start': 1, 'end': 1}],
            })

    @pytest.mark.parametrize("key,value", [
        ('threads', None), ('threads', 'many'), ('line_width', None), ('line_width', [70]),
    ])
    def test_non_numeric_settings(self, key, value):
        """Test empty or non-numeric settings raise ValueError, not TypeError."""
        with pytest.raises(ValueError, match=f"{key} must be a number"):
            BatchConfig.from_dict({
                key: value,
                'jobs': [{'input': 'g.fa', 'operation': 'delete', 'start': 1, 'end': 1}],
            })

    def test_jobs_not_a_list(self):
        """Test a mapping under jobs is rejected."""
        with pytest.raises(ValueError, match="must be a list"):
            BatchConfig.from_dict({'jobs': {'input': 'g.fa'}})

    def test_malformed_yaml(self, tmp_path):
        """Test YAML syntax errors surface as ValueError naming the file."""
        config_path = tmp_path / 'broken.yaml'
        config_path.write_text("jobs: [\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Could not parse .*broken.yaml"):
            BatchConfig.from_yaml(config_path)

    def test_template_is_valid(self):
        """Test the generated template parses into a full config."""
        config = BatchConfig.from_dict(yaml.safe_load(CONFIG_TEMPLATE))
        assert len(config.jobs) == 6
        chained = config.jobs[-1]
        assert chained.name == 'chained'
        assert chained.operations == [Delete(5, 10), Insert(20, 'GGGG')]
        assert config.jobs[4].output_path == Path('./edited') / 'cb5_50_20.fa'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
