"""
Tests for the batch runner.
"""

import pytest

from logparse.exceptions import ConfigurationError
from logparse.processing.batch import EXIT_CONFLICT, EXIT_FAILURE, EXIT_OK, run_batch
from logparse.processing.file_processor import ResultStatus
from tests.samples import SAY_JANE, SAY_JOHN


class TestRunBatch:
    """Test ordering, aggregation and failure isolation."""

    def test_results_in_input_order(self, write_log, make_options):
        first = write_log([SAY_JANE], name="b.log")
        second = write_log([SAY_JOHN, SAY_JANE], name="a.log")

        summary = run_batch(make_options(files=[first, second]))

        assert [r.path for r in summary] == [first, second]
        assert [r.kept for r in summary] == [1, 2]
        assert summary.exit_code == EXIT_OK
        assert summary.lines_kept == 3

    def test_failures_do_not_stop_batch(self, write_log, make_options, tmp_path):
        good = write_log([SAY_JANE], name="good.log")
        conflicted = write_log([SAY_JOHN], name="conflicted.log")
        conflicted.with_suffix(".txt").write_text("existing\n", encoding="utf-8")
        missing = tmp_path / "missing.log"

        summary = run_batch(make_options(files=[missing, conflicted, good]))

        assert [r.status for r in summary] == [
            ResultStatus.IO_FAILURE,
            ResultStatus.CONFLICT,
            ResultStatus.SUCCESS,
        ]
        assert summary.succeeded == 1
        assert summary.conflicts == 1
        assert summary.failures == 1
        assert summary.exit_code == EXIT_FAILURE
        assert good.with_suffix(".txt").exists()

    def test_conflict_exit_code(self, write_log, make_options):
        log = write_log([SAY_JANE])
        log.with_suffix(".txt").write_text("existing\n", encoding="utf-8")

        summary = run_batch(make_options(files=[log]))

        assert summary.exit_code == EXIT_CONFLICT

    def test_progress_callback(self, write_log, make_options):
        logs = [write_log([SAY_JANE], name=f"{i}.log") for i in range(3)]
        seen = []

        run_batch(make_options(files=logs, dry_run=True), progress_callback=seen.append)

        assert [r.path for r in seen] == logs

    def test_empty_batch(self, make_options):
        summary = run_batch(make_options())
        assert len(summary) == 0
        assert summary.exit_code == EXIT_OK


class TestBatchValidation:
    """Test configuration errors abort before processing."""

    def test_invalid_group(self, write_log, make_options):
        log = write_log([SAY_JANE])
        with pytest.raises(ConfigurationError):
            run_batch(make_options(group="people", files=[log]))
        assert not log.with_suffix(".txt").exists()

    def test_invalid_extension(self, write_log, make_options):
        log = write_log([SAY_JANE])
        with pytest.raises(ConfigurationError):
            run_batch(make_options(extension="txt", files=[log]))


class TestOutputCollisions:
    """Test inputs that map to the same transcript within one batch."""

    def test_same_name_in_output_dir(self, tmp_path, write_log, make_options):
        (tmp_path / "x").mkdir()
        (tmp_path / "y").mkdir()
        first = write_log([SAY_JANE], name="x/n.log")
        second = write_log([SAY_JOHN], name="y/n.log")
        out = tmp_path / "out"

        summary = run_batch(make_options(files=[first, second], output_dir=out, force_replace=True))

        assert [r.status for r in summary] == [ResultStatus.SUCCESS, ResultStatus.CONFLICT]
        assert summary[1].output_path == out / "n.txt"
        assert (out / "n.txt").read_text(encoding="utf-8").splitlines() == [SAY_JANE]
        assert summary.exit_code == EXIT_CONFLICT

    def test_same_stem_in_one_directory(self, write_log, make_options):
        first = write_log([SAY_JANE], name="a.log")
        second = write_log([SAY_JOHN], name="a.old")

        summary = run_batch(make_options(files=[first, second], force_replace=True))

        assert summary[0].ok
        assert summary[1].status is ResultStatus.CONFLICT
        assert "already written" in summary[1].error
        assert first.with_suffix(".txt").read_text(encoding="utf-8").splitlines() == [SAY_JANE]

    def test_replacing_existing_transcript_still_allowed(self, write_log, make_options):
        log = write_log([SAY_JANE])
        log.with_suffix(".txt").write_text("from an earlier run\n", encoding="utf-8")

        summary = run_batch(make_options(files=[log], force_replace=True))

        assert summary[0].ok
        assert log.with_suffix(".txt").read_text(encoding="utf-8").splitlines() == [SAY_JANE]
