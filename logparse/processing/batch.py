"""
Batch runner: processes every input file of a run in order.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Set

from logparse.config.settings import ParseOptions

from .file_processor import FileProcessor, ProcessResult, ResultStatus

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFLICT = 1
EXIT_FAILURE = 2


class BatchSummary(list):
    """The results of a batch, in input order, with roll-up counts."""

    def __init__(self, results: Iterable[ProcessResult] = ()):
        super().__init__(results)

    def _count(self, status: ResultStatus) -> int:
        return sum(1 for result in self if result.status is status)

    @property
    def succeeded(self) -> int:
        return self._count(ResultStatus.SUCCESS)

    @property
    def conflicts(self) -> int:
        return self._count(ResultStatus.CONFLICT)

    @property
    def failures(self) -> int:
        return self._count(ResultStatus.IO_FAILURE)

    @property
    def lines_kept(self) -> int:
        return sum(result.kept for result in self)

    @property
    def exit_code(self) -> int:
        """0 when every file succeeded, 2 on any IO failure, otherwise 1 for conflicts."""
        if self.failures:
            return EXIT_FAILURE
        if self.conflicts:
            return EXIT_CONFLICT
        return EXIT_OK


def run_batch(
    options: ParseOptions,
    progress_callback: Optional[Callable[[ProcessResult], None]] = None,
) -> BatchSummary:
    """
    Process every file in options.files, strictly in order.

    Individual file failures never stop the batch. An output written for an
    earlier file is never overwritten by a later one; the later file is
    reported as a conflict.

    Args:
        options: Resolved run options
        progress_callback: Optional callback invoked with each result

    Returns:
        BatchSummary with one ProcessResult per input file

    Raises:
        ConfigurationError: if the options are invalid; raised before any file is touched
    """
    options.validate()

    processor = FileProcessor(options)
    summary = BatchSummary()
    written: Set[Path] = set()

    logger.info(f"Starting batch of {len(options.files)} file(s) for group {options.group.label}")

    for path in options.files:
        result = processor.process(path, claimed=written)
        summary.append(result)
        if result.written:
            written.add(result.output_path.resolve())
        if progress_callback:
            progress_callback(result)

    logger.info(
        f"Batch complete: {summary.succeeded} succeeded, "
        f"{summary.conflicts} conflicts, {summary.failures} failed"
    )
    return summary
