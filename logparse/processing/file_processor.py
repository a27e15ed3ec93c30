"""
Per-file processing: filter one log into a transcript.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import AbstractSet, List, Optional, Union

from logparse.config.settings import ParseOptions
from logparse.exceptions import FileIOError, LineParseError, OutputConflictError
from logparse.parser.classifier import LineClassifier, MessageKind
from logparse.parser.matcher import keep

logger = logging.getLogger(__name__)


class ResultStatus(Enum):
    """Outcome of processing one file."""

    SUCCESS = "success"
    CONFLICT = "conflict"
    IO_FAILURE = "io_failure"


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of processing one input file."""

    path: Path
    status: ResultStatus
    output_path: Optional[Path] = None
    kept: int = 0
    skipped: int = 0
    lines_read: int = 0
    error: Optional[str] = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @property
    def failed(self) -> bool:
        return self.status is ResultStatus.IO_FAILURE

    @property
    def written(self) -> bool:
        """True when a transcript was actually written to output_path."""
        return self.ok and not self.dry_run and self.output_path is not None

    def __repr__(self) -> str:
        return (
            f"ProcessResult({self.path.name}, {self.status.value}, "
            f"{self.kept} kept, {self.skipped} skipped)"
        )


class FileProcessor:
    """
    Filters a single ACT log file into a chat transcript.

    Each call to process() owns its own classifier and line buffer, so one
    processor can be reused for every file of a batch.
    """

    def __init__(self, options: ParseOptions):
        """
        Initialize the file processor.

        Args:
            options: Resolved run options
        """
        self.options = options

    def output_path_for(self, path: Union[str, Path]) -> Path:
        """Transcript path for an input: same name, transcript extension."""
        path = Path(path)
        directory = self.options.output_dir if self.options.output_dir else path.parent
        return directory / path.with_suffix(self.options.extension).name

    def process(
        self, path: Union[str, Path], claimed: AbstractSet[Path] = frozenset()
    ) -> ProcessResult:
        """
        Filter one log file and write its transcript.

        Never raises for file level problems; they are reported in the result.

        Args:
            path: Input log file
            claimed: Resolved outputs already written earlier in the same batch;
                these are never overwritten, even with force_replace

        Returns:
            ProcessResult describing the outcome
        """
        path = Path(path)
        logger.info(f"Processing {path}")

        try:
            kept_lines, skipped, lines_read = self._filter(path)
        except FileIOError as e:
            logger.error(str(e))
            return ProcessResult(path=path, status=ResultStatus.IO_FAILURE, error=str(e))

        output_path = self.output_path_for(path)

        if self.options.dry_run:
            logger.info(f"Dry run: {len(kept_lines)} lines would be written to {output_path}")
            return ProcessResult(
                path=path,
                status=ResultStatus.SUCCESS,
                kept=len(kept_lines),
                skipped=skipped,
                lines_read=lines_read,
                dry_run=True,
            )

        try:
            self._write(path, output_path, kept_lines, claimed)
        except OutputConflictError as e:
            logger.warning(str(e))
            return ProcessResult(
                path=path,
                status=ResultStatus.CONFLICT,
                output_path=e.path,
                kept=len(kept_lines),
                skipped=skipped,
                lines_read=lines_read,
                error=str(e),
            )
        except FileIOError as e:
            logger.error(str(e))
            return ProcessResult(
                path=path,
                status=ResultStatus.IO_FAILURE,
                kept=len(kept_lines),
                skipped=skipped,
                lines_read=lines_read,
                error=str(e),
            )

        logger.info(f"Wrote {len(kept_lines)} lines to {output_path}")
        return ProcessResult(
            path=path,
            status=ResultStatus.SUCCESS,
            output_path=output_path,
            kept=len(kept_lines),
            skipped=skipped,
            lines_read=lines_read,
        )

    def _filter(self, path: Path):
        """Stream the input and return (kept lines, skipped count, lines read)."""
        classifier = LineClassifier()
        group = self.options.group
        include_emotes = self.options.include_emotes
        kept_lines: List[str] = []
        skipped = 0
        lines_read = 0

        try:
            with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
                for line_number, line in enumerate(f, 1):
                    lines_read += 1
                    if not line.strip():
                        continue

                    try:
                        log_line = classifier.classify(line)
                    except LineParseError as e:
                        skipped += 1
                        logger.debug(f"{path.name}:{line_number}: skipped ({e})")
                        continue

                    if log_line.kind is MessageKind.OTHER:
                        continue

                    if keep(log_line, group, include_emotes):
                        kept_lines.append(log_line.raw_line)
        except OSError as e:
            raise FileIOError(f"Cannot read {path}: {e.strerror or e}") from e

        logger.debug(f"{path.name}: {classifier.get_stats()}, kept {len(kept_lines)}")
        return kept_lines, skipped, lines_read

    def _write(
        self, path: Path, output_path: Path, kept_lines: List[str], claimed: AbstractSet[Path]
    ):
        target = output_path.resolve()
        if target == path.resolve():
            raise FileIOError(f"Refusing to overwrite input {path} with its own transcript")

        if target in claimed:
            raise OutputConflictError(
                output_path, f"Output file {output_path} was already written by this batch"
            )

        if output_path.exists() and not self.options.force_replace:
            raise OutputConflictError(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
                for line in kept_lines:
                    f.write(line)
                    f.write("\n")
        except OSError as e:
            raise FileIOError(f"Cannot write {output_path}: {e.strerror or e}") from e
