"""
File and batch processing for LogParse.
"""

from .file_processor import FileProcessor, ProcessResult, ResultStatus
from .batch import BatchSummary, run_batch

__all__ = ["FileProcessor", "ProcessResult", "ResultStatus", "BatchSummary", "run_batch"]
