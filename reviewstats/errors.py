"""
Exception types raised by the pipeline stages.
"""

from typing import List, Optional, Tuple


class ReviewStatsError(Exception):
    """Base class for all pipeline errors."""


class DecompressionError(ReviewStatsError):
    """The gzip input could not be read, decoded or written out."""


class RecordParseError(ReviewStatsError):
    """
    The decompressed text is not valid JSON-lines.

    line_number is 1-based and is None when the whole document was parsed
    at once (legacy repair mode).
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        content: Optional[str] = None
    ):
        self.line_number = line_number
        self.content = content
        if line_number is not None:
            message = f"line {line_number}: {message}"
        if content is not None:
            message = f"{message} ({content!r})"
        super().__init__(message)


class ReportWriteError(ReviewStatsError):
    """One or more CSV reports failed to write."""

    def __init__(self, failures: List[Tuple[str, BaseException]]):
        self.failures = failures
        paths = ", ".join(path for path, _ in failures)
        super().__init__(f"{len(failures)} report(s) failed to write: {paths}")
