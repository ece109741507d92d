"""
Storage utility.

CSV serialization of report rows, synchronous or on a small thread pool.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

import config.settings as settings
from reviewstats.models.report import Columns

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> Any:
    """Write integral floats as integers (4.0 -> 4)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class CsvReportWriter:
    """
    Writes report rows to CSV files.

    write() is synchronous. submit() schedules a write on the pool and
    returns at once; wait() joins every pending write and reports failures.
    """

    def __init__(self, max_workers: int = settings.CSV_WRITE_WORKERS):
        """
        Initialize CSV writer.

        Args:
            max_workers: Size of the thread pool used by submit()
        """
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: List[Tuple[str, Future]] = []

    def write(self, path: str, rows: List[Dict], columns: Columns) -> str:
        """
        Write rows to a CSV file.

        Args:
            path: Destination file path
            rows: Flat dict records
            columns: Ordered (field_key, display_title) pairs

        Returns:
            Path of the written file
        """
        keys = [key for key, _ in columns]
        titles = [title for _, title in columns]

        projected = [
            [_format_value(row.get(key)) for key in keys]
            for row in rows
        ]
        df = pd.DataFrame(projected, columns=titles, dtype=object)

        try:
            df.to_csv(path, index=False, lineterminator="\n", encoding="utf-8")
        except Exception as e:
            logger.error(f"Failed to write {path}: {e}")
            raise

        logger.info(f"Wrote {len(rows)} rows to {path}")
        return path

    def submit(self, path: str, rows: List[Dict], columns: Columns) -> Future:
        """Schedule write() on the pool without waiting for it."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="csv-writer"
            )
        future = self._executor.submit(self.write, path, rows, columns)
        self._pending.append((path, future))
        return future

    def wait(self) -> List[Tuple[str, BaseException]]:
        """
        Join all submitted writes.

        Returns:
            (path, exception) for every write that failed, in submit order
        """
        failures = []
        for path, future in self._pending:
            error = future.exception()
            if error is not None:
                failures.append((path, error))

        self._pending = []
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

        return failures


def ensure_directory(path: str) -> None:
    """Create path (with parents) if it does not exist."""
    os.makedirs(path, exist_ok=True)
