"""
Report data model.

Run configuration and the fixed CSV layouts of the four reports.
"""

from dataclasses import dataclass
from typing import List, Tuple

import config.settings as settings

REPAIR_MODES = ("lines", "legacy")

# (field_key, display_title) pairs, in column order
Columns = List[Tuple[str, str]]

POPULARITY_COLUMNS: Columns = [
    ("asin", "ASIN"),
    ("count", "Review Count"),
]

RATING_COLUMNS: Columns = [
    ("asin", "ASIN"),
    ("averageRating", "Average Rating"),
]

PERIOD_COLUMNS: Columns = [
    ("asin", "ASIN"),
    ("count", "Review Count"),
]

SEARCH_COLUMNS: Columns = [
    ("asin", "ASIN"),
    ("reviewerName", "Reviewer Name"),
    ("reviewText", "Review Text"),
]


@dataclass
class ReportConfig:
    """
    Parameters of a single pipeline run.
    target_month is one-based (January == 1).
    """
    search_term: str = settings.SEARCH_TERM
    target_year: int = settings.TARGET_YEAR
    target_month: int = settings.TARGET_MONTH
    repair_mode: str = settings.REPAIR_MODE
    fatal_on_write_error: bool = settings.FATAL_ON_WRITE_ERROR

    def __post_init__(self):
        if not (1 <= self.target_month <= 12):
            raise ValueError(f"Invalid target_month: {self.target_month}. Must be 1-12")
        if self.repair_mode not in REPAIR_MODES:
            raise ValueError(
                f"Invalid repair_mode: {self.repair_mode}. Must be 'lines' or 'legacy'"
            )

    @classmethod
    def from_settings(cls) -> "ReportConfig":
        """Build a config from the current values in config.settings."""
        return cls(
            search_term=settings.SEARCH_TERM,
            target_year=settings.TARGET_YEAR,
            target_month=settings.TARGET_MONTH,
            repair_mode=settings.REPAIR_MODE,
            fatal_on_write_error=settings.FATAL_ON_WRITE_ERROR
        )
