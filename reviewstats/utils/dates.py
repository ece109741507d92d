"""
Review date parsing.
"""

from datetime import date, datetime
from typing import Any, Iterable, Optional

import config.settings as settings


def parse_review_time(
    value: Any,
    formats: Iterable[str] = settings.REVIEW_TIME_FORMATS
) -> Optional[date]:
    """
    Parse a reviewTime string such as "04 1, 2015".

    Returns None for missing, non-string or unparseable values.
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
