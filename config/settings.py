"""
Configuration settings for ReviewStats.

Centralized configuration for the pipeline stages and report parameters.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent

# Report parameters (month is one-based: 4 == April)
SEARCH_TERM = os.getenv("REVIEWSTATS_SEARCH_TERM", "great")
TARGET_YEAR = int(os.getenv("REVIEWSTATS_TARGET_YEAR", "2015"))
TARGET_MONTH = int(os.getenv("REVIEWSTATS_TARGET_MONTH", "4"))

# Record parsing
REPAIR_MODE = os.getenv("REVIEWSTATS_REPAIR_MODE", "lines")  # "lines" or "legacy"
REVIEW_TIME_FORMATS = ("%m %d, %Y", "%Y-%m-%d")
PREVIEW_RECORDS = 5

# Decompression
DECOMPRESS_CHUNK_SIZE = 1024 * 1024

# CSV output
CSV_WRITE_WORKERS = 4
FATAL_ON_WRITE_ERROR = os.getenv(
    "REVIEWSTATS_FATAL_ON_WRITE_ERROR", "false"
).lower() in ("1", "true", "yes")

POPULARITY_FILENAME = "products_by_popularity.csv"
RATING_FILENAME = "products_by_rating.csv"
PERIOD_FILENAME = "popular_in_period.csv"
SEARCH_FILENAME = "search_results.csv"

# Logging
LOG_LEVEL = os.getenv("REVIEWSTATS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewstats.log"
