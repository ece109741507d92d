"""
Report Pipeline.

Runs decompression, record parsing, the four aggregations and the CSV
writes for one dataset.
"""

import logging
import os
from typing import Dict, Optional

from reviewstats.errors import ReportWriteError
from reviewstats.models.report import (
    PERIOD_COLUMNS,
    POPULARITY_COLUMNS,
    RATING_COLUMNS,
    SEARCH_COLUMNS,
    ReportConfig,
)
from reviewstats.stages.aggregation import (
    PeriodAggregator,
    PopularityAggregator,
    RatingAggregator,
    TextSearchFilter,
)
from reviewstats.stages.decompression import Decompressor
from reviewstats.stages.repair import RecordRepairer
from reviewstats.utils.storage import CsvReportWriter, ensure_directory
import config.settings as settings

logger = logging.getLogger(__name__)


class ReportPipeline:
    """
    Orchestrates a single run:
    1. Decompress → 2. Parse records → 3. Aggregate → 4. Write CSVs

    The CSV writes run concurrently and are all joined before run() returns.
    """

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        writer: Optional[CsvReportWriter] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Run parameters, defaults to config.settings
            writer: CSV writer, a new CsvReportWriter by default
        """
        self.config = config or ReportConfig.from_settings()

        self.decompressor = Decompressor()
        self.repairer = RecordRepairer(mode=self.config.repair_mode)
        self.writer = writer or CsvReportWriter()

        self.popularity = PopularityAggregator()
        self.rating = RatingAggregator()
        self.period = PeriodAggregator(
            year=self.config.target_year,
            month=self.config.target_month
        )
        self.search = TextSearchFilter(self.config.search_term)

    def run(self, gz_path: str, output_dir: str) -> Dict[str, str]:
        """
        Produce all reports for gz_path in output_dir.

        Args:
            gz_path: Gzip-compressed JSON-lines dataset
            output_dir: Output directory, created if absent

        Returns:
            Mapping of report file name to written path

        Raises:
            DecompressionError, RecordParseError: a stage failed
            ReportWriteError: a CSV failed and fatal_on_write_error is set
        """
        ensure_directory(output_dir)

        # STAGE 1: Decompression
        extracted_path = self.decompressor.extract(gz_path, output_dir)

        # STAGE 2: Parsing
        reviews = self.repairer.load(extracted_path)
        if not reviews:
            logger.warning(f"No review records found in {extracted_path}")

        # STAGE 3: Aggregation, each report handed to the writer once built
        paths = {}

        def submit(filename, rows, columns):
            if not rows:
                logger.warning(f"Report {filename} has no rows")
            path = os.path.join(output_dir, filename)
            self.writer.submit(path, rows, columns)
            paths[filename] = path

        submit(settings.POPULARITY_FILENAME, self.popularity.aggregate(reviews), POPULARITY_COLUMNS)
        submit(settings.RATING_FILENAME, self.rating.aggregate(reviews), RATING_COLUMNS)
        submit(settings.PERIOD_FILENAME, self.period.aggregate(reviews), PERIOD_COLUMNS)
        submit(settings.SEARCH_FILENAME, self.search.filter(reviews), SEARCH_COLUMNS)

        # STAGE 4: Join CSV writes
        failures = self.writer.wait()
        for path, _ in failures:
            paths.pop(os.path.basename(path), None)

        if failures:
            logger.error(f"{len(failures)} report(s) failed to write")
            if self.config.fatal_on_write_error:
                raise ReportWriteError(failures)

        logger.info(f"Pipeline complete: {len(paths)} reports in {output_dir}")
        return paths
