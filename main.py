"""
ReviewStats - Review Dataset Reports

CLI entry point for running the report pipeline.
"""

import argparse
import logging
import sys
from typing import List, Optional

from reviewstats.errors import ReportWriteError
from reviewstats.pipeline import ReportPipeline
import config.settings as settings


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = UsageArgumentParser(
        prog="reviewstats",
        description="ReviewStats - aggregate reports over gzipped JSON-lines reviews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract and report on a review dump
  python main.py data/reviews_Electronics_5.json.gz output/

Report parameters (search term, period, repair mode) are read from
config/settings.py and REVIEWSTATS_* environment variables.
        """
    )

    parser.add_argument(
        "gz_file_path",
        help="Path to the gzip-compressed JSON-lines review file"
    )

    parser.add_argument(
        "output_dir",
        help="Directory for the extracted file and CSV reports (created if absent)"
    )

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI and return the process exit status.

    Stage failures are logged and do not change the exit status; write
    failures do only when FATAL_ON_WRITE_ERROR is enabled.
    """
    args = build_parser().parse_args(argv)

    setup_logging(settings.LOG_LEVEL)
    logger = logging.getLogger(__name__)

    try:
        logger.info("Initializing ReviewStats pipeline...")
        pipeline = ReportPipeline()
        pipeline.run(args.gz_file_path, args.output_dir)
        logger.info("ReviewStats completed successfully")
        return 0

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        return 1

    except ReportWriteError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        return 0


def main():
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
