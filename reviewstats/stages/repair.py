"""
Record repair stage.

Turns decompressed JSON-lines text into an ordered list of ProductReview
objects. Two strategies are supported:

- "lines": decode every line on its own and fail on the first bad line
  with its line number.
- "legacy": join all lines into one JSON array, strip trailing commas and
  parse the whole document at once.
"""

import json
import logging
import re
from typing import Iterable, List

import config.settings as settings
from reviewstats.errors import RecordParseError
from reviewstats.models.report import REPAIR_MODES
from reviewstats.models.review import ProductReview

logger = logging.getLogger(__name__)

# A comma followed only by whitespace before a closing bracket or brace
TRAILING_COMMA = re.compile(r",(\s*[\]}])")

# Longest snippet of a bad line quoted in error messages
MAX_CONTENT_IN_ERROR = 200


class RecordRepairer:
    """
    Parses decompressed review text into records.
    """

    def __init__(self, mode: str = settings.REPAIR_MODE):
        """
        Initialize repairer.

        Args:
            mode: "lines" or "legacy"
        """
        if mode not in REPAIR_MODES:
            raise ValueError(f"Invalid repair mode: {mode}")
        self.mode = mode

    def load(self, path: str) -> List[ProductReview]:
        """
        Read a decompressed JSON-lines file into ProductReview objects.

        Args:
            path: Path to the decompressed file

        Returns:
            Reviews in file order

        Raises:
            RecordParseError: the file is not valid JSON-lines
        """
        # Undecodable bytes are read as U+FFFD
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            if self.mode == "legacy":
                raw_records = self.repair_text(f.read())
            else:
                raw_records = self.parse_lines(f)

        reviews = [ProductReview.from_dict(record) for record in raw_records]

        logger.info(f"Parsed {len(reviews)} review records from {path}")
        logger.debug(f"First records: {raw_records[:settings.PREVIEW_RECORDS]}")
        return reviews

    def repair_text(self, text: str) -> List[dict]:
        """
        Parse JSON-lines text by rewriting it into a single JSON array.

        Lines are joined with commas and wrapped in brackets; commas left
        dangling before "]" or "}" (blank lines, trailing newline) are
        removed before parsing.
        """
        document = "[" + ",".join(text.split("\n")) + "]"
        document = TRAILING_COMMA.sub(r"\1", document)

        try:
            records = json.loads(document)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse repaired JSON: {e}")
            raise RecordParseError(f"Invalid JSON-lines input: {e}") from e

        for record in records:
            if not isinstance(record, dict):
                raise RecordParseError(
                    f"Expected a JSON object, got {type(record).__name__}"
                )
        return records

    def parse_lines(self, lines: Iterable[str]) -> List[dict]:
        """
        Decode one JSON object per line, skipping blank lines.

        Raises:
            RecordParseError: on the first malformed line
        """
        records = []
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue

            try:
                record = self._decode_line(line)
            except json.JSONDecodeError as e:
                logger.error(f"Malformed JSON on line {line_number}: {e}")
                raise RecordParseError(
                    e.msg,
                    line_number=line_number,
                    content=line[:MAX_CONTENT_IN_ERROR]
                ) from e

            if not isinstance(record, dict):
                raise RecordParseError(
                    f"Expected a JSON object, got {type(record).__name__}",
                    line_number=line_number,
                    content=line[:MAX_CONTENT_IN_ERROR]
                )
            records.append(record)

        return records

    @staticmethod
    def _decode_line(line: str):
        """Decode a line as is, retrying once with trailing commas removed."""
        try:
            return json.loads(line)
        except json.JSONDecodeError:
            repaired = TRAILING_COMMA.sub(r"\1", line)
            if repaired == line:
                raise
            return json.loads(repaired)
