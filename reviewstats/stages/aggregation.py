"""
Review aggregators.

Each aggregator makes a single pass over the parsed reviews and owns its
own accumulator. Sorting is descending and stable, so ties keep the order
in which products were first seen.
"""

import logging
from collections import Counter
from typing import Dict, List

from reviewstats.models.review import ProductReview
from reviewstats.utils.dates import parse_review_time

logger = logging.getLogger(__name__)


def _count_rows(counts: Counter) -> List[Dict]:
    rows = [{"asin": asin, "count": count} for asin, count in counts.items()]
    return sorted(rows, key=lambda row: row["count"], reverse=True)


class PopularityAggregator:
    """
    Counts reviews per product.
    """

    def aggregate(self, reviews: List[ProductReview]) -> List[Dict]:
        """
        Returns:
            [{"asin", "count"}] sorted by count, most reviewed first
        """
        counts = Counter(review.asin for review in reviews)

        logger.info(
            f"Counted {len(counts)} unique products "
            f"(total reviews: {len(reviews)})"
        )
        return _count_rows(counts)


class RatingAggregator:
    """
    Averages the star rating per product.
    """

    def aggregate(self, reviews: List[ProductReview]) -> List[Dict]:
        """
        Returns:
            [{"asin", "averageRating"}] sorted by average, highest first
        """
        totals: Dict[str, List[float]] = {}
        skipped = 0

        for review in reviews:
            if review.overall is None:
                skipped += 1
                continue
            total = totals.setdefault(review.asin, [0, 0])
            total[0] += review.overall
            total[1] += 1

        if skipped:
            logger.debug(f"Skipped {skipped} reviews without a numeric rating")

        rows = [
            {"asin": asin, "averageRating": total_rating / total_reviews}
            for asin, (total_rating, total_reviews) in totals.items()
        ]
        return sorted(rows, key=lambda row: row["averageRating"], reverse=True)


class PeriodAggregator:
    """
    Counts reviews per product within one calendar month.
    """

    def __init__(self, year: int, month: int):
        """
        Args:
            year: Four-digit year
            month: One-based month (4 == April)
        """
        self.year = year
        self.month = month

    def in_period(self, review: ProductReview) -> bool:
        review_date = parse_review_time(review.review_time)
        return (
            review_date is not None
            and review_date.year == self.year
            and review_date.month == self.month
        )

    def aggregate(self, reviews: List[ProductReview]) -> List[Dict]:
        """
        Returns:
            [{"asin", "count"}] for reviews dated in the period, most reviewed first
        """
        matching = [review for review in reviews if self.in_period(review)]
        counts = Counter(review.asin for review in matching)

        logger.info(
            f"Found {len(matching)} reviews in {self.year}-{self.month:02d} "
            f"across {len(counts)} products"
        )
        return _count_rows(counts)


class TextSearchFilter:
    """
    Case-insensitive substring search over review text.
    """

    def __init__(self, search_term: str):
        self.search_term = search_term
        self._needle = search_term.lower()

    def matches(self, review: ProductReview) -> bool:
        return review.has_text and self._needle in review.review_text.lower()

    def filter(self, reviews: List[ProductReview]) -> List[Dict]:
        """
        Returns:
            [{"asin", "reviewerName", "reviewText"}] in source order
        """
        rows = [
            {
                "asin": review.asin,
                "reviewerName": review.reviewer_name,
                "reviewText": review.review_text
            }
            for review in reviews
            if self.matches(review)
        ]

        logger.info(f"Found {len(rows)} reviews mentioning '{self.search_term}'")
        return rows
