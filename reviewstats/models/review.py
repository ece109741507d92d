"""
Review data model.

Represents one product review decoded from the JSON-lines dataset.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional


@dataclass(frozen=True)
class ProductReview:
    """
    Product review as found in the Amazon review dumps.
    Only the fields used by the reports are kept.
    """
    asin: Optional[str]  # Product identifier
    overall: Optional[float] = None  # Star rating, None if missing or not numeric
    review_time: Optional[str] = None  # Raw date string, e.g. "04 1, 2015"
    reviewer_name: Optional[str] = None
    review_text: Any = None  # Kept as decoded; may be absent or not a string

    @classmethod
    def from_dict(cls, data: dict) -> "ProductReview":
        """Create ProductReview from a decoded JSON object."""
        overall = data.get("overall")
        if isinstance(overall, bool) or not isinstance(overall, Real):
            overall = None

        return cls(
            asin=data.get("asin"),
            overall=overall,
            review_time=data.get("reviewTime"),
            reviewer_name=data.get("reviewerName"),
            review_text=data.get("reviewText")
        )

    @property
    def has_text(self) -> bool:
        """True when review_text is a non-empty string."""
        return isinstance(self.review_text, str) and bool(self.review_text)
