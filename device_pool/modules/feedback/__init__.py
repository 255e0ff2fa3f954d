"""Feedback ledger attached to each device."""

from .exceptions import DuplicateReviewError, ReviewNotFoundError
from .service import DEFAULT_RATING, MAX_RATING, MIN_RATING, FeedbackLedgerService

__all__ = [
    "FeedbackLedgerService",
    "DuplicateReviewError",
    "ReviewNotFoundError",
    "DEFAULT_RATING",
    "MIN_RATING",
    "MAX_RATING",
]
