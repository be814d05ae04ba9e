"""Policy for how long an approved access request stays valid."""

from enum import StrEnum


class GrantWindowMode(StrEnum):
    """REVIEW_DEADLINE: grant expires at the request's review deadline.
    FIXED: grant expires a fixed window after the review.
    """

    REVIEW_DEADLINE = "review_deadline"
    FIXED = "fixed"
