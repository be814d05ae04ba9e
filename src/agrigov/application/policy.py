"""Access policy - tunables of the workflow and drift rules."""

from dataclasses import dataclass
from datetime import timedelta

from agrigov.domain.value_objects import GrantWindowMode


@dataclass(frozen=True)
class AccessPolicy:
    """Review deadlines, grant window and drift thresholds."""

    standard_review: timedelta = timedelta(hours=24)
    emergency_review: timedelta = timedelta(hours=4)
    grant_window_mode: GrantWindowMode = GrantWindowMode.REVIEW_DEADLINE
    grant_window: timedelta = timedelta(hours=24)
    stale_after: timedelta = timedelta(days=90)
    excessive_factor: float = 1.5

    @classmethod
    def from_settings(cls, settings) -> "AccessPolicy":
        return cls(
            standard_review=timedelta(hours=settings.standard_review_hours),
            emergency_review=timedelta(hours=settings.emergency_review_hours),
            grant_window_mode=GrantWindowMode(settings.grant_window_mode),
            grant_window=timedelta(hours=settings.grant_window_hours),
            stale_after=timedelta(days=settings.stale_after_days),
            excessive_factor=settings.excessive_factor,
        )

    def review_period(self, emergency: bool) -> timedelta:
        return self.emergency_review if emergency else self.standard_review
