"""Clock port - injectable time source."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Returns the current timezone-aware UTC time."""

    def now_utc(self) -> datetime: ...
