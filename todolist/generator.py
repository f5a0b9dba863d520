"""Sources of the current time."""

from __future__ import annotations

import datetime as dt
from abc import ABC, abstractmethod


class TimeGenerator(ABC):
    """Produces timestamps for records."""

    @abstractmethod
    def new_utc_date_time(self) -> dt.datetime:
        """Return the current instant as a timezone-aware UTC datetime."""

    def new_utc_primitive_date_time(self) -> dt.datetime:
        """Return the current UTC instant without timezone information."""
        return self.new_utc_date_time().replace(tzinfo=None)


class DefaultTimeGenerator(TimeGenerator):
    """Reads the system clock, truncated to millisecond precision."""

    def new_utc_date_time(self) -> dt.datetime:
        now = dt.datetime.now(dt.timezone.utc)
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DefaultTimeGenerator)

    def __hash__(self) -> int:
        return hash(DefaultTimeGenerator)

    def __repr__(self) -> str:
        return "DefaultTimeGenerator()"