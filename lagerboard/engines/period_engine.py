#!filepath: lagerboard/engines/period_engine.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Dict, Optional, Tuple

from lagerboard.utils.datetime_utils import DateTimeUtils


class Period(str, Enum):
    CONFIRMED = "confirmed"
    PREPPED = "prepped"
    ON_LOCATION = "onLocation"
    DELAYED = "delayed"
    TO_BE_INVOICED = "toBeInvoiced"
    TRANSPORT = "transport"

    @property
    def slug(self) -> str:
        """URL segment under /projects/."""
        return _SLUGS[self]

    @classmethod
    def from_slug(cls, slug: str) -> "Period":
        for period, s in _SLUGS.items():
            if s == slug:
                return period
        raise KeyError(slug)


_SLUGS: Dict[Period, str] = {
    Period.CONFIRMED: "confirmed",
    Period.PREPPED: "prepped",
    Period.ON_LOCATION: "onlocation",
    Period.DELAYED: "delayed",
    Period.TO_BE_INVOICED: "tobeinvoiced",
    Period.TRANSPORT: "transports",
}

# (start_offset, end_offset) in days relative to today
PERIOD_OFFSETS: Dict[Period, Tuple[int, int]] = {
    Period.CONFIRMED: (-1, 7),
    Period.PREPPED: (-1, 7),
    Period.ON_LOCATION: (-1, 5),
    Period.TO_BE_INVOICED: (-7, 0),
    Period.DELAYED: (-45, 0),
    Period.TRANSPORT: (-2, 20),
}

# the four panels of the warehouse display, left to right
DISPLAY_PERIODS: Tuple[Period, ...] = (
    Period.CONFIRMED,
    Period.PREPPED,
    Period.ON_LOCATION,
    Period.DELAYED,
)


@dataclass(frozen=True)
class DateWindow:
    """
    Range of calendar dates [start, end], optionally anchored at a time of day.

    With `at` set both bounds sit at that time (start + at, end + at), so an
    end offset of 0 means "up to now". Without it the range covers whole days.
    """
    start: date
    end: date
    at: Optional[time] = None

    def bounds(self) -> Tuple[datetime, datetime]:
        """
        Datetime bounds for SQL BETWEEN.
        """
        if self.at is None:
            return DateTimeUtils.start_of_day(self.start), DateTimeUtils.end_of_day(self.end)
        return datetime.combine(self.start, self.at), datetime.combine(self.end, self.at)

    def __contains__(self, value: date | datetime) -> bool:
        if isinstance(value, datetime):
            start, end = self.bounds()
            return start <= value <= end
        return self.start <= value <= self.end


class PeriodEngine:
    """
    Engine layer (pure logic):
    - no I/O
    - turns a named period into a window relative to `now`
    - a datetime `now` keeps its time of day in both bounds; a plain date
      gives whole days
    """

    def __init__(self, business_days: bool = False):
        self.business_days = business_days

    def window(self, period: Period, now: datetime | date) -> DateWindow:
        start_offset, end_offset = PERIOD_OFFSETS[period]
        if isinstance(now, datetime):
            today, at = now.date(), now.time().replace(microsecond=0)
        else:
            today, at = now, None
        return DateWindow(
            start=self._shift(today, start_offset),
            end=self._shift(today, end_offset),
            at=at,
        )

    def _shift(self, today: date, offset: int) -> date:
        if self.business_days:
            return DateTimeUtils.add_business_days(today, offset)
        return date.fromordinal(today.toordinal() + offset)


def period_window(period: Period, now: datetime | date, *, business_days: bool = False) -> DateWindow:
    return PeriodEngine(business_days=business_days).window(period, now)
