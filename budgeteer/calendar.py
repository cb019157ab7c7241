"""
Local Calendar

Answers "which calendar month / day does this timestamp fall in" for one
explicit, fixed timezone.

DESIGN DECISION: The zone is pinned when the calendar is created and never
re-read afterwards. A total and a category breakdown computed moments apart
must agree on month boundaries even if the device changes zone in between.
"""

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo
import calendar as _calendar

import tzlocal

from budgeteer.config import get_settings


DateLike = Union[datetime, date]


class LocalCalendar:
    """
    Month and day bucketing in a single pinned timezone.

    Aware datetimes are converted into the pinned zone.
    Naive datetimes are taken as wall-clock time in the pinned zone.
    Plain dates are taken as local midnight.
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        # No zone given: pin the device zone (DST-aware, not its current offset)
        self._tz = tz if tz is not None else tzlocal.get_localzone()

    @classmethod
    def from_settings(cls) -> "LocalCalendar":
        """Build the session calendar from BUDGETEER_TIMEZONE (or device zone)."""
        name = get_settings().timezone
        return cls(ZoneInfo(name) if name else None)

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def localize(self, value: DateLike) -> datetime:
        """Express a date or datetime as an aware datetime in the pinned zone."""
        if not isinstance(value, datetime):
            return datetime.combine(value, time.min, tzinfo=self._tz)
        if value.tzinfo is None:
            return value.replace(tzinfo=self._tz)
        return value.astimezone(self._tz)

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def month_key(self, value: DateLike) -> tuple[int, int]:
        """(year, month) of the value in local time."""
        local = self.localize(value)
        return local.year, local.month

    def same_month(self, a: DateLike, b: DateLike) -> bool:
        return self.month_key(a) == self.month_key(b)

    def start_of_day(self, value: DateLike) -> datetime:
        """Local midnight of the day containing value."""
        local = self.localize(value)
        return datetime.combine(local.date(), time.min, tzinfo=self._tz)

    def days_in_month(self, value: DateLike) -> int:
        year, month = self.month_key(value)
        return _calendar.monthrange(year, month)[1]

    def days_between(self, earlier: DateLike, later: DateLike) -> int:
        """Whole local calendar days from earlier to later (negative if reversed)."""
        delta: timedelta = self.localize(later).date() - self.localize(earlier).date()
        return delta.days
