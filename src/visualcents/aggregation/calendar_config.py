"""Explicit calendar used for every date-bucketing decision.

Which day a transaction belongs to depends on the time zone, and which day a
week starts on depends on the locale. Both are carried by ``CalendarConfig`` so
results never depend on the machine the code runs on.
"""

from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from visualcents.config import Settings
from visualcents.exceptions import ConfigurationError, InvalidPeriodError


class Granularity(str, Enum):
    """Calendar unit used to bucket transactions."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class CalendarConfig:
    """Time zone and first weekday used to normalize timestamps."""

    def __init__(self, timezone: str = "Asia/Shanghai", first_weekday: int = 0) -> None:
        """Create a calendar.

        Args:
            timezone: IANA time zone name.
            first_weekday: First day of the week, 0=Monday ... 6=Sunday.

        Raises:
            ConfigurationError: If the time zone is unknown or the weekday is out of range.
        """

        if not 0 <= first_weekday <= 6:
            raise ConfigurationError(f"first_weekday must be in 0..6, got {first_weekday}")

        try:
            self._tz = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown time zone: {timezone!r}") from exc

        self.timezone = timezone
        self.first_weekday = first_weekday

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> CalendarConfig:
        """Build a calendar from application settings."""
        from visualcents.config import get_settings

        settings = settings or get_settings()
        return cls(timezone=settings.timezone, first_weekday=settings.first_weekday)

    @property
    def tzinfo(self) -> ZoneInfo:
        return self._tz

    def __repr__(self) -> str:
        return f"CalendarConfig(timezone={self.timezone!r}, first_weekday={self.first_weekday})"

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def today(self) -> date:
        return self.now().date()

    def localize(self, value: datetime) -> datetime:
        """Express a timestamp in this calendar's zone.

        Naive timestamps are taken to already be local wall-clock time.
        """
        if value.tzinfo is None:
            return value.replace(tzinfo=self._tz)
        return value.astimezone(self._tz)

    def local_date(self, value: datetime | date) -> date:
        if isinstance(value, datetime):
            return self.localize(value).date()
        return value

    def start_of(self, day: date) -> datetime:
        """First instant of a calendar day."""
        return datetime.combine(day, time(), tzinfo=self._tz)

    def start_of_day(self, value: datetime) -> datetime:
        return self.start_of(self.local_date(value))

    def week_start(self, day: date) -> date:
        """Date of the first day of the week containing ``day``."""
        offset = (day.weekday() - self.first_weekday) % 7
        return day - timedelta(days=offset)

    def period_start(self, value: datetime | date, granularity: Granularity) -> datetime:
        """Start instant of the period of the given granularity containing ``value``."""
        day = self.local_date(value)
        if granularity == Granularity.DAY:
            first = day
        elif granularity == Granularity.WEEK:
            first = self.week_start(day)
        elif granularity == Granularity.MONTH:
            first = day.replace(day=1)
        else:
            first = day.replace(month=1, day=1)
        return self.start_of(first)

    def period_end(self, start: datetime, granularity: Granularity) -> datetime:
        """Exclusive end of the period beginning at ``start``.

        Raises:
            InvalidPeriodError: If the period ends past the last representable date.
        """
        day = self.local_date(start)
        try:
            if granularity == Granularity.DAY:
                nxt = day + timedelta(days=1)
            elif granularity == Granularity.WEEK:
                nxt = day + timedelta(days=7)
            elif granularity == Granularity.MONTH:
                nxt = date(day.year + 1, 1, 1) if day.month == 12 else date(day.year, day.month + 1, 1)
            else:
                nxt = date(day.year + 1, 1, 1)
        except (OverflowError, ValueError) as exc:
            raise InvalidPeriodError(f"no {granularity.value} period after {day.isoformat()}") from exc
        return self.start_of(nxt)

    def days_in_month(self, year: int, month: int) -> int:
        """Number of days in a month.

        Raises:
            InvalidPeriodError: If ``year``/``month`` do not name a calendar month.
        """
        if not 1 <= month <= 12:
            raise InvalidPeriodError(f"month must be in 1..12, got {month}")
        # The last month needs a following day to close its final bucket.
        if not MINYEAR <= year < MAXYEAR and not (year == MAXYEAR and month < 12):
            raise InvalidPeriodError(f"{year}-{month:02d} is outside the supported calendar range")
        return calendar.monthrange(year, month)[1]
