#!/usr/bin/env python3
"""
Date Primitives

Immutable date wrapper and month ranges used to select which Lunch Money
transactions are reviewed. Day keys are always ISO formatted so that
lexicographic and chronological order agree.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timezone


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def day_key(self) -> str:
        """Key used to group transactions by calendar day."""
        return self.date.isoformat()

    def month_key(self) -> str:
        """Format as YYYY-MM."""
        return self.date.strftime("%Y-%m")

    def __str__(self) -> str:
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp as returned by Lunch Money.

    Naive timestamps are assumed to be UTC so that all parsed values
    are mutually comparable.

    Args:
        value: Timestamp string such as "2024-07-03T17:21:05.312Z"

    Returns:
        Timezone-aware datetime, or None if value is empty
    """
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class MonthRange:
    """
    First and last day of a calendar month.

    This is the date range the review session fetches transactions for.
    """

    start: date
    end: date

    @classmethod
    def for_month(cls, day: date) -> "MonthRange":
        """Build the range of the month containing day."""
        last_day = calendar.monthrange(day.year, day.month)[1]
        return cls(start=day.replace(day=1), end=day.replace(day=last_day))

    @classmethod
    def from_string(cls, value: str) -> "MonthRange":
        """
        Parse a month selection.

        Args:
            value: "YYYY-MM" or any "YYYY-MM-DD" inside the month

        Returns:
            MonthRange for that month

        Raises:
            ValueError: If value is not a recognised month
        """
        for fmt in ("%Y-%m", "%Y-%m-%d"):
            try:
                return cls.for_month(datetime.strptime(value, fmt).date())
            except ValueError:
                continue
        raise ValueError(f"Invalid month: {value!r} (expected YYYY-MM)")

    @classmethod
    def current(cls) -> "MonthRange":
        """Range of the current month."""
        return cls.for_month(date.today())

    @property
    def key(self) -> str:
        """Month key, e.g. 2024-07."""
        return self.start.strftime("%Y-%m")

    @property
    def title(self) -> str:
        """Human readable title, e.g. Jul 2024."""
        return self.start.strftime("%b %Y")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


def months_of_year(today: date | None = None) -> list[MonthRange]:
    """
    List the selectable months, newest first.

    Covers January of the current year through the current month.

    Args:
        today: Reference date (default: today)

    Returns:
        List of MonthRange objects in descending order
    """
    if today is None:
        today = date.today()
    return [MonthRange.for_month(date(today.year, month, 1)) for month in range(today.month, 0, -1)]
