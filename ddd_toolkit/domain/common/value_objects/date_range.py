"""
DateRange value object.

An inclusive range of calendar days.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Self

from ..exceptions import ValidationError
from ..value_object import ValueObject


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Inclusive date range.

    Business Rules:
    - start must not be after end
    - a single day is a valid range (duration 0 days)
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if not isinstance(self.start, date) or not isinstance(self.end, date):
            raise ValidationError("DateRange bounds must be dates")
        # datetime is a date subclass; keep only the calendar day
        if isinstance(self.start, datetime):
            object.__setattr__(self, "start", self.start.date())
        if isinstance(self.end, datetime):
            object.__setattr__(self, "end", self.end.date())
        if self.start > self.end:
            raise ValidationError(
                "Start date must be before or equal to end date",
                value=f"{self.start.isoformat()}..{self.end.isoformat()}",
            )

    def __str__(self) -> str:
        return (
            f"{self.start.isoformat()} to {self.end.isoformat()} "
            f"({self.duration_in_days()} days)"
        )

    @classmethod
    def from_strings(cls, start: str, end: str) -> Self:
        try:
            return cls(date.fromisoformat(start), date.fromisoformat(end))
        except (TypeError, ValueError) as err:
            raise ValidationError("Invalid date format provided") from err

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> Self:
        if "start_date" not in data or "end_date" not in data:
            raise ValidationError("Date range must contain start_date and end_date")
        return cls.from_strings(data["start_date"], data["end_date"])

    @classmethod
    def single_day(cls, day: date) -> Self:
        return cls(day, day)

    @classmethod
    def last_n_days(cls, days: int, today: date | None = None) -> Self:
        if days < 1:
            raise ValidationError("Number of days must be positive", value=days)
        end = today or datetime.now(UTC).date()
        return cls(end - timedelta(days=days - 1), end)

    def duration_in_days(self) -> int:
        return (self.end - self.start).days

    def contains(self, day: date) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        return self.start <= day <= self.end

    def overlaps(self, other: "DateRange") -> bool:
        return self.start <= other.end and other.start <= self.end

    def previous_period(self) -> "DateRange":
        """Range of the same length that ends the day before this one starts."""
        length = self.duration_in_days()
        end = self.start - timedelta(days=1)
        return DateRange(end - timedelta(days=length), end)

    def to_primitive(self) -> dict[str, str]:
        return {"start_date": self.start.isoformat(), "end_date": self.end.isoformat()}
