"""Calendar month value used for monthly queries and reports."""

from dataclasses import dataclass
from datetime import date

from dateutil.relativedelta import relativedelta


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month.

    Attributes:
        year: Four-digit year.
        month: Month number (1-12).
    """

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def current(cls) -> "YearMonth":
        today = date.today()
        return cls(today.year, today.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return self.first_day + relativedelta(day=31)

    def next(self) -> "YearMonth":
        following = self.first_day + relativedelta(months=1)
        return YearMonth(following.year, following.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
