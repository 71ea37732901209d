"""Parsing of raw amount, date and month inputs.

Front ends hand the ledger raw strings; these helpers turn them into the
typed values the stores persist, or raise a ValidationError subclass.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from errors import (
    InvalidAmountError,
    InvalidDateError,
    InvalidLimitError,
    UnknownCategoryError,
)
from models.period import YearMonth

# SQLite INTEGER is a signed 64-bit value
_MAX_INTEGER = 2**63 - 1
_MIN_INTEGER = -(2**63)
_MAX_CENTS = _MAX_INTEGER


def parse_amount(value: Union[Decimal, int, str]) -> int:
    """Convert an amount to integer cents.

    Args:
        value: Decimal, int, or string such as "12.50" or "-3".

    Returns:
        Signed amount in cents.

    Raises:
        InvalidAmountError: If the value is not a finite number with at most
            two decimal places.
    """
    if isinstance(value, bool) or isinstance(value, float):
        # floats cannot carry exact cents
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidAmountError("Amount cannot be empty")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise InvalidAmountError(f"Invalid amount: {value!r}") from None
    elif isinstance(value, (Decimal, int)):
        amount = Decimal(value)
    else:
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite: {value!r}")

    try:
        cents = amount.scaleb(2)
    except ArithmeticError:
        raise InvalidAmountError(f"Amount out of range: {value!r}") from None
    if cents != cents.to_integral_value():
        raise InvalidAmountError(f"Amount has more than two decimal places: {value!r}")

    cents = int(cents)
    # values past this bound were rounded by the decimal context
    if abs(cents) > _MAX_CENTS:
        raise InvalidAmountError(f"Amount out of range: {value!r}")
    return cents


def cents_to_decimal(cents: int) -> Decimal:
    """Convert integer cents to a Decimal with exactly two places."""
    return Decimal(cents).scaleb(-2)


def format_cents(cents: int) -> str:
    """Format integer cents as a fixed two-decimal string (e.g. "-12.50")."""
    return f"{cents_to_decimal(cents):.2f}"


def parse_date(value: Union[date, str]) -> date:
    """Parse a calendar date.

    Args:
        value: A date (datetimes are truncated to their date) or an ISO
            "YYYY-MM-DD" string.

    Returns:
        The parsed date.

    Raises:
        InvalidDateError: If the value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Invalid date: {value!r}")

    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def parse_category_id(value: Union[int, str, None]) -> Optional[int]:
    """Parse a category reference.

    Args:
        value: Category ID as an int or digit string. None or a blank
            string means "no category".

    Returns:
        The category ID, or None.

    Raises:
        UnknownCategoryError: If the value cannot be a category ID.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise UnknownCategoryError(f"Invalid category ID: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isdecimal():
            value = int(text)
    if isinstance(value, int):
        if not is_storable_id(value):
            raise UnknownCategoryError(f"Category with ID {value} not found")
        return value
    raise UnknownCategoryError(f"Invalid category ID: {value!r}")


def is_storable_id(value) -> bool:
    """Check that a row ID fits in a SQLite INTEGER column.

    An ID outside this range cannot name any stored row.
    """
    return isinstance(value, int) and _MIN_INTEGER <= value <= _MAX_INTEGER


def parse_description(value) -> Optional[str]:
    """Normalize a transaction description.

    None stays None (no description); any other value is stored as text.
    """
    if value is None or isinstance(value, str):
        return value
    return str(value)


def parse_limit(value) -> int:
    """Parse a listing limit.

    Raises:
        InvalidLimitError: If the value is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidLimitError(f"Limit must be a positive integer, got {value!r}")
    if not 1 <= value <= _MAX_INTEGER:
        raise InvalidLimitError(f"Limit must be a positive integer, got {value!r}")
    return value


def parse_year_month(value: Union[YearMonth, date, str]) -> YearMonth:
    """Parse a calendar month.

    Args:
        value: A YearMonth, a date (its month is used), or a "YYYY-MM" string.

    Returns:
        The parsed YearMonth.

    Raises:
        InvalidDateError: If the value is not a valid year and month.
    """
    if isinstance(value, YearMonth):
        return value
    if isinstance(value, date):
        return YearMonth(value.year, value.month)
    if not isinstance(value, str):
        raise InvalidDateError(f"Invalid month: {value!r}")

    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError:
        raise InvalidDateError(f"Invalid month {value!r}, expected YYYY-MM") from None
    return YearMonth(parsed.year, parsed.month)
