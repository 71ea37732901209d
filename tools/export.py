"""CSV export of transaction listings."""

from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from models.transaction import Transaction
from parsing import format_cents

CSV_HEADER = "ID,Date,Amount,Description,Category"

# Characters that force a CSV field to be quoted
_SPECIAL_CHARS = (",", '"', "\n", "\r")


def quote_field(value: str) -> str:
    """Wrap a value in double quotes, doubling any quotes inside it."""
    return '"' + value.replace('"', '""') + '"'


def _category_field(name: Optional[str]) -> str:
    if not name:
        return ""
    if any(char in name for char in _SPECIAL_CHARS):
        return quote_field(name)
    return name


def to_csv_text(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions as CSV text.

    Writes one header row, then one row per transaction in the order given:
    ID, ISO date, amount with two decimals, description, category name.
    The description is always quoted; the category only when it has to be.

    Args:
        transactions: Transactions joined with their category names.

    Returns:
        CSV text, every row terminated by a newline.
    """
    lines = [CSV_HEADER]
    for t in transactions:
        lines.append(
            ",".join(
                [
                    str(t.id),
                    t.transaction_date.isoformat(),
                    format_cents(t.amount_cents),
                    quote_field(t.description or ""),
                    _category_field(t.category_name),
                ]
            )
        )
    return "\n".join(lines) + "\n"


def export_filename(today: Optional[date] = None) -> str:
    """Get the export file name for a day, e.g. expenses_2025-01-31.csv."""
    today = today or date.today()
    return f"expenses_{today.isoformat()}.csv"


def write_export(text: str, directory: Path, today: Optional[date] = None) -> Path:
    """Write export text to a dated CSV file.

    Args:
        text: CSV text produced by to_csv_text.
        directory: Directory to write into (created if missing).
        today: Date used for the file name (defaults to today).

    Returns:
        Path of the written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    output_path = directory / export_filename(today)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(text)

    return output_path
