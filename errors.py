"""Error types raised by the ledger.

Validation errors mean the caller supplied bad input and nothing was written.
StorageUnavailableError means the database itself could not be used.
"""


class LedgerError(Exception):
    """Base exception for ledger operations."""

    pass


class ValidationError(LedgerError):
    """Input was rejected before any write happened."""

    pass


class EmptyNameError(ValidationError):
    """Category name is empty or only whitespace."""

    pass


class DuplicateNameError(ValidationError):
    """A category with the same name already exists."""

    pass


class InvalidAmountError(ValidationError):
    """Amount is not a finite value with at most two decimal places."""

    pass


class InvalidDateError(ValidationError):
    """Date (or year-month) could not be parsed as a calendar date."""

    pass


class UnknownCategoryError(ValidationError):
    """Referenced category does not exist."""

    pass


class InvalidLimitError(ValidationError):
    """Listing limit is not a positive integer."""

    pass


class NotFoundError(LedgerError):
    """Entity not found in storage."""

    pass


class CategoryInUseError(LedgerError):
    """Category is still referenced by at least one transaction."""

    pass


class StorageUnavailableError(LedgerError):
    """Could not use the storage backend."""

    pass
