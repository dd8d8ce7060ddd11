# nary_state/errors.py
"""Errors raised by NAryState and the row/count codec.

Every error here signals caller misuse and is raised before any storage is
touched.
"""


class NAryStateError(Exception):
    """Base class for NAryState errors."""


class NAryDomainError(NAryStateError, ValueError):
    """A count or row value outside the codec's domain."""


class NonMultipleRowCountError(NAryDomainError):
    """Raised when a flat length is not a multiple of a non-null unit size."""

    def __init__(self, rows: int, unit_size: int) -> None:
        super().__init__(
            f"Row count {rows} is not a multiple of non-null unit size {unit_size}."
        )
        self.rows = rows
        self.unit_size = unit_size


class NegativeCountForNonNullUnitError(NAryDomainError):
    """Raised when a negative unit count is requested for a non-null unit."""

    def __init__(self, count: int, unit_size: int) -> None:
        super().__init__(
            f"Negative count {count} for non-null unit of size {unit_size}."
        )
        self.count = count
        self.unit_size = unit_size


class UnitIndexError(NAryStateError, IndexError):
    """Raised when a unit index is not below count() for a non-null unit."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Index {index} exceeds unit count() {count}.")
        self.index = index
        self.count = count
