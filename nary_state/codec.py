# nary_state/codec.py
"""Unit size resolution and the row <-> unit-count mapping.

A null unit (zero rows) has no meaningful count: the mapping reports it as
``UNCOUNTED``, which compares and converts like the integer -1.
"""
from dataclasses import dataclass
from typing import Union

from .errors import NonMultipleRowCountError, NegativeCountForNonNullUnitError


@dataclass(frozen=True)
class Counted:
    n: int

    def __int__(self):
        return self.n


@dataclass(frozen=True)
class Uncounted:
    def __int__(self):
        return -1


UNCOUNTED = Uncounted()

UnitCount = Union[Counted, Uncounted]


def unit_size(unit_type) -> int:
    """Row count of ``unit_type``, read off a default-constructed instance."""
    return int(unit_type().size())


def unit_count_from_rows(rows: int, unit_size: int) -> UnitCount:
    """How many units a flat vector of ``rows`` rows decodes to.

    Raises NonMultipleRowCountError if the unit is non-null and ``rows`` is
    not a multiple of ``unit_size``.
    """
    if unit_size > 0:
        if rows % unit_size != 0:
            raise NonMultipleRowCountError(rows, unit_size)
        return Counted(rows // unit_size)
    return UNCOUNTED


def rows_from_unit_count(count: Union[int, UnitCount], unit_size: int) -> int:
    """How many rows ``count`` units occupy.

    A negative count (or UNCOUNTED) maps to 0 rows, but only for a null unit;
    otherwise NegativeCountForNonNullUnitError is raised.
    """
    count = int(count)
    if count >= 0:
        return count * unit_size
    if unit_size != 0:
        raise NegativeCountForNonNullUnitError(count, unit_size)
    return 0
