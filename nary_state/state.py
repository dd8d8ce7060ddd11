# nary_state/state.py
import operator
import numpy as np
from typing import Iterable, Iterator, Optional, Type

from . import codec
from .codec import Counted, UNCOUNTED, UnitCount
from .errors import UnitIndexError
from .units import UnitVector


def _as_flat(flat, dtype) -> np.ndarray:
    """Copy ``flat`` into a fresh 1-D array; an (n, 1) column is accepted."""
    arr = np.array(flat, dtype=dtype)
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr.reshape(-1)
    if arr.ndim != 1:
        raise ValueError(f"expected a flat column vector, got shape {arr.shape}")
    return arr


class NAryState:
    """A vector made of zero or more units of one fixed-size unit type.

    All units live back to back in a single flat array (``as_numpy()``), so
    unit ``i`` occupies rows ``[i*unit_size, (i+1)*unit_size)``. Units are
    built lazily on ``get`` and flattened on ``append``/``set``.

    If the unit type has zero rows (a null unit) the count is indeterminate:
    ``count()`` is always -1, ``append`` does nothing and indices are never
    bound-checked.
    """

    def __init__(self, unit_type: Type[UnitVector], dtype=np.float64):
        self.unit_type = unit_type
        self.dtype = np.dtype(dtype)
        # with_count fills with NaN
        if not np.issubdtype(self.dtype, np.inexact):
            raise ValueError(f"dtype must be float or complex, got {self.dtype}")
        self._unit_size = codec.unit_size(unit_type)
        self._count: UnitCount = codec.unit_count_from_rows(0, self._unit_size)
        self._combined = np.empty(0, dtype=self.dtype)

    @staticmethod
    def with_count(unit_type: Type[UnitVector], count: int, dtype=np.float64) -> "NAryState":
        """Room for ``count`` units, every scalar NaN until written."""
        st = NAryState(unit_type, dtype=dtype)
        rows = st.rows_from_unit_count(operator.index(count))
        st._combined = np.full(rows, np.nan, dtype=st.dtype)
        # round trip forces UNCOUNTED for a null unit whatever was asked
        st._count = st.unit_count_from_rows(rows)
        return st

    @staticmethod
    def from_numpy(unit_type: Type[UnitVector], flat, dtype=np.float64) -> "NAryState":
        st = NAryState(unit_type, dtype=dtype)
        st.assign(flat)
        return st

    # ---------- row/count codec ----------

    @property
    def unit_size(self) -> int:
        return self._unit_size

    def unit_count_from_rows(self, rows: int) -> UnitCount:
        return codec.unit_count_from_rows(rows, self._unit_size)

    def rows_from_unit_count(self, count) -> int:
        return codec.rows_from_unit_count(count, self._unit_size)

    # ---------- vector concept ----------

    def count(self) -> int:
        """Number of units held, or -1 for a null unit."""
        return int(self._count)

    def size(self) -> int:
        """Total rows of the flat representation (not the unit count)."""
        return int(self._combined.shape[0])

    def as_numpy(self) -> np.ndarray:
        return self._combined.copy()

    def assign(self, flat) -> "NAryState":
        """Replace all storage with a copy of ``flat`` and recount."""
        arr = _as_flat(flat, self.dtype)
        count = self.unit_count_from_rows(arr.shape[0])
        self._combined = arr
        self._count = count
        return self

    # ---------- unit access ----------

    def _check_index(self, i: int) -> int:
        i = operator.index(i)
        if self._unit_size == 0:
            return i
        if not (0 <= i < self.count()):
            raise UnitIndexError(i, self.count())
        return i

    def _block(self, i: int) -> slice:
        row0 = i * self._unit_size
        return slice(row0, row0 + self._unit_size)

    def _flatten(self, unit) -> np.ndarray:
        vals = np.asarray(unit.as_numpy(), dtype=self.dtype).reshape(-1)
        if vals.shape[0] != self._unit_size:
            raise ValueError(
                f"unit flattens to {vals.shape[0]} rows, expected {self._unit_size}")
        return vals

    def append(self, unit):
        if self._unit_size == 0:
            assert self._count is UNCOUNTED
            return
        vals = self._flatten(unit)
        old = self.size()
        # grow by one unit, keeping the existing rows
        grown = np.empty(old + self._unit_size, dtype=self.dtype)
        grown[:old] = self._combined
        grown[old:] = vals
        self._combined = grown
        self._count = Counted(self._count.n + 1)

    def extend(self, units: Iterable):
        """Append every unit of ``units`` in order with one reallocation."""
        if self._unit_size == 0:
            return
        blocks = [self._flatten(u) for u in units]
        if not blocks:
            return
        self._combined = np.concatenate([self._combined] + blocks)
        self._count = Counted(self._count.n + len(blocks))

    def get(self, i: int):
        """A new unit built from block ``i``.

        Raises UnitIndexError if the unit is non-null and ``i`` is not below
        ``count()``.
        """
        i = self._check_index(i)
        return self.unit_type(self._combined[self._block(i)].copy())

    def set(self, i: int, unit):
        i = self._check_index(i)
        vals = self._flatten(unit)
        self._combined[self._block(i)] = vals

    def units(self) -> Iterator:
        for i in range(max(self.count(), 0)):
            yield self.get(i)

    __iter__ = units

    # ---------- bulk access ----------

    def _check_indices(self, indices) -> np.ndarray:
        idx = np.asarray(indices).reshape(-1)
        if idx.size and not np.issubdtype(idx.dtype, np.integer):
            raise TypeError(f"unit indices must be integers, got {idx.dtype}")
        idx = idx.astype(np.int64)
        if self._unit_size == 0:
            return idx
        for i in idx:
            self._check_index(int(i))
        return idx

    def take(self, indices, backend: str = "serial", num_threads: Optional[int] = None) -> np.ndarray:
        """Units ``indices`` stacked as a (len(indices), unit_size) array."""
        idx = self._check_indices(indices)
        ap = _backend(backend, num_threads)
        return ap.take_units(self._combined, self._unit_size, idx)

    def put(self, indices, values, backend: str = "serial", num_threads: Optional[int] = None):
        """Write row ``j`` of ``values`` into unit ``indices[j]``; indices must be unique."""
        idx = self._check_indices(indices)
        if self._unit_size > 0 and np.unique(idx).shape[0] != idx.shape[0]:
            raise ValueError("put indices must be unique")
        vals = np.asarray(values, dtype=self.dtype)
        if vals.shape != (idx.shape[0], self._unit_size):
            raise ValueError(
                f"values must have shape {(idx.shape[0], self._unit_size)}, got {vals.shape}")
        ap = _backend(backend, num_threads)
        ap.put_units(self._combined, self._unit_size, idx, vals)

    # ---------- value semantics ----------

    def copy(self) -> "NAryState":
        st = NAryState(self.unit_type, dtype=self.dtype)
        st._combined = self._combined.copy()
        st._count = self._count
        return st

    def __eq__(self, other):
        if not isinstance(other, NAryState):
            return NotImplemented
        return (self.unit_type is other.unit_type
                and self.dtype == other.dtype
                and bool(np.array_equal(self._combined, other._combined)))

    def __repr__(self):
        return (f"NAryState({getattr(self.unit_type, '__name__', self.unit_type)}, "
                f"count={self.count()}, size={self.size()})")


def to_numpy(vec: NAryState) -> np.ndarray:
    return vec.as_numpy()


def _backend(backend: str, num_threads: Optional[int]):
    if backend == "serial":
        from . import apply_serial as ap
    elif backend == "numba":
        try:
            from . import apply_numba as ap
        except Exception as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
        if num_threads is not None:
            ap.set_threads(int(num_threads))
    else:
        raise NotImplementedError(f"Unknown backend: {backend}")
    return ap
