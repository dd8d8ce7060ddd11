# nary_state/units.py
import numpy as np
from typing import Protocol, Type, runtime_checkable


@runtime_checkable
class UnitVector(Protocol):
    """What NAryState needs from a unit type.

    ``cls()`` default-constructs, ``cls(block)`` builds a unit from a
    contiguous block of a flat array, ``size()`` is the same for every
    instance of the type and ``as_numpy()`` flattens to ``size()`` scalars.
    """

    def size(self) -> int: ...

    def as_numpy(self) -> np.ndarray: ...


class FixedVector:
    SIZE = 0

    def __init__(self, values=None, dtype=None):
        if values is None:
            self.values = np.zeros(self.SIZE, dtype=np.float64 if dtype is None else dtype)
            return
        arr = np.asarray(values)
        if arr.ndim != 1 or arr.shape[0] != self.SIZE:
            raise ValueError(
                f"{type(self).__name__} needs {self.SIZE} values, got shape {arr.shape}")
        if dtype is None:
            # float and complex blocks keep their scalar type
            dtype = arr.dtype if arr.dtype.kind in "fc" else np.float64
        self.values = np.array(arr, dtype=dtype)

    @property
    def dtype(self):
        return self.values.dtype

    def size(self) -> int:
        return self.SIZE

    def as_numpy(self) -> np.ndarray:
        return self.values.copy()

    def __eq__(self, other):
        if not isinstance(other, FixedVector) or other.SIZE != self.SIZE:
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    def __repr__(self):
        return f"{type(self).__name__}({self.values.tolist()})"


class NullVector(FixedVector):
    """A unit with zero rows; NAryState treats its count as indeterminate."""
    SIZE = 0


def fixed_vector(name: str, size: int) -> Type[FixedVector]:
    if size < 0:
        raise ValueError("size must be >= 0")
    return type(name, (FixedVector,), {"SIZE": int(size)})
