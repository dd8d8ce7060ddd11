# nary_state/apply_serial.py
import numpy as np


def take_units(flat: np.ndarray, unit_size: int, indices: np.ndarray) -> np.ndarray:
    """Gather units ``indices`` of ``flat`` into a (len(indices), unit_size) array."""
    out = np.empty((indices.shape[0], unit_size), dtype=flat.dtype)
    for j in range(indices.shape[0]):
        row0 = indices[j] * unit_size
        for r in range(unit_size):
            out[j, r] = flat[row0 + r]
    return out


def put_units(flat: np.ndarray, unit_size: int, indices: np.ndarray, values: np.ndarray):
    """Scatter rows of ``values`` into units ``indices`` of ``flat`` in place."""
    assert values.shape == (indices.shape[0], unit_size)
    for j in range(indices.shape[0]):
        row0 = indices[j] * unit_size
        for r in range(unit_size):
            flat[row0 + r] = values[j, r]
