# nary_state/apply_numba.py
import numpy as np
from numba import config, njit, prange, set_num_threads, get_num_threads

# ---------- low-level kernels (Numba JIT) ----------

@njit(parallel=True)
def _take_kernel(flat, unit_size, indices, out):
    for j in prange(indices.shape[0]):
        row0 = indices[j] * unit_size
        for r in range(unit_size):
            out[j, r] = flat[row0 + r]

@njit(parallel=True)
def _put_kernel(flat, unit_size, indices, values):
    # indices are unique, so every j owns a disjoint block
    for j in prange(indices.shape[0]):
        row0 = indices[j] * unit_size
        for r in range(unit_size):
            flat[row0 + r] = values[j, r]

# ---------- user-facing helpers ----------

def set_threads(n: int):
    # numba rejects counts above its pool size
    set_num_threads(max(1, min(int(n), config.NUMBA_NUM_THREADS)))

def max_threads() -> int:
    return config.NUMBA_NUM_THREADS

def get_threads() -> int:
    return get_num_threads()

def take_units(flat: np.ndarray, unit_size: int, indices: np.ndarray) -> np.ndarray:
    out = np.empty((indices.shape[0], unit_size), dtype=flat.dtype)
    _take_kernel(flat, unit_size, indices.astype(np.int64), out)
    return out

def put_units(flat: np.ndarray, unit_size: int, indices: np.ndarray, values: np.ndarray):
    assert values.shape == (indices.shape[0], unit_size)
    _put_kernel(flat, unit_size, indices.astype(np.int64), values.astype(flat.dtype))
