# nary_state/tests/test_cross_backend.py
import numpy as np
import pytest
from nary_state.state import NAryState
from nary_state.units import fixed_vector
from nary_state.errors import UnitIndexError

Vec3 = fixed_vector("Vec3", 3)

def filled(n, seed=0):
    rng = np.random.default_rng(seed)
    return NAryState.from_numpy(Vec3, rng.standard_normal(3 * n))

def test_take_matches_get():
    st = filled(6)
    idx = [4, 0, 5]
    out = st.take(idx)
    assert out.shape == (3, 3)
    for j, i in enumerate(idx):
        assert np.array_equal(out[j], st.get(i).as_numpy())

def test_put_matches_set():
    a = filled(5, seed=1)
    b = a.copy()
    vals = np.arange(6.0).reshape(2, 3)
    a.put([3, 1], vals)
    b.set(3, Vec3(vals[0]))
    b.set(1, Vec3(vals[1]))
    assert a == b

def test_put_validates_before_writing():
    st = filled(3)
    before = st.as_numpy()
    with pytest.raises(UnitIndexError):
        st.put([0, 3], np.zeros((2, 3)))
    with pytest.raises(ValueError):
        st.put([1, 1], np.zeros((2, 3)))
    with pytest.raises(ValueError):
        st.put([1], np.zeros((1, 2)))
    assert np.array_equal(st.as_numpy(), before)

def test_unknown_backend():
    st = filled(2)
    with pytest.raises(NotImplementedError):
        st.take([0], backend="cupy")

def test_serial_vs_numba_take():
    st = filled(50, seed=3)
    idx = np.random.default_rng(4).permutation(50)
    s = st.take(idx, backend="serial")
    n = st.take(idx, backend="numba", num_threads=4)
    assert np.array_equal(s, n)

def test_serial_vs_numba_put():
    rng = np.random.default_rng(123)
    for count in (1, 7, 64):
        a = filled(count, seed=count)
        b = a.copy()
        idx = rng.permutation(count)[: max(1, count // 2)]
        vals = rng.standard_normal((idx.shape[0], 3))
        a.put(idx, vals, backend="serial")
        b.put(idx, vals, backend="numba", num_threads=8)
        assert np.allclose(a.as_numpy(), b.as_numpy(), atol=0, rtol=0)

def test_numba_threads_clamped_to_pool():
    from nary_state.apply_numba import max_threads, get_threads
    st = filled(10, seed=5)
    out = st.take(np.arange(10), backend="numba", num_threads=max_threads() + 64)
    assert np.array_equal(out, st.take(np.arange(10)))
    assert get_threads() == max_threads()
    st.put([0], np.ones((1, 3)), backend="numba", num_threads=0)
    assert get_threads() == 1
    assert np.array_equal(st.get(0).as_numpy(), np.ones(3))
