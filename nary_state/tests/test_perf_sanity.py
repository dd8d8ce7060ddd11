# nary_state/tests/test_perf_sanity.py
import time
import numpy as np
from nary_state.state import NAryState
from nary_state.units import fixed_vector

Vec6 = fixed_vector("Vec6", 6)

def build_units(n):
    return [Vec6(np.full(6, float(i))) for i in range(n)]

def test_append_and_extend_agree_and_time():
    units = build_units(2000)

    t0 = time.perf_counter()
    a = NAryState(Vec6)
    for u in units:
        a.append(u)
    t1 = time.perf_counter() - t0

    t0 = time.perf_counter()
    b = NAryState(Vec6)
    b.extend(units)
    t2 = time.perf_counter() - t0

    # correctness
    assert a == b
    assert a.count() == 2000 and a.size() == 12000
    # sanity: both timings are positive
    assert t1 > 0 and t2 > 0
    # one reallocation should never lose badly to one per unit
    assert t2 < 5.0 * t1
