# nary_state/bench.py
import argparse, csv, os, socket, subprocess, time, platform
from datetime import datetime
import numpy as np
from .state import NAryState
from .units import fixed_vector

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

def method_dir(method):
    path = os.path.join(DATA_DIR, method)
    os.makedirs(path, exist_ok=True)
    return path

# ---------------------------------------------------------------------

def meta_row():
    commit = ""
    try:
        commit = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                         stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        pass
    return {
        "hostname": socket.gethostname(),
        "commit": commit,
        "dtype": "float64",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
        "machine": platform.machine(),
    }

HEADER = ["count","unit_size","method","threads","wall_ms","hostname","commit","dtype","timestamp"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    m = meta_row()
    row = dict(row, hostname=m["hostname"], commit=m["commit"], dtype=m["dtype"], timestamp=m["timestamp"])
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

# ---------------------------------------------------------------------

def random_units(unit_type, count, seed=0):
    rng = np.random.default_rng(seed)
    return [unit_type(rng.standard_normal(unit_type.SIZE)) for _ in range(count)]

def time_fill(unit_type, units, method):
    st = NAryState(unit_type)
    t0 = time.perf_counter()
    if method == "append":
        for u in units:
            st.append(u)
    else:
        st.extend(units)
    wall = (time.perf_counter() - t0) * 1e3  # ms
    assert st.count() == len(units)
    return wall

def time_bulk(st, backend, threads=None):
    idx = np.arange(st.count())[::-1]
    t0 = time.perf_counter()
    vals = st.take(idx, backend=backend, num_threads=threads)
    st.put(idx, vals * 2.0, backend=backend, num_threads=threads)
    return (time.perf_counter() - t0) * 1e3

def numba_max_threads():
    try:
        from .apply_numba import max_threads
        return max_threads()
    except ImportError:
        return os.cpu_count() or 1

# ---------------------------------------------------------------------
# individual experiments

def bench_fill(counts, unit_size, method, out_path):
    print(f"[run] Fill scaling ({method}) → {out_path}")
    new_csv(out_path)
    unit_type = fixed_vector("BenchUnit", unit_size)
    for n in counts:
        units = random_units(unit_type, n, seed=42)
        wall = time_fill(unit_type, units, method)
        write_row(out_path, {
            "count": n, "unit_size": unit_size, "method": method, "threads": 0, "wall_ms": f"{wall:.3f}",
        })
        print(f"  count={n}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_backends(count, unit_size, threads_list, out_path):
    print(f"[run] take/put serial vs numba → {out_path}")
    new_csv(out_path)
    from .apply_numba import set_threads
    unit_type = fixed_vector("BenchUnit", unit_size)
    st = NAryState(unit_type)
    st.extend(random_units(unit_type, count, seed=123))

    t_serial = time_bulk(st, "serial")
    write_row(out_path, {
        "count": count, "unit_size": unit_size, "method": "serial", "threads": 0, "wall_ms": f"{t_serial:.3f}",
    })
    print(f"  serial  wall={t_serial:.2f} ms")

    pool = numba_max_threads()
    time_bulk(st, "numba", threads=1)   # warmup / JIT
    for t in threads_list:
        tt = min(int(t), pool)
        if tt != t:
            print(f"  requested t={t} > pool={pool}; using t={tt}")
        set_threads(tt)
        wall = time_bulk(st, "numba", threads=tt)
        write_row(out_path, {
            "count": count, "unit_size": unit_size, "method": "numba", "threads": tt, "wall_ms": f"{wall:.3f}",
        })
        print(f"  numba t={tt}  wall={wall:.2f} ms  speedup={t_serial / wall if wall > 0 else float('nan'):.2f}×")
    print("✓ done.\n")

# ---------------------------------------------------------------------
def main():
    p = argparse.ArgumentParser(description="nary_state benchmarks → data/<method>/*.csv")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_fill = sub.add_parser("fill")
    p_fill.add_argument("--counts", type=str, default="100,500,1000,5000,10000")
    p_fill.add_argument("--unit-size", type=int, default=6)
    p_fill.add_argument("--method", type=str, default="append", choices=["append","extend"])

    p_back = sub.add_parser("backends")
    p_back.add_argument("--count", type=int, default=200_000)
    p_back.add_argument("--unit-size", type=int, default=6)
    p_back.add_argument("--threads", type=str, default="1,2,4,8")

    args = p.parse_args()

    if args.cmd == "fill":
        counts = [int(x) for x in args.counts.split(",")]
        out_path = os.path.join(method_dir(args.method), "fill.csv")
        bench_fill(counts, args.unit_size, args.method, out_path)

    elif args.cmd == "backends":
        ts = [int(x) for x in args.threads.split(",")]
        out_path = os.path.join(method_dir("numba"), "backends.csv")
        bench_backends(args.count, args.unit_size, ts, out_path)

if __name__ == "__main__":
    main()
