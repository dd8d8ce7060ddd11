# nary_state/plot_results.py
import csv, os
import matplotlib.pyplot as plt
from collections import defaultdict
from statistics import median

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        r = csv.DictReader(f)
        for row in r:
            row["count"]     = int(row["count"])
            row["unit_size"] = int(row["unit_size"])
            row["threads"]   = int(row["threads"])
            row["wall_ms"]   = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by_key(rows, key_fields):
    buckets = defaultdict(list)
    for r in rows:
        key = tuple(r[k] for k in key_fields)
        buckets[key].append(r["wall_ms"])
    agg = []
    for key, vals in buckets.items():
        out = dict(zip(key_fields, key))
        out["wall_ms"] = float(median(vals))
        agg.append(out)
    return agg

def plot_runtime_vs_count(rows, out_dir, tag):
    pts = median_by_key(rows, ["method", "count"])
    if not pts: return
    by_method = defaultdict(list)
    for r in pts:
        by_method[r["method"]].append((r["count"], r["wall_ms"]))
    plt.figure()
    for m, p in by_method.items():
        xs, ys = zip(*sorted(p))
        plt.plot(xs, ys, marker="o", label=m)
    plt.xlabel("Units appended")
    plt.ylabel("Runtime (ms, log scale)")
    plt.xscale("log")
    plt.yscale("log")
    plt.title(f"Fill time vs unit count [{tag}]")
    plt.grid(True, which="both", ls="--", lw=0.5)
    plt.legend()
    plt.savefig(os.path.join(out_dir, f"runtime_vs_count_{tag}.png"), dpi=200)
    plt.close()

def plot_speedup_vs_threads(rows, out_dir, tag):
    serial = [r["wall_ms"] for r in rows if r["method"] == "serial"]
    pts = median_by_key([r for r in rows if r["method"] == "numba"], ["threads"])
    if not serial or not pts: return
    t_serial = median(serial)
    pts = sorted(pts, key=lambda r: r["threads"])
    xs = [r["threads"] for r in pts]
    ys = [t_serial / r["wall_ms"] for r in pts]
    plt.figure()
    plt.plot(xs, ys, marker="o")
    plt.xlabel("Threads")
    plt.ylabel("Speedup over serial")
    plt.title(f"take/put speedup vs threads [{tag}]")
    plt.grid(True)
    plt.savefig(os.path.join(out_dir, f"speedup_vs_threads_{tag}.png"), dpi=200)
    plt.close()


def main():
    csvs = []
    for root, _, files in os.walk(DATA_DIR):
        for f in files:
            if f.endswith(".csv"):
                csvs.append(os.path.join(root, f))

    if not csvs:
        print("No CSV files found under data/")
        return

    for path in csvs:
        tag = os.path.splitext(os.path.basename(path))[0]
        method = os.path.basename(os.path.dirname(path))
        try:
            rows = load_rows(path)
        except (OSError, KeyError, ValueError) as e:
            print(f"Skipping {path}: {e}")
            continue

        print(f"Plotting from {method}/{tag}.csv ({len(rows)} rows)...")
        out_dir = os.path.dirname(path)
        if tag.startswith("fill"):
            plot_runtime_vs_count(rows, out_dir, method)
        elif tag.startswith("backends"):
            plot_speedup_vs_threads(rows, out_dir, method)

    print("\nSaved all plots under data/<method>/*.png")


if __name__ == "__main__":
    main()
