import argparse
import csv
from typing import Callable, Dict, List, NamedTuple, Tuple

import jax.numpy as jnp
import numpy as np

import hagrid_core as hg


class Workload(NamedTuple):
    name: str
    run: Callable[[object, int, str], object]


def _parse_csv_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _run_equal(buf, size: int, backend: str):
    half = size // 2
    return hg.block_swap_equal(buf, 0, half, half, backend=backend)


def _run_contiguous(buf, size: int, backend: str):
    return hg.block_swap_contiguous(buf, 0, size // 3, size, backend=backend)


def _run_disjoint(buf, size: int, backend: str):
    q = size // 4
    return hg.block_swap_disjoint(buf, 0, q, 3 * q - q // 2, size, backend=backend)


def _run_ordered(buf, size: int, backend: str):
    return hg.float_to_ordered(buf, backend=backend)


def _build_workloads() -> List[Workload]:
    return [
        Workload("equal", _run_equal),
        Workload("contiguous", _run_contiguous),
        Workload("disjoint", _run_disjoint),
        Workload("ordered", _run_ordered),
    ]


def _make_buffer(backend: str, size: int, seed: int):
    rng = np.random.default_rng(seed)
    values = rng.standard_normal(size).astype(np.float32)
    if backend == hg.Backend.DEVICE.value:
        return jnp.asarray(values)
    return values


def _write_csv(path: str, rows: List[Dict[str, object]]) -> None:
    fieldnames: List[str] = []
    for row in rows:
        for key in row.keys():
            if key not in fieldnames:
                fieldnames.append(key)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def _summarize(rows: List[Dict[str, object]]) -> None:
    grouped: Dict[Tuple[str, str, int], List[float]] = {}
    for row in rows:
        key = (row["workload"], row["backend"], int(row["size"]))
        grouped.setdefault(key, []).append(float(row["exec_ms"]))
    print("Summary (mean exec_ms):")
    for (workload, backend, size), values in sorted(grouped.items()):
        mean_ms = sum(values) / max(1, len(values))
        print(f"  {workload:12s} {backend:8s} {size:9d} {mean_ms:9.3f} ms")


def main() -> None:
    parser = argparse.ArgumentParser(description="Time block swaps and float keys.")
    parser.add_argument("--out", default="bench_block_swap.csv", help="CSV output path.")
    parser.add_argument("--runs", type=int, default=5, help="Timed runs per workload.")
    parser.add_argument("--warmup", type=int, default=1, help="Warmup runs per workload.")
    parser.add_argument("--seed", type=int, default=0, help="Seed for buffer contents.")
    parser.add_argument("--sizes", default="1024,16384", help="Comma list of buffer sizes.")
    parser.add_argument("--workloads", default="", help="Comma list to filter workloads.")
    parser.add_argument(
        "--backends",
        default="host,device",
        help="Comma list of backends (host, device).",
    )
    args = parser.parse_args()

    sizes: List[int] = []
    for raw in _parse_csv_list(args.sizes):
        if raw.isdigit() and int(raw) > 0:
            sizes.append(int(raw))
    backends = [hg.coerce_backend(b).value for b in _parse_csv_list(args.backends)]
    workloads = _build_workloads()
    if args.workloads:
        wanted = set(_parse_csv_list(args.workloads))
        workloads = [w for w in workloads if w.name in wanted]

    rows: List[Dict[str, object]] = []
    for workload in workloads:
        for backend in backends:
            for size in sizes:
                for _ in range(args.warmup):
                    buf = _make_buffer(backend, size, args.seed)
                    hg.profile(lambda: workload.run(buf, size, backend))
                for run in range(args.runs):
                    buf = _make_buffer(backend, size, args.seed + run)
                    exec_ms = hg.profile(lambda: workload.run(buf, size, backend))
                    rows.append(
                        {
                            "workload": workload.name,
                            "backend": backend,
                            "size": size,
                            "run": run,
                            "exec_ms": f"{exec_ms:.4f}",
                        }
                    )

    _write_csv(args.out, rows)
    _summarize(rows)
    print(f"Wrote {len(rows)} rows to {args.out}")


if __name__ == "__main__":
    main()
