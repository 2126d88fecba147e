"""
scripts/bench_pool2d_reference_vs_numpy.py

Benchmark script (NOT a unit test) to compare KeyInfer pooling performance
between the two compute backends:
1) "reference": Tensor-primitive kernel (Python loops over windows/channels)
2) "numpy": vectorized sliding-window kernel

Usage examples
--------------
# Default: benchmark a few shapes
python scripts/bench_pool2d_reference_vs_numpy.py

# Benchmark a single shape
python scripts/bench_pool2d_reference_vs_numpy.py --H 64 --W 64 --C 16 --k 2 --s 2 --padding same

# More repeats (more stable)
python scripts/bench_pool2d_reference_vs_numpy.py --repeats 30 --warmup 5
"""

from __future__ import annotations

import os
import sys

# Ensure repo_root/src is importable when running this file directly.
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

import argparse
import statistics
import time
from typing import Callable

import numpy as np

from keyinfer.infrastructure.pooling import AveragePooling2D, MaxPooling2D
from keyinfer.infrastructure.tensor import Tensor


def _time_one(fn: Callable[[], None], *, warmup: int, repeats: int) -> list[float]:
    for _ in range(warmup):
        fn()

    times: list[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def _fmt_seconds(x: float) -> str:
    if x < 1e-6:
        return f"{x*1e9:.2f} ns"
    if x < 1e-3:
        return f"{x*1e6:.2f} µs"
    if x < 1:
        return f"{x*1e3:.2f} ms"
    return f"{x:.3f} s"


def _print_row(name: str, ref_s: float, np_s: float) -> None:
    speedup = (ref_s / np_s) if np_s > 0 else float("inf")
    print(
        f"{name:<22}  "
        f"reference(median)={_fmt_seconds(ref_s):>10}  "
        f"numpy(median)={_fmt_seconds(np_s):>10}  "
        f"speedup={speedup:>7.2f}x"
    )


def bench_one(
    *, H: int, W: int, C: int, k: int, s: int, padding: str, warmup: int, repeats: int
) -> None:
    rng = np.random.default_rng(0)
    x = Tensor(rng.standard_normal((H, W, C)).astype(np.float32))

    print(f"\n(H={H}, W={W}, C={C}) k={k} s={s} padding={padding}")
    for cls in (MaxPooling2D, AveragePooling2D):
        medians = []
        for backend in ("reference", "numpy"):
            layer = cls(k, stride=s, padding_mode=padding, backend=backend)

            def run() -> None:
                y = layer(x)
                _ = float(np.sum(y.data))

            medians.append(
                statistics.median(_time_one(run, warmup=warmup, repeats=repeats))
            )
        _print_row(cls.__name__, medians[0], medians[1])


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--H", type=int, default=None)
    parser.add_argument("--W", type=int, default=None)
    parser.add_argument("--C", type=int, default=8)
    parser.add_argument("--k", type=int, default=2)
    parser.add_argument("--s", type=int, default=2)
    parser.add_argument("--padding", choices=("valid", "same"), default="valid")
    parser.add_argument("--warmup", type=int, default=2)
    parser.add_argument("--repeats", type=int, default=10)
    args = parser.parse_args()

    if args.H is not None and args.W is not None:
        shapes = [(args.H, args.W)]
    else:
        shapes = [(16, 16), (28, 28), (64, 64)]

    for H, W in shapes:
        bench_one(
            H=H,
            W=W,
            C=args.C,
            k=args.k,
            s=args.s,
            padding=args.padding,
            warmup=args.warmup,
            repeats=args.repeats,
        )


if __name__ == "__main__":
    main()
