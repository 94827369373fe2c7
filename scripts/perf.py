#!/usr/bin/env python3
"""Throughput micro-benchmarks for the scalar and batch MD5 engines."""
from __future__ import annotations

import argparse
import hashlib
import random
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5fold.batch import digest_many
from md5fold.md5 import digest


def _messages(count: int, size: int, seed: int) -> list:
    rng = random.Random(seed)
    return [bytes(rng.getrandbits(8) for _ in range(size)) for _ in range(count)]


def bench_scalar(msgs: list) -> None:
    start = time.time()
    for m in msgs:
        digest(m)
    elapsed = time.time() - start
    rate = len(msgs) / elapsed if elapsed else 0.0
    print(f"scalar: messages={len(msgs)} time={elapsed:.3f}s rate={rate:.2f}/s")


def bench_batch(msgs: list) -> None:
    start = time.time()
    digest_many(msgs)
    elapsed = time.time() - start
    rate = len(msgs) / elapsed if elapsed else 0.0
    print(f"batch: messages={len(msgs)} time={elapsed:.3f}s rate={rate:.2f}/s")


def bench_hashlib(msgs: list) -> None:
    start = time.time()
    for m in msgs:
        hashlib.md5(m).digest()
    elapsed = time.time() - start
    rate = len(msgs) / elapsed if elapsed else 0.0
    print(f"hashlib: messages={len(msgs)} time={elapsed:.3f}s rate={rate:.2f}/s")


def main() -> None:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--count", type=int, default=1000)
    ap.add_argument("--size", type=int, default=64)
    ap.add_argument("--seed", type=int, default=2024)
    ap.add_argument("--skip-scalar", action="store_true")
    args = ap.parse_args()

    msgs = _messages(args.count, args.size, args.seed)
    if not args.skip_scalar:
        bench_scalar(msgs)
    bench_batch(msgs)
    bench_hashlib(msgs)


if __name__ == "__main__":
    main()
