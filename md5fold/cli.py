from __future__ import annotations

import argparse
from typing import List

from .core import LENGTH_FIELDS
from .md5 import digest
from .verify import avalanche_probe, check_vectors


def cmd_verify_core(_: argparse.Namespace) -> int:
    ok_all, mismatches = check_vectors()
    for m, ours, ref in mismatches:
        print(f"MD5('{m[:20] + (b'...' if len(m) > 20 else b'')}') -> FAIL")
        print(f"  ours={ours}\n  ref ={ref}")
    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_hash(ns: argparse.Namespace) -> int:
    for value in ns.values:
        if ns.hex:
            try:
                data = bytes.fromhex(value)
            except ValueError:
                print(f"hash: invalid hex input {value!r}")
                return 1
        else:
            data = value.encode("utf-8")
        d = digest(data, length_field=ns.length_field)
        if ns.fold:
            out = f"{d.fold():016x}"
        elif ns.rfc:
            out = d.hexdigest()
        else:
            out = f"{d.ab:016x} {d.cd:016x}"
        print(f"{out}  {value}")
    return 0


def cmd_avalanche(ns: argparse.Namespace) -> int:
    if ns.samples < 1 or ns.size < 1:
        print("avalanche: --samples and --size must be >= 1")
        return 1
    stats = avalanche_probe(samples=ns.samples, size=ns.size, seed=ns.seed)
    print(
        f"avalanche: samples={stats['samples']} unchanged={stats['unchanged']} "
        f"mean_bits={stats['mean_bits']:.2f} min_bits={stats['min_bits']}"
    )
    return 0 if stats["unchanged"] == 0 else 1


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="md5fold")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("verify-core", help="check the MD5 engine against hashlib")
    s1.set_defaults(func=cmd_verify_core)

    s2 = sub.add_parser("hash", help="print the packed digest of each argument")
    s2.add_argument("values", nargs="+")
    s2.add_argument("--hex", action="store_true", help="arguments are hex-encoded bytes")
    out = s2.add_mutually_exclusive_group()
    out.add_argument("--fold", action="store_true", help="print the folded 64-bit digest")
    out.add_argument("--rfc", action="store_true", help="print the RFC 1321 hex digest")
    s2.add_argument("--length-field", choices=LENGTH_FIELDS, default="full")
    s2.set_defaults(func=cmd_hash)

    s3 = sub.add_parser("avalanche", help="flip single bits of random messages and count digest changes")
    s3.add_argument("--samples", type=int, default=256)
    s3.add_argument("--size", type=int, default=64)
    s3.add_argument("--seed", type=int, default=None)
    s3.set_defaults(func=cmd_avalanche)

    args = p.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
