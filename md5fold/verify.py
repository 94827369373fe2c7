from __future__ import annotations

import hashlib
import random
from typing import Dict, List, Sequence, Tuple

from .md5 import digest, md5_bytes

# RFC 1321 appendix A.5 suite plus lengths around the padding boundary
VECTORS: List[bytes] = [
    b"",
    b"a",
    b"abc",
    b"message digest",
    b"abcdefghijklmnopqrstuvwxyz",
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    b"1234567890" * 8,
    b"x" * 55,
    b"x" * 56,
    b"x" * 57,
    b"x" * 63,
    b"x" * 64,
    b"x" * 119,
]


def check_vectors(vectors: Sequence[bytes] = VECTORS) -> Tuple[bool, List[Tuple[bytes, str, str]]]:
    mismatches: List[Tuple[bytes, str, str]] = []
    for m in vectors:
        ours = md5_bytes(m).hex()
        ref = hashlib.md5(m).hexdigest()
        if ours != ref:
            mismatches.append((m, ours, ref))
    return not mismatches, mismatches


def avalanche_probe(samples: int = 256, size: int = 64, seed: int | None = None) -> Dict[str, float]:
    """Flip one random bit per random message and measure how the digest moves.

    Returns the count of unchanged digests and the mean/min number of output
    bits that differ (ideal mean is 64 of 128).
    """
    if samples < 1 or size < 1:
        raise ValueError("samples and size must be >= 1")
    rng = random.Random(seed)
    unchanged = 0
    total_bits = 0
    min_bits = 128
    for _ in range(samples):
        msg = bytearray(rng.getrandbits(8) for _ in range(size))
        before = digest(msg)
        pos = rng.randrange(size * 8)
        msg[pos >> 3] ^= 1 << (pos & 7)
        after = digest(msg)
        diff = bin(before.ab ^ after.ab).count("1") + bin(before.cd ^ after.cd).count("1")
        if diff == 0:
            unchanged += 1
        total_bits += diff
        min_bits = min(min_bits, diff)
    return {
        "samples": samples,
        "unchanged": unchanged,
        "mean_bits": total_bits / samples,
        "min_bits": min_bits,
    }
