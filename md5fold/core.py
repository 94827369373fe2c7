from __future__ import annotations

import math
from typing import Iterator, List, Tuple

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

BLOCK_SIZE = 64

LENGTH_FIELDS = ("full", "low32")


class LengthOverflow(ValueError):
    """Raised in strict mode when the bit length does not fit the length field."""


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


# Rotation constants (RC_t) per RFC 1321
_RC: List[int] = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)


def _mk_AC() -> List[int]:
    # AC_t = floor(2^32 * abs(sin(t+1)))
    return [int(abs(math.sin(i + 1)) * (1 << 32)) & MASK32 for i in range(64)]


_AC: List[int] = _mk_AC()


def ft(t: int, X: int, Y: int, Z: int) -> int:
    X, Y, Z = u32(X), u32(Y), u32(Z)
    if 0 <= t < 16:
        return u32((X & Y) | ((~X) & Z))
    if 16 <= t < 32:
        return u32((Z & X) | ((~Z) & Y))
    if 32 <= t < 48:
        return u32(X ^ Y ^ Z)
    if 48 <= t < 64:
        return u32(Y ^ (X | (~Z)))
    raise ValueError("t out of range")


def wt_index(t: int) -> int:
    if 0 <= t < 16:
        return t
    if 16 <= t < 32:
        return (5 * t + 1) % 16
    if 32 <= t < 48:
        return (3 * t + 5) % 16
    if 48 <= t < 64:
        return (7 * t) % 16
    raise ValueError("t out of range")


def compress_block(
    ihv: Tuple[int, int, int, int],
    m: List[int],
) -> Tuple[int, int, int, int]:
    """
    MD5 compression function.
    Inputs:
      - ihv: (A, B, C, D) chaining value
      - m: 16 little-endian 32-bit words
    Returns the next chaining value.
    """
    if len(m) != 16:
        raise ValueError("m must have 16 words")

    a0, b0, c0, d0 = (u32(ihv[0]), u32(ihv[1]), u32(ihv[2]), u32(ihv[3]))
    a, b, c, d = a0, b0, c0, d0

    for t in range(64):
        f = u32(ft(t, b, c, d) + a + _AC[t] + m[wt_index(t)])
        a, b, c, d = d, u32(b + rl(f, _RC[t])), b, c

    return u32(a0 + a), u32(b0 + b), u32(c0 + c), u32(d0 + d)


# MD5 initial value
MD5_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def padded_length(msg_len_bytes: int) -> int:
    # smallest multiple of 64 holding the message, 0x80 and the 8-byte length
    return ((msg_len_bytes + 8) // BLOCK_SIZE + 1) * BLOCK_SIZE


def length_field_bytes(msg_len_bytes: int, length_field: str = "full", strict: bool = False) -> bytes:
    """Encode the bit length of the message for the last 8 bytes of the padded stream.

    ``full`` stores the RFC 1321 64-bit little-endian bit count. ``low32`` keeps
    only the low 32 bits of the count and leaves the upper 4 bytes zero, which
    matches digests produced by implementations with a 32-bit length counter.
    With ``strict`` set, a bit count that does not fit raises LengthOverflow
    instead of wrapping.
    """
    if length_field not in LENGTH_FIELDS:
        raise ValueError(f"unknown length_field {length_field!r}, expected one of {LENGTH_FIELDS}")
    bit_len = msg_len_bytes * 8
    mask = MASK64 if length_field == "full" else MASK32
    if strict and bit_len > mask:
        raise LengthOverflow(f"bit length {bit_len} does not fit the {length_field} length field")
    return (bit_len & mask).to_bytes(8, "little")


def md5_padding(msg_len_bytes: int, length_field: str = "full", strict: bool = False) -> bytes:
    # 0x80 then zeros then length (little-endian)
    pad = b"\x80"
    # k such that (msg_len + 1 + k) % 64 == 56
    k = (56 - (msg_len_bytes + 1) % 64) % 64
    pad += b"\x00" * k
    pad += length_field_bytes(msg_len_bytes, length_field, strict)
    return pad


def iter_blocks(
    data,
    length: int,
    length_field: str = "full",
    strict: bool = False,
) -> Iterator[bytes]:
    """Yield the padded stream of ``data[:length]`` one 64-byte block at a time.

    Only the final one or two blocks are assembled from the data tail and the
    padding; all earlier blocks are sliced straight from the input.
    """
    view = memoryview(data).cast("B")
    if length < 0 or length > len(view):
        raise ValueError(f"length {length} outside buffer of {len(view)} bytes")
    tail = md5_padding(length, length_field, strict)
    full = length - length % BLOCK_SIZE
    for off in range(0, full, BLOCK_SIZE):
        yield bytes(view[off : off + BLOCK_SIZE])
    last = bytes(view[full:length]) + tail
    for off in range(0, len(last), BLOCK_SIZE):
        yield last[off : off + BLOCK_SIZE]


def bytes_to_words_le(block: bytes) -> List[int]:
    if len(block) != BLOCK_SIZE:
        raise ValueError("block must be 64 bytes")
    return [int.from_bytes(block[i : i + 4], "little") for i in range(0, 64, 4)]


def words_to_bytes_le(words: List[int]) -> bytes:
    return b"".join(u32(w).to_bytes(4, "little") for w in words)
