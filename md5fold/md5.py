from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .core import (
    MD5_IV,
    bytes_to_words_le,
    compress_block,
    iter_blocks,
    u32,
)


@dataclass(frozen=True)
class Digest128:
    """MD5 result as two 64-bit halves.

    ``ab`` holds A in its low 32 bits and B in its high 32 bits, ``cd`` holds C
    and D the same way. Serialising each half little-endian and concatenating
    gives the RFC 1321 digest bytes.
    """

    ab: int
    cd: int

    @classmethod
    def from_ihv(cls, ihv: Tuple[int, int, int, int]) -> "Digest128":
        a, b, c, d = (u32(x) for x in ihv)
        return cls(a | (b << 32), c | (d << 32))

    def as_tuple(self) -> Tuple[int, int]:
        return self.ab, self.cd

    def fold(self) -> int:
        return self.ab ^ self.cd

    def to_bytes(self) -> bytes:
        return self.ab.to_bytes(8, "little") + self.cd.to_bytes(8, "little")

    def hexdigest(self) -> str:
        return self.to_bytes().hex()


def _resolve_length(data, length: Optional[int]) -> int:
    if length is None:
        return memoryview(data).nbytes
    return length


def digest(
    data,
    length: Optional[int] = None,
    *,
    length_field: str = "full",
    strict: bool = False,
) -> Digest128:
    """MD5 of ``data[:length]`` (the whole buffer when ``length`` is None)."""
    n = _resolve_length(data, length)
    ihv = MD5_IV
    for block in iter_blocks(data, n, length_field, strict):
        ihv = compress_block(ihv, bytes_to_words_le(block))
    return Digest128.from_ihv(ihv)


def fold(d: Digest128) -> int:
    """XOR the two 64-bit halves into a 64-bit checksum.

    Collision resistance drops to that of a 64-bit hash; use it for hash keys
    and checksums, not where the full 128 bits must be unique.
    """
    return d.ab ^ d.cd


def digest64(
    data,
    length: Optional[int] = None,
    *,
    length_field: str = "full",
    strict: bool = False,
) -> int:
    return fold(digest(data, length, length_field=length_field, strict=strict))


def md5_bytes(data, length: Optional[int] = None) -> bytes:
    return digest(data, length).to_bytes()


def md5_hex(data, length: Optional[int] = None) -> str:
    return md5_bytes(data, length).hex()
