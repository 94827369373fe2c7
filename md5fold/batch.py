"""
Lane-parallel MD5 over many messages using numpy uint32 arithmetic.

Each message occupies one lane. All lanes run the same 64 steps per block;
lanes whose padded stream is shorter than the longest one are masked so their
chaining value stops changing after their last block.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .core import BLOCK_SIZE, MD5_IV, _AC, _RC, md5_padding, padded_length, wt_index

_MD5_AC = np.array(_AC, dtype=np.uint32)
_MD5_RC = np.array(_RC, dtype=np.uint32)
_MD5_G = np.array([wt_index(t) for t in range(64)], dtype=np.int64)

_SHIFT32 = np.uint64(32)


def _rol_u32(x: np.ndarray, n: np.uint32) -> np.ndarray:
    return (x << n) | (x >> (np.uint32(32) - n))


def _step_fn(t: int, b: np.ndarray, c: np.ndarray, d: np.ndarray) -> np.ndarray:
    if t < 16:
        return (b & c) | (~b & d)
    if t < 32:
        return (d & b) | (~d & c)
    if t < 48:
        return b ^ c ^ d
    return c ^ (b | ~d)


def _message_words(messages: Sequence, length_field: str) -> tuple[np.ndarray, np.ndarray]:
    lengths = [memoryview(m).nbytes for m in messages]
    nblocks = np.array([padded_length(n) // BLOCK_SIZE for n in lengths], dtype=np.int64)
    width = int(nblocks.max()) * BLOCK_SIZE
    buf = bytearray()
    for msg, n in zip(messages, lengths):
        lane = bytes(memoryview(msg).cast("B")) + md5_padding(n, length_field)
        buf += lane + b"\x00" * (width - len(lane))
    words = np.frombuffer(bytes(buf), dtype="<u4").astype(np.uint32)
    return words.reshape(len(messages), width // BLOCK_SIZE, 16), nblocks


def _compress_lanes(state: tuple, m: np.ndarray) -> tuple:
    a, b, c, d = state
    for t in range(64):
        f = _step_fn(t, b, c, d) + a + _MD5_AC[t] + m[:, _MD5_G[t]]
        a, b, c, d = d, b + _rol_u32(f, _MD5_RC[t]), b, c
    return a, b, c, d


def digest_many(messages: Sequence, *, length_field: str = "full") -> np.ndarray:
    """MD5 of every message; row ``i`` is ``(A|B<<32, C|D<<32)`` as uint64."""
    n = len(messages)
    if n == 0:
        return np.zeros((0, 2), dtype=np.uint64)
    words, nblocks = _message_words(messages, length_field)

    ihv = [np.full(n, v, dtype=np.uint32) for v in MD5_IV]
    for i in range(words.shape[1]):
        out = _compress_lanes(tuple(ihv), words[:, i, :])
        active = nblocks > i
        ihv = [np.where(active, h + o, h) for h, o in zip(ihv, out)]

    a0, b0, c0, d0 = (h.astype(np.uint64) for h in ihv)
    res = np.empty((n, 2), dtype=np.uint64)
    res[:, 0] = a0 | (b0 << _SHIFT32)
    res[:, 1] = c0 | (d0 << _SHIFT32)
    return res


def digest64_many(messages: Sequence, *, length_field: str = "full") -> np.ndarray:
    res = digest_many(messages, length_field=length_field)
    return res[:, 0] ^ res[:, 1]
