import random
import unittest

import numpy as np

from md5fold.batch import digest64_many, digest_many
from md5fold.md5 import digest, digest64


class TestBatch(unittest.TestCase):
    def test_matches_scalar_mixed_lengths(self) -> None:
        rng = random.Random(5)
        msgs = [bytes(rng.getrandbits(8) for _ in range(n)) for n in (0, 3, 55, 56, 57, 63, 64, 119, 120, 250)]
        res = digest_many(msgs)
        self.assertEqual(res.shape, (len(msgs), 2))
        self.assertEqual(res.dtype, np.uint64)
        for row, m in zip(res, msgs):
            self.assertEqual((int(row[0]), int(row[1])), digest(m).as_tuple())

    def test_digest64_many(self) -> None:
        msgs = [b"", b"abc", b"message digest", bytearray(b"z" * 100)]
        res = digest64_many(msgs)
        self.assertEqual([int(x) for x in res], [digest64(m) for m in msgs])

    def test_empty_batch(self) -> None:
        self.assertEqual(digest_many([]).shape, (0, 2))
        self.assertEqual(digest64_many([]).shape, (0,))

    def test_low32_length_field(self) -> None:
        res = digest_many([b"abc"], length_field="low32")
        self.assertEqual((int(res[0, 0]), int(res[0, 1])), digest(b"abc").as_tuple())


if __name__ == "__main__":
    unittest.main()
