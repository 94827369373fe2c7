import contextlib
import io
import unittest

from md5fold.cli import main
from md5fold.md5 import digest


def _run(argv: list) -> tuple:
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        rc = main(argv)
    return rc, buf.getvalue()


class TestCLI(unittest.TestCase):
    def test_verify_core(self) -> None:
        rc, out = _run(["verify-core"])
        self.assertEqual(rc, 0)
        self.assertIn("verify-core: PASS", out)

    def test_hash_rfc(self) -> None:
        rc, out = _run(["hash", "--rfc", "abc"])
        self.assertEqual(rc, 0)
        self.assertEqual(out.split()[0], "900150983cd24fb0d6963f7d28e17f72")

    def test_hash_packed_and_fold(self) -> None:
        d = digest(b"abc")
        rc, out = _run(["hash", "abc"])
        self.assertEqual(rc, 0)
        self.assertEqual(out.split()[:2], [f"{d.ab:016x}", f"{d.cd:016x}"])
        rc, out = _run(["hash", "--hex", "--fold", "616263"])
        self.assertEqual(rc, 0)
        self.assertEqual(out.split()[0], f"{d.fold():016x}")

    def test_hash_bad_hex(self) -> None:
        rc, out = _run(["hash", "--hex", "zz"])
        self.assertEqual(rc, 1)
        self.assertIn("invalid hex", out)

    def test_avalanche(self) -> None:
        rc, out = _run(["avalanche", "--samples", "20", "--seed", "3"])
        self.assertEqual(rc, 0)
        self.assertIn("unchanged=0", out)


if __name__ == "__main__":
    unittest.main()
