import contextlib
import io
import json
import os
import tempfile
import unittest

from linker.cli.main import main


ADDR_A = "So11111111111111111111111111111111111111112"
ADDR_B = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
ADDR_C = "11111111111111111111111111111111"


def _rpc_tx(sig, *keys):
    return {"slot": 1, "blockTime": 1700000000, "transaction": {"signatures": [sig], "message": {"accountKeys": list(keys)}}}


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.fixture = os.path.join(self._tmp.name, "fixture.json")
        with open(self.fixture, "w", encoding="utf-8") as f:
            json.dump({
                "signatures": {ADDR_A: ["s1"], ADDR_C: ["s2"]},
                "transactions": {
                    "s1": _rpc_tx("s1", ADDR_A, ADDR_B),
                    "s2": _rpc_tx("s2", ADDR_B, ADDR_C),
                },
            }, f)

    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_prints_found_path_and_writes_outputs(self) -> None:
        out_dir = os.path.join(self._tmp.name, "out")

        code, out, _ = self._run(ADDR_A, ADDR_C, "--fixture", self.fixture, "--out", out_dir)

        self.assertEqual(code, 0)
        self.assertIn("Found 1 path(s) between the addresses:", out)
        self.assertIn(f"{ADDR_A} -> {ADDR_B} -> {ADDR_C}", out)

        with open(os.path.join(out_dir, "links.json"), encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["paths"], [[ADDR_A, ADDR_B, ADDR_C]])
        self.assertEqual(data["graph"], {"nodes": 3, "edges": 2})
        self.assertEqual(data["signatures"]["unique"], 2)

        with open(os.path.join(out_dir, "summary.md"), encoding="utf-8") as f:
            summary = f.read()
        self.assertIn("## Paths (1)", summary)
        self.assertIn("1 intermediate account(s)", summary)
        self.assertIn("- Activity window: 2023-11-14 22:13:20 .. 2023-11-14 22:13:20 (UTC)", summary)
        self.assertEqual(data["transactions"]["earliest_block_time"], 1700000000)

    def test_depth_limit_reports_no_paths(self) -> None:
        code, out, _ = self._run(ADDR_A, ADDR_C, "--fixture", self.fixture, "--max-depth", "2")

        self.assertEqual(code, 0)
        self.assertIn("Found 0 path(s) between the addresses:", out)

    def test_invalid_address_exits_with_usage_code(self) -> None:
        code, _, err = self._run(ADDR_A, "not-an-address", "--fixture", self.fixture)

        self.assertEqual(code, 2)
        self.assertIn("Invalid address provided", err)
        self.assertIn("not-an-address", err)

    def test_missing_fixture_signature_is_skipped(self) -> None:
        with open(self.fixture, "w", encoding="utf-8") as f:
            json.dump({"signatures": {ADDR_A: ["s1", "gone"]},
                       "transactions": {"s1": _rpc_tx("s1", ADDR_A, ADDR_B)}}, f)

        code, out, _ = self._run(ADDR_A, ADDR_B, "--fixture", self.fixture)

        self.assertEqual(code, 0)
        self.assertIn(f"{ADDR_A} -> {ADDR_B}", out)


if __name__ == "__main__":
    unittest.main()
