from __future__ import annotations

from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch
import io
import tempfile
import unittest

from buildcore.console import Console
from sassbuild import host
from sassbuild.options import BuildOptions
from sassbuild.verify import BinaryVerifier


class BinaryVerifierTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.binary = Path(self.temp_dir.name) / "binding.node"
        self.options = BuildOptions(platform="linux", arch="x64")
        self.console = Console("debug")

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _check(self, verifier: BinaryVerifier, options: BuildOptions | None = None) -> tuple[bool, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            decision = verifier.needs_build(options or self.options, self.binary)
        return decision, out.getvalue(), err.getvalue()

    def test_missing_binary_needs_build(self) -> None:
        probe = MagicMock()
        decision, _, _ = self._check(BinaryVerifier(console=self.console, probe=probe, environ={}))
        self.assertTrue(decision)
        probe.assert_not_called()

    def test_working_binary_is_kept(self) -> None:
        self.binary.write_bytes(b"ok")
        probe = MagicMock()
        decision, out, _ = self._check(BinaryVerifier(console=self.console, probe=probe, environ={}))
        self.assertFalse(decision)
        probe.assert_called_once_with(self.binary)
        self.assertIn(f"Binary found at {self.binary}", out)
        self.assertIn("Binary is fine", out)

    def test_broken_binary_triggers_build(self) -> None:
        self.binary.write_bytes(b"ok")
        probe = MagicMock(side_effect=RuntimeError("undefined symbol"))
        decision, out, err = self._check(BinaryVerifier(console=self.console, probe=probe, environ={}))
        self.assertTrue(decision)
        self.assertIn("Binary has a problem: undefined symbol", err)
        self.assertIn("Building the binary locally", out)

    def test_force_flag_skips_probe(self) -> None:
        self.binary.write_bytes(b"ok")
        probe = MagicMock()
        verifier = BinaryVerifier(console=self.console, probe=probe, environ={})
        decision, _, _ = self._check(verifier, BuildOptions(platform="linux", arch="x64", force=True))
        self.assertTrue(decision)
        probe.assert_not_called()

    def test_force_environment_skips_probe(self) -> None:
        self.binary.write_bytes(b"ok")
        probe = MagicMock()
        verifier = BinaryVerifier(console=self.console, probe=probe, environ={"SASS_FORCE_BUILD": "1"})
        decision, _, _ = self._check(verifier)
        self.assertTrue(decision)
        probe.assert_not_called()

    def test_empty_force_environment_is_ignored(self) -> None:
        self.binary.write_bytes(b"ok")
        probe = MagicMock()
        verifier = BinaryVerifier(console=self.console, probe=probe, environ={"SASS_FORCE_BUILD": ""})
        decision, _, _ = self._check(verifier)
        self.assertFalse(decision)

    def test_default_probe_rejects_corrupt_binary(self) -> None:
        self.binary.write_bytes(b"this is not a shared object")
        decision, _, err = self._check(BinaryVerifier(console=self.console, environ={}))
        self.assertTrue(decision)
        self.assertIn("Binary has a problem", err)


class HostTests(unittest.TestCase):
    def test_module_name_from_file_name(self) -> None:
        self.assertEqual(host.binding_module_name(Path("/x/binding.node")), "binding")
        self.assertEqual(host.binding_module_name(Path("_sass.cpython-312-x86_64-linux-gnu.so")), "_sass")

    def test_load_binding_rejects_garbage(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "binding.node"
            path.write_bytes(b"\x00garbage")
            with self.assertRaises(ImportError):
                host.load_binding(path)

    def test_probe_renders_trivial_source(self) -> None:
        binding = SimpleNamespace(render_sync=MagicMock(return_value="s {\n  a: ss; }\n"))
        with patch("sassbuild.host.load_binding", return_value=binding) as loader:
            host.probe_binary(Path("/x/binding.node"))
        loader.assert_called_once_with(Path("/x/binding.node"))
        binding.render_sync.assert_called_once_with("s { a: ss }")

    def test_probe_propagates_render_errors(self) -> None:
        binding = SimpleNamespace(render_sync=MagicMock(side_effect=ValueError("Invalid CSS")))
        with patch("sassbuild.host.load_binding", return_value=binding):
            with self.assertRaises(ValueError):
                host.probe_binary(Path("/x/binding.node"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
