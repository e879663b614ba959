"""CLI argument and default-path behavior tests.

Verifies how ``reproject.cli.main`` chooses targets, modes, and config.
Prevents regressions in command-line entrypoint ergonomics.
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from reproject import cli


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name).resolve()
        self.root = self.base / "proj"
        (self.root / "lib").mkdir(parents=True)
        (self.root / "lib" / "core.py").write_text("", encoding="utf-8")
        (self.root / "node_modules").mkdir()
        (self.root / "setup.cfg").write_text("", encoding="utf-8")
        self.config_path = self.base / "config.json"

    def _main(self, *argv: str, default_path: Path | None = None) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
            code = cli.main(["--config", str(self.config_path), *argv], default_path=default_path)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_defaults_to_fallback_directory_and_file_sink(self) -> None:
        code, stdout, _stderr = self._main(default_path=self.root)

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(stdout, "Structure saved: structure.txt\n")
        written = (self.root / "structure.txt").read_text(encoding="utf-8")
        self.assertTrue(written.startswith("proj/\n├── lib\n"))

    def test_stdout_mode_applies_ignore_arguments(self) -> None:
        code, stdout, _stderr = self._main(str(self.root), "--stdout", "--ignore", "node_modules")

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(stdout, "proj/\n├── lib\n│   └── core.py\n└── setup.cfg\n")
        self.assertFalse((self.root / "structure.txt").exists())

    def test_configured_patterns_and_output_name_are_used(self) -> None:
        self.config_path.write_text(
            json.dumps({"ignore_patterns": ["node_modules", "lib"], "output_file_name": "tree.txt"}),
            encoding="utf-8",
        )

        code, _stdout, _stderr = self._main(str(self.root / "setup.cfg"))

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual((self.root / "tree.txt").read_text(encoding="utf-8"), "proj/\n└── setup.cfg\n")

    def test_output_argument_overrides_config(self) -> None:
        code, stdout, _stderr = self._main(str(self.root), "--output", "layout.md")

        self.assertEqual(code, cli.EXIT_OK)
        self.assertIn("layout.md", stdout)
        self.assertTrue((self.root / "layout.md").is_file())

    def test_save_config_persists_effective_settings(self) -> None:
        self._main(str(self.root), "--stdout", "--ignore", ".git", "--output", "tree.txt", "--save-config")

        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {"ignore_patterns": [".git"], "output_file_name": "tree.txt"})

    def test_clipboard_mode_reports_failure_with_exit_code(self) -> None:
        with mock.patch("reproject.structure.copy_text_to_clipboard", return_value=False):
            code, _stdout, stderr = self._main(str(self.root), "--clipboard")

        self.assertEqual(code, cli.EXIT_FAILED)
        self.assertIn("clipboard", stderr)

    @unittest.skipIf(os.name == "nt", "Windows file names are not byte strings")
    def test_undecodable_file_name_is_written_to_structure_file(self) -> None:
        raw_name = b"bad\xff.txt"
        try:
            fd = os.open(os.path.join(os.fsencode(self.root), raw_name), os.O_CREAT | os.O_WRONLY, 0o644)
        except (OSError, ValueError) as exc:
            self.skipTest(f"filesystem rejects non-UTF-8 names: {exc}")
        os.close(fd)
        (self.root / "structure.txt").write_text("previous\n", encoding="utf-8")

        code, _stdout, _stderr = self._main(str(self.root), "--ignore", "lib", "--ignore", "node_modules")

        self.assertEqual(code, cli.EXIT_OK)
        written = (self.root / "structure.txt").read_bytes()
        self.assertIn(b"bad\xff.txt\n", written)
        self.assertTrue(written.startswith(b"proj/\n"))

    def test_missing_path_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._main(str(self.base / "missing"))

        self.assertTrue(str(ctx.exception.code).startswith("Error:"))

    def test_cancelled_generation_exits_130(self) -> None:
        with mock.patch("reproject.structure.run_render_in_background", return_value=None):
            code, _stdout, stderr = self._main(str(self.root))

        self.assertEqual(code, cli.EXIT_CANCELLED)
        self.assertIn("cancelled", stderr)
        self.assertFalse((self.root / "structure.txt").exists())

    def test_clipboard_and_stdout_are_mutually_exclusive(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()), self.assertRaises(SystemExit):
            cli.main(["--clipboard", "--stdout"])


if __name__ == "__main__":
    unittest.main()
