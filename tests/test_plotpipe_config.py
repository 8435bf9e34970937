from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from plotpipe.config import (
    COMMAND_ENV_VAR,
    DEFAULT_CONFIG,
    BackendConfig,
    load_backend_config,
    resolve_backend_config,
)
from plotpipe.output import OutputFileType


class BackendConfigTests(unittest.TestCase):
    def _write(self, td: str, body: str) -> Path:
        path = Path(td) / "plotpipe.toml"
        path.write_text(body, encoding="utf-8")
        return path

    def test_defaults(self) -> None:
        self.assertEqual(DEFAULT_CONFIG.command, ("gnuplot", "-persist"))
        self.assertIsNone(DEFAULT_CONFIG.close_timeout_s)
        self.assertEqual(DEFAULT_CONFIG.default_file_type, OutputFileType.PNG)

    def test_load_backend_table(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(
                td,
                '[backend]\ncommand = ["/opt/gnuplot", "-persist"]\nclose_timeout_s = 5\n'
                'default_file_type = "SVG"\ntitle_height = 14\n',
            )
            config = load_backend_config(path)
        self.assertEqual(config.command, ("/opt/gnuplot", "-persist"))
        self.assertEqual(config.close_timeout_s, 5.0)
        self.assertEqual(config.default_file_type, OutputFileType.SVG)
        self.assertEqual(config.title_height, 14.0)

    def test_command_string_is_shell_split(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            config = load_backend_config(self._write(td, '[backend]\ncommand = "gnuplot -p"\n'))
        self.assertEqual(config.command, ("gnuplot", "-p"))

    def test_missing_table_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            self.assertEqual(load_backend_config(self._write(td, "")), DEFAULT_CONFIG)

    def test_invalid_values_are_rejected(self) -> None:
        bodies = [
            "[backend]\nunknown = 1\n",
            "[backend]\ncommand = 3\n",
            "[backend]\nclose_timeout_s = \"soon\"\n",
            "[backend]\nclose_timeout_s = 0\n",
            "[backend]\ndefault_file_type = \"gp\"\n",
            "[backend]\ndefault_file_type = \"bmp\"\n",
            "backend = 1\n",
        ]
        for body in bodies:
            with self.subTest(body=body), tempfile.TemporaryDirectory() as td:
                with self.assertRaises(ValueError):
                    load_backend_config(self._write(td, body))

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(FileNotFoundError):
                load_backend_config(Path(td) / "absent.toml")

    def test_environment_overrides_command(self) -> None:
        config = resolve_backend_config(env={COMMAND_ENV_VAR: "wgnuplot -persist"})
        self.assertEqual(config.command, ("wgnuplot", "-persist"))
        self.assertEqual(resolve_backend_config(env={}), DEFAULT_CONFIG)

    def test_empty_command_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            BackendConfig(command=())


if __name__ == "__main__":
    unittest.main()
