import tempfile
import unittest
from pathlib import Path

from server.static_files import guess_content_type, resolve_static_file


class ServerStaticFilesTests(unittest.TestCase):
    def test_resolve_static_file_returns_file_inside_ui_root(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            ui_root = Path(temp_dir)
            app_js = ui_root / "assets" / "timer.js"
            app_js.parent.mkdir(parents=True, exist_ok=True)
            app_js.write_text("console.log('tick');", encoding="utf-8")

            self.assertEqual(app_js.resolve(), resolve_static_file(ui_root, "/assets/timer.js"))

    def test_resolve_static_file_rejects_path_traversal(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            ui_root = root / "ui"
            ui_root.mkdir(parents=True, exist_ok=True)
            (root / "config.toml").write_text("[timer]", encoding="utf-8")

            self.assertIsNone(resolve_static_file(ui_root, "/../config.toml"))

    def test_resolve_static_file_rejects_root_or_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            ui_root = Path(temp_dir)
            self.assertIsNone(resolve_static_file(ui_root, "/"))
            self.assertIsNone(resolve_static_file(ui_root, ""))
            self.assertIsNone(resolve_static_file(ui_root, "/missing.wav"))

    def test_guess_content_type_sets_charset_for_text(self) -> None:
        self.assertEqual("text/css; charset=utf-8", guess_content_type(Path("timer.css")))
        js_type = guess_content_type(Path("timer.js"))
        self.assertTrue(js_type.endswith("; charset=utf-8"))
        self.assertIn("javascript", js_type)

    def test_guess_content_type_falls_back_for_unknown_extensions(self) -> None:
        self.assertEqual(
            "application/octet-stream",
            guess_content_type(Path("blob.unknownbinaryextension")),
        )


if __name__ == "__main__":
    unittest.main()
