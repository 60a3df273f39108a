from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from sandbox_charts.cli import main
from sandbox_charts.errors import ChartConfigError


def _run(*argv: str) -> dict:
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        main(list(argv))
    return json.loads(out.getvalue())


class CliTests(unittest.TestCase):
    def test_ticks_loose(self) -> None:
        payload = _run("ticks", "0", "10")
        self.assertEqual(payload["policy"], "loose")
        self.assertEqual(payload["ticks"], [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])
        self.assertEqual(payload["labels"], ["0.000", "2.00", "4.00", "6.00", "8.00", "10.0"])

    def test_ticks_tight_with_tick_count(self) -> None:
        payload = _run("ticks", "0.5", "9.7", "--policy", "tight", "--tick-count", "5")
        self.assertEqual(payload["ticks"], [0.5, 2.0, 4.0, 6.0, 8.0, 9.7])
        self.assertEqual(payload["labels"], ["0", "2", "4", "6", "8", "9"])

    def test_ticks_normalises_degenerate_range(self) -> None:
        payload = _run("ticks", "3", "3")
        self.assertGreater(payload["high"], payload["low"])

    def test_render_writes_png_and_summary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "out" / "chart.png"
            payload = _run(
                "render",
                str(output),
                "--width",
                "400",
                "--x-range",
                "0",
                "50",
                "--y-range",
                "-1",
                "1",
                "--title",
                "Score",
            )
            self.assertTrue(output.exists())
            with Image.open(output) as image:
                self.assertEqual(image.size, (400, 280))
        self.assertEqual((payload["width"], payload["height"]), (400, 280))
        self.assertEqual(payload["x_ticks"][0], "0")
        self.assertEqual(payload["x_ticks"][-1], "50")
        left, top, plot_w, plot_h = payload["plot_rect"]
        self.assertEqual(left, payload["margins"]["left"])
        self.assertGreater(plot_w, 0)
        self.assertGreater(plot_h, 0)

    def test_render_without_title_and_with_style_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            style = Path(tmp) / "style.json"
            style.write_text(json.dumps({"background_color": "#eeeeee", "tick_length": 6}), encoding="utf-8")
            payload = _run("render", str(Path(tmp) / "c.png"), "--no-title", "--style", str(style))
        self.assertEqual(payload["margins"]["top"], 0)

    def test_render_rejects_unknown_style_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            style = Path(tmp) / "style.json"
            style.write_text(json.dumps({"legend": True}), encoding="utf-8")
            with self.assertRaises(ChartConfigError):
                main(["render", str(Path(tmp) / "c.png"), "--style", str(style)])


if __name__ == "__main__":
    unittest.main()
