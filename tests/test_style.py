from __future__ import annotations

import unittest

from sandbox_charts.errors import ChartConfigError
from sandbox_charts.style import DARK_GRAY, DEFAULT_STYLE, ChartStyle, FontSpec, parse_color, validate_style_overrides


class ChartStyleTests(unittest.TestCase):
    def test_defaults(self) -> None:
        style = ChartStyle()
        self.assertEqual(style.title, "Graph Title")
        self.assertEqual(style.x_axis_header, "X Axis")
        self.assertEqual(style.y_axis_header, "Y Axis")
        self.assertEqual(style.background_color, (255, 255, 255, 255))
        self.assertEqual(style.axis_color, DARK_GRAY)
        self.assertEqual(style.title_font, FontSpec(size_px=32.0, bold=True))
        self.assertEqual(style.axis_font.size_px, 14.0)
        self.assertEqual(style.value_font.size_px, 12.0)
        self.assertEqual((style.tick_length, style.tick_margin, style.tick_count), (3, 2, 5))

    def test_rejects_invalid_geometry(self) -> None:
        with self.assertRaises(ChartConfigError):
            ChartStyle(tick_length=-1)
        with self.assertRaises(ChartConfigError):
            ChartStyle(tick_count=1)
        with self.assertRaises(ChartConfigError):
            ChartStyle(significant_digits=-2)

    def test_rejects_unknown_tick_format(self) -> None:
        with self.assertRaisesRegex(ChartConfigError, "x_tick_format"):
            ChartStyle(x_tick_format="roman")  # type: ignore[arg-type]

    def test_font_spec_validation(self) -> None:
        with self.assertRaises(ChartConfigError):
            FontSpec(size_px=0)
        with self.assertRaises(ChartConfigError):
            FontSpec(family=" ")
        with self.assertRaises(ChartConfigError):
            FontSpec(file_path="  ")
        self.assertEqual(str(FontSpec(file_path="fonts/a.ttf").normalized_file_path), "fonts/a.ttf")


class StyleOverrideTests(unittest.TestCase):
    def test_no_overrides_returns_defaults(self) -> None:
        self.assertEqual(validate_style_overrides(), DEFAULT_STYLE)

    def test_package_exposes_validated_default_style(self) -> None:
        import sandbox_charts

        self.assertEqual(sandbox_charts.validate_style_overrides(), sandbox_charts.ChartStyle())
        self.assertEqual(DEFAULT_STYLE.background_color, (255, 255, 255, 255))

    def test_accepts_partial_override(self) -> None:
        style = validate_style_overrides(
            {
                "title": "Loss",
                "background_color": "#102030",
                "axis_color": [1, 2, 3],
                "value_font": {"size_px": 10, "bold": True},
                "tick_count": 7,
            }
        )
        self.assertEqual(style.title, "Loss")
        self.assertEqual(style.background_color, (16, 32, 48, 255))
        self.assertEqual(style.axis_color, (1, 2, 3, 255))
        self.assertEqual(style.value_font, FontSpec(size_px=10.0, bold=True))
        self.assertEqual(style.tick_count, 7)
        self.assertEqual(style.title_font, DEFAULT_STYLE.title_font)

    def test_null_title_suppresses_it(self) -> None:
        self.assertIsNone(validate_style_overrides({"title": None}).title)

    def test_rejects_unknown_key(self) -> None:
        with self.assertRaisesRegex(ChartConfigError, "Unknown style key"):
            validate_style_overrides({"legend": True})

    def test_rejects_unknown_font_key(self) -> None:
        with self.assertRaisesRegex(ChartConfigError, "Unknown font key"):
            validate_style_overrides({"title_font": {"italic": True}})

    def test_rejects_non_integer_geometry(self) -> None:
        with self.assertRaisesRegex(ChartConfigError, "integer"):
            validate_style_overrides({"tick_length": 2.5})
        with self.assertRaisesRegex(ChartConfigError, "integer"):
            validate_style_overrides({"tick_margin": True})

    def test_overrides_merge_onto_given_base(self) -> None:
        base = validate_style_overrides({"title": "Base"})
        style = validate_style_overrides({"tick_length": 6}, base=base)
        self.assertEqual(style.title, "Base")
        self.assertEqual(style.tick_length, 6)


class ParseColorTests(unittest.TestCase):
    def test_hex_with_alpha(self) -> None:
        self.assertEqual(parse_color("#ff000080"), (255, 0, 0, 128))

    def test_rejects_bad_colors(self) -> None:
        for value in ("red", "#12345", "#gg0000", [300, 0, 0], (1, 2)):
            with self.assertRaises(ChartConfigError, msg=repr(value)):
                parse_color(value)


if __name__ == "__main__":
    unittest.main()
