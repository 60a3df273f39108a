from sandbox_charts.api import chart
from sandbox_charts.chart import AxisChart, OutputGraph
from sandbox_charts.errors import ChartConfigError, FontMetricsError
from sandbox_charts.formatting import floor_integer_label, to_significant_digit_string
from sandbox_charts.layout import ChartLayout, LayoutEngine, Margins, Scale
from sandbox_charts.metrics import FontMetrics, TextMetrics
from sandbox_charts.rasterizer import Rasterizer
from sandbox_charts.scales import AxisRange, Tick, loose_label, nice_number, tight_label
from sandbox_charts.style import ChartStyle, FontSpec, validate_style_overrides

__all__ = [
    "AxisChart",
    "AxisRange",
    "ChartConfigError",
    "ChartLayout",
    "ChartStyle",
    "FontMetrics",
    "FontMetricsError",
    "FontSpec",
    "LayoutEngine",
    "Margins",
    "OutputGraph",
    "Rasterizer",
    "Scale",
    "TextMetrics",
    "Tick",
    "chart",
    "floor_integer_label",
    "loose_label",
    "nice_number",
    "tight_label",
    "to_significant_digit_string",
    "validate_style_overrides",
]
