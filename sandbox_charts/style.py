from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Sequence

from sandbox_charts.errors import ChartConfigError
from sandbox_charts.formatting import TickFormat
from sandbox_charts.scales import DEFAULT_TICK_COUNT


RGBA = tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)
DARK_GRAY: RGBA = (64, 64, 64, 255)

BASE_FONT_FAMILY = "Helvetica"
TICK_FORMATS: tuple[str, ...] = ("significant", "integer")


def _check_rgba(key: str, color: Any) -> None:
    if not isinstance(color, tuple) or len(color) != 4:
        raise ChartConfigError(f"`{key}` must be an RGBA tuple")
    if any(not isinstance(c, int) or c < 0 or c > 255 for c in color):
        raise ChartConfigError(f"`{key}` components must be integers in [0, 255]")


@dataclass(frozen=True)
class FontSpec:
    """Font selection from either system lookup or an explicit file path.

    If `file_path` is set, metrics and rendering load that file and never fall back.
    """

    family: str = BASE_FONT_FAMILY
    size_px: float = 12.0
    bold: bool = False
    file_path: str | None = None

    def __post_init__(self) -> None:
        if not self.family.strip() and self.file_path is None:
            raise ChartConfigError("FontSpec requires `family` when `file_path` is not set")
        if self.file_path is not None and not str(self.file_path).strip():
            raise ChartConfigError("FontSpec `file_path` must be non-empty when provided")
        if self.size_px <= 0:
            raise ChartConfigError("FontSpec `size_px` must be > 0")

    @property
    def normalized_file_path(self) -> Path | None:
        if self.file_path is None:
            return None
        return Path(self.file_path)


@dataclass(frozen=True)
class ChartStyle:
    """Everything that shapes one render apart from canvas size and axis ranges."""

    title: str | None = "Graph Title"
    x_axis_header: str | None = "X Axis"
    y_axis_header: str | None = "Y Axis"
    background_color: RGBA = WHITE
    title_color: RGBA = BLACK
    axis_color: RGBA = DARK_GRAY
    title_font: FontSpec = field(default_factory=lambda: FontSpec(size_px=32.0, bold=True))
    axis_font: FontSpec = field(default_factory=lambda: FontSpec(size_px=14.0))
    value_font: FontSpec = field(default_factory=lambda: FontSpec(size_px=12.0))
    tick_length: int = 3
    tick_margin: int = 2
    tick_count: int = DEFAULT_TICK_COUNT
    significant_digits: int = 3
    x_tick_format: TickFormat = "integer"
    y_tick_format: TickFormat = "significant"

    def __post_init__(self) -> None:
        if self.tick_length < 0 or self.tick_margin < 0:
            raise ChartConfigError("tick_length and tick_margin must be >= 0")
        if self.tick_count < 2:
            raise ChartConfigError("tick_count must be >= 2")
        if self.significant_digits < 0:
            raise ChartConfigError("significant_digits must be >= 0")
        for key in ("x_tick_format", "y_tick_format"):
            if getattr(self, key) not in TICK_FORMATS:
                raise ChartConfigError(f"`{key}` must be one of {', '.join(TICK_FORMATS)}")
        for key in ("background_color", "title_color", "axis_color"):
            _check_rgba(key, getattr(self, key))


DEFAULT_STYLE = ChartStyle()

_FONT_KEYS = ("title_font", "axis_font", "value_font")
_COLOR_KEYS = ("background_color", "title_color", "axis_color")


def validate_style_overrides(overrides: Mapping[str, Any] | None = None, *, base: ChartStyle = DEFAULT_STYLE) -> ChartStyle:
    """Validate and merge JSON-like overrides onto ``base``.

    Colors may be ``#RRGGBB``/``#RRGGBBAA`` strings or RGB(A) lists; fonts are
    mappings with any of ``family``, ``size_px``, ``bold``, ``file_path``.
    """

    known = {f.name for f in fields(ChartStyle)}
    updates: dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        if key not in known:
            raise ChartConfigError(f"Unknown style key: {key}")
        if key in _COLOR_KEYS:
            updates[key] = parse_color(value)
        elif key in _FONT_KEYS:
            updates[key] = _merge_font(key, getattr(base, key), value)
        elif key in ("title", "x_axis_header", "y_axis_header"):
            if value is not None and not isinstance(value, str):
                raise ChartConfigError(f"Style `{key}` must be a string or null")
            updates[key] = value
        elif key in ("tick_length", "tick_margin", "tick_count", "significant_digits"):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ChartConfigError(f"Style `{key}` must be an integer")
            updates[key] = value
        else:
            updates[key] = value
    return replace(base, **updates)


def parse_color(value: Any) -> RGBA:
    if isinstance(value, str):
        return _parse_hex_color(value)
    if isinstance(value, Sequence) and len(value) in (3, 4):
        rgba = tuple(int(c) for c in value)
        if len(rgba) == 3:
            rgba = rgba + (255,)
        _check_rgba("color", rgba)
        return rgba  # type: ignore[return-value]
    raise ChartConfigError(f"color must be #RRGGBB, #RRGGBBAA or an RGB(A) list, got {value!r}")


def _parse_hex_color(hex_color: str) -> RGBA:
    value = hex_color.strip()
    if not value.startswith("#"):
        raise ChartConfigError(f"color must be #RRGGBB or #RRGGBBAA, got `{hex_color}`")
    raw = value[1:]
    if len(raw) not in (6, 8):
        raise ChartConfigError(f"color must be #RRGGBB or #RRGGBBAA, got `{hex_color}`")
    try:
        r = int(raw[0:2], 16)
        g = int(raw[2:4], 16)
        b = int(raw[4:6], 16)
        a = int(raw[6:8], 16) if len(raw) == 8 else 255
    except ValueError as exc:
        raise ChartConfigError(f"color must be #RRGGBB or #RRGGBBAA, got `{hex_color}`") from exc
    return (r, g, b, a)


def _merge_font(key: str, current: FontSpec, value: Any) -> FontSpec:
    if isinstance(value, FontSpec):
        return value
    if not isinstance(value, Mapping):
        raise ChartConfigError(f"Style `{key}` must be an object")
    raw = asdict(current)
    for name, item in value.items():
        if name not in raw:
            raise ChartConfigError(f"Unknown font key `{name}` in `{key}`")
        raw[name] = item
    return FontSpec(
        family=str(raw["family"]),
        size_px=float(raw["size_px"]),
        bold=bool(raw["bold"]),
        file_path=None if raw["file_path"] is None else str(raw["file_path"]),
    )
