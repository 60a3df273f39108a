from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
from pathlib import Path
from typing import Sequence

from sandbox_charts.api import chart
from sandbox_charts.errors import ChartConfigError
from sandbox_charts.formatting import resolve_tick_formatter
from sandbox_charts.scales import DEFAULT_TICK_COUNT, AxisRange, loose_label, tight_label
from sandbox_charts.style import DEFAULT_STYLE


LOGGER = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="sandbox-charts")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render an empty titled chart frame to a PNG file.")
    render.add_argument("output", type=Path)
    render.add_argument("--width", type=int, default=None)
    render.add_argument("--height", type=int, default=None)
    render.add_argument("--x-range", type=float, nargs=2, metavar=("LO", "HI"), default=(0.0, 1.0))
    render.add_argument("--y-range", type=float, nargs=2, metavar=("LO", "HI"), default=(0.0, 1.0))
    render.add_argument("--title", default=None)
    render.add_argument("--x-header", default=None)
    render.add_argument("--y-header", default=None)
    render.add_argument("--no-title", action="store_true", help="Suppress the title row entirely.")
    render.add_argument("--style", type=Path, default=None, help="JSON file of style overrides.")

    ticks = sub.add_parser("ticks", help="Print nice tick values for a data range as JSON.")
    ticks.add_argument("low", type=float)
    ticks.add_argument("high", type=float)
    ticks.add_argument("--policy", choices=["loose", "tight"], default="loose")
    ticks.add_argument("--tick-count", type=int, default=DEFAULT_TICK_COUNT)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        print(json.dumps(_render(args), indent=2, sort_keys=True))
        return

    if args.command == "ticks":
        print(json.dumps(_ticks(args.low, args.high, args.policy, args.tick_count), indent=2, sort_keys=True))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _render(args: argparse.Namespace) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if args.style is not None:
        overrides.update(_load_style(args.style))
    if args.title is not None:
        overrides["title"] = args.title
    if args.no_title:
        overrides["title"] = None
    if args.x_header is not None:
        overrides["x_axis_header"] = args.x_header
    if args.y_header is not None:
        overrides["y_axis_header"] = args.y_header

    target = chart(args.width, args.height, **overrides)
    target.set_x_range(*args.x_range).set_y_range(*args.y_range)
    image = target.to_image()
    args.output.parent.mkdir(parents=True, exist_ok=True)
    image.save(args.output, format="PNG")
    layout = target.last_layout()
    assert layout is not None
    LOGGER.info("wrote %s (%sx%s)", args.output, target.width, target.height)
    return {
        "output": str(args.output),
        "width": target.width,
        "height": target.height,
        "margins": asdict(layout.margins),
        "plot_rect": list(layout.plot_rect()),
        "x_ticks": [tick.label for tick in layout.x_ticks],
        "y_ticks": [tick.label for tick in layout.y_ticks],
    }


def _load_style(path: Path) -> dict[str, object]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ChartConfigError(f"style file {path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ChartConfigError(f"style file {path} must contain a JSON object")
    return raw


def _ticks(low: float, high: float, policy: str, tick_count: int) -> dict[str, object]:
    axis = AxisRange(low, high).normalized()
    if policy == "tight":
        values = tight_label(axis.low, axis.high, tick_count=tick_count)
        formatter = resolve_tick_formatter(DEFAULT_STYLE.x_tick_format, DEFAULT_STYLE.significant_digits)
    else:
        values = loose_label(axis.low, axis.high, tick_count=tick_count)
        formatter = resolve_tick_formatter(DEFAULT_STYLE.y_tick_format, DEFAULT_STYLE.significant_digits)
    return {
        "policy": policy,
        "low": axis.low,
        "high": axis.high,
        "ticks": [float(v) for v in values.tolist()],
        "labels": [formatter(float(v)) for v in values.tolist()],
    }


if __name__ == "__main__":
    main()
