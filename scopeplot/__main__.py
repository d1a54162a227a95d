from __future__ import annotations

import argparse
from dataclasses import replace
import logging
import math
from pathlib import Path
from typing import Sequence

from scopeplot.api import raster_graph
from scopeplot.config import PLOT_STYLES, GraphConfig, load_graph_config
from scopeplot.feed import SampleFeed
from scopeplot.scales import AxisRange, format_label, nice_step, required_precision, tick_values
from scopeplot.theme import DEFAULT_THEME


def _waveform(kind: int, t: float) -> float:
    phase = t % 1.0
    if kind % 3 == 0:
        return math.sin(2 * math.pi * t)
    if kind % 3 == 1:
        return 0.8 if phase < 0.5 else -0.8
    return 1.2 * phase - 0.6


def _render(args: argparse.Namespace) -> int:
    if args.config is not None:
        config, theme = load_graph_config(args.config)
    else:
        config, theme = GraphConfig(title="scopeplot demo", x_title="time (s)"), DEFAULT_THEME
    config = replace(
        config,
        x_range=AxisRange(0.0, args.samples / args.rate),
        y_range=AxisRange(-1.5, 1.5),
        sample_rate=args.rate,
        style=args.style or config.style,
    )
    graph = raster_graph(args.width, args.height, config=config, theme=theme)
    feed = SampleFeed(max_queue_size=max(1, args.samples * args.series))
    for i in range(args.samples):
        t = i / args.rate
        for series_id in range(args.series):
            feed.push_auto(_waveform(series_id, t + series_id * 0.15), series_id)
    drawn = feed.drain_into(graph)
    out = graph.canvas.save_png(args.out)
    print(f"wrote {out} ({drawn} samples)")
    return 0


def _ticks(args: argparse.Namespace) -> int:
    axis = AxisRange(args.min, args.max)
    step = nice_step(axis.span, args.pixels, args.label_px)
    precision = required_precision(axis.max, axis.min, step)
    print(f"step={step} precision={precision}")
    for value in tick_values(axis.min, axis.max, step):
        print(format_label(value, precision))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="scopeplot")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render synthetic multi-series samples to a PNG.")
    render.add_argument("--out", type=Path, default=Path("scopeplot.png"))
    render.add_argument("--config", type=Path, default=None, help="TOML file with [graph] and [theme] tables.")
    render.add_argument("--width", type=int, default=None)
    render.add_argument("--height", type=int, default=None)
    render.add_argument("--style", choices=sorted(PLOT_STYLES), default=None)
    render.add_argument("--series", type=int, default=3)
    render.add_argument("--samples", type=int, default=200)
    render.add_argument("--rate", type=float, default=50.0, help="Samples per x unit.")

    ticks = sub.add_parser("ticks", help="Print the tick labels chosen for a range.")
    ticks.add_argument("min", type=float)
    ticks.add_argument("max", type=float)
    ticks.add_argument("--pixels", type=float, default=300.0)
    ticks.add_argument("--label-px", type=float, default=30.0)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "render":
        if args.samples <= 0 or args.series <= 0 or args.rate <= 0:
            parser.error("--samples, --series and --rate must be > 0")
        return _render(args)
    return _ticks(args)


if __name__ == "__main__":
    raise SystemExit(main())
