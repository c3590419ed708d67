"""CLI entry point for sky snapshots.

Render the almanac sky for a date (and optionally a time) from the yearly
data files:
    skyalmanac 2024-04-23 --time 21:30
    skyalmanac 2024-04-23 --svg --out moon.svg
    skyalmanac 2024-04-23 --sweep 24 --out frames/
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from skyalmanac.compute import DEFAULT_VIEWPORT, run, sweep_frames
from skyalmanac.config import EngineConfig
from skyalmanac.data import AlmanacDataError
from skyalmanac.i18n import t
from skyalmanac.models import QueryInput, Viewport
from skyalmanac.renderers.static import save_static_frame
from skyalmanac.renderers.svg_2d import render_svg_html


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the sky for a date.")
    parser.add_argument("date", help="ISO date, e.g. 2024-04-23")
    parser.add_argument("--time", help="Local time HH:MM (default: a moment the moon is up)")
    parser.add_argument("--width", type=int, default=DEFAULT_VIEWPORT.width)
    parser.add_argument("--height", type=int, default=DEFAULT_VIEWPORT.height)
    parser.add_argument("--lang", choices=("he", "en"), default="he")
    parser.add_argument("--out", type=Path, help="Output file")
    parser.add_argument("--svg", action="store_true", help="Write an HTML/SVG page instead of PNG")
    parser.add_argument(
        "--sweep", type=int, metavar="N", help="Write N PNG frames along the moonrise sweep"
    )
    return parser.parse_args(argv)


def _write_sweep(args: argparse.Namespace, config: EngineConfig) -> int:
    try:
        frames = sweep_frames(
            QueryInput(date=args.date),
            count=args.sweep,
            viewport=Viewport(width=args.width, height=args.height),
            config=config,
            lang=args.lang,
        )
    except AlmanacDataError as e:
        logger.error("[almanac] {}", t("error_no_data", args.lang, error=e))
        return 1
    if not frames:
        logger.warning("[almanac] no moonrise on {}, nothing to sweep", args.date)
        return 1

    for i, frame in enumerate(frames):
        path = None
        if args.out is not None:
            path = args.out / f"{args.date}_{i:03d}.png"
        path = save_static_frame(frame, path)
        logger.debug("[almanac] sweep frame={} minutes={} path={}", i, frame.minutes, path)
    logger.info("[almanac] sweep date={} frames={}", args.date, len(frames))
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    config = EngineConfig.from_env()
    if args.sweep:
        return _write_sweep(args, config)
    try:
        frame = run(
            QueryInput(date=args.date, time=args.time),
            viewport=Viewport(width=args.width, height=args.height),
            config=config,
            lang=args.lang,
        )
    except AlmanacDataError as e:
        logger.error("[almanac] {}", t("error_no_data", args.lang, error=e))
        return 1

    if args.svg:
        path = args.out or Path(f"{args.date}.html")
        path.write_text(render_svg_html(frame, args.lang), encoding="utf-8")
    else:
        path = save_static_frame(frame, args.out)

    logger.info(
        "[almanac] date={} minutes={} hebrew={} illumination={}%",
        frame.date, frame.minutes, frame.hebrew_date, frame.illumination_pct,
    )
    print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
