"""Command line interface for touch latency calibration."""
from __future__ import annotations

import argparse
import logging
import math
from typing import List, Tuple

from .config import CalibrationConfig, CalibrationConstants
from .domain import CalibrationResult, Sample
from .errors import CalibrationError
from .io import read_samples_tsv, write_samples_tsv, write_tsv
from .session import LatencySession
from .synthetic import generate_circle_trace

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Touchscreen latency calibration toolkit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--consistency-threshold",
        type=float,
        default=CalibrationConstants.CONSISTENCY_THRESHOLD_MS,
        help="Allowed disagreement between the two period estimates in ms (default: 30)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    simulate = sub.add_parser("simulate", help="Write a synthetic circular stylus trace")
    simulate.add_argument("output", help="Path to write the trace TSV")
    simulate.add_argument("--cx", type=float, default=400.0, help="Circle center x in px")
    simulate.add_argument("--cy", type=float, default=400.0, help="Circle center y in px")
    simulate.add_argument("--radius", type=float, default=200.0, help="Circle radius in px")
    simulate.add_argument("--period", type=float, default=1000.0, help="Revolution time in ms")
    simulate.add_argument("--duration", type=float, default=3000.0, help="Trace length in ms")
    simulate.add_argument("--interval", type=float, default=1000.0 / 60.0, help="Sample interval in ms")
    simulate.add_argument("--phase", type=float, default=0.0, help="Start angle in degrees")
    simulate.add_argument("--noise", type=float, default=0.0, help="Gaussian jitter in px")
    simulate.add_argument("--lag", type=float, default=0.0, help="Reporting lag in ms")
    simulate.add_argument("--clockwise", action="store_true", help="Trace in the opposite direction")
    simulate.add_argument("--seed", type=int, default=None, help="Random seed for the jitter")

    calibrate = sub.add_parser("calibrate", help="Fit circle and revolution period to a trace")
    calibrate.add_argument("input", help="Trace TSV with time_ms, x_px, y_px")

    project = sub.add_parser("project", help="Calibrate on one trace and project another")
    project.add_argument("input", metavar="calibration", help="Trace TSV used for calibration")
    project.add_argument("live", help="Trace TSV of live samples to project")
    project.add_argument("output", help="Path to write projected points TSV")
    project.add_argument("--nudge", type=float, default=0.0, help="Time offset in ms")

    plot = sub.add_parser("plot", help="Plot a calibration trace and its fitted circle")
    plot.add_argument("input", help="Trace TSV used for calibration")
    plot.add_argument("output", help="Path to write the generated plot (png or pdf)")
    plot.add_argument("--live", help="Optional trace TSV of live samples to project")
    plot.add_argument("--nudge", type=float, default=0.0, help="Time offset in ms")
    plot.add_argument(
        "--figsize",
        nargs=2,
        type=float,
        metavar=("WIDTH", "HEIGHT"),
        default=(6.0, 6.0),
        help="Figure size in inches (width height)",
    )
    plot.add_argument("--dpi", type=float, default=None, help="Optional DPI override for the figure")

    return parser


def calibrate_samples(
    samples: List[Sample], cfg: CalibrationConfig | None = None
) -> Tuple[LatencySession, CalibrationResult]:
    """Run one collection phase over ``samples``; return the calibrated session."""
    session = LatencySession(cfg)
    session.begin_collecting()
    session.replay(samples)
    result = session.finish_collecting()
    return session, result


def _report(result: CalibrationResult) -> None:
    period = f"{result.period:.3f}" if result.period is not None else "undefined"
    print(f"samples\t{result.sample_count}")
    print(f"cx\t{result.cx:.3f}")
    print(f"cy\t{result.cy:.3f}")
    print(f"r\t{result.r:.3f}")
    print(f"period\t{period}")
    if result.warning is not None:
        print(f"warning\t{result.warning}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    cfg = CalibrationConfig(consistency_threshold_ms=args.consistency_threshold)

    if args.command == "simulate":
        samples = generate_circle_trace(
            cx=args.cx,
            cy=args.cy,
            r=args.radius,
            period=args.period,
            duration=args.duration,
            interval=args.interval,
            phase=math.radians(args.phase),
            noise_px=args.noise,
            lag=args.lag,
            clockwise=args.clockwise,
            seed=args.seed,
        )
        write_samples_tsv(samples, args.output)
        logger.info("Wrote %s samples to %s", len(samples), args.output)
        return 0

    try:
        session, result = calibrate_samples(read_samples_tsv(args.input), cfg)
    except CalibrationError as exc:
        logger.error("Calibration failed: %s", exc)
        return 1

    if args.command == "calibrate":
        _report(result)
        return 0

    if args.command == "project":
        live = read_samples_tsv(args.live)
        projected = session.projector.project_many(session.circle, args.nudge, live)
        write_tsv(projected, args.output)
        logger.info("Wrote %s projected samples to %s", len(projected), args.output)
        return 0

    if args.command == "plot":
        from .analyzer import CalibrationPlotter, PlotConfig

        projected = None
        if args.live:
            projected = session.projector.project_many(
                session.circle, args.nudge, read_samples_tsv(args.live)
            )
        plot_cfg = PlotConfig(figsize=tuple(args.figsize), dpi=args.dpi)
        CalibrationPlotter(plot_cfg).plot(
            session.calibration_set.snapshot(), session.circle, projected, args.output
        )
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
