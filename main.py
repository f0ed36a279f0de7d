import argparse
import logging
import sys
from pathlib import Path

from constants.parameters import DEFAULT_INTERPOLATION_STEP_S, FilterConfig
from output.kml_writer import render_kml
from trajectory.refinement import refine_track
from utilities.track_loader import load_track

DEFAULT_LOG_PATH = Path("logs/gpx2kml_debug.log")

logger = logging.getLogger("gpx2kml")


def configure_logging(log_path: Path) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
        ],
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpx2kml",
        description="Convert a GPX track or FlySight CSV log to an altitude-accurate KML file.",
    )
    parser.add_argument(
        "-i",
        "--input_filename",
        required=True,
        help="GPX file, or FlySight log when the name contains .csv/.CSV",
    )
    parser.add_argument(
        "--min", type=float, default=0.0, help="Filter points below this altitude"
    )
    parser.add_argument(
        "--max",
        type=float,
        default=0.0,
        help="If this is more than 0, filter points above this altitude",
    )
    parser.add_argument(
        "--step",
        type=float,
        default=DEFAULT_INTERPOLATION_STEP_S,
        help="Interpolation step in seconds (0.0 for none)",
    )
    parser.add_argument(
        "-o", "--output", default=None, help="Output KML path (default: stdout)"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=DEFAULT_LOG_PATH,
        help=f"Debug log path (default: {DEFAULT_LOG_PATH})",
    )
    return parser


def main(argv=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_file)
        config = FilterConfig(
            min_altitude_m=args.min,
            max_altitude_m=args.max,
            interpolation_step_s=args.step,
        )
        records = load_track(args.input_filename)
        result = refine_track(records, config)
        document = render_kml(result)
    except (OSError, ValueError) as exc:
        logger.error("Conversion of %s failed: %s", args.input_filename, exc)
        print(f"gpx2kml: {exc}", file=sys.stderr)
        return 1

    logger.info(
        "Converted %d samples: %d line points, %d markers, %d waypoints",
        len(result.samples),
        len(result.line),
        len(result.markers),
        len(result.waypoints),
    )

    if args.output is None:
        sys.stdout.write(document)
    else:
        Path(args.output).write_text(document, encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())
