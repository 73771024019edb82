"""Entry point for ``python -m syllabus_cal``.

Provides a CLI that accepts a syllabus document and runs the full
syllabus-to-calendar pipeline.  Uses stdlib :mod:`argparse` for
argument parsing.

Subcommands:
    run       -- Default. Extract events from a syllabus.
    benchmark -- Score the classifier against annotated sample syllabi.

Exit codes:
    0 -- Completed successfully (including zero events).
    1 -- An error occurred (file not found, unreadable, config error).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from syllabus_cal.benchmark.report import format_console_summary
from syllabus_cal.benchmark.runner import run_benchmark
from syllabus_cal.config import ConfigError, Settings, load_settings
from syllabus_cal.demo_output import print_pipeline_result
from syllabus_cal.exceptions import TextExtractionError
from syllabus_cal.log import setup_logging
from syllabus_cal.pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="syllabus-cal",
        description="Extract calendar events from a course syllabus.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- "run" subcommand (default) -----------------------------------
    run_parser = subparsers.add_parser(
        "run",
        help="Extract events from a syllabus (.pdf, .txt or .md).",
    )
    run_parser.add_argument(
        "syllabus_file",
        type=str,
        help="Path to the syllabus document.",
    )
    run_parser.add_argument(
        "--ics",
        type=str,
        default=None,
        metavar="PATH",
        help="Also write the events to an iCalendar file.",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print {events, unparsed} as JSON instead of the report.",
    )
    run_parser.add_argument(
        "--reference-date",
        type=str,
        default=None,
        metavar="YYYY-MM-DD",
        help="Date treated as today (defaults to the current date).",
    )
    run_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    # --- "benchmark" subcommand ---------------------------------------
    bench_parser = subparsers.add_parser(
        "benchmark",
        help="Score the classifier against annotated sample syllabi.",
    )
    bench_parser.add_argument(
        "directory",
        nargs="?",
        default="samples/",
        help="Directory containing sample syllabi (default: samples/).",
    )
    bench_parser.add_argument(
        "--output",
        type=str,
        default="reports/",
        help="Directory for benchmark history (default: reports/).",
    )
    bench_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, routing anything that is not a subcommand to ``run``.

    ``syllabus-cal file.pdf`` is therefore the same as
    ``syllabus-cal run file.pdf``.
    """
    known_subcommands = {"run", "benchmark"}
    if not argv:
        argv = ["run"]
    elif argv[0] in {"-h", "--help"}:
        pass
    elif argv[0] not in known_subcommands:
        argv = ["run", *argv]

    return parser.parse_args(argv)


def _reference_datetime(settings: Settings, reference_date: str | None) -> datetime:
    """Return "now" in the configured timezone, or midnight of *reference_date*."""
    if reference_date is None:
        return settings.now()
    day = datetime.strptime(reference_date, "%Y-%m-%d")
    return day.replace(tzinfo=ZoneInfo(settings.timezone))


def _handle_run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute the ``run`` subcommand.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    syllabus_path = Path(args.syllabus_file)

    if not syllabus_path.exists():
        print(f"Error: File not found: {syllabus_path}", file=sys.stderr)
        return 1

    if not syllabus_path.is_file():
        print(f"Error: Not a file: {syllabus_path}", file=sys.stderr)
        return 1

    try:
        reference = _reference_datetime(settings, args.reference_date)
    except ValueError:
        print(
            f"Error: Invalid --reference-date {args.reference_date!r} (expected YYYY-MM-DD)",
            file=sys.stderr,
        )
        return 1

    try:
        result = run_pipeline(
            source_path=syllabus_path,
            current_datetime=reference,
            ics_path=Path(args.ics) if args.ics else None,
            event_duration=timedelta(minutes=settings.event_duration_minutes),
        )
    except (FileNotFoundError, PermissionError, TextExtractionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        sys.stdout.write(json.dumps(result.parse_result.to_dict(), indent=2) + "\n")
    else:
        print_pipeline_result(result)

    return 0


def _handle_benchmark(args: argparse.Namespace) -> int:
    """Execute the ``benchmark`` subcommand.

    Returns:
        Exit code: ``0`` on success, ``1`` if the directory is missing.
    """
    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: Not a directory: {directory}", file=sys.stderr)
        return 1

    result = run_benchmark(directory, Path(args.output))
    print(format_console_summary(result))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the syllabus-cal CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None`` (the normal case).

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    log_level = "DEBUG" if getattr(args, "verbose", False) else settings.log_level
    try:
        setup_logging(log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "benchmark":
        return _handle_benchmark(args)

    return _handle_run(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
