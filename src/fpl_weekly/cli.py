"""Command-line interface for building the weekly FPL report."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import cast

from .config import ConfigError, load_settings
from .pipeline import (
    BuildError,
    BuildOutcome,
    LogCallback,
    LogLevel,
    OutputFormat,
    build,
)

SUPPORTED_FORMATS = ("markdown", "json")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fpl-weekly",
        description=(
            "Build the weekly FPL summary "
            "(fixtures, transfers, form, prices, injuries)"
        ),
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Fetch FPL data and write the weekly report",
    )
    build_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Build from a saved payload (data.json) instead of the FPL API",
    )
    build_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory (default: $FPL_WEEKLY_OUTPUT_DIR or public)",
    )
    build_parser.add_argument(
        "--formats",
        default="markdown,json",
        help="Comma-separated list of output formats (markdown,json)",
    )
    build_parser.add_argument(
        "--curated",
        type=Path,
        default=None,
        help="Markdown file appended to the report (default: curated.md)",
    )
    build_parser.add_argument(
        "--save-raw",
        action="store_true",
        help="Also write the raw API payload to data.json",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the report but do not write files",
    )
    build_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Display debug logging",
    )

    return parser


def _make_console_logger(verbose: bool) -> LogCallback:
    """Create a logging callback that writes pipeline events to the console."""

    prefixes: dict[LogLevel, str] = {
        "success": "✅ ",
        "warning": "⚠️ ",
        "error": "❌ ",
        "debug": "[debug] ",
    }

    def _log(message: str, level: LogLevel) -> None:
        if level == "debug" and not verbose:
            return
        prefix = prefixes.get(level, "")
        stream = sys.stderr if level in {"error", "warning"} else sys.stdout
        print(f"{prefix}{message}", file=stream)

    return _log


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("fpl_weekly")
    logger.setLevel(logging.DEBUG if verbose else logging.ERROR)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s: %(name)s: %(message)s")
        )
        logger.addHandler(handler)


def _parse_formats(raw: str) -> list[OutputFormat]:
    formats = [item.strip().lower() for item in raw.split(",") if item.strip()]
    formats = ["markdown" if item == "md" else item for item in formats]
    unknown = [item for item in formats if item not in SUPPORTED_FORMATS]
    if unknown:
        raise ValueError(f"Unsupported format(s): {', '.join(unknown)}")
    return cast("list[OutputFormat]", formats)


def _print_build_summary(outcome: BuildOutcome) -> None:
    report = outcome.report
    payload = {
        "gameweek": report.gameweek.id,
        "gameweek_name": report.gameweek.name,
        "selection_method": report.selection_method,
        "fixture_days": len(report.fixture_days),
        "fixtures": sum(len(day.fixtures) for day in report.fixture_days),
        "availability_risks": len(report.availability_risks),
        "diagnostics": len(report.diagnostics),
        "written": {key: str(path) for key, path in outcome.written.items()},
    }
    print(json.dumps(payload, indent=2))


def _run_build(args: argparse.Namespace) -> int:
    _configure_logging(args.verbose)
    log = _make_console_logger(verbose=args.verbose)
    try:
        formats = _parse_formats(args.formats)
        settings = load_settings()
    except (ValueError, ConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    overrides: dict[str, Path] = {}
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if args.curated is not None:
        overrides["curated_path"] = args.curated
    settings = dataclasses.replace(settings, **overrides)

    try:
        outcome = build(
            settings=settings,
            input_path=args.input,
            formats=formats,
            save_raw=args.save_raw,
            dry_run=args.dry_run,
            log=log,
        )
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        return 1

    _print_build_summary(outcome)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    if argv is not None and not isinstance(argv, Sequence):
        argv = list(argv)
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "build":
        return _run_build(args)
    parser.error(f"Unknown command {args.command}")
    return 1


if __name__ == "__main__":  # pragma: no cover - entry point
    raise SystemExit(main())
