#!/usr/bin/env python3
"""durationfmt CLI - print durations in compact human-readable form.

Given whole seconds and optional nanoseconds, prints the duration the way
Go's time.Duration prints it (e.g. "1m30s", "3m29.000001s", "2.2ms").
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .config.settings import Settings, load_settings
from .exceptions import DurationFmtError
from .models.duration import Duration
from .utils.logging import get_logger, operation_context, setup_logging

# Sample conversions printed by --examples
EXAMPLES: List[Tuple[int, int]] = [
    (0, 0),
    (90, 0),
    (209, 1_000),
]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="durationfmt",
        description="Format elapsed time as a compact duration string",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s 90                     # 1m30s
  %(prog)s 209 --nanos 1000       # 3m29.000001s
  %(prog)s --total-nanos 2200000  # 2.2ms
  %(prog)s --examples
        """,
    )

    parser.add_argument(
        "seconds",
        nargs="?",
        type=int,
        help="Whole seconds of the duration",
    )
    parser.add_argument(
        "--nanos",
        type=int,
        default=0,
        help="Sub-second nanoseconds, 0-999999999 (default: 0)",
    )

    operation_group = parser.add_mutually_exclusive_group()
    operation_group.add_argument(
        "--total-nanos",
        type=int,
        help="Total duration in nanoseconds, instead of SECONDS and --nanos",
    )
    operation_group.add_argument(
        "--examples",
        action="store_true",
        help="Print sample conversions (the default when no duration is given)",
    )

    # Logging options
    parser.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to this file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose console output (equivalent to --log-level DEBUG)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all log output except errors",
    )

    # Configuration file options
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to JSON configuration file",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        help="Treat configuration warnings as errors",
    )
    parser.add_argument(
        "--save-config",
        type=Path,
        metavar="PATH",
        help="Write the effective settings to PATH as JSON",
    )

    return parser


def validate_arguments(args: argparse.Namespace) -> None:
    """Validate command line arguments."""
    if args.quiet and args.verbose:
        raise ValueError("Cannot use both --quiet and --verbose flags")

    if args.total_nanos is not None and (args.seconds is not None or args.nanos):
        raise ValueError("--total-nanos cannot be combined with SECONDS or --nanos")

    if args.examples and (args.seconds is not None or args.nanos):
        raise ValueError("--examples cannot be combined with SECONDS or --nanos")

    if args.seconds is None and args.nanos:
        raise ValueError("--nanos requires SECONDS")


def merge_settings_with_args(args: argparse.Namespace, settings: Settings) -> Settings:
    """Merge command line arguments with settings."""
    updates = {}

    if args.log_level:
        updates["log_level"] = args.log_level
    if args.log_file:
        updates["log_file"] = args.log_file
    if args.verbose:
        updates["verbose"] = True
        updates["quiet"] = False
    if args.quiet:
        updates["quiet"] = True
        updates["verbose"] = False

    current_dict = settings.model_dump()
    current_dict.update(updates)

    return Settings(**current_dict)


def setup_application_logging(settings: Settings) -> None:
    """Set up application logging based on settings."""
    setup_logging(
        log_level=settings.get_effective_log_level(),
        log_file=settings.log_file,
        max_file_size=settings.log_file_max_size,
        backup_count=settings.log_file_backup_count,
        json_format=settings.json_logs,
    )


def resolve_durations(args: argparse.Namespace) -> List[Duration]:
    """Build the durations requested on the command line."""
    if args.total_nanos is not None:
        return [Duration.from_nanos(args.total_nanos)]

    if args.seconds is not None:
        return [Duration(args.seconds, args.nanos)]

    return [Duration(seconds, nanos) for seconds, nanos in EXAMPLES]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the durationfmt CLI."""
    try:
        parser = create_argument_parser()
        args = parser.parse_args(argv)

        validate_arguments(args)

        settings = load_settings(args.config, strict=args.strict_config)
        settings = merge_settings_with_args(args, settings)

        setup_application_logging(settings)

        logger = get_logger(__name__)

        if args.save_config:
            settings.save(args.save_config)
            logger.info(f"Saved configuration to {args.save_config}")

        with operation_context("format_duration"):
            durations = resolve_durations(args)
            logger.debug(f"Formatting {len(durations)} duration(s)")

            for duration in durations:
                print(duration.format())

        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130

    except (DurationFmtError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger = get_logger(__name__)
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
