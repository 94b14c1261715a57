"""
Command-line interface for heapdiff.

Subcommands:
    snapshot   capture one histogram of a running JVM
    diff       compare two saved captures (before, after)
    watch      capture, wait for an action, capture again and compare
"""

import argparse
import dataclasses
import logging
import re
import sys
import time
import tomllib
from pathlib import Path
from typing import Any, List, Optional

from ..config import get_config, get_config_info, set_config_path
from ..histogram.memory_histogram import MemoryHistogram
from ..histogramer import Histogramer
from ..models.config import AppConfig
from ..plotter import plot_histogram
from ..snapshot.factory import create_snapshot_source
from ..snapshot.replay import FileSnapshotSource
from ..storage.report_manager import ReportManager
from ..system.commands import check_jcmd_installed
from ..system.processes import is_process_running
from ..validation import (
    HistogramError,
    ValidationError,
    handle_cli_error,
    validate_pid,
    validate_positive_integer,
    validate_regex_pattern,
)

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

REGEX_PREFIX = "re:"


def parse_filter_arguments(values: Optional[List[str]]) -> List[Any]:
    """
    Convert ``--filter`` values to histogram filter criteria.

    Values starting with ``re:`` are compiled as regular expressions; any
    other value is a class name or a ``prefix*`` wildcard.

    Raises:
        ValidationError: If a regular expression does not compile.
    """
    criteria: List[Any] = []
    for value in values or []:
        if value.startswith(REGEX_PREFIX):
            pattern = validate_regex_pattern(value[len(REGEX_PREFIX):], field_name="--filter")
            criteria.append(re.compile(pattern))
        else:
            criteria.append(value)
    return criteria


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heapdiff",
        description="Capture and compare JVM class histograms.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    report_options = argparse.ArgumentParser(add_help=False)
    report_options.add_argument(
        "-t", "--top", type=str, help="Number of classes to print. Defaults to report.top_n."
    )
    report_options.add_argument(
        "-f",
        "--filter",
        action="append",
        metavar="CRITERIA",
        help="Keep matching classes only: a class name, a 'prefix*' wildcard or 're:<regex>'. Repeatable.",
    )
    report_options.add_argument("-o", "--output", type=str, help="Save the report under this name.")
    report_options.add_argument("--plot", action="store_true", help="Also save a bar chart of the report.")

    target_options = argparse.ArgumentParser(add_help=False)
    target = target_options.add_mutually_exclusive_group()
    target.add_argument("-p", "--pid", type=str, help="Process id of the target JVM.")
    target.add_argument(
        "--pattern", type=str, help="Regex selecting the target JVM by command line."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        "snapshot",
        parents=[report_options, target_options],
        help="Capture and print one class histogram.",
    )
    diff_parser = subparsers.add_parser(
        "diff",
        parents=[report_options],
        help="Compare two capture files saved from 'jcmd <pid> GC.class_histogram'.",
    )
    diff_parser.add_argument("before", type=Path, help="Capture taken first (reference).")
    diff_parser.add_argument("after", type=Path, help="Capture taken second.")
    watch_parser = subparsers.add_parser(
        "watch",
        parents=[report_options, target_options],
        help="Capture, wait, capture again and print the difference.",
    )
    watch_parser.add_argument(
        "--wait",
        type=float,
        help="Seconds to wait between captures instead of waiting for Enter.",
    )
    return parser


def _resolve_source(args: argparse.Namespace, app_config: AppConfig):
    pid = None
    if args.pid:
        pid = validate_pid(args.pid, field_name="--pid")
        if not is_process_running(pid):
            raise ValidationError(f"No running process with pid {pid}", field_name="--pid", value=pid)
    if args.pattern:
        validate_regex_pattern(args.pattern, field_name="--pattern")
        app_config = dataclasses.replace(
            app_config, capture=dataclasses.replace(app_config.capture, target_pattern=args.pattern)
        )
    if not check_jcmd_installed(app_config.capture.jcmd_path):
        logger.warning(
            f"'{app_config.capture.jcmd_path}' was not found in PATH. Install a JDK "
            "or set capture.jcmd_path in config.toml."
        )
    return create_snapshot_source(app_config.capture, pid=pid)


def _resolve_top(args: argparse.Namespace, app_config: AppConfig) -> int:
    if args.top:
        return validate_positive_integer(args.top, min_value=1, field_name="--top")
    return app_config.report.top_n


def _wait_for_action(wait_seconds: Optional[float]) -> None:
    if wait_seconds is not None:
        logger.info(f"Waiting {wait_seconds}s before the second capture...")
        time.sleep(wait_seconds)
        return
    try:
        input("Reference snapshot taken. Run the workload, then press Enter...")
    except EOFError:
        raise ValidationError(
            "stdin is closed, cannot wait for Enter. Pass --wait SECONDS instead.",
            field_name="--wait",
        ) from None


def emit_report(
    histogram: MemoryHistogram,
    criteria: List[Any],
    top_n: int,
    args: argparse.Namespace,
    app_config: AppConfig,
    default_name: str,
) -> None:
    """Filter, print, and optionally save and plot a histogram."""
    if criteria:
        histogram = histogram.filter(*criteria)

    print(histogram.get_top(top_n))
    print(
        f"Total: {histogram.get_total_memory()} bytes in {len(histogram)} classes "
        f"({histogram.get_total_instances()} instances)"
    )

    if args.output:
        manager = ReportManager(app_config.report.output_dir, app_config.report.storage)
        manager.save_report(histogram, args.output)

    if args.plot or not app_config.report.skip_plots:
        plot_histogram(
            histogram,
            app_config.report.output_dir,
            args.output or default_name,
            top_n=top_n,
        )


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for heapdiff.

    Raises:
        SystemExit: On configuration errors, invalid arguments or capture failures.
    """
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.config:
            set_config_path(args.config)
        app_config = get_config()
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=False,
            logger=logger,
        )
    logger.debug(f"Configuration: {get_config_info()}")

    run_timestamp = time.strftime("%Y%m%d_%H%M%S")
    try:
        # Rejected before any capture is taken
        criteria = parse_filter_arguments(args.filter)
        top_n = _resolve_top(args, app_config)

        if args.command == "diff":
            excluded = app_config.parser.excluded_packages
            reference = Histogramer(FileSnapshotSource(args.before), excluded).create_histogram()
            current = Histogramer(FileSnapshotSource(args.after), excluded).create_histogram()
            histogram = current.diff(reference)
        elif args.command == "snapshot":
            source = _resolve_source(args, app_config)
            histogram = Histogramer(source, app_config.parser.excluded_packages).create_histogram()
            histogram = histogram.sort_by_size()
        else:
            source = _resolve_source(args, app_config)
            histogramer = Histogramer(source, app_config.parser.excluded_packages)
            histogram = histogramer.compare_captures(lambda: _wait_for_action(args.wait))
        emit_report(histogram, criteria, top_n, args, app_config, f"{args.command}_{run_timestamp}")
    except ValidationError as e:
        handle_cli_error(error=e, context="argument validation", exit_code=1, logger=logger)
    except HistogramError as e:
        handle_cli_error(error=e, context=f"'{args.command}' command", exit_code=1, logger=logger)


if __name__ == "__main__":
    main_cli()
