"""
Main entry point for the uncommitted changes scanner.
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .components.report_renderer import ReportRenderer
from .components.repository_scanner import RepositoryScanner
from .services.config_manager import ConfigurationManager
from .utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker
from .utils.logging import get_logger, setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="uncommitted",
        description="Find git repositories with uncommitted changes under a directory.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Directory to scan (default: current directory)",
    )
    parser.add_argument("--config", help="Optional YAML or JSON configuration file")
    parser.add_argument("--width", type=int, dest="box_width", help="Report box width")
    color_group = parser.add_mutually_exclusive_group()
    color_group.add_argument(
        "--color", dest="color", action="store_const", const="always",
        help="Always use ANSI colors",
    )
    color_group.add_argument(
        "--no-color", dest="color", action="store_const", const="never",
        help="Never use ANSI colors",
    )
    parser.add_argument(
        "--timeout", type=float, dest="git_timeout",
        help="Seconds before a git command is abandoned (0 disables)",
    )
    parser.add_argument(
        "--exclude", action="append", dest="exclude_dirs", metavar="NAME",
        help="Directory name to skip while walking (repeatable)",
    )
    parser.add_argument("--log-level", dest="log_level", help="Log level for stderr output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_start_path(path: Optional[str]) -> str:
    """
    Determine where the scan starts.

    Raises:
        OSError: If no path was given and the working directory is unavailable
    """
    if path:
        return path
    return os.getcwd()


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "box_width": args.box_width,
        "color": args.color,
        "git_timeout": args.git_timeout,
        "exclude_dirs": args.exclude_dirs,
        "log_level": args.log_level,
    }


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run a scan and print the report.

    Args:
        argv: Command-line arguments without the program name

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    try:
        config = ConfigurationManager(args.config).load_config(_overrides(args))
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        get_error_tracker().record_error(
            component="main",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.MEDIUM,
            message=f"Invalid configuration: {e}",
            exception=e,
            context={"config_path": args.config},
        )
        return EXIT_FAILURE

    setup_logging(log_level=config.log_level, log_dir=config.log_dir)
    logger = get_logger("main")

    try:
        start_path = resolve_start_path(args.path)
    except OSError as e:
        print(f"Unable to determine the current directory: {e}", file=sys.stderr)
        get_error_tracker().record_error(
            component="main",
            category=ErrorCategory.SYSTEM,
            severity=ErrorSeverity.MEDIUM,
            message="Unable to determine the current directory",
            exception=e,
        )
        return EXIT_FAILURE

    renderer = ReportRenderer(box_width=config.box_width, use_color=config.use_color(sys.stdout))
    print(renderer.render_scanning_banner())

    result = RepositoryScanner(config).scan(start_path)
    print(renderer.render(result))

    stats = get_error_tracker().get_error_stats()
    logger.info(
        "Scan finished",
        extra={
            "start_path": start_path,
            "repositories": result.repository_count,
            "skipped_directories": len(result.skipped_directories),
            "errors": stats["total_errors"],
        },
    )
    return EXIT_OK


def main():
    """Main application entry point."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        print("\nScan interrupted by user", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    except MemoryError:
        print("Fatal error: out of memory while scanning", file=sys.stderr)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
