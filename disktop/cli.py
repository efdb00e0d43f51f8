"""
CLI entry point for disktop.
Parses arguments, runs a scan and prints the largest files found.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import (
    DEFAULT_DEPTH,
    DEFAULT_TOP_N,
    RESERVED_PREFIX,
    ScanConfig,
    default_deny_list,
    default_root,
    default_workers,
)
from .drives import list_drives
from .report import render_drives, render_report
from .scanner import scan
from .utils import display_path

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging with the specified level."""
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    logger.debug(f"Logging initialized at level {log_level}")


def non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def setup_arg_parser() -> argparse.ArgumentParser:
    """
    Set up command line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="disktop",
        description="Find the largest files under a directory tree"
    )

    parser.add_argument(
        'path',
        metavar='PATH',
        nargs='?',
        default=None,
        help=f'Directory to scan (default: {default_root()})'
    )

    parser.add_argument(
        '-d', '--depth', '-depth',
        dest='depth',
        metavar='N',
        type=non_negative_int,
        default=DEFAULT_DEPTH,
        help=f'Directory levels to visit, the root included (default: {DEFAULT_DEPTH})'
    )

    parser.add_argument(
        '-n', '--num', '-num',
        dest='num',
        metavar='N',
        type=non_negative_int,
        default=DEFAULT_TOP_N,
        help=f'Number of files to report (default: {DEFAULT_TOP_N})'
    )

    parser.add_argument(
        '--workers',
        metavar='N',
        type=non_negative_int,
        default=None,
        help='Worker threads listing directories (default: CPU count + 4, max 32)'
    )

    parser.add_argument(
        '--sequential',
        action='store_true',
        help='Walk the tree on a single thread'
    )

    parser.add_argument(
        '--exclude',
        metavar='PATH',
        action='append',
        default=[],
        help='Directory never descended into (repeatable)'
    )

    parser.add_argument(
        '--no-default-excludes',
        dest='default_excludes',
        action='store_false',
        help='Do not apply the built-in list of excluded system directories'
    )

    parser.add_argument(
        '--prefix',
        metavar='STR',
        default=RESERVED_PREFIX,
        help=f'Skip entries whose name starts with STR (default: "{RESERVED_PREFIX}", "" disables)'
    )

    parser.add_argument(
        '--follow-symlinks',
        action='store_true',
        help='Resolve symbolic links instead of skipping them'
    )

    parser.add_argument(
        '--no-streaming',
        dest='streaming',
        action='store_false',
        help='Keep every observation and rank them after the walk'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='List paths that could not be read'
    )

    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        default='warning',
        help='Set the logging level (default: warning)'
    )

    parser.add_argument(
        '--drives',
        action='store_true',
        help='List mounted volumes and exit'
    )

    return parser


def build_config(args: argparse.Namespace) -> ScanConfig:
    deny = list(default_deny_list()) if args.default_excludes else []
    deny.extend(args.exclude)

    if args.sequential:
        workers = 1
    elif args.workers is not None:
        workers = args.workers
    else:
        workers = default_workers()

    return ScanConfig(
        root=args.path or default_root(),
        max_depth=args.depth,
        top_n=args.num,
        reserved_prefix=args.prefix,
        deny_list=tuple(deny),
        workers=workers,
        follow_symlinks=args.follow_symlinks,
        streaming=args.streaming,
    )


def _tolerant_stdout() -> None:
    # a path the console encoding cannot represent must not abort the report
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="backslashreplace")


def _silence_stdout() -> None:
    # the reader went away; keep interpreter shutdown from flushing into the closed pipe
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        pass


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = setup_arg_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    _tolerant_stdout()

    try:
        if args.drives:
            for line in render_drives(list_drives()):
                print(line)
            return 0

        config = build_config(args)
        logger.debug(f"Scanning {config.root} depth={config.max_depth} workers={config.workers}")
        result = scan(config)

        for line in render_report(result, config.top_n, verbose=args.verbose):
            print(line)

        if not result.root_accessible:
            print(f"Error: cannot read directory {display_path(result.root)}", file=sys.stderr)
            return 1
        return 0

    except KeyboardInterrupt:
        print("\nScan cancelled.", file=sys.stderr)
        return 130

    except BrokenPipeError:
        _silence_stdout()
        return 1

    except Exception as e:
        logger.exception("Error in disktop")
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
