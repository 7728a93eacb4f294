# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the goenums command-line interface."""

import argparse
import signal
import sys
import threading
from pathlib import Path

from yachalk import chalk

from goenums import version
from goenums.cli.logs import configure_logging
from goenums.generator import FileResult, FileStatus, generate_all
from goenums.model.request import Configuration, Handlers
from goenums.project.config import ProjectConfigError, find_project_config, load_project_config, merge_flags

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the goenums CLI."""
    parser = argparse.ArgumentParser(
        prog="goenums",
        description="goenums - type-safe wrappers for iota-based Go enums",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Go source files to generate enums for")
    parser.add_argument(
        "-f",
        "--failfast",
        action="store_true",
        help="Return an error from Parse for unknown values (default: false)",
    )
    parser.add_argument(
        "-l",
        "--legacy",
        action="store_true",
        help="Generate code without Go 1.23 iterator support (default: false)",
    )
    parser.add_argument(
        "-i",
        "--insensitive",
        action="store_true",
        help="Generate case-insensitive string parsing (default: false)",
    )
    parser.add_argument(
        "-c",
        "--constraints",
        action="store_true",
        help="Inline the numeric constraints instead of importing golang.org/x/exp (default: false)",
    )
    parser.add_argument(
        "-vv",
        "--verbose",
        action="store_true",
        help="Log debug output including the generated code (default: false)",
    )
    parser.add_argument("-o", "--output", default=None, metavar="FORMAT", help="Output format (default: go)")
    parser.add_argument(
        "--handlers",
        default=None,
        metavar="LIST",
        help="Comma-separated serialisation hooks to emit: json,text,yaml,sql,binary or none (default: all)",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="Project configuration file (default: nearest .goenums.yaml)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        metavar="N",
        help="Number of files to process concurrently (default: 1)",
    )
    parser.add_argument("--version", action="store_true", help="Print version information and exit")

    args = parser.parse_args()
    if not args.version and not args.files:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_STATUS_COLOURS = {
    FileStatus.OK: chalk.green,
    FileStatus.NO_ENUMS: chalk.yellow,
    FileStatus.UNSUPPORTED: chalk.yellow,
    FileStatus.CANCELLED: chalk.yellow,
}


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the version printer or the generator."""
    if args.version:
        return _cmd_version()
    return _cmd_generate(args)


def _cmd_version() -> int:
    """Print the version, build and commit."""
    print(chalk.blue("goenums"))
    print(chalk.green(f"    version :: {version.CURRENT}"))
    print(chalk.green(f"    build   :: {version.BUILD}"))
    print(chalk.green(f"    commit  :: {version.COMMIT}"))
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Generate enum wrappers for every file on the command line."""
    if args.jobs < 1:
        print("Error: --jobs must be at least 1.", file=sys.stderr)
        return 1

    try:
        configuration = _configuration(args)
    except (ProjectConfigError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger = configure_logging(configuration.verbose)
    logger.debug(
        "config settings",
        extra={
            "file_count": len(args.files),
            "output": configuration.output_format,
            "failfast": configuration.failfast,
            "legacy": configuration.legacy,
            "insensitive": configuration.insensitive,
            "handlers": ",".join(configuration.handlers.enabled()),
        },
    )

    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())
    try:
        results = generate_all(args.files, configuration, jobs=args.jobs, logger=logger, cancel=cancel)
    finally:
        signal.signal(signal.SIGINT, previous)

    for result in results:
        _print_result(result)

    failed = [result for result in results if not result.ok]
    if failed:
        print(f"{len(failed)} of {len(results)} file(s) failed.", file=sys.stderr)
        return 1
    return 0


def _configuration(args: argparse.Namespace) -> Configuration:
    """Build the run configuration from the project file and the flags."""
    config_path = Path(args.config) if args.config else find_project_config(Path.cwd())
    base = load_project_config(config_path) if config_path is not None else Configuration()
    handlers = None
    if args.handlers is not None:
        names = [name.strip() for name in args.handlers.split(",") if name.strip()]
        handlers = Handlers.only([] if names == ["none"] else names)
    return merge_flags(
        base,
        failfast=args.failfast,
        legacy=args.legacy,
        insensitive=args.insensitive,
        constraints=args.constraints,
        verbose=args.verbose,
        output_format=args.output,
        handlers=handlers,
    )


def _print_result(result: FileResult) -> None:
    """Print one coloured status line for a file."""
    colour = _STATUS_COLOURS.get(result.status, chalk.red)
    status = colour(f"{result.status.value:>15}")
    if result.ok:
        outputs = ", ".join(path.name for path in result.written)
        print(f"{status}  {result.filename} -> {outputs}")
        return
    print(f"{status}  {result.filename}: {result.message}", file=sys.stderr)
