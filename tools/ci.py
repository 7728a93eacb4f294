#!/usr/bin/env python3
# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the goenums CI checks locally.

Steps run in order: format, lint, type check, tests with coverage, a CLI
smoke run and the package build. ``--skip NAME`` leaves a step out and
``--fail-fast`` stops after the first failing step.
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("format", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    ("lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    ("types", ["uv", "run", "ty", "check", "src/"]),
    ("tests", ["uv", "run", "pytest", "--cov=goenums", "--cov-report=term-missing"]),
    ("smoke", ["uv", "run", "goenums", "--version"]),
    ("build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run goenums CI checks")
    parser.add_argument("--skip", action="append", default=[], choices=[name for name, _ in STEPS])
    parser.add_argument("--fail-fast", action="store_true", help="Stop after the first failing step")
    args = parser.parse_args()

    results: list[tuple[str, bool, float]] = []
    for name, cmd in STEPS:
        if name in args.skip:
            continue
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        passed = proc.returncode == 0
        results.append((name, passed, time.monotonic() - start))
        if not passed and args.fail_fast:
            break

    _banner("summary")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}\n{chalk.blue(title)}\n{sep}")


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    sys.exit(main())
