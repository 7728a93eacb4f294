# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Batch generation over Go source files."""

from goenums.generator.pipeline import FileResult, FileStatus, generate, generate_all

__all__ = [
    "FileResult",
    "FileStatus",
    "generate",
    "generate_all",
]
