# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Writers turning generation requests into Go source files."""

from goenums.writer.gofile import GoFileWriter, GoNames, WriteCancelled, WriteError, output_path

__all__ = [
    "GoFileWriter",
    "GoNames",
    "WriteError",
    "WriteCancelled",
    "output_path",
]
