# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source abstractions supplying Go text to the parser."""

from goenums.source.sources import FileSource, ReaderSource, Source, TextSource

__all__ = [
    "Source",
    "FileSource",
    "ReaderSource",
    "TextSource",
]
