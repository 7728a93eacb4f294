# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Origins of Go source text handed to the extraction pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol

# ###############
# Public Interface
# ###############


class Source(Protocol):
    """Supplies raw content and an identifier for it."""

    @property
    def filename(self) -> str: ...

    def content(self) -> bytes:
        """Return the raw bytes to parse.

        Raises:
            OSError: If the content cannot be read.
        """
        ...


class FileSource:
    """Reads content from a path on the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def filename(self) -> str:
        return str(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def content(self) -> bytes:
        return self._path.read_bytes()


class ReaderSource:
    """Reads content from an open binary stream, e.g. standard input."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @property
    def filename(self) -> str:
        return "reader"

    def content(self) -> bytes:
        return self._stream.read()


class TextSource:
    """Serves in-memory text under a chosen filename."""

    def __init__(self, text: str, filename: str = "memory.go") -> None:
        self._text = text
        self._filename = filename

    @property
    def filename(self) -> str:
        return self._filename

    def content(self) -> bytes:
        return self._text.encode("utf-8")
