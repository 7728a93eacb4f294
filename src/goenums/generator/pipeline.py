# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-file generation: parse a Go file and write its enum wrappers.

Every file ends in a FileResult carrying a status. A failing file never
stops the others; with ``jobs > 1`` files are processed on a thread pool
and results are still returned in input order.
"""

from __future__ import annotations

import enum
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from goenums.extraction.pipeline import (
    InternalParserError,
    NoEnumsFoundError,
    ParseCancelled,
    SourceReadError,
    SourceSyntaxError,
    parse_source,
)
from goenums.model.request import Configuration
from goenums.source import FileSource
from goenums.writer.gofile import GoFileWriter, WriteCancelled, WriteError

# ###############
# Public Interface
# ###############

SUPPORTED_SUFFIX = ".go"
SUPPORTED_OUTPUT_FORMATS: tuple[str, ...] = ("go",)


class FileStatus(enum.Enum):
    """Outcome of generating one input file."""

    OK = "ok"
    NO_ENUMS = "no enums found"
    UNSUPPORTED = "unsupported input"
    READ_ERROR = "read error"
    SYNTAX_ERROR = "syntax error"
    INTERNAL_ERROR = "internal error"
    WRITE_ERROR = "write error"
    CANCELLED = "cancelled"


@dataclass
class FileResult:
    """The status of one input file and the files written for it.

    Attributes:
        filename: The input file as given.
        status: What happened.
        written: Paths of the generated files, empty unless status is OK.
        enums: Names of the enum types found.
        message: Error detail for failed files.
    """

    filename: str
    status: FileStatus
    written: list[Path] = field(default_factory=list)
    enums: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == FileStatus.OK


def generate(
    path: str | Path,
    configuration: Configuration | None = None,
    *,
    logger: logging.Logger | None = None,
    cancel: threading.Event | None = None,
) -> FileResult:
    """Parse *path* and write one Go file per enum type it declares.

    Unexpected faults while parsing or rendering end as INTERNAL_ERROR.
    """
    log = logger or _logger
    cfg = configuration or Configuration()
    filename = str(path)

    if Path(path).suffix != SUPPORTED_SUFFIX:
        return FileResult(filename, FileStatus.UNSUPPORTED, message=f"only {SUPPORTED_SUFFIX} files are supported")
    if cfg.output_format not in SUPPORTED_OUTPUT_FORMATS:
        return FileResult(
            filename,
            FileStatus.UNSUPPORTED,
            message=f"unsupported output format '{cfg.output_format}'",
        )

    log.info("processing file", extra={"file": filename})
    try:
        requests = parse_source(FileSource(path), cfg, logger=log, cancel=cancel)
    except ParseCancelled as exc:
        return FileResult(filename, FileStatus.CANCELLED, message=str(exc))
    except SourceReadError as exc:
        return FileResult(filename, FileStatus.READ_ERROR, message=str(exc))
    except SourceSyntaxError as exc:
        return FileResult(filename, FileStatus.SYNTAX_ERROR, message=str(exc))
    except NoEnumsFoundError as exc:
        return FileResult(filename, FileStatus.NO_ENUMS, message=str(exc))
    except InternalParserError as exc:
        return FileResult(filename, FileStatus.INTERNAL_ERROR, message=str(exc))
    except Exception as exc:
        return _internal_error(filename, exc, log)

    enums = [request.enum_group.type_name for request in requests]
    writer = GoFileWriter(cfg, logger=log)
    try:
        written = writer.write(requests, cancel)
    except WriteCancelled as exc:
        return FileResult(filename, FileStatus.CANCELLED, enums=enums, message=str(exc))
    except WriteError as exc:
        return FileResult(filename, FileStatus.WRITE_ERROR, enums=enums, message=str(exc))
    except Exception as exc:
        return _internal_error(filename, exc, log, enums)
    return FileResult(filename, FileStatus.OK, written=written, enums=enums)


def generate_all(
    paths: list[str | Path],
    configuration: Configuration | None = None,
    *,
    jobs: int = 1,
    logger: logging.Logger | None = None,
    cancel: threading.Event | None = None,
) -> list[FileResult]:
    """Run generate() for every path and return the results in input order.

    Blank entries are ignored. With ``jobs > 1`` files are processed
    concurrently on a thread pool of that size.
    """
    log = logger or _logger
    names = [p for p in paths if str(p).strip()]
    if jobs <= 1 or len(names) <= 1:
        return [generate(p, configuration, logger=log, cancel=cancel) for p in names]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        futures = [pool.submit(generate, p, configuration, logger=log, cancel=cancel) for p in names]
        return [future.result() for future in futures]


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _internal_error(filename: str, exc: Exception, log: logging.Logger, enums: list[str] | None = None) -> FileResult:
    log.error("internal failure", extra={"file": filename}, exc_info=exc)
    return FileResult(
        filename,
        FileStatus.INTERNAL_ERROR,
        enums=enums or [],
        message=f"{type(exc).__name__}: {exc}",
    )
