# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse entry point: source text in, generation requests out.

The pipeline reads a Source, builds its syntax tree, extracts enum groups
and wraps each group into a GenerationRequest. Failures are reported
through a small exception taxonomy so that callers can tell unreadable,
malformed and enum-free files apart from faults in the extractor itself.
"""

from __future__ import annotations

import logging
import threading

from goenums import version
from goenums.extraction.walker import extract_enum_groups
from goenums.model.enums import EnumGroup
from goenums.model.request import Configuration, GenerationRequest
from goenums.parser import LexerError, ParseError, parse
from goenums.parser.syntax import GoFile
from goenums.source import Source
from goenums.writer.naming import lower_first, plural

# ###############
# Public Interface
# ###############


class ExtractionError(Exception):
    """Base class for failures to turn a source into generation requests."""

    def __init__(self, message: str, filename: str = "") -> None:
        super().__init__(f"{filename}: {message}" if filename else message)
        self.filename = filename


class SourceReadError(ExtractionError):
    """Raised when the source content cannot be read."""


class SourceSyntaxError(ExtractionError):
    """Raised when the source is not syntactically valid Go.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, filename: str = "", line: int = 0, column: int = 0) -> None:
        super().__init__(message, filename)
        self.line = line
        self.column = column


class NoEnumsFoundError(ExtractionError):
    """Raised when a valid source declares no iota-based enum."""


class InternalParserError(ExtractionError):
    """Raised when the parser or extractor itself fails unexpectedly."""


class ParseCancelled(Exception):
    """Raised when cancellation is requested before parsing completes."""


def parse_source(
    source: Source,
    configuration: Configuration | None = None,
    *,
    logger: logging.Logger | None = None,
    cancel: threading.Event | None = None,
) -> list[GenerationRequest]:
    """Extract every enum group in *source* as a generation request.

    Args:
        source: Where the Go text comes from.
        configuration: Options copied into each request; only the invalid
            marker affects extraction.
        logger: Logger for diagnostics; defaults to this module's logger.
        cancel: Checked on entry, after reading and after parsing.

    Returns:
        One GenerationRequest per enum group, in first-appearance order.

    Raises:
        ParseCancelled: If *cancel* is set at a checkpoint.
        SourceReadError: If reading the content fails for any reason or it is not UTF-8.
        SourceSyntaxError: If the content is not valid Go.
        NoEnumsFoundError: If the file declares no enum group.
        InternalParserError: If parsing or extraction fails unexpectedly.
    """
    log = logger or _logger
    cfg = configuration or Configuration()
    filename = source.filename

    _checkpoint(cancel, filename, "before reading")
    text = _read(source, filename)
    _checkpoint(cancel, filename, "after reading")

    try:
        tree = parse(text)
    except (LexerError, ParseError) as exc:
        raise SourceSyntaxError(str(exc), filename, exc.line, exc.column) from exc
    except Exception as exc:
        raise _internal_failure(exc, filename, log) from exc
    _checkpoint(cancel, filename, "after parsing")

    try:
        groups = extract_enum_groups(tree, marker=cfg.invalid_marker, logger=log)
        requests = [_request(tree, group, filename, cfg) for group in groups]
    except Exception as exc:
        raise _internal_failure(exc, filename, log) from exc

    if not requests:
        raise NoEnumsFoundError("no enums found", filename)
    log.debug("extracted %d enum(s) from %s", len(requests), filename)
    return requests


def schema_imports(group: EnumGroup) -> list[str]:
    """Return the sorted import paths the group's field types refer to.

    ``time.Duration`` contributes ``time``; tags without a dot contribute
    nothing.
    """
    paths = {spec.type_tag.rsplit(".", 1)[0] for spec in group.field_schema.fields if "." in spec.type_tag}
    return sorted(paths)


def output_name(type_name: str) -> str:
    """Return the output file stem for a type, e.g. ``status`` -> ``statuses``."""
    base = type_name.rsplit(".", 1)[-1]
    return plural(lower_first(base)).lower()


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _checkpoint(cancel: threading.Event | None, filename: str, stage: str) -> None:
    if cancel is not None and cancel.is_set():
        raise ParseCancelled(f"{filename}: cancelled {stage}")


def _read(source: Source, filename: str) -> str:
    try:
        data = source.content()
    except ParseCancelled:
        raise
    except OSError as exc:
        raise SourceReadError(str(exc), filename) from exc
    except Exception as exc:
        raise SourceReadError(f"{type(exc).__name__}: {exc}", filename) from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceReadError(f"not valid UTF-8: {exc}", filename) from exc


def _internal_failure(exc: Exception, filename: str, log: logging.Logger) -> InternalParserError:
    log.error(
        "internal parser failure",
        extra={
            "version": version.CURRENT,
            "build": version.BUILD,
            "commit": version.COMMIT,
            "file": filename,
        },
    )
    return InternalParserError(f"{type(exc).__name__}: {exc}", filename)


def _request(tree: GoFile, group: EnumGroup, filename: str, configuration: Configuration) -> GenerationRequest:
    return GenerationRequest(
        package=tree.package,
        imports=schema_imports(group),
        enum_group=group,
        version=version.CURRENT,
        source_filename=filename,
        output_filename=output_name(group.type_name),
        configuration=configuration,
    )
