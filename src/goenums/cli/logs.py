# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Console logging for the goenums command line."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# ###############
# Public Interface
# ###############

LOGGER_NAME = "goenums"


class CompactFormatter(logging.Formatter):
    """Formats a record as its level, message and ``key: value`` extras."""

    def format(self, record: logging.LogRecord) -> str:
        text = f"{record.levelname.lower()}: {record.getMessage()}"
        extras = [f"{key}: {value}" for key, value in record.__dict__.items() if key not in _RESERVED]
        if extras:
            text += " (" + ", ".join(extras) + ")"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


def configure_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Attach a compact console handler to the goenums logger.

    Calling this again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _MARKER, False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(CompactFormatter())
    setattr(handler, _MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


# ################
# Implementation
# ################

_MARKER = "_goenums_console"

_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}
