# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lenient conversion of comment payload text into typed Go field values.

Every conversion falls back to the type's zero value when the text cannot be
read. An unparsable payload never fails the enum it belongs to.
"""

from __future__ import annotations

import json
import math
import re
import struct
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from goenums.model.enums import FieldScalar, TypeTag, known_type_tag

# ###############
# Public Interface
# ###############

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def coerce(raw: str, type_tag: str) -> tuple[FieldScalar, str]:
    """Convert *raw* to the Python value and Go literal for *type_tag*.

    Args:
        raw: The trimmed, unquoted payload text.
        type_tag: A schema type tag such as ``int32`` or ``time.Duration``.

    Returns:
        A ``(value, literal)`` pair. Unknown tags yield ``(raw, raw)``.
    """
    tag = known_type_tag(type_tag)
    if tag is None:
        return raw, raw
    if tag in _INT_RANGES:
        value = parse_int(raw, tag)
        return value, str(value)
    if tag in (TypeTag.FLOAT32, TypeTag.FLOAT64):
        number = parse_float(raw, tag)
        return number, _float_literal(number)
    if tag == TypeTag.BOOL:
        flag = raw == "true"
        return flag, "true" if flag else "false"
    if tag == TypeTag.STRING:
        return raw, go_quote(raw)
    if tag == TypeTag.DURATION:
        nanos = parse_duration(raw)
        return timedelta(microseconds=nanos / 1000), duration_literal(nanos)
    moment = parse_time(raw)
    return moment, format_rfc3339(moment)


def parse_int(raw: str, tag: TypeTag) -> int:
    """Parse a base-10 integer within the range of *tag*, or return 0."""
    low, high = _INT_RANGES[tag]
    pattern = _UNSIGNED_RE if low == 0 else _SIGNED_RE
    if not pattern.fullmatch(raw):
        return 0
    value = int(raw)
    if value < low or value > high:
        return 0
    return value


def parse_float(raw: str, tag: TypeTag = TypeTag.FLOAT64) -> float:
    """Parse a decimal floating-point number, or return 0.0.

    Values that overflow the width of *tag* also yield 0.0. float32 values are
    rounded to single precision.
    """
    if not _FLOAT_RE.fullmatch(raw):
        return 0.0
    value = float(raw)
    if math.isinf(value) or math.isnan(value):
        return 0.0
    if tag == TypeTag.FLOAT32:
        if abs(value) > _FLOAT32_MAX:
            return 0.0
        value = struct.unpack("f", struct.pack("f", value))[0]
    return value


def go_quote(text: str) -> str:
    """Render *text* as a double-quoted Go string literal."""
    return json.dumps(text, ensure_ascii=False)


def parse_duration(raw: str) -> int:
    """Parse a Go duration string such as ``1h30m`` into nanoseconds.

    Returns 0 for text Go would reject, and for values outside int64.
    """
    if raw == "0":
        return 0
    match = _DURATION_RE.fullmatch(raw)
    if not match:
        return 0
    sign, body = match.group(1), match.group(2)
    total = Decimal(0)
    for number, unit in _DURATION_PART_RE.findall(body):
        if not any(ch.isdigit() for ch in number):
            return 0
        try:
            total += Decimal(number) * _DURATION_UNITS[unit]
        except InvalidOperation:
            return 0
    nanos = int(total)
    if sign == "-":
        nanos = -nanos
    if nanos < -(2**63) or nanos > 2**63 - 1:
        return 0
    return nanos


def duration_literal(nanos: int) -> str:
    """Render a duration as a Go expression using the largest exact unit."""
    for unit, name in _DURATION_RENDER_UNITS:
        if nanos % unit == 0:
            return f"{name} * {nanos // unit}"
    return f"time.Nanosecond * {nanos}"


def parse_time(raw: str) -> datetime:
    """Parse a timestamp using the supported layouts in order.

    Layouts: RFC3339, date only, RFC3339 with nanoseconds, RFC1123,
    RFC1123 with numeric zone, RFC822, RFC822 with numeric zone and RFC850.
    Returns ZERO_TIME when no layout matches.
    """
    for parser in _TIME_PARSERS:
        moment = parser(raw)
        if moment is not None:
            return moment
    return ZERO_TIME


def format_rfc3339(moment: datetime) -> str:
    """Format a timestamp as RFC3339 without fractional seconds."""
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


# ################
# Implementation
# ################

_INT_RANGES: dict[TypeTag, tuple[int, int]] = {
    TypeTag.INT: (-(2**63), 2**63 - 1),
    TypeTag.INT8: (-(2**7), 2**7 - 1),
    TypeTag.INT16: (-(2**15), 2**15 - 1),
    TypeTag.INT32: (-(2**31), 2**31 - 1),
    TypeTag.INT64: (-(2**63), 2**63 - 1),
    TypeTag.UINT: (0, 2**64 - 1),
    TypeTag.UINT8: (0, 2**8 - 1),
    TypeTag.UINT16: (0, 2**16 - 1),
    TypeTag.UINT32: (0, 2**32 - 1),
    TypeTag.UINT64: (0, 2**64 - 1),
}

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_FLOAT32_MAX = 3.4028234663852886e38

_DURATION_UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DURATION_PART = r"([0-9]*\.?[0-9]*)(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"([+-]?)((?:{_DURATION_PART})+)")
_DURATION_PART_RE = re.compile(_DURATION_PART)

_DURATION_RENDER_UNITS: tuple[tuple[int, str], ...] = (
    (_DURATION_UNITS["h"], "time.Hour"),
    (_DURATION_UNITS["m"], "time.Minute"),
    (_DURATION_UNITS["s"], "time.Second"),
)

_RFC3339_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})(\.[0-9]+)?(Z|[+-][0-9]{2}:[0-9]{2})"
)
_DATE_ONLY_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_ZONE_ABBREVIATION_RE = re.compile(r"(.*) ([A-Z]{3,5})")


def _float_literal(value: float) -> str:
    text = repr(value)
    return "0.0" if text == "-0.0" else text


def _parse_rfc3339(raw: str) -> datetime | None:
    match = _RFC3339_RE.fullmatch(raw)
    if not match:
        return None
    year, month, day, hour, minute, second = (int(match.group(i)) for i in range(1, 7))
    fraction = match.group(7)
    micros = int((fraction[1:] + "000000")[:6]) if fraction else 0
    zone = match.group(8)
    if zone == "Z":
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone(-offset if zone[0] == "-" else offset)
    try:
        return datetime(year, month, day, hour, minute, second, micros, tzinfo=tz)
    except ValueError:
        return None


def _parse_date_only(raw: str) -> datetime | None:
    match = _DATE_ONLY_RE.fullmatch(raw)
    if not match:
        return None
    try:
        return datetime(int(match.group(1)), int(match.group(2)), int(match.group(3)), tzinfo=timezone.utc)
    except ValueError:
        return None


def _strptime(raw: str, layout: str) -> datetime | None:
    try:
        moment = datetime.strptime(raw, layout)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _layout_with_abbreviation(layout: str) -> Callable[[str], datetime | None]:
    """Build a parser for a layout ending in a zone abbreviation such as ``MST``.

    Abbreviations carry no offset, so the time is taken as UTC.
    """

    def parse(raw: str) -> datetime | None:
        match = _ZONE_ABBREVIATION_RE.fullmatch(raw)
        if not match:
            return None
        return _strptime(match.group(1), layout)

    return parse


def _layout(layout: str) -> Callable[[str], datetime | None]:
    def parse(raw: str) -> datetime | None:
        return _strptime(raw, layout)

    return parse


# RFC3339 already accepts fractional seconds, which covers RFC3339Nano.
_TIME_PARSERS: tuple[Callable[[str], datetime | None], ...] = (
    _parse_rfc3339,
    _parse_date_only,
    _layout_with_abbreviation("%a, %d %b %Y %H:%M:%S"),
    _layout("%a, %d %b %Y %H:%M:%S %z"),
    _layout_with_abbreviation("%d %b %y %H:%M"),
    _layout("%d %b %y %H:%M %z"),
    _layout_with_abbreviation("%A, %d-%b-%y %H:%M:%S"),
)
