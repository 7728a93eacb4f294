# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoding of the metadata authors embed in trailing comments.

A type comment declares a field schema, for example::

    type planet int // Gravity[float64], Moons[int]

A member comment may carry a validity marker, aliases and a field payload::

    unknown planet = iota // invalid
    earth                 // "Earth","Terra" 1.0,1

Nothing in this module raises. Malformed fragments contribute nothing and
decoding continues with whatever could be recovered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from goenums.extraction.coercion import coerce
from goenums.model.enums import FieldSchema, FieldSpec, FieldValue, SchemaStyle, normalize_type_tag

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class MemberAnnotation:
    """What a member's trailing comment says about the member.

    Attributes:
        valid: False when the comment carries the validity marker.
        aliases: Alias strings in order; empty when the comment names none.
        payload: Unquoted field values in order; empty when there is no payload.
    """

    valid: bool = True
    aliases: list[str] = field(default_factory=list)
    payload: list[str] = field(default_factory=list)


def comment_text(raw: str | None) -> str:
    """Strip the comment delimiters from a raw comment token."""
    if not raw:
        return ""
    if raw.startswith("//"):
        return raw[2:]
    if raw.startswith("/*") and raw.endswith("*/"):
        return raw[2:-2]
    return raw


def parse_field_schema(comment: str) -> FieldSchema:
    """Read a field schema from a type comment.

    The comment is split on commas. Each piece is ``Name Type``,
    ``Name[Type]`` or ``Name(Type)``; the first accepted piece fixes the
    style for the whole schema and pieces written in another style are
    skipped, as are pieces lacking a name, a type or a closing delimiter.
    """
    specs: list[FieldSpec] = []
    style: SchemaStyle | None = None
    for piece in comment.split(","):
        parsed = _parse_schema_piece(piece.strip())
        if parsed is None:
            continue
        piece_style, spec = parsed
        if style is None:
            style = piece_style
        elif piece_style != style:
            continue
        specs.append(spec)
    return FieldSchema(fields=specs, style=style or SchemaStyle.SPACE)


def decode_member_comment(comment: str, *, has_schema: bool, marker: str = "invalid") -> MemberAnnotation:
    """Decode a member comment (delimiters already stripped).

    Args:
        comment: The comment text.
        has_schema: Whether the member's type declares any fields. A single
            space-free word is read as payload when it does and as an alias
            list when it does not.
        marker: The validity marker token. Matching is case-sensitive and
            every occurrence is removed before aliases are read.

    Returns:
        The decoded MemberAnnotation.
    """
    valid = True
    text = comment
    if marker and marker in text:
        valid = False
        text = text.replace(marker, "")
    aliases, payload = split_annotation(text.strip(), has_schema=has_schema, marker=marker)
    return MemberAnnotation(valid=valid, aliases=aliases, payload=split_payload(payload))


def split_annotation(text: str, *, has_schema: bool, marker: str = "invalid") -> tuple[list[str], str]:
    """Split trimmed comment text into an alias list and payload text.

    The rules, applied in order:

    * empty text has neither aliases nor payload;
    * text starting with ``"`` opens a quoted alias list. Further aliases
      follow after commas; the list ends at the first whitespace outside
      quotes and everything after it is payload;
    * text without whitespace is payload when the type has fields, otherwise
      a comma-separated alias list. Text that still holds the marker names no
      aliases;
    * otherwise the first whitespace-delimited word is a comma-separated
      alias list and the rest is payload.

    Returns:
        A ``(aliases, payload)`` pair. Aliases are unquoted; the payload is
        returned trimmed but otherwise untouched.
    """
    if not text:
        return [], ""
    if text.startswith('"'):
        return _split_quoted_aliases(text)
    parts = text.split(None, 1)
    if len(parts) == 1:
        if has_schema:
            return [], text
        if marker and marker in text:
            return [], ""
        return _alias_list(text), ""
    return _alias_list(parts[0]), parts[1].strip()


def split_payload(text: str) -> list[str]:
    """Split payload text on commas outside double quotes.

    Each value is trimmed and unquoted. Empty text yields no values.
    """
    if not text.strip():
        return []
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaped = False
    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\" and in_quotes:
            current.append(ch)
            escaped = True
        elif ch == '"':
            current.append(ch)
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            values.append(_unquote("".join(current).strip()))
            current = []
        else:
            current.append(ch)
    values.append(_unquote("".join(current).strip()))
    return values


def bind_field_values(
    payload: list[str],
    schema: FieldSchema,
    *,
    member: str = "",
    logger: logging.Logger | None = None,
) -> list[FieldValue]:
    """Zip payload values with the schema and coerce each one.

    A payload shorter than the schema is malformed: a warning is logged and
    no values are produced for the member. Values beyond the schema are
    ignored.
    """
    log = logger or _logger
    if not payload or schema.is_empty:
        return []
    if len(payload) < len(schema.fields):
        log.warning(
            "member %s supplies %d of %d field values, ignoring payload",
            member,
            len(payload),
            len(schema.fields),
        )
        return []
    if len(payload) > len(schema.fields):
        log.debug("member %s supplies %d extra field values", member, len(payload) - len(schema.fields))
    values: list[FieldValue] = []
    for raw, spec in zip(payload, schema.fields):
        value, literal = coerce(raw, spec.type_tag)
        values.append(FieldValue(name=spec.name, type_tag=spec.type_tag, raw=raw, value=value, literal=literal))
    return values


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)

_STYLES: tuple[tuple[str, SchemaStyle, str], ...] = (
    ("[", SchemaStyle.BRACKET, "]"),
    ("(", SchemaStyle.PARENTHESIS, ")"),
)


def _parse_schema_piece(piece: str) -> tuple[SchemaStyle, FieldSpec] | None:
    if not piece:
        return None
    for opener, style, closer in _STYLES:
        if opener not in piece:
            continue
        name_end = piece.index(opener)
        type_start = name_end + 1
        type_end = piece.find(closer, type_start)
        if type_end == -1:
            return None
        name = piece[:name_end].strip()
        tag = piece[type_start:type_end].strip()
        if not name or not tag:
            return None
        return style, FieldSpec(name=name, type_tag=normalize_type_tag(tag))
    words = piece.split(None, 1)
    if len(words) != 2:
        return None
    name, tag = words[0], words[1].strip()
    # A space-style tag is a single word; anything longer is prose.
    if len(tag.split()) != 1:
        return None
    return SchemaStyle.SPACE, FieldSpec(name=name, type_tag=normalize_type_tag(tag))


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1].replace('\\"', '"')
    return text


def _alias_list(text: str) -> list[str]:
    aliases = [_unquote(alias.strip()) for alias in text.split(",")]
    return [alias for alias in aliases if alias]


def _split_quoted_aliases(text: str) -> tuple[list[str], str]:
    """Read ``"A","B",C rest`` into ``(["A", "B", "C"], "rest")``."""
    aliases: list[str] = []
    pos = 0
    length = len(text)
    while pos < length:
        if text[pos] == '"':
            end = text.find('"', pos + 1)
            if end == -1:
                aliases.append(text[pos + 1 :])
                return [alias for alias in aliases if alias], ""
            aliases.append(text[pos + 1 : end])
            pos = end + 1
        else:
            start = pos
            while pos < length and text[pos] != "," and not text[pos].isspace():
                pos += 1
            aliases.append(text[start:pos])
        if pos < length and text[pos] == ",":
            pos += 1
            while pos < length and text[pos].isspace():
                pos += 1
            continue
        break
    return [alias for alias in aliases if alias], text[pos:].strip()
