# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Go source writer for generation requests.

Each request becomes one ``<plural>_enums.go`` file next to its source. The
file holds a wrapper struct around the original constant type, a container
exposing every value, parsing from strings and numbers, validity checks,
the serialisation hooks enabled in the configuration and a compile-time
guard against renumbered constants.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from jinja2 import BaseLoader, Environment, StrictUndefined, Template

from goenums.extraction.coercion import go_quote
from goenums.model.enums import EnumGroup, FieldValue, TypeTag, known_type_tag
from goenums.model.request import Configuration, GenerationRequest
from goenums.writer.naming import camel_case, is_plural, lower_first, plural, singular

# ###############
# Public Interface
# ###############

OUTPUT_SUFFIX = "_enums.go"


class WriteError(Exception):
    """Raised when a generated file cannot be produced or stored."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(f"{path}: {message}" if path is not None else message)
        self.path = path


class WriteCancelled(Exception):
    """Raised when cancellation is requested between files."""


@dataclass(frozen=True)
class GoNames:
    """Identifiers used in the generated file for one enum type."""

    type_name: str
    embed_field: str
    wrapper: str
    receiver: str
    container_var: str
    container_type: str
    name_map: str
    names_map: str
    valid_map: str
    number_constraint: str

    @classmethod
    def for_type(cls, type_name: str) -> GoNames:
        base = type_name.rsplit(".", 1)[-1]
        wrapper = camel_case(singular(base) if is_plural(base) else base)
        if wrapper == base:
            wrapper += "Enum"
        container_var = plural(camel_case(base))
        return cls(
            type_name=type_name,
            embed_field=base,
            wrapper=wrapper,
            receiver=wrapper[0].lower(),
            container_var=container_var,
            container_type=lower_first(container_var) + "Container",
            name_map=lower_first(container_var) + "NameMap",
            names_map=lower_first(wrapper) + "Names",
            valid_map="valid" + container_var,
            number_constraint=lower_first(wrapper) + "Number",
        )


def output_path(request: GenerationRequest) -> Path:
    """Return where the generated file for *request* is written.

    Raises:
        WriteError: If the output filename contains whitespace or path separators.
    """
    name = request.output_filename
    if not name or any(ch.isspace() or ch in "/\\" for ch in name):
        raise WriteError(f"output name {name!r} contains invalid characters")
    return Path(request.source_filename).parent / f"{name}{OUTPUT_SUFFIX}"


def go_field_literal(value: FieldValue) -> str:
    """Render a coerced field value as a Go expression."""
    if known_type_tag(value.type_tag) == TypeTag.TIME and isinstance(value.value, datetime):
        return _time_literal(value.value)
    return value.literal


class GoFileWriter:
    """Writes Go enum wrappers for generation requests."""

    def __init__(self, configuration: Configuration | None = None, *, logger: logging.Logger | None = None) -> None:
        self._configuration = configuration or Configuration()
        self._logger = logger or _logger

    def render(self, request: GenerationRequest) -> str:
        """Return the full Go source for *request*."""
        context = _build_context(request)
        sections = [template.render(**context).strip("\n") for template in _section_templates(request)]
        return _tabify("\n\n".join(section for section in sections if section)) + "\n"

    def write(self, requests: list[GenerationRequest], cancel: threading.Event | None = None) -> list[Path]:
        """Render and store every request.

        Returns:
            The paths written, in request order.

        Raises:
            WriteCancelled: If *cancel* is set before a file is written.
            WriteError: If a request is incomplete or its file cannot be stored.
        """
        written: list[Path] = []
        for request in requests:
            if cancel is not None and cancel.is_set():
                raise WriteCancelled(request.source_filename)
            if not request.is_valid():
                raise WriteError(f"incomplete generation request for {request.source_filename!r}")
            path = output_path(request)
            text = self.render(request)
            if self._configuration.verbose:
                self._logger.debug("generated code for %s:\n%s", request.enum_group.type_name, text)
            try:
                path.write_text(text, encoding="utf-8")
            except OSError as exc:
                raise WriteError(str(exc), path) from exc
            self._logger.info("wrote %s", path, extra={"enum": request.enum_group.type_name})
            written.append(path)
        return written


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)

_NUMBER_TYPES: tuple[str, ...] = (
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
)

_CONSTRAINTS_IMPORT = "golang.org/x/exp/constraints"

_HEADER = r"""
// Code generated by goenums {{ version }}. DO NOT EDIT.
//
// Source: {{ source_filename }}
// Command: {{ command }}

package {{ package }}

import (
{% for path in imports %}
    "{{ path }}"
{% endfor %}
{% if external_imports %}

{% for path in external_imports %}
    "{{ path }}"
{% endfor %}
{% endif %}
)
"""

_WRAPPER = r"""
// {{ n.wrapper }} is a type that represents a single enum value.
// It combines the core information about the enum constant and its defined fields.
type {{ n.wrapper }} struct {
    {{ n.type_name }}
{% for f in fields %}
    {{ f.name }} {{ f.type }}
{% endfor %}
}

// {{ n.container_type }} is the container for all enum values.
// It is private; use the public methods on the {{ n.wrapper }} type.
type {{ n.container_type }} struct {
{% for m in members %}
    {{ m.key }} {{ n.wrapper }}
{% endfor %}
}

// {{ n.container_var }} is the entry point for all {{ n.wrapper }} values.
var {{ n.container_var }} = {{ n.container_type }}{
{% for m in members %}
    {{ m.key }}: {{ n.wrapper }}{
        {{ n.embed_field }}: {{ m.name }},
{% for v in m["values"] %}
        {{ v.name }}: {{ v.literal }},
{% endfor %}
    },
{% endfor %}
}

// invalid{{ n.wrapper }} is the invalid sentinel value for {{ n.wrapper }}.
var invalid{{ n.wrapper }} = {{ n.wrapper }}{}
"""

_ALL = r"""
// allSlice returns a slice of all enum values.
func (c {{ n.container_type }}) allSlice() []{{ n.wrapper }} {
    return []{{ n.wrapper }}{
{% for m in members %}
        {{ n.container_var }}.{{ m.key }},
{% endfor %}
    }
}

{% if legacy %}
// All returns a slice of all enum values.
func (c {{ n.container_type }}) All() []{{ n.wrapper }} {
    return c.allSlice()
}
{% else %}
// All returns an iterator over all enum values.
func (c {{ n.container_type }}) All() iter.Seq[{{ n.wrapper }}] {
    return func(yield func({{ n.wrapper }}) bool) {
        for _, v := range c.allSlice() {
            if !yield(v) {
                return
            }
        }
    }
}
{% endif %}
"""

_PARSE = r"""
// Parse{{ n.wrapper }} parses the input value into an enum value.
// Strings, byte slices and fmt.Stringer values are matched against the aliases;
// numbers are matched against the constant values.
func Parse{{ n.wrapper }}(input any) ({{ n.wrapper }}, error) {
    res := invalid{{ n.wrapper }}
    switch v := input.(type) {
    case {{ n.wrapper }}:
        return v, nil
    case string:
        res = stringTo{{ n.wrapper }}(v)
    case fmt.Stringer:
        res = stringTo{{ n.wrapper }}(v.String())
    case []byte:
        res = stringTo{{ n.wrapper }}(string(v))
{% for number in number_types %}
    case {{ number }}:
        res = numberTo{{ n.wrapper }}(v)
{% endfor %}
    default:
        return res, fmt.Errorf("invalid type %T", input)
    }
{% if failfast %}
    if res == invalid{{ n.wrapper }} {
        return res, fmt.Errorf("invalid value %v", input)
    }
{% endif %}
    return res, nil
}

// {{ n.name_map }} maps every alias to its {{ n.wrapper }} value.
var {{ n.name_map }} = map[string]{{ n.wrapper }}{
{% for alias, key in alias_entries %}
    {{ alias }}: {{ n.container_var }}.{{ key }},
{% endfor %}
}

// stringTo{{ n.wrapper }} converts a string into its {{ n.wrapper }} value.
// It returns invalid{{ n.wrapper }} when the string matches no alias.
func stringTo{{ n.wrapper }}(s string) {{ n.wrapper }} {
    if t, ok := {{ n.name_map }}[s]; ok {
        return t
    }
{% if insensitive %}
    if t, ok := {{ n.name_map }}[strings.ToLower(s)]; ok {
        return t
    }
{% endif %}
    return invalid{{ n.wrapper }}
}
"""

_NUMBER = r"""
{% if constraints %}
type {{ n.number_constraint }} interface {
    ~int | ~int8 | ~int16 | ~int32 | ~int64 | ~uint | ~uint8 | ~uint16 | ~uint32 | ~uint64 | ~uintptr | ~float32 | ~float64
}

{% endif %}
// numberTo{{ n.wrapper }} converts a numeric value to a {{ n.wrapper }}.
// It returns invalid{{ n.wrapper }} when the number is not one of the constant values.
{% if constraints %}
func numberTo{{ n.wrapper }}[T {{ n.number_constraint }}](num T) {{ n.wrapper }} {
{% else %}
func numberTo{{ n.wrapper }}[T constraints.Integer | constraints.Float](num T) {{ n.wrapper }} {
{% endif %}
    f := float64(num)
    if math.Floor(f) != f {
        return invalid{{ n.wrapper }}
    }
    for _, v := range {{ n.container_var }}.allSlice() {
        if float64(v.{{ n.embed_field }}) == f {
            return v
        }
    }
    return invalid{{ n.wrapper }}
}

// Exhaustive{{ n.container_var }} calls f for every enum value.
func Exhaustive{{ n.container_var }}(f func({{ n.wrapper }})) {
    for _, v := range {{ n.container_var }}.allSlice() {
        f(v)
    }
}

// {{ n.valid_map }} records which enum values are valid.
var {{ n.valid_map }} = map[{{ n.wrapper }}]bool{
{% for m in members %}
    {{ n.container_var }}.{{ m.key }}: {{ m.valid }},
{% endfor %}
}

// IsValid reports whether the value is defined and not marked invalid.
func ({{ n.receiver }} {{ n.wrapper }}) IsValid() bool {
    return {{ n.valid_map }}[{{ n.receiver }}]
}
"""

_JSON = r"""
// MarshalJSON implements json.Marshaler for {{ n.wrapper }}.
func ({{ n.receiver }} {{ n.wrapper }}) MarshalJSON() ([]byte, error) {
    return []byte("\"" + {{ n.receiver }}.String() + "\""), nil
}

// UnmarshalJSON implements json.Unmarshaler for {{ n.wrapper }}.
func ({{ n.receiver }} *{{ n.wrapper }}) UnmarshalJSON(b []byte) error {
    parsed, err := Parse{{ n.wrapper }}(bytes.Trim(b, "\""))
    if err != nil {
        return err
    }
    *{{ n.receiver }} = parsed
    return nil
}
"""

_TEXT = r"""
// MarshalText implements encoding.TextMarshaler for {{ n.wrapper }}.
func ({{ n.receiver }} {{ n.wrapper }}) MarshalText() ([]byte, error) {
    return []byte({{ n.receiver }}.String()), nil
}

// UnmarshalText implements encoding.TextUnmarshaler for {{ n.wrapper }}.
func ({{ n.receiver }} *{{ n.wrapper }}) UnmarshalText(b []byte) error {
    parsed, err := Parse{{ n.wrapper }}(b)
    if err != nil {
        return err
    }
    *{{ n.receiver }} = parsed
    return nil
}
"""

_SQL = r"""
// Scan implements sql.Scanner for {{ n.wrapper }}.
func ({{ n.receiver }} *{{ n.wrapper }}) Scan(value any) error {
    parsed, err := Parse{{ n.wrapper }}(value)
    if err != nil {
        return err
    }
    *{{ n.receiver }} = parsed
    return nil
}

// Value implements driver.Valuer for {{ n.wrapper }}.
func ({{ n.receiver }} {{ n.wrapper }}) Value() (driver.Value, error) {
    return {{ n.receiver }}.String(), nil
}
"""

_BINARY = r"""
// MarshalBinary implements encoding.BinaryMarshaler for {{ n.wrapper }}.
func ({{ n.receiver }} {{ n.wrapper }}) MarshalBinary() ([]byte, error) {
    return []byte({{ n.receiver }}.String()), nil
}

// UnmarshalBinary implements encoding.BinaryUnmarshaler for {{ n.wrapper }}.
func ({{ n.receiver }} *{{ n.wrapper }}) UnmarshalBinary(b []byte) error {
    parsed, err := Parse{{ n.wrapper }}(b)
    if err != nil {
        return err
    }
    *{{ n.receiver }} = parsed
    return nil
}
"""

_YAML = r"""
// MarshalYAML implements yaml.Marshaler for {{ n.wrapper }}.
func ({{ n.receiver }} {{ n.wrapper }}) MarshalYAML() (any, error) {
    return {{ n.receiver }}.String(), nil
}

// UnmarshalYAML implements the yaml unmarshaler callback interface for {{ n.wrapper }}.
func ({{ n.receiver }} *{{ n.wrapper }}) UnmarshalYAML(unmarshal func(any) error) error {
    var s string
    if err := unmarshal(&s); err != nil {
        return err
    }
    parsed, err := Parse{{ n.wrapper }}(s)
    if err != nil {
        return err
    }
    *{{ n.receiver }} = parsed
    return nil
}
"""

_STRING = r"""
// {{ n.names_map }} maps every value to its canonical name.
var {{ n.names_map }} = map[{{ n.wrapper }}]string{
{% for m in members %}
    {{ n.container_var }}.{{ m.key }}: {{ m.alias }},
{% endfor %}
}

// String implements fmt.Stringer and returns the canonical name of the value.
func ({{ n.receiver }} {{ n.wrapper }}) String() string {
    if name, ok := {{ n.names_map }}[{{ n.receiver }}]; ok {
        return name
    }
    return fmt.Sprintf("{{ n.type_name }}(%d)", {{ n.receiver }}.{{ n.embed_field }})
}

// An "invalid array index" compiler error means the constant values changed.
// Re-run goenums to regenerate this file.
func _() {
    var x [1]struct{}
{% for m in members %}
    _ = x[{{ m.name }}-({{ m.ordinal }})]
{% endfor %}
}
"""

_ENVIRONMENT = Environment(
    loader=BaseLoader(),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)

_TEMPLATES: dict[str, Template] = {
    name: _ENVIRONMENT.from_string(source)
    for name, source in {
        "header": _HEADER,
        "wrapper": _WRAPPER,
        "all": _ALL,
        "parse": _PARSE,
        "number": _NUMBER,
        "json": _JSON,
        "text": _TEXT,
        "sql": _SQL,
        "binary": _BINARY,
        "yaml": _YAML,
        "string": _STRING,
    }.items()
}


def _section_templates(request: GenerationRequest) -> list[Template]:
    handlers = request.configuration.handlers
    names = ["header", "wrapper", "all", "parse", "number"]
    names.extend(name for name in ("json", "text", "sql", "binary", "yaml") if name in handlers.enabled())
    names.append("string")
    return [_TEMPLATES[name] for name in names]


@dataclass
class _ImportSet:
    standard: set[str] = field(default_factory=set)
    external: set[str] = field(default_factory=set)

    def add(self, path: str) -> None:
        (self.external if "." in path.split("/", 1)[0] else self.standard).add(path)


def _imports(request: GenerationRequest) -> _ImportSet:
    cfg = request.configuration
    enabled = cfg.handlers.enabled()
    imports = _ImportSet()
    for path in ("fmt", "math", *request.imports):
        imports.add(path)
    if not cfg.legacy:
        imports.add("iter")
    if cfg.insensitive:
        imports.add("strings")
    if "json" in enabled:
        imports.add("bytes")
    if "sql" in enabled:
        imports.add("database/sql/driver")
    if not cfg.constraints:
        imports.add(_CONSTRAINTS_IMPORT)
    return imports


def _alias_entries(group: EnumGroup, insensitive: bool) -> list[tuple[str, str]]:
    """Return ``(quoted alias, member key)`` pairs; the first use of an alias wins."""
    seen: set[str] = set()
    entries: list[tuple[str, str]] = []
    for member in group.members:
        aliases = list(member.aliases or [member.name])
        if insensitive:
            aliases.extend(alias.lower() for alias in list(aliases))
        for alias in aliases:
            if alias in seen:
                continue
            seen.add(alias)
            entries.append((go_quote(alias), member.name.upper()))
    return entries


def _build_context(request: GenerationRequest) -> dict[str, object]:
    group = request.enum_group
    cfg = request.configuration
    imports = _imports(request)
    members = [
        {
            "name": member.name,
            "key": member.name.upper(),
            "ordinal": member.ordinal,
            "valid": "true" if member.valid else "false",
            "alias": go_quote(member.alias),
            "values": [{"name": value.name, "literal": go_field_literal(value)} for value in member.field_values],
        }
        for member in group.members
    ]
    return {
        "version": request.version,
        "source_filename": request.source_filename,
        "command": request.command(),
        "package": request.package,
        "imports": sorted(imports.standard),
        "external_imports": sorted(imports.external),
        "n": GoNames.for_type(group.type_name),
        "fields": [{"name": spec.name, "type": spec.type_tag} for spec in group.field_schema.fields],
        "members": members,
        "alias_entries": _alias_entries(group, cfg.insensitive),
        "number_types": _NUMBER_TYPES,
        "legacy": cfg.legacy,
        "failfast": cfg.failfast,
        "insensitive": cfg.insensitive,
        "constraints": cfg.constraints,
    }


def _time_literal(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        zone = "time.UTC"
    else:
        zone = f'time.FixedZone("", {int(offset.total_seconds())})'
    return (
        f"time.Date({moment.year}, time.Month({moment.month}), {moment.day}, "
        f"{moment.hour}, {moment.minute}, {moment.second}, {moment.microsecond * 1000}, {zone})"
    )


def _tabify(text: str) -> str:
    """Replace each leading four-space indent step with a tab, as gofmt does."""
    lines = []
    for line in text.split("\n"):
        stripped = line.lstrip(" ")
        depth, rest = divmod(len(line) - len(stripped), 4)
        lines.append("\t" * depth + " " * rest + stripped if stripped else "")
    return "\n".join(lines)
