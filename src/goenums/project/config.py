# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML project configuration supplying defaults for the goenums options.

A ``.goenums.yaml`` file looks like::

    failfast: true
    insensitive: true
    invalid-marker: invalid
    handlers: [json, sql]

Every key is optional. Command-line flags switch options on in addition to
what the file sets.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from goenums.model.request import Configuration, Handlers

# ###############
# Public Interface
# ###############

CONFIG_FILENAME = ".goenums.yaml"

BOOLEAN_KEYS: tuple[str, ...] = ("failfast", "legacy", "insensitive", "constraints", "verbose")


class ProjectConfigError(Exception):
    """Raised when a project configuration file is invalid or cannot be loaded."""


def find_project_config(start: Path) -> Path | None:
    """Return the nearest ``.goenums.yaml`` in *start* or one of its parents."""
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        path = candidate / CONFIG_FILENAME
        if path.is_file():
            return path
    return None


def load_project_config(path: Path) -> Configuration:
    """Load and validate a project configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        The Configuration the file describes; unset keys keep their defaults.

    Raises:
        ProjectConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Project config file not found: {path}") from None
    except OSError as exc:
        raise ProjectConfigError(f"Cannot read project config file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


def merge_flags(base: Configuration, **flags: bool | str | Handlers | None) -> Configuration:
    """Overlay command-line values on a configuration.

    Boolean flags only switch options on. Other values replace the base
    value unless they are None.
    """
    updates: dict[str, object] = {}
    for key, value in flags.items():
        if value is None or value is False:
            continue
        updates[key] = value
    return base.model_copy(update=updates)


# ################
# Implementation
# ################


def _parse_project_config(text: str, source_label: str = "<string>") -> Configuration:
    """Parse project config YAML text into a Configuration.

    Raises:
        ProjectConfigError: If the YAML is invalid or a value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return Configuration()
    if not isinstance(data, dict):
        raise ProjectConfigError(f"{source_label}: project config must be a YAML mapping")

    known = {*BOOLEAN_KEYS, "output-format", "invalid-marker", "handlers"}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ProjectConfigError(f"{source_label}: unknown field(s) {', '.join(unknown)}")

    values: dict[str, object] = {}
    for key in BOOLEAN_KEYS:
        if key in data:
            values[key] = _require_bool(data, key, source_label)
    if "output-format" in data:
        values["output_format"] = _require_string(data, "output-format", source_label)
    if "invalid-marker" in data:
        values["invalid_marker"] = _require_string(data, "invalid-marker", source_label)
    if "handlers" in data:
        values["handlers"] = _parse_handlers(data["handlers"], source_label)

    try:
        return Configuration(**values)
    except ValidationError as exc:
        raise ProjectConfigError(f"{source_label}: {exc}") from exc


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping[key]
    if not isinstance(value, bool):
        raise ProjectConfigError(f"{source_label}: '{key}' must be true or false")
    return value


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise ProjectConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value


def _parse_handlers(raw: object, source_label: str) -> Handlers:
    if not isinstance(raw, list) or not all(isinstance(name, str) for name in raw):
        raise ProjectConfigError(f"{source_label}: 'handlers' must be a list of names")
    try:
        return Handlers.only(raw)
    except ValueError as exc:
        raise ProjectConfigError(f"{source_label}: {exc}") from exc
