# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run configuration and the generation request handed to writers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from goenums.model.enums import EnumGroup

# ###############
# Public Interface
# ###############

HANDLER_NAMES: tuple[str, ...] = ("json", "text", "yaml", "sql", "binary")


class Handlers(BaseModel):
    """Which serialisation hooks the writer emits for each enum."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    json_: bool = _Field(default=True, alias="json")
    text: bool = True
    yaml: bool = True
    sql: bool = True
    binary: bool = True

    @classmethod
    def only(cls, names: list[str]) -> Handlers:
        """Build handlers with exactly the named hooks enabled.

        Raises:
            ValueError: If a name is not one of HANDLER_NAMES.
        """
        unknown = [name for name in names if name not in HANDLER_NAMES]
        if unknown:
            raise ValueError(f"unknown handler(s): {', '.join(unknown)}")
        return cls(**{name: name in names for name in HANDLER_NAMES})

    def enabled(self) -> list[str]:
        """Return the enabled hook names in canonical order."""
        flags = {
            "json": self.json_,
            "text": self.text,
            "yaml": self.yaml,
            "sql": self.sql,
            "binary": self.binary,
        }
        return [name for name in HANDLER_NAMES if flags[name]]


class Configuration(BaseModel):
    """Options threaded from the command line to the writer.

    Only ``invalid_marker`` affects extraction. The remaining options shape
    the generated code.
    """

    model_config = ConfigDict(frozen=True)

    failfast: bool = False
    legacy: bool = False
    insensitive: bool = False
    constraints: bool = False
    verbose: bool = False
    output_format: str = "go"
    handlers: Handlers = _Field(default_factory=Handlers)
    invalid_marker: str = "invalid"


class GenerationRequest(BaseModel):
    """Everything a writer needs to emit one enum wrapper."""

    model_config = ConfigDict(frozen=True)

    package: str
    imports: list[str] = _Field(default_factory=list)
    enum_group: EnumGroup
    version: str
    source_filename: str
    output_filename: str
    configuration: Configuration = _Field(default_factory=Configuration)

    def is_valid(self) -> bool:
        return bool(self.package and self.enum_group.type_name and self.version and self.source_filename)

    def command(self) -> str:
        """Return the command line that reproduces this request."""
        cfg = self.configuration
        parts = ["goenums"]
        if cfg.failfast:
            parts.append("-f")
        if cfg.legacy:
            parts.append("-l")
        if cfg.insensitive:
            parts.append("-i")
        if cfg.constraints:
            parts.append("-c")
        if cfg.verbose:
            parts.append("-vv")
        if cfg.output_format and cfg.output_format != "go":
            parts.extend(["-o", cfg.output_format])
        enabled = cfg.handlers.enabled()
        if len(enabled) != len(HANDLER_NAMES):
            parts.extend(["--handlers", ",".join(enabled) or "none"])
        if self.source_filename:
            parts.append(self.source_filename)
        return " ".join(parts)
