# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the goenums semantic model."""

import pydantic
import pytest

from goenums.model import (
    HANDLER_NAMES,
    Configuration,
    EnumGroup,
    EnumMember,
    FieldSchema,
    FieldSpec,
    GenerationRequest,
    Handlers,
    SchemaStyle,
    TypeTag,
    known_type_tag,
    normalize_type_tag,
)

# ###############
# Test Helpers
# ###############


def _request(**overrides: object) -> GenerationRequest:
    values: dict[str, object] = {
        "package": "validation",
        "enum_group": EnumGroup(type_name="status", members=[EnumMember(name="active", ordinal=0)]),
        "version": "v0.3.6",
        "source_filename": "status.go",
        "output_filename": "statuses",
    }
    values.update(overrides)
    return GenerationRequest(**values)


# ###############
# Type Tags
# ###############


class TestTypeTags:
    def test_byte_and_rune_aliases(self) -> None:
        assert normalize_type_tag("byte") == "uint8"
        assert normalize_type_tag("rune") == "int32"

    def test_unknown_tag_is_kept(self) -> None:
        assert normalize_type_tag(" Money ") == "Money"
        assert known_type_tag("Money") is None

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("int", TypeTag.INT),
            ("uint64", TypeTag.UINT64),
            ("float32", TypeTag.FLOAT32),
            ("time.Duration", TypeTag.DURATION),
            ("time.Time", TypeTag.TIME),
            ("byte", TypeTag.UINT8),
        ],
    )
    def test_known_tags(self, tag: str, expected: TypeTag) -> None:
        assert known_type_tag(tag) == expected


# ###############
# Field Schema
# ###############


class TestFieldSchema:
    def test_default_is_empty(self) -> None:
        schema = FieldSchema()
        assert schema.is_empty
        assert schema.style == SchemaStyle.SPACE

    @pytest.mark.parametrize(
        ("style", "opener", "closer"),
        [
            (SchemaStyle.SPACE, " ", " "),
            (SchemaStyle.BRACKET, "[", "]"),
            (SchemaStyle.PARENTHESIS, "(", ")"),
        ],
    )
    def test_delimiters(self, style: SchemaStyle, opener: str, closer: str) -> None:
        schema = FieldSchema(fields=[FieldSpec(name="Gravity", type_tag="float64")], style=style)
        assert schema.opener == opener
        assert schema.closer == closer
        assert not schema.is_empty


# ###############
# Members and Groups
# ###############


class TestEnumMember:
    def test_alias_defaults_to_name(self) -> None:
        assert EnumMember(name="active", ordinal=1).alias == "active"

    def test_first_alias_is_canonical(self) -> None:
        member = EnumMember(name="active", ordinal=1, aliases=["Active", "ON"])
        assert member.alias == "Active"

    def test_members_are_frozen(self) -> None:
        member = EnumMember(name="active", ordinal=1)
        with pytest.raises(pydantic.ValidationError):
            member.ordinal = 2  # type: ignore[misc]


class TestEnumGroup:
    def test_defaults(self) -> None:
        group = EnumGroup(type_name="status")
        assert group.start_index == 0
        assert group.field_schema.is_empty
        assert group.members == []
        assert group.comment == ""


# ###############
# Handlers and Configuration
# ###############


class TestHandlers:
    def test_all_enabled_by_default(self) -> None:
        assert Handlers().enabled() == list(HANDLER_NAMES)

    def test_only_selected(self) -> None:
        handlers = Handlers.only(["sql", "json"])
        assert handlers.enabled() == ["json", "sql"]
        assert handlers.json_

    def test_only_none(self) -> None:
        assert Handlers.only([]).enabled() == []

    def test_unknown_handler(self) -> None:
        with pytest.raises(ValueError, match="unknown handler"):
            Handlers.only(["xml"])

    def test_json_by_field_name(self) -> None:
        assert not Handlers(json_=False).json_


class TestConfiguration:
    def test_defaults(self) -> None:
        cfg = Configuration()
        assert not cfg.failfast
        assert cfg.output_format == "go"
        assert cfg.invalid_marker == "invalid"
        assert cfg.handlers.enabled() == list(HANDLER_NAMES)


# ###############
# Generation Request
# ###############


class TestGenerationRequest:
    def test_is_valid(self) -> None:
        assert _request().is_valid()

    def test_missing_package_is_invalid(self) -> None:
        assert not _request(package="").is_valid()

    def test_missing_version_is_invalid(self) -> None:
        assert not _request(version="").is_valid()

    def test_default_command(self) -> None:
        assert _request().command() == "goenums status.go"

    def test_command_with_flags(self) -> None:
        cfg = Configuration(failfast=True, legacy=True, insensitive=True, constraints=True, verbose=True)
        assert _request(configuration=cfg).command() == "goenums -f -l -i -c -vv status.go"

    def test_command_with_output_and_handlers(self) -> None:
        cfg = Configuration(output_format="ts", handlers=Handlers.only(["json"]))
        assert _request(configuration=cfg).command() == "goenums -o ts --handlers json status.go"

    def test_command_without_handlers(self) -> None:
        cfg = Configuration(handlers=Handlers.only([]))
        assert _request(configuration=cfg).command() == "goenums --handlers none status.go"
