# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the YAML project configuration."""

from pathlib import Path

import pytest

from goenums.model.request import Configuration, Handlers
from goenums.project import (
    CONFIG_FILENAME,
    ProjectConfigError,
    find_project_config,
    load_project_config,
    merge_flags,
)

# ###############
# Test Helpers
# ###############


def _write_config(directory: Path, text: str) -> Path:
    path = directory / CONFIG_FILENAME
    path.write_text(text, encoding="utf-8")
    return path


# ###############
# Discovery
# ###############


class TestFindProjectConfig:
    def test_in_start_directory(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "failfast: true\n")
        assert find_project_config(tmp_path) == path

    def test_in_parent_directory(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_config(nested) == path

    def test_nearest_wins(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "")
        nested = tmp_path / "pkg"
        nested.mkdir()
        inner = _write_config(nested, "")
        assert find_project_config(nested) == inner

    def test_start_may_be_a_file(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "")
        source = tmp_path / "status.go"
        source.write_text("package a\n", encoding="utf-8")
        assert find_project_config(source) == path

    def test_directory_named_like_config_is_ignored(self, tmp_path: Path) -> None:
        nested = tmp_path / "pkg"
        (nested / CONFIG_FILENAME).mkdir(parents=True)
        assert find_project_config(nested) != nested / CONFIG_FILENAME


# ###############
# Loading
# ###############


class TestLoadProjectConfig:
    def test_full_config(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            "failfast: true\n"
            "legacy: false\n"
            "insensitive: true\n"
            "constraints: true\n"
            "verbose: false\n"
            "output-format: go\n"
            "invalid-marker: skip\n"
            "handlers: [json, sql]\n",
        )
        cfg = load_project_config(path)
        assert cfg.failfast is True
        assert cfg.legacy is False
        assert cfg.insensitive is True
        assert cfg.constraints is True
        assert cfg.output_format == "go"
        assert cfg.invalid_marker == "skip"
        assert cfg.handlers.enabled() == ["json", "sql"]

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_project_config(_write_config(tmp_path, "")) == Configuration()

    def test_unset_keys_keep_defaults(self, tmp_path: Path) -> None:
        cfg = load_project_config(_write_config(tmp_path, "legacy: true\n"))
        assert cfg.legacy is True
        assert cfg.invalid_marker == "invalid"
        assert cfg.handlers == Handlers()

    def test_empty_handler_list(self, tmp_path: Path) -> None:
        cfg = load_project_config(_write_config(tmp_path, "handlers: []\n"))
        assert cfg.handlers.enabled() == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="not found"):
            load_project_config(tmp_path / CONFIG_FILENAME)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).mkdir()
        with pytest.raises(ProjectConfigError, match="Cannot read"):
            load_project_config(tmp_path / CONFIG_FILENAME)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="Invalid YAML"):
            load_project_config(_write_config(tmp_path, "failfast: [unclosed\n"))

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="must be a YAML mapping"):
            load_project_config(_write_config(tmp_path, "- failfast\n"))

    def test_unknown_keys(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="unknown field\\(s\\) colour, jobs"):
            load_project_config(_write_config(tmp_path, "jobs: 2\ncolour: red\n"))

    @pytest.mark.parametrize("value", ["yes-please", "1", '"true"'])
    def test_boolean_type_is_checked(self, tmp_path: Path, value: str) -> None:
        with pytest.raises(ProjectConfigError, match="'failfast' must be true or false"):
            load_project_config(_write_config(tmp_path, f"failfast: {value}\n"))

    @pytest.mark.parametrize("value", ['""', "3", "[a]"])
    def test_string_type_is_checked(self, tmp_path: Path, value: str) -> None:
        with pytest.raises(ProjectConfigError, match="'invalid-marker' must be a non-empty string"):
            load_project_config(_write_config(tmp_path, f"invalid-marker: {value}\n"))

    def test_handlers_must_be_a_list(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="'handlers' must be a list of names"):
            load_project_config(_write_config(tmp_path, "handlers: json\n"))

    def test_unknown_handler(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectConfigError, match="unknown handler\\(s\\): xml"):
            load_project_config(_write_config(tmp_path, "handlers: [json, xml]\n"))

    def test_error_names_the_file(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "legacy: 3\n")
        with pytest.raises(ProjectConfigError, match=str(tmp_path.name)):
            load_project_config(path)


# ###############
# Flag Merging
# ###############


class TestMergeFlags:
    def test_flags_switch_options_on(self) -> None:
        cfg = merge_flags(Configuration(), failfast=True, insensitive=True)
        assert cfg.failfast is True
        assert cfg.insensitive is True
        assert cfg.legacy is False

    def test_unset_flags_keep_file_values(self) -> None:
        base = Configuration(failfast=True, output_format="go")
        cfg = merge_flags(base, failfast=False, output_format=None, handlers=None)
        assert cfg == base

    def test_values_replace_file_values(self) -> None:
        base = Configuration(handlers=Handlers.only(["json"]))
        cfg = merge_flags(base, handlers=Handlers.only(["sql"]), output_format="go")
        assert cfg.handlers.enabled() == ["sql"]

    def test_base_is_not_modified(self) -> None:
        base = Configuration()
        merge_flags(base, legacy=True)
        assert base.legacy is False
