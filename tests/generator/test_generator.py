# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for per-file generation and batch runs."""

import logging
import threading
from pathlib import Path

import pytest

from goenums.extraction import pipeline
from goenums.generator import FileStatus, generate, generate_all
from goenums.model.request import Configuration
from goenums.writer.gofile import GoFileWriter

# ###############
# Test Helpers
# ###############

_STATUS = """package validation

type status int

const (
\tunknown status = iota // invalid
\tfailed
\tpassed
)
"""

_TWO_TYPES = """package shapes

type color int
type shape int

const (
\tred color = iota
\tgreen
)

const (
\tcircle shape = iota
\tsquare
)
"""


_DEEPLY_NESTED = "package a\n\nconst deep = " + "(" * 2000 + "1" + ")" * 2000 + "\n"


def _write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


# ###############
# Single Files
# ###############


class TestGenerate:
    def test_writes_generated_file(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "status.go", _STATUS)
        result = generate(source)
        assert result.ok
        assert result.status == FileStatus.OK
        assert result.filename == str(source)
        assert result.enums == ["status"]
        assert result.written == [tmp_path / "statuses_enums.go"]
        assert (tmp_path / "statuses_enums.go").read_text(encoding="utf-8").startswith("// Code generated")

    def test_one_output_per_type(self, tmp_path: Path) -> None:
        result = generate(_write(tmp_path, "shapes.go", _TWO_TYPES))
        assert result.enums == ["color", "shape"]
        assert [path.name for path in result.written] == ["colors_enums.go", "shapes_enums.go"]

    def test_configuration_shapes_output(self, tmp_path: Path) -> None:
        generate(_write(tmp_path, "status.go", _STATUS), Configuration(failfast=True))
        assert "if res == invalidStatus {" in (tmp_path / "statuses_enums.go").read_text(encoding="utf-8")

    def test_accepts_string_paths(self, tmp_path: Path) -> None:
        assert generate(str(_write(tmp_path, "status.go", _STATUS))).ok

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        result = generate(_write(tmp_path, "status.txt", _STATUS))
        assert result.status == FileStatus.UNSUPPORTED
        assert ".go" in result.message
        assert not result.ok

    def test_unsupported_output_format(self, tmp_path: Path) -> None:
        result = generate(_write(tmp_path, "status.go", _STATUS), Configuration(output_format="json"))
        assert result.status == FileStatus.UNSUPPORTED
        assert "json" in result.message
        assert not (tmp_path / "statuses_enums.go").exists()

    def test_missing_file(self, tmp_path: Path) -> None:
        result = generate(tmp_path / "missing.go")
        assert result.status == FileStatus.READ_ERROR

    def test_syntax_error(self, tmp_path: Path) -> None:
        result = generate(_write(tmp_path, "bad.go", "package a\nconst (\n\ta t = \n)\n"))
        assert result.status == FileStatus.SYNTAX_ERROR
        assert "bad.go" in result.message

    def test_no_enums(self, tmp_path: Path) -> None:
        result = generate(_write(tmp_path, "plain.go", "package a\nconst limit = 10\n"))
        assert result.status == FileStatus.NO_ENUMS
        assert result.written == []

    def test_internal_error(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def explode(*args: object, **kwargs: object) -> list[object]:
            raise KeyError("member")

        monkeypatch.setattr(pipeline, "extract_enum_groups", explode)
        result = generate(_write(tmp_path, "status.go", _STATUS))
        assert result.status == FileStatus.INTERNAL_ERROR
        assert "KeyError" in result.message

    def test_parser_fault(self, tmp_path: Path) -> None:
        result = generate(_write(tmp_path, "deep.go", _DEEPLY_NESTED))
        assert result.status == FileStatus.INTERNAL_ERROR
        assert "RecursionError" in result.message
        assert result.written == []

    def test_render_fault(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def explode(self: GoFileWriter, request: object) -> str:
            raise RuntimeError("template broke")

        monkeypatch.setattr(GoFileWriter, "render", explode)
        result = generate(_write(tmp_path, "status.go", _STATUS))
        assert result.status == FileStatus.INTERNAL_ERROR
        assert result.message == "RuntimeError: template broke"
        assert result.enums == ["status"]
        assert not (tmp_path / "statuses_enums.go").exists()

    def test_write_error(self, tmp_path: Path) -> None:
        (tmp_path / "statuses_enums.go").mkdir()
        result = generate(_write(tmp_path, "status.go", _STATUS))
        assert result.status == FileStatus.WRITE_ERROR
        assert result.enums == ["status"]
        assert result.written == []

    def test_cancelled(self, tmp_path: Path) -> None:
        cancel = threading.Event()
        cancel.set()
        result = generate(_write(tmp_path, "status.go", _STATUS), cancel=cancel)
        assert result.status == FileStatus.CANCELLED
        assert not (tmp_path / "statuses_enums.go").exists()

    def test_logs_processing(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("goenums.test.generator")
        with caplog.at_level(logging.INFO, logger="goenums.test.generator"):
            generate(_write(tmp_path, "status.go", _STATUS), logger=logger)
        assert "processing file" in caplog.text
        assert "wrote" in caplog.text


# ###############
# Batches
# ###############


class TestGenerateAll:
    def test_failures_do_not_stop_other_files(self, tmp_path: Path) -> None:
        paths = [
            _write(tmp_path, "plain.go", "package a\n"),
            _write(tmp_path, "status.go", _STATUS),
            tmp_path / "missing.go",
        ]
        results = generate_all(paths)
        assert [result.status for result in results] == [
            FileStatus.NO_ENUMS,
            FileStatus.OK,
            FileStatus.READ_ERROR,
        ]

    @pytest.mark.parametrize("jobs", [1, 2])
    def test_internal_fault_does_not_stop_other_files(self, tmp_path: Path, jobs: int) -> None:
        paths: list[str | Path] = [_write(tmp_path, "deep.go", _DEEPLY_NESTED), _write(tmp_path, "status.go", _STATUS)]
        results = generate_all(paths, jobs=jobs)
        assert [result.status for result in results] == [FileStatus.INTERNAL_ERROR, FileStatus.OK]
        assert (tmp_path / "statuses_enums.go").exists()

    @pytest.mark.parametrize("jobs", [1, 2, 8])
    def test_results_keep_input_order(self, tmp_path: Path, jobs: int) -> None:
        paths: list[str | Path] = []
        for index in range(6):
            directory = tmp_path / f"pkg{index}"
            directory.mkdir()
            paths.append(_write(directory, "status.go", _STATUS))
        results = generate_all(paths, jobs=jobs)
        assert [result.filename for result in results] == [str(path) for path in paths]
        assert all(result.ok for result in results)

    def test_blank_entries_are_skipped(self, tmp_path: Path) -> None:
        source = _write(tmp_path, "status.go", _STATUS)
        results = generate_all(["", str(source), "   "])
        assert [result.filename for result in results] == [str(source)]

    def test_empty_batch(self) -> None:
        assert generate_all([]) == []

    def test_cancelled_batch(self, tmp_path: Path) -> None:
        cancel = threading.Event()
        cancel.set()
        paths: list[str | Path] = [_write(tmp_path, "status.go", _STATUS), _write(tmp_path, "shapes.go", _TWO_TYPES)]
        results = generate_all(paths, jobs=2, cancel=cancel)
        assert [result.status for result in results] == [FileStatus.CANCELLED, FileStatus.CANCELLED]
