"""Tests for the json-schema-diff command-line interface.

Drives ``main(argv)`` directly, with schema files written to ``tmp_path``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from json_schema_diff import __version__
from json_schema_diff.cli import main


def _write(tmp_path: Path, name: str, value: Any) -> str:
    path = tmp_path / name
    path.write_text(json.dumps(value), encoding="utf-8")
    return str(path)


class TestOutput:
    def test_one_json_line_per_change(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        old = _write(tmp_path, "old.json", {"type": "string"})
        new = _write(tmp_path, "new.json", {"type": "number"})

        assert main([old, new]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line) for line in lines] == [
            {
                "path": "",
                "change": "TypeRemove",
                "removed": "string",
                "is_breaking": True,
            },
            {"path": "", "change": "TypeAdd", "added": "number", "is_breaking": False},
            {
                "path": "",
                "change": "TypeAdd",
                "added": "integer",
                "is_breaking": False,
            },
        ]

    def test_no_changes_prints_nothing(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        schema = {"type": "object", "required": ["a"]}
        old = _write(tmp_path, "old.json", schema)
        new = _write(tmp_path, "new.json", schema)

        assert main([old, new]) == 0
        assert capsys.readouterr().out == ""

    def test_range_payload(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        old = _write(tmp_path, "old.json", {"properties": {"n": {"minimum": 1}}})
        new = _write(tmp_path, "new.json", {"properties": {"n": {"minimum": 0}}})

        assert main([old, new]) == 0

        (line,) = capsys.readouterr().out.splitlines()
        assert json.loads(line) == {
            "path": ".n",
            "change": "RangeChange",
            "old_value": {"minimum": 1.0},
            "new_value": {"minimum": 0.0},
            "is_breaking": False,
        }

    def test_verbose_flag(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        old = _write(tmp_path, "old.json", True)
        new = _write(tmp_path, "new.json", True)
        assert main([old, new, "-v"]) == 0
        assert capsys.readouterr().out == ""


class TestErrors:
    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        new = _write(tmp_path, "new.json", {})
        assert main([str(tmp_path / "missing.json"), new]) == 1
        assert "cannot read schema" in capsys.readouterr().err

    def test_invalid_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        old = tmp_path / "old.json"
        old.write_text("{not json", encoding="utf-8")
        new = _write(tmp_path, "new.json", {})
        assert main([str(old), new]) == 1
        assert "invalid JSON" in capsys.readouterr().err

    def test_invalid_schema(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        old = _write(tmp_path, "old.json", {"type": "strng"})
        new = _write(tmp_path, "new.json", {})
        assert main([old, new]) == 1
        captured = capsys.readouterr()
        assert "unknown type 'strng'" in captured.err
        assert captured.out == ""

    def test_reference_cycle_through_any_of(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        schema = {
            "$ref": "#/definitions/A",
            "definitions": {
                "A": {"anyOf": [{"$ref": "#/definitions/A"}, {"type": "string"}]}
            },
        }
        old = _write(tmp_path, "old.json", schema)
        new = _write(tmp_path, "new.json", schema)
        assert main([old, new]) == 1
        captured = capsys.readouterr()
        assert "exceeded maximum depth 128" in captured.err
        assert captured.out == ""

    def test_missing_arguments(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2


class TestVersion:
    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
