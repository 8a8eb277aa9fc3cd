"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tsmodel.cli import _build_parser, main


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()

    assert parser.parse_args(["--verbose", "extract"]).verbose is True
    args = parser.parse_args(["extract", "--verbose", "src", "lib"])
    assert args.verbose is True
    assert args.paths == ["src", "lib"]
    assert args.config == "."
    assert args.output is None


def test_extract_prints_model_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "ts" / "a.ts"
    source.parent.mkdir()
    source.write_text("export interface A { id: number; }\n", encoding="utf-8")

    main(["extract", "--config", str(tmp_path), str(source)])

    payload = json.loads(capsys.readouterr().out)
    (file_payload,) = payload["files"]
    assert file_payload["interfaces"][0]["properties"][0]["name"] == "id"


def test_extract_writes_output_file(tmp_path: Path) -> None:
    (tmp_path / "ts").mkdir()
    (tmp_path / "ts" / "a.ts").write_text("export enum E { A = 1 }\n", encoding="utf-8")
    (tmp_path / ".tsmodel.yml").write_text("output: out/model.json\n", encoding="utf-8")

    main(["extract", "--config", str(tmp_path)])

    payload = json.loads((tmp_path / "out" / "model.json").read_text(encoding="utf-8"))
    assert payload["files"][0]["enums"][0]["encoding"] == "integer"


def test_missing_root_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--config", str(tmp_path), str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "missing" in capsys.readouterr().err


def test_invalid_config_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".tsmodel.yml").write_text("workers: 0\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["extract", "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_cli_accepts_quiet_and_log_file_after_command() -> None:
    parser = _build_parser()

    args = parser.parse_args(["extract", "-q", "--log-file", "run.log"])
    assert args.quiet is True
    assert args.verbose is False
    assert args.log_file == "run.log"
    assert parser.parse_args(["extract"]).log_file is None


def test_extract_writes_debug_log_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "ts" / "a.ts"
    source.parent.mkdir()
    source.write_text("export interface A { id: number; }\n", encoding="utf-8")
    log_file = tmp_path / "run.log"

    main(["extract", "--quiet", "--log-file", str(log_file), "--config", str(tmp_path), str(source)])

    assert json.loads(capsys.readouterr().out)["files"]
    assert "tsmodel:source_loader: Loaded 1 source files" in log_file.read_text(encoding="utf-8")
