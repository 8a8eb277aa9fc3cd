"""Tests for tsmodel.source_loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from tsmodel.source_loader import SourceLoader, SourceLoadError, build_ignore_rule, is_source_file


def _write(path: Path, content: str = "export interface A {}\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_collect_filters_and_sorts(tmp_path: Path) -> None:
    root = tmp_path / "ts"
    _write(root / "b.ts")
    _write(root / "a.ts")
    _write(root / "nested" / "c.ts")
    _write(root / "types.d.ts")
    _write(root / "readme.md", "# docs\n")
    _write(root / "node_modules" / "lib" / "index.ts")
    _write(root / "generated" / "skip.ts")
    _write(root / "nested" / "skip.spec.ts")

    loader = SourceLoader(exclude_paths=["generated/", "*.spec.ts"])
    paths = loader.collect([root])

    assert [path.relative_to(root).as_posix() for path in paths] == [
        "a.ts",
        "b.ts",
        "nested/c.ts",
    ]


def test_collect_accepts_file_roots_and_deduplicates(tmp_path: Path) -> None:
    root = tmp_path / "ts"
    _write(root / "a.ts")
    _write(root / "b.ts")

    paths = SourceLoader().collect([root / "a.ts", root, root])

    assert [path.name for path in paths] == ["a.ts", "b.ts"]


def test_collect_rejects_missing_root(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileNotFoundError) as excinfo:
        SourceLoader().collect([missing])

    assert str(missing) in str(excinfo.value)


def test_load_reads_utf8_text(tmp_path: Path) -> None:
    root = tmp_path / "ts"
    _write(root / "a.ts", "// café\ninterface A {}\n")

    (source,) = SourceLoader().load([root])

    assert source.path == (root / "a.ts").as_posix()
    assert "café" in source.text


def test_unreadable_file_aborts_the_run(tmp_path: Path) -> None:
    root = tmp_path / "ts"
    root.mkdir()
    (root / "bad.ts").write_bytes(b"interface A { a: \xff\xfe }")

    with pytest.raises(SourceLoadError) as excinfo:
        SourceLoader().load([root])

    assert "bad.ts" in str(excinfo.value)


def test_ignore_rules_follow_gitignore_shapes() -> None:
    anchored = build_ignore_rule("/gen")
    assert anchored is not None
    assert anchored.matches("gen", True)
    assert not anchored.matches("src/gen", True)

    floating = build_ignore_rule("legacy/")
    assert floating is not None
    assert floating.matches("src/legacy", True)
    assert not floating.matches("src/legacy", False)

    assert build_ignore_rule("   ") is None


def test_is_source_file_excludes_declaration_files() -> None:
    assert is_source_file(Path("a.ts"))
    assert not is_source_file(Path("a.d.ts"))
    assert not is_source_file(Path("a.tsx"))
