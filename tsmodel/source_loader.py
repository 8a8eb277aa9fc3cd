"""Source discovery and loading for TypeScript trees."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
    ".idea",
    ".vscode",
    "dist",
    "build",
    "coverage",
}

_SOURCE_SUFFIXES = (".ts",)
_DECLARATION_SUFFIX = ".d.ts"


class SourceLoadError(RuntimeError):
    """Raised when a selected source file cannot be read."""


@dataclass
class SourceText:
    """Raw text of one eligible source file."""

    path: str
    text: str


@dataclass
class IgnoreRule:
    """Represents an exclude pattern from .tsmodel.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def is_source_file(path: Path, suffixes: Sequence[str] = _SOURCE_SUFFIXES) -> bool:
    """Return True for source files, excluding ambient declaration files."""
    name = path.name
    if name.endswith(_DECLARATION_SUFFIX):
        return False
    return name.endswith(tuple(suffixes))


class SourceLoader:
    """Walks source roots and reads every eligible file."""

    def __init__(
        self,
        exclude_paths: Iterable[str] = (),
        suffixes: Sequence[str] = _SOURCE_SUFFIXES,
    ) -> None:
        self._rules = [rule for rule in map(build_ignore_rule, exclude_paths) if rule is not None]
        self._suffixes = tuple(suffixes)
        self.logger = get_logger("source_loader")

    def collect(self, roots: Iterable[Path | str]) -> List[Path]:
        """Return eligible files under the roots, sorted by posix path."""
        found: dict[str, Path] = {}
        for root in roots:
            root_path = Path(root).expanduser()
            if not root_path.exists():
                raise FileNotFoundError(f"Source path not found: {root}")
            if root_path.is_file():
                if is_source_file(root_path, self._suffixes):
                    found[root_path.as_posix()] = root_path
                continue
            for path in self._iter_files(root_path):
                found[path.as_posix()] = path
        return [found[key] for key in sorted(found)]

    def load(self, roots: Iterable[Path | str]) -> List[SourceText]:
        """Collect and read every eligible file; any read failure is fatal."""
        sources: List[SourceText] = []
        for path in self.collect(roots):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceLoadError(f"Failed to read {path}: {exc}") from exc
            sources.append(SourceText(path=path.as_posix(), text=text))
        self.logger.debug("Loaded %d source files", len(sources))
        return sources

    def _iter_files(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in dirnames:
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, self._rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in filenames:
                path = current_dir / filename
                if not is_source_file(path, self._suffixes):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, self._rules):
                    continue
                yield path


__all__ = ["SourceLoadError", "SourceLoader", "SourceText", "is_source_file"]
