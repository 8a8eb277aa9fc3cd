"""Merge per-file parse results into a single structural model."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .logging import get_logger
from .models import Model, SourceFile


class ModelAggregator:
    """Collects ``SourceFile`` records in discovery order.

    Same-named declarations from different files are never merged. Each
    stays in its own file record and can be told apart with
    ``Model.qualified_name``; ``collisions()`` reports them.
    """

    def __init__(self) -> None:
        self._files: List[SourceFile] = []
        self.logger = get_logger("aggregator")

    def add(self, source_file: SourceFile) -> None:
        self._files.append(source_file)

    def merge(self, files: Iterable[SourceFile]) -> None:
        for source_file in files:
            self.add(source_file)

    def ignore(self, names: Iterable[str]) -> int:
        """Drop user declarations whose name is listed; returns how many went."""
        ignored = {name for name in names if name}
        if not ignored:
            return 0
        removed = 0
        for source_file in self._files:
            for attribute in ("interfaces", "enums", "classes", "type_aliases"):
                declarations = getattr(source_file, attribute)
                kept = [item for item in declarations if item.name not in ignored]
                removed += len(declarations) - len(kept)
                setattr(source_file, attribute, kept)
        if removed:
            self.logger.info("Ignored %d declaration(s): %s", removed, ", ".join(sorted(ignored)))
        return removed

    def collisions(self) -> Dict[str, List[str]]:
        """Map each name declared in more than one file to those file paths."""
        owners: Dict[str, List[str]] = {}
        for source_file in self._files:
            for name in dict.fromkeys(source_file.declaration_names()):
                owners.setdefault(name, []).append(source_file.path)
        duplicates = {name: paths for name, paths in owners.items() if len(paths) > 1}
        for name, paths in sorted(duplicates.items()):
            self.logger.warning(
                "Declaration %s is defined in %d files (%s); keeping all of them",
                name,
                len(paths),
                ", ".join(paths),
            )
        return duplicates

    def build(self) -> Model:
        model = Model()
        for source_file in self._files:
            model.add_file(source_file)
        return model


__all__ = ["ModelAggregator"]
