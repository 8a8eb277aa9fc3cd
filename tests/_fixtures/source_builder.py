"""Helper utilities for writing throwaway TypeScript source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from tsmodel.config import TsModelConfig
from tsmodel.extractor import ModelExtractor
from tsmodel.models import Model, SourceFile


class SourceTreeBuilder:
    """Writes `.ts` files under a temporary root and extracts a model from them."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self.config = TsModelConfig(root=self.root, source_dirs=["ts"], workers=2)

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries below the root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def extract(self) -> Model:
        """Run the full pipeline over the configured source directories."""
        return ModelExtractor(self.config).extract()

    def file(self, model: Model, relative: str) -> SourceFile:
        """Return the file record written at `relative`."""
        wanted = (self.root / relative).resolve().as_posix()
        for source_file in model.files:
            if source_file.path == wanted:
                return source_file
        raise AssertionError(f"{relative} not present in model")


__all__ = ["SourceTreeBuilder"]
