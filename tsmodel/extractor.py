"""End-to-end extraction: load, parse, aggregate, synthesize."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from .aggregator import ModelAggregator
from .config import TsModelConfig
from .logging import get_logger
from .models import Model, SourceFile
from .parser import SourceParser
from .source_loader import SourceLoader, SourceText
from .synthesizer import InlineTypeSynthesizer


class ModelExtractor:
    """Builds the structural model for a set of source roots."""

    def __init__(
        self,
        config: TsModelConfig,
        loader: SourceLoader | None = None,
        parser: SourceParser | None = None,
        synthesizer: InlineTypeSynthesizer | None = None,
    ) -> None:
        self.config = config
        self.loader = loader or SourceLoader(exclude_paths=config.exclude_paths)
        self.parser = parser or SourceParser(hint_marker=config.hints.marker)
        self.synthesizer = synthesizer or InlineTypeSynthesizer(
            suffix=config.synthesis.suffix,
            max_depth=config.synthesis.max_depth,
            hint_marker=config.hints.marker,
        )
        self.logger = get_logger("extractor")

    def extract(self, roots: Optional[Iterable[Path | str]] = None) -> Model:
        """Run the pipeline; read failures propagate, structural issues are logged."""
        selected = list(roots) if roots is not None else self.config.resolved_source_dirs()
        self.logger.info("Extracting model from %d root(s)", len(selected))

        sources = self.loader.load(selected)
        parsed = self._parse_all(sources)

        aggregator = ModelAggregator()
        aggregator.merge(parsed)
        aggregator.ignore(self.config.ignore_items)
        aggregator.collisions()
        model = aggregator.build()

        # Mutates shared property lists, so it runs once and on this thread.
        self.synthesizer.run(model)

        self.logger.info(
            "Extracted %d file(s), %d interface(s)", len(model.files), len(model.all_interfaces())
        )
        return model

    def _parse_all(self, sources: List[SourceText]) -> List[SourceFile]:
        if not sources:
            return []
        workers = max(1, min(self.config.workers, len(sources)))
        if workers == 1:
            return [self.parser.parse(source) for source in sources]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order, keeping discovery order.
            return list(executor.map(self.parser.parse, sources))


__all__ = ["ModelExtractor"]
