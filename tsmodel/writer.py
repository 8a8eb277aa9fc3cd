"""Serialise the structural model to JSON."""

from __future__ import annotations

import json
from pathlib import Path

from .models import Model


def model_to_json(model: Model) -> str:
    return json.dumps(model.to_dict(), indent=2, ensure_ascii=False) + "\n"


def write_model(model: Model, path: Path) -> Path:
    """Write the model to ``path``, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model_to_json(model), encoding="utf-8")
    return path


__all__ = ["model_to_json", "write_model"]
