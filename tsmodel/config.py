"""Configuration loading for tsmodel (.tsmodel.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

CONFIG_FILENAME = ".tsmodel.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SynthesisConfig:
    """Settings for inline object type synthesis."""

    suffix: str = "DTO"
    max_depth: int = 16


@dataclass
class HintConfig:
    """Marker used to find destination-type hints in trailing comments."""

    marker: str = "javaType"


@dataclass
class TsModelConfig:
    """Represents the settings defined in .tsmodel.yml."""

    root: Path
    source_dirs: List[str] = field(default_factory=lambda: ["ts"])
    exclude_paths: List[str] = field(default_factory=list)
    ignore_items: List[str] = field(default_factory=list)
    synthesis: SynthesisConfig = field(default_factory=SynthesisConfig)
    hints: HintConfig = field(default_factory=HintConfig)
    workers: int = 4
    output: Optional[Path] = None

    def resolved_source_dirs(self) -> List[Path]:
        """Return source directories anchored at the configuration root."""
        return [(self.root / entry).resolve() for entry in self.source_dirs]


def load_config(config_path: Path) -> TsModelConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TsModelConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = TsModelConfig(root=root)

    if "source_dirs" in data:
        source_dirs = _as_str_list(data.get("source_dirs"))
        if not source_dirs:
            raise ConfigError("source_dirs must list at least one directory")
        config.source_dirs = source_dirs

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    config.ignore_items = _as_str_list(data.get("ignore_items"))

    synthesis_data = _as_dict(data.get("synthesis"))
    if synthesis_data:
        suffix = _as_str(synthesis_data.get("suffix"))
        if suffix is not None:
            config.synthesis.suffix = suffix
        max_depth = _as_int(synthesis_data.get("max_depth"))
        if max_depth is not None:
            if max_depth < 1:
                raise ConfigError("synthesis.max_depth must be a positive integer")
            config.synthesis.max_depth = max_depth

    hints_data = _as_dict(data.get("hints"))
    if hints_data:
        marker = _as_str(hints_data.get("marker"))
        if marker:
            config.hints.marker = marker

    workers = _as_int(data.get("workers"))
    if workers is not None:
        if workers < 1:
            raise ConfigError("workers must be a positive integer")
        config.workers = workers

    output = _as_str(data.get("output"))
    if output:
        config.output = root / output

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "HintConfig",
    "SynthesisConfig",
    "TsModelConfig",
    "load_config",
]
