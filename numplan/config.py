"""Configuration helpers for the numbering pipeline."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import yaml

from .generator import DEFAULT_ATTEMPTS_PER_NUMBER

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' could not be parsed: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


@dataclass
class PipelineSettings:
    """Runtime options for :class:`numplan.orchestrator.NumberingPipeline`."""

    output_dir: Path = Path("output")
    export_clean: bool = False
    export_batch_call: bool = False
    attempts_per_number: int = DEFAULT_ATTEMPTS_PER_NUMBER
    seed: Optional[int] = None
    column_mapping: Dict[str, Union[str, Sequence[str]]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "PipelineSettings":
        known = {"output_dir", "export_clean", "export_batch_call", "attempts_per_number", "seed", "column_mapping"}
        for key in config:
            if key not in known:
                LOGGER.debug("Ignoring unknown configuration key %s", key)

        try:
            attempts = int(config.get("attempts_per_number", DEFAULT_ATTEMPTS_PER_NUMBER))
            seed = config.get("seed")
            seed = int(seed) if seed is not None else None
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid numeric configuration value: {exc}") from exc
        if attempts <= 0:
            raise ConfigurationError("'attempts_per_number' must be a positive integer")

        mapping = config.get("column_mapping") or {}
        if not isinstance(mapping, dict):
            raise ConfigurationError("'column_mapping' must be a mapping of field names to column names")

        return cls(
            output_dir=Path(config.get("output_dir", "output")),
            export_clean=bool(config.get("export_clean", False)),
            export_batch_call=bool(config.get("export_batch_call", False)),
            attempts_per_number=attempts,
            seed=seed,
            column_mapping=dict(mapping),
        )
