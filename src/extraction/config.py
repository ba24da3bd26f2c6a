"""Configuration helpers for the extraction engine."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml
from jsonschema import ValidationError, validate

from .lexicons import TAG_KEYWORDS

_DEFAULT_CONFIG_PATH = Path("config/extraction.yaml")

CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "resolution": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "threshold": {"type": "number", "minimum": 0, "maximum": 1},
                "min_token_length": {"type": "integer", "minimum": 1},
            },
        },
        "tasks": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "description_template": {"type": "string", "pattern": "\\{title\\}"},
            },
        },
        "tags": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": {"type": "string"}},
        },
        "recommendations": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "large_task_minutes": {"type": "integer", "minimum": 0},
                "high_priority_threshold": {"type": "integer", "minimum": 0},
                "task_count_threshold": {"type": "integer", "minimum": 0},
            },
        },
    },
}


@dataclass(slots=True)
class ExtractionConfig:
    """Represents the full extraction configuration mapping."""

    raw: Mapping[str, Any]

    @classmethod
    def empty(cls) -> "ExtractionConfig":
        return cls(raw={})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ExtractionConfig":
        try:
            validate(instance=dict(mapping), schema=CONFIG_SCHEMA)
        except ValidationError as exc:
            location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
            raise ValueError(f"Invalid extraction config at {location}: {exc.message}") from exc
        return cls(raw={str(key): dict(value) for key, value in mapping.items()})

    def section(self, name: str) -> dict[str, Any]:
        return dict(self.raw.get(name, {}))

    def tag_keywords(self) -> dict[str, tuple[str, ...]]:
        """Default tag lexicon extended with configured keywords."""

        merged: dict[str, tuple[str, ...]] = dict(TAG_KEYWORDS)
        for domain, keywords in self.section("tags").items():
            extra = _normalize_keywords(keywords)
            label = str(domain).strip().lower()
            if label and extra:
                merged[label] = tuple(dict.fromkeys(merged.get(label, ()) + extra))
        return merged

    def tasks_config(self) -> dict[str, Any]:
        config = self.section("tasks")
        if self.section("tags"):
            config["tag_keywords"] = self.tag_keywords()
        return config


def load_extraction_config(path: Path | None) -> ExtractionConfig:
    """Load extraction configuration from YAML, defaulting to an empty mapping."""

    if path is None:
        if not _DEFAULT_CONFIG_PATH.exists():
            return ExtractionConfig.empty()
        return ExtractionConfig.from_mapping(_load_yaml(_DEFAULT_CONFIG_PATH))

    resolved = path.expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"Extraction config '{resolved}' does not exist")
    return ExtractionConfig.from_mapping(_load_yaml(resolved))


def _load_yaml(path: Path) -> Mapping[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("Extraction config must be a mapping at the top level.")
    return data


def _normalize_keywords(keywords: Iterable[object]) -> tuple[str, ...]:
    terms: list[str] = []
    for keyword in keywords:
        term = str(keyword).strip().lower()
        if term:
            terms.append(term)
    return tuple(dict.fromkeys(terms))


__all__ = [
    "CONFIG_SCHEMA",
    "ExtractionConfig",
    "load_extraction_config",
]
