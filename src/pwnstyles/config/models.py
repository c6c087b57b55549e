"""
Pydantic models for validating and hashing project configuration files.
"""

from __future__ import annotations

import json
import hashlib
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pwnstyles.toml"
DEVELOPMENT = "development"


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class TemplateLocation(BaseModel):
    """
    A stylesheet source directory and the directory its compiled CSS lands in.

    Both paths are relative to the project root unless absolute.
    """
    source: Path
    output: Path

    model_config = ConfigDict(extra="forbid")


def default_template_locations() -> List[TemplateLocation]:
    return [
        TemplateLocation(
            source=Path("public/pwnstyles/stylesheets/scss"),
            output=Path("public/pwnstyles/stylesheets"),
        ),
        TemplateLocation(
            source=Path("public/stylesheets/scss"),
            output=Path("public/stylesheets"),
        ),
    ]


def default_expansions() -> Dict[str, List[str]]:
    return {"pwnstyles": ["/pwnstyles/stylesheets/pwnstyles"]}


class ProjectConfig(BaseModel):
    """
    Per-project settings read from ``pwnstyles.toml``.

    Attributes:
        environment: Application environment ("development", "production", ...).
            None defers to PWNSTYLES_ENV.
        exclude: Extra relative paths the update generator must never overwrite.
        template_locations: Stylesheet source/output directory pairs, in compile order.
        expansions: Named stylesheet groups, each a list of stylesheet paths.
    """
    environment: Optional[str] = None
    exclude: List[str] = Field(default_factory=list)
    template_locations: List[TemplateLocation] = Field(default_factory=default_template_locations)
    expansions: Dict[str, List[str]] = Field(default_factory=default_expansions)

    model_config = ConfigDict(extra="forbid")

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip().lower()
        if not cleaned:
            raise ValueError("environment must not be empty")
        return cleaned

    def add_template_location(self, source: Path | str, output: Path | str) -> TemplateLocation:
        """
        Append a template location unless the same source/output pair is already registered.
        """
        location = TemplateLocation(source=Path(source), output=Path(output))
        if location not in self.template_locations:
            self.template_locations.append(location)
        return location

    @property
    def hash(self) -> str:
        """
        Deterministic hash of the normalized config, used to detect changes.
        """
        payload = self.model_dump(mode="json", round_trip=True)
        blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(blob).hexdigest()


def load_config(path: Path | str) -> ProjectConfig:
    """
    Load and validate a TOML config file into a ProjectConfig instance.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated ProjectConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    raw_data = _normalize_toml_schema(raw_data)

    try:
        config = ProjectConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    for location in config.template_locations:
        if location.source == location.output:
            logger.warning("Template location %s compiles into its own source directory", location.source)
    return config


def load_project_config(project_root: Path | str, config_path: Path | str | None = None) -> ProjectConfig:
    """
    Load an explicit config file, else ``<project_root>/pwnstyles.toml`` when present, else defaults.
    """
    if config_path is not None:
        return load_config(config_path)
    candidate = Path(project_root).expanduser().resolve() / CONFIG_FILENAME
    if candidate.exists():
        logger.debug("Using project config %s", candidate)
        return load_config(candidate)
    logger.debug("No %s in %s; using defaults", CONFIG_FILENAME, candidate.parent)
    return ProjectConfig()


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Normalize TOML-specific schema conveniences to the internal config model.

    Accepts the singular table array [[template_location]] and maps it to the
    internal plural list field template_locations. Expansions declared in the
    file are merged over the built-in ones.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a TOML table/object.")

    if "template_locations" in data:
        raise ConfigError("Use [[template_location]] blocks (singular) instead of [[template_locations]].")

    normalized = dict(data)
    if "template_location" in normalized:
        extra_locations = _coerce_table_array(normalized.pop("template_location"), "template_location")
        defaults = [location.model_dump() for location in default_template_locations()]
        normalized["template_locations"] = defaults + extra_locations

    if "expansions" in normalized:
        expansions = normalized["expansions"]
        if not isinstance(expansions, dict):
            raise ConfigError("[expansions] must be a table mapping names to lists of stylesheets.")
        merged: Dict[str, Any] = dict(default_expansions())
        for name, sources in expansions.items():
            merged[name] = [sources] if isinstance(sources, str) else sources
        normalized["expansions"] = merged

    return normalized


def _coerce_table_array(value: Any, label: str) -> list[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise ConfigError(f"Each [[{label}]] entry must be a table/object.")
        return value
    raise ConfigError(f"Invalid [{label}] block; expected a table or array of tables.")
