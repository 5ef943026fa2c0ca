"""Label configuration file loading.

The configuration file is JSON:

    {
      "publish": {"branch": "main"},
      "repositories": {
        "octo-org/octo-repo": {
          "strict": false,
          "labels": {
            "bug": "d73a4a",
            "needs-triage": {"color": "fbca04", "description": "...", "siblings": ["triage"]}
          }
        }
      }
    }

Each repository manifest is validated on its own: an invalid manifest becomes a
`ConfigError` and does not prevent the remaining repositories from syncing.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from label_sync.labels import Label, hydrate
from label_sync.sync.report import ConfigError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".json"}


class ConfigFileError(Exception):
    """Raised when the configuration file as a whole cannot be used."""


class LabelDefinition(BaseModel):
    color: str
    description: str = Field(default="")
    siblings: list[str] = Field(default_factory=list)


class RepositoryManifest(BaseModel):
    """Desired labels for one repository."""

    strict: bool = Field(default=False)
    labels: dict[str, str | LabelDefinition] = Field(default_factory=dict)

    # Repository whose same-numbered issues receive sibling labels.
    # Defaults to the configured repository itself.
    sibling_repository: str | None = Field(default=None)

    @field_validator("sibling_repository")
    @classmethod
    def _check_sibling_repository(cls, value: str | None) -> str | None:
        if value is None:
            return None
        owner, repo = parse_repository_name(value)
        return f"{owner}/{repo}"

    def hydrate(self) -> list[Label]:
        return hydrate(self.labels)

    @property
    def siblings(self) -> dict[str, list[str]]:
        """Trigger label name -> sibling label names."""

        return {
            name: list(value.siblings)
            for name, value in self.labels.items()
            if isinstance(value, LabelDefinition) and value.siblings
        }


class PublishConfig(BaseModel):
    branch: str = Field(default="main")


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    publish: PublishConfig
    repositories: dict[str, RepositoryManifest] = field(default_factory=dict)
    errors: list[ConfigError] = field(default_factory=list)


def parse_repository_name(value: str) -> tuple[str, str]:
    """Split "owner/repo" into its parts."""

    parts = value.strip().strip("/").split("/")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise ValueError(f"Cannot decode the repository name {value!r} (expected 'owner/repo')")
    return parts[0], parts[1]


def _format_validation_error(e: ValidationError) -> str:
    problems = []
    for err in e.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(problems)


def parse_config(raw: object) -> LoadedConfig:
    """Validate a decoded configuration document."""

    if not isinstance(raw, dict):
        raise ConfigFileError("Configuration must be a JSON object")

    try:
        publish = PublishConfig.model_validate(raw.get("publish") or {})
    except ValidationError as e:
        raise ConfigFileError(f"Invalid publish section: {_format_validation_error(e)}") from e

    repositories_raw = raw.get("repositories")
    if not isinstance(repositories_raw, dict):
        raise ConfigFileError("Configuration is missing a 'repositories' object")

    repositories: dict[str, RepositoryManifest] = {}
    errors: list[ConfigError] = []
    for name, manifest_raw in repositories_raw.items():
        try:
            parse_repository_name(name)
            repositories[name] = RepositoryManifest.model_validate(manifest_raw)
        except ValidationError as e:
            message = f"{name}: {_format_validation_error(e)}"
            logger.warning("Invalid repository manifest", extra={"repo": name, "error": message})
            errors.append(ConfigError(repository=name, message=message))
        except ValueError as e:
            logger.warning("Invalid repository name", extra={"repo": name})
            errors.append(ConfigError(repository=name, message=str(e)))

    return LoadedConfig(publish=publish, repositories=repositories, errors=errors)


def load_config(path: Path) -> LoadedConfig:
    """Read and validate a configuration file."""

    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ConfigFileError(f"Unsupported configuration type {path}")
    if not path.is_file():
        raise ConfigFileError(f"Couldn't find a valid configuration file at {path}")

    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigFileError(f"Couldn't parse configuration file at {path}: {e}") from e

    loaded = parse_config(raw)
    logger.info(
        "Configuration loaded",
        extra={
            "path": str(path),
            "repositories": sorted(loaded.repositories),
            "config_errors": len(loaded.errors),
        },
    )
    return loaded
