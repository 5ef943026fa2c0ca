"""Runtime settings for label-sync.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The token is read from `LABEL_SYNC_GITHUB_TOKEN`, falling back to the
`GITHUB_TOKEN` that CI providers usually inject.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelSyncSettings(BaseSettings):
    """Settings for a sync run.

    Environment variables:
    - LABEL_SYNC_GITHUB_TOKEN (or GITHUB_TOKEN)
    - GITHUB_BRANCH           (optional; the ref being built)
    - GITHUB_BASE_URL         (optional)
    - LOG_LEVEL               (optional)
    - LABEL_SYNC_CONFIG       (optional)
    - LABEL_SYNC_MAX_WORKERS  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `LabelSyncSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("LABEL_SYNC_GITHUB_TOKEN", "GITHUB_TOKEN"),
        description="GitHub token used for API authentication",
    )
    github_branch: str = Field(
        default="",
        validation_alias="GITHUB_BRANCH",
        description=(
            "Branch the run is executing on. Changes are only persisted when it matches "
            "the configured publish branch."
        ),
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    config_path: Path = Field(
        default=Path("labels.json"),
        validation_alias="LABEL_SYNC_CONFIG",
        description="Path to the label configuration file",
    )

    max_workers: int = Field(
        default=4,
        gt=0,
        validation_alias="LABEL_SYNC_MAX_WORKERS",
        description="Maximum number of repositories synced concurrently",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> LabelSyncSettings:
        if not self.github_token.strip():
            raise ValueError("LABEL_SYNC_GITHUB_TOKEN (or GITHUB_TOKEN) is required")
        if not self.github_branch.strip():
            raise ValueError("GITHUB_BRANCH is required")
        return self

    def is_dry_run(self, publish_branch: str) -> bool:
        """Only the publish branch persists changes; every other branch is a dry run."""

        return self.github_branch.strip() != publish_branch.strip()
