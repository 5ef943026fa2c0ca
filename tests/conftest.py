"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from label_sync.github.client import GitHubClient
from label_sync.labels import Label


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run in an empty directory with no label-sync environment variables."""
    for name in (
        "LABEL_SYNC_GITHUB_TOKEN",
        "GITHUB_TOKEN",
        "GITHUB_BRANCH",
        "GITHUB_BASE_URL",
        "LOG_LEVEL",
        "LABEL_SYNC_CONFIG",
        "LABEL_SYNC_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Provide a valid configuration file with two repositories."""
    path = tmp_path / "labels.json"
    path.write_text(
        json.dumps(
            {
                "publish": {"branch": "main"},
                "repositories": {
                    "octo-org/octo-repo": {
                        "strict": True,
                        "labels": {
                            "bug": "d73a4a",
                            "needs-triage": {
                                "color": "fbca04",
                                "description": "Waiting for triage",
                                "siblings": ["triage"],
                            },
                            "triage": "ededed",
                        },
                    },
                    "octo-org/other-repo": {
                        "labels": {"bug": "d73a4a"},
                    },
                },
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_client() -> Callable[..., Mock]:
    """Provide a factory for mocked GitHub clients."""

    def _make(repository: str, labels: list[Label] | None = None) -> Mock:
        client = Mock(spec=GitHubClient)
        client.repository = repository
        client.list_labels.return_value = list(labels or [])
        client.list_open_issues.return_value = []
        return client

    return _make
