"""Unit tests for the CLI entrypoint."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from label_sync import main as main_module
from label_sync.labels import Label
from label_sync.main import main


def test_sync_fails_without_credentials(
    clean_env: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["sync"]) == 2
    assert "Missing GitHub configuration" in capsys.readouterr().err


def test_sync_fails_without_configuration_file(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("LABEL_SYNC_GITHUB_TOKEN", "token")
    monkeypatch.setenv("GITHUB_BRANCH", "main")

    assert main(["sync", "--config", str(clean_env / "missing.json")]) == 2
    assert "Couldn't find a valid configuration file" in capsys.readouterr().err


def test_sync_on_feature_branch_is_dry_run(
    clean_env: Path,
    config_file: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("LABEL_SYNC_GITHUB_TOKEN", "token")
    monkeypatch.setenv("GITHUB_BRANCH", "feature")

    clients: dict[str, Mock] = {}

    def fake_factory(*, token: str, base_url: str):
        assert token == "token"

        def _make(repository: str) -> Mock:
            client = Mock()
            client.repository = repository
            client.list_labels.return_value = [Label(name="bug", color="d73a4a")]
            client.list_open_issues.return_value = []
            clients[repository] = client
            return client

        return _make

    monkeypatch.setattr(main_module, "default_client_factory", fake_factory)

    assert main(["sync", "--config", str(config_file)]) == 0

    out = capsys.readouterr().out
    assert "(dry run: true)" in out
    assert "[ok] octo-org/octo-repo" in out
    assert set(clients) == {"octo-org/octo-repo", "octo-org/other-repo"}
    for client in clients.values():
        client.create_label.assert_not_called()


def test_validate_reports_invalid_repositories(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "labels.json"
    path.write_text(
        '{"repositories": {"octo-org/good": {"labels": {"bug": "f00"}}, "bad": {}}}',
        encoding="utf-8",
    )

    assert main(["validate", "--config", str(path)]) == 4

    out = capsys.readouterr().out
    assert "ok: octo-org/good" in out
    assert "invalid:" in out
