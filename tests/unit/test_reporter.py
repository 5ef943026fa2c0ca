from __future__ import annotations

from label_sync.labels import Label
from label_sync.manifest import RepositoryManifest
from label_sync.sync.report import (
    ApplyFailure,
    ConfigError,
    IssueRef,
    SiblingIssueReport,
    SiblingSyncReport,
    SyncFailure,
    SyncRunReport,
    SyncSuccess,
)
from label_sync.sync.reporter import render_repository, render_run_report


def _manifest(strict: bool) -> RepositoryManifest:
    return RepositoryManifest.model_validate(
        {"strict": strict, "labels": {"bug/0": "ff", "bug/1": "00", "bug/2": "33"}}
    )


def test_render_run_report() -> None:
    report = SyncRunReport(
        dry_run=True,
        syncs=[
            SyncFailure(
                owner="maticzav",
                repo="labelsync",
                message="Couldn't make a diff of labels.",
                config=_manifest(strict=False),
            ),
            SyncSuccess(
                owner="maticzav",
                repo="graphql-shield",
                additions=[Label(name="bug/2", color="33")],
                updates=[Label(name="bug/1", color="00")],
                removals=[Label(name="bug/3", color="ff")],
                config=_manifest(strict=True),
                siblings=SiblingSyncReport(
                    repository="maticzav/graphql-shield",
                    dry_run=True,
                    issues=[
                        SiblingIssueReport(
                            issue=IssueRef(number=4, title="Crash"),
                            siblings=[Label(name="triage", color="")],
                        ),
                        SiblingIssueReport(issue=IssueRef(number=5, title="Docs"), siblings=[]),
                    ],
                ),
            ),
        ],
    )

    text = render_run_report(report)

    assert text.splitlines()[:3] == [
        "Label Sync Report",
        "This is an autogenerated report for your project.",
        "(dry run: true)",
    ]
    assert "[failed] maticzav/labelsync\n  Couldn't make a diff of labels." in text
    assert "[ok] maticzav/graphql-shield (strict: true)" in text
    assert "  Added: bug/2" in text
    assert "  Updated: bug/1" in text
    assert "  Removed: bug/3" in text
    assert "  - Crash (#4)\n    Added triage." in text
    assert "Docs" not in text
    assert text.endswith("Synced all repositories with no problems!")


def test_render_run_report_lists_config_errors_and_apply_failures() -> None:
    report = SyncRunReport(
        dry_run=False,
        syncs=[
            SyncSuccess(
                owner="octo-org",
                repo="octo-repo",
                additions=[],
                updates=[],
                removals=[],
                config=RepositoryManifest(),
                apply_failures=[ApplyFailure(action="remove", target="old", message="404")],
            )
        ],
        config_errors=[ConfigError(repository="octo-org/bad", message="octo-org/bad: invalid")],
    )

    text = render_run_report(report)

    assert "Labels are up to date." in text
    assert "  ! remove old: 404" in text
    assert text.endswith("Check the configuration of these projects:\n  octo-org/bad: invalid")


def test_render_repository_by_outcome() -> None:
    config = _manifest(strict=False)

    success = render_repository(
        SyncSuccess(
            owner="octo-org",
            repo="octo-repo",
            additions=[],
            updates=[Label(name="bug/0", color="ff")],
            removals=[],
            config=config,
        )
    )
    failure = render_repository(
        SyncFailure(owner="octo-org", repo="gone", message="Not Found", config=config)
    )

    assert success.splitlines() == ["[ok] octo-org/octo-repo (strict: false)", "  Updated: bug/0"]
    assert failure.splitlines() == ["[failed] octo-org/gone", "  Not Found"]
