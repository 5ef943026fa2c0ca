"""Run label sync across many repositories.

Per repository: fetch current labels, diff against the manifest, authorize the
changes, apply them (unless dry-run), then propagate sibling labels on open
issues. Repositories run concurrently in a bounded thread pool; every
repository produces its own report and failures never cross over.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import requests
from github import GithubException

from label_sync.github.client import FetchError, GitHubClient
from label_sync.labels import Label
from label_sync.manifest import LoadedConfig, RepositoryManifest, parse_repository_name

from .diff import diff
from .policy import SyncPlan, plan, should_apply
from .report import (
    ApplyAction,
    ApplyFailure,
    SiblingSyncReport,
    SyncFailure,
    SyncReport,
    SyncRunReport,
    SyncSuccess,
)
from .siblings import plan_siblings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], GitHubClient]

_APPLY_ERRORS = (GithubException, requests.RequestException, ValueError)


@dataclass(frozen=True, slots=True)
class SyncOptions:
    dry_run: bool
    max_workers: int = 4


def apply_plan(client: GitHubClient, sync_plan: SyncPlan) -> list[ApplyFailure]:
    """Apply a plan: all additions, then updates, then removals.

    Each label is applied independently. Failures are logged and returned so the
    already-computed report stays valid.
    """

    steps: list[tuple[ApplyAction, list[Label], Callable[[Label], None]]] = [
        ("add", sync_plan.to_add, client.create_label),
        ("update", sync_plan.to_update, client.update_label),
        ("remove", sync_plan.to_remove, client.delete_label),
    ]

    failures: list[ApplyFailure] = []
    for action, labels, apply in steps:
        for label in labels:
            try:
                apply(label)
            except _APPLY_ERRORS as e:
                logger.warning(
                    "Failed to apply label change",
                    extra={
                        "repo": client.repository,
                        "action": action,
                        "label": label.name,
                        "error": str(e),
                    },
                )
                failures.append(ApplyFailure(action=action, target=label.name, message=str(e)))
    return failures


class LabelSyncRunner:
    """Orchestrates fetch -> diff -> plan -> apply for a set of repositories."""

    def __init__(self, *, client_factory: ClientFactory, options: SyncOptions) -> None:
        self._client_factory = client_factory
        self._options = options

    @property
    def options(self) -> SyncOptions:
        return self._options

    def run(self, config: LoadedConfig) -> SyncRunReport:
        names = list(config.repositories)
        logger.info(
            "Starting label sync",
            extra={
                "repositories": names,
                "dry_run": self._options.dry_run,
                "max_workers": self._options.max_workers,
            },
        )

        with ThreadPoolExecutor(
            max_workers=self._options.max_workers, thread_name_prefix="label-sync"
        ) as pool:
            # map() keeps results in configuration order.
            syncs = list(
                pool.map(
                    lambda name: self.sync_repository(name, config.repositories[name]),
                    names,
                )
            )

        report = SyncRunReport(
            dry_run=self._options.dry_run,
            syncs=syncs,
            config_errors=list(config.errors),
        )
        logger.info(
            "Label sync finished",
            extra={
                "succeeded": sum(1 for s in syncs if isinstance(s, SyncSuccess)),
                "failed": sum(1 for s in syncs if isinstance(s, SyncFailure)),
                "config_errors": len(report.config_errors),
            },
        )
        return report

    def sync_repository(self, repository: str, manifest: RepositoryManifest) -> SyncReport:
        """Sync one repository. Never raises; errors become a `SyncFailure`."""

        owner, repo = parse_repository_name(repository)
        full_name = f"{owner}/{repo}"

        try:
            client = self._client_factory(full_name)
        except (FetchError, GithubException, requests.RequestException) as e:
            logger.warning("Repository unavailable", extra={"repo": full_name, "error": str(e)})
            return SyncFailure(owner=owner, repo=repo, message=str(e), config=manifest)

        try:
            return self._sync_with_client(client, owner=owner, repo=repo, manifest=manifest)
        except FetchError as e:
            logger.warning("Couldn't fetch repository state", extra={"repo": full_name})
            return SyncFailure(owner=owner, repo=repo, message=str(e), config=manifest)
        except Exception as e:
            logger.exception("Repository sync failed", extra={"repo": full_name})
            return SyncFailure(
                owner=owner,
                repo=repo,
                message=f"Unexpected error while syncing labels: {e}",
                config=manifest,
            )
        finally:
            client.close()

    def _sync_with_client(
        self,
        client: GitHubClient,
        *,
        owner: str,
        repo: str,
        manifest: RepositoryManifest,
    ) -> SyncSuccess:
        current = client.list_labels()
        desired = manifest.hydrate()

        label_diff = diff(current, desired)
        sync_plan = plan(label_diff, strict=manifest.strict, dry_run=self._options.dry_run)

        failures: list[ApplyFailure] = []
        if should_apply(dry_run=self._options.dry_run):
            failures.extend(apply_plan(client, sync_plan))

        logger.info(
            "Repository labels reconciled",
            extra={
                "repo": client.repository,
                "dry_run": self._options.dry_run,
                "strict": manifest.strict,
                "additions": len(sync_plan.to_add),
                "updates": len(sync_plan.to_update),
                "removals": len(sync_plan.to_remove),
                "apply_failures": len(failures),
            },
        )

        siblings: SiblingSyncReport | None = None
        if manifest.siblings:
            siblings, sibling_failures = self._sync_siblings(client, manifest, desired)
            failures.extend(sibling_failures)

        return SyncSuccess(
            owner=owner,
            repo=repo,
            additions=sync_plan.to_add,
            updates=sync_plan.to_update,
            removals=sync_plan.to_remove,
            config=manifest,
            siblings=siblings,
            apply_failures=failures,
        )

    def _sync_siblings(
        self,
        client: GitHubClient,
        manifest: RepositoryManifest,
        catalog: list[Label],
    ) -> tuple[SiblingSyncReport, list[ApplyFailure]]:
        target_name = manifest.sibling_repository or client.repository
        dry_run = self._options.dry_run

        # Label results are already computed; sibling problems must not discard them.
        try:
            issues = client.list_open_issues()
        except FetchError as e:
            logger.warning("Couldn't fetch issues for siblings", extra={"repo": client.repository})
            failure = ApplyFailure(action="siblings", target=client.repository, message=str(e))
            return SiblingSyncReport(repository=target_name, dry_run=dry_run), [failure]

        # The source issue's labels only describe the target when they are the same issue.
        same_repository = target_name == client.repository
        items = plan_siblings(
            issues, manifest.siblings, catalog, skip_present=same_repository
        )
        report = SiblingSyncReport(repository=target_name, dry_run=dry_run, issues=items)

        if not report.changed_issues or not should_apply(dry_run=dry_run):
            return report, []

        if same_repository:
            return report, self._apply_siblings(client, report)

        try:
            target = self._client_factory(target_name)
        except (FetchError, GithubException, requests.RequestException) as e:
            logger.warning("Sibling repository unavailable", extra={"repo": target_name})
            return report, [ApplyFailure(action="siblings", target=target_name, message=str(e))]
        try:
            return report, self._apply_siblings(target, report)
        finally:
            target.close()

    @staticmethod
    def _apply_siblings(client: GitHubClient, report: SiblingSyncReport) -> list[ApplyFailure]:
        failures: list[ApplyFailure] = []
        for item in report.changed_issues:
            names = [label.name for label in item.siblings]
            try:
                client.add_labels_to_issue(issue_number=item.issue.number, labels=names)
            except _APPLY_ERRORS as e:
                logger.warning(
                    "Failed to add sibling labels",
                    extra={
                        "repo": client.repository,
                        "issue_number": item.issue.number,
                        "labels": names,
                        "error": str(e),
                    },
                )
                failures.append(
                    ApplyFailure(action="siblings", target=f"#{item.issue.number}", message=str(e))
                )
        return failures


def default_client_factory(*, token: str, base_url: str) -> ClientFactory:
    def _factory(repository: str) -> GitHubClient:
        return GitHubClient(token=token, repository=repository, base_url=base_url)

    return _factory
