"""GitHub API client wrapper for label synchronization.

Wraps PyGithub (label mutations) and a `requests` session (paginated REST reads)
so sync code never talks to GitHub directly and tests can use a mock.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

from label_sync.labels import Label
from label_sync.sync.report import IssueRef

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when current state could not be read from GitHub."""


class GitHubClient:
    """Per-repository wrapper around the label and issue endpoints we need."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository.strip().strip("/"):
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")
        self._rest_base_url = base_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "label-sync",
            }
        )

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=self._rest_base_url)
        try:
            self._repo = self._github.get_repo(self._repository_name)
        except GithubException as e:
            self._session.close()
            raise FetchError(f"Couldn't access repository {self._repository_name}: {e}") from e
        logger.info(
            "Authenticated with GitHub and connected to repository",
            extra={"repo": self._repository_name},
        )

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def _repo_url(self, *, path: str) -> str:
        path = path.strip("/")
        root = f"{self._rest_base_url}/repos/{self._repository_name}"
        return f"{root}/{path}" if path else root

    def _get_paginated_json_list(
        self, url: str, *, params: dict[str, str] | None = None
    ) -> list[dict[str, Any]]:
        """Fetch a REST endpoint that returns a JSON list, following every page.

        Stops at the first short or empty page.
        """

        items: list[dict[str, Any]] = []
        per_page = 100
        for page in itertools.count(1):
            query: dict[str, str | int] = {"per_page": per_page, "page": page}
            if params:
                query.update(params)
            resp = self._session.get(url, params=query, timeout=30)
            resp.raise_for_status()
            payload = resp.json()
            if not isinstance(payload, list):
                break

            page_items: list[dict[str, Any]] = [p for p in payload if isinstance(p, dict)]
            items.extend(page_items)

            if len(payload) < per_page:
                break

        logger.debug(
            "Fetched paginated list",
            extra={"url": url, "pages": page, "count": len(items)},
        )
        return items

    def list_labels(self) -> list[Label]:
        """Return the repository's current labels.

        Raises:
            FetchError if the labels could not be retrieved.
        """

        url = self._repo_url(path="labels")
        try:
            raw = self._get_paginated_json_list(url)
            labels = [Label.from_github(item) for item in raw]
        except (requests.RequestException, ValueError) as e:
            raise FetchError(f"Couldn't fetch labels of {self._repository_name}: {e}") from e

        logger.debug(
            "Repository labels fetched",
            extra={"repo": self._repository_name, "count": len(labels)},
        )
        return labels

    def create_label(self, label: Label) -> None:
        self._repo.create_label(
            name=label.name, color=label.color, description=label.description
        )
        logger.info("Label created", extra={"repo": self._repository_name, "label": label.name})

    def update_label(self, label: Label) -> None:
        """Update a label in place; the label name identifies the current label."""

        existing = self._repo.get_label(label.name)
        existing.edit(name=label.name, color=label.color, description=label.description)
        logger.info("Label updated", extra={"repo": self._repository_name, "label": label.name})

    def delete_label(self, label: Label) -> None:
        existing = self._repo.get_label(label.name)
        existing.delete()
        logger.info("Label deleted", extra={"repo": self._repository_name, "label": label.name})

    def list_open_issues(self) -> list[IssueRef]:
        """Return open issues (pull requests excluded) with their labels.

        Raises:
            FetchError if the issues could not be retrieved.
        """

        url = self._repo_url(path="issues")
        try:
            raw = self._get_paginated_json_list(url, params={"state": "open"})
        except requests.RequestException as e:
            raise FetchError(f"Couldn't fetch issues of {self._repository_name}: {e}") from e

        issues: list[IssueRef] = []
        for item in raw:
            # The issues endpoint also lists pull requests.
            if "pull_request" in item:
                continue
            number = item.get("number")
            if not isinstance(number, int) or number <= 0:
                continue
            title = item.get("title")
            raw_labels = item.get("labels")
            labels = [
                Label.from_github(raw_label)
                for raw_label in (raw_labels if isinstance(raw_labels, list) else [])
                if isinstance(raw_label, dict) and raw_label.get("name")
            ]
            issues.append(
                IssueRef(
                    number=number,
                    title=title if isinstance(title, str) else "",
                    labels=labels,
                )
            )
        return issues

    def add_labels_to_issue(self, *, issue_number: int, labels: list[str]) -> list[str]:
        """Add labels to an issue.

        Returns:
            The label names on the issue after the request.
        """

        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        normalized = [name for name in labels if name.strip()]
        if not normalized:
            raise ValueError("At least one label is required")

        url = self._repo_url(path=f"issues/{issue_number}/labels")
        resp = self._session.post(url, json={"labels": normalized}, timeout=30)
        resp.raise_for_status()

        data = resp.json()
        returned = [
            item["name"]
            for item in (data if isinstance(data, list) else [])
            if isinstance(item, dict) and isinstance(item.get("name"), str)
        ]
        logger.info(
            "Issue labels added",
            extra={
                "repo": self._repository_name,
                "issue_number": issue_number,
                "requested_labels": normalized,
                "returned_labels": returned,
            },
        )
        return returned

    def close(self) -> None:
        self._session.close()
        if self._github is not None:
            self._github.close()
