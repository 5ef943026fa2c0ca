"""Structured results of a sync run.

Each repository yields exactly one report, either `SyncSuccess` or
`SyncFailure`. A failure in one repository never affects another's report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from label_sync.labels import Label

if TYPE_CHECKING:
    from label_sync.manifest import RepositoryManifest


@dataclass(frozen=True, slots=True)
class ConfigError:
    """A repository whose manifest could not be parsed or validated."""

    repository: str
    message: str


@dataclass(frozen=True, slots=True)
class IssueRef:
    """Minimal issue data needed for sibling propagation."""

    number: int
    title: str
    labels: list[Label] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SiblingIssueReport:
    issue: IssueRef
    siblings: list[Label]


@dataclass(frozen=True, slots=True)
class SiblingSyncReport:
    repository: str
    dry_run: bool
    issues: list[SiblingIssueReport] = field(default_factory=list)

    @property
    def changed_issues(self) -> list[SiblingIssueReport]:
        return [item for item in self.issues if item.siblings]


ApplyAction = Literal["add", "update", "remove", "siblings"]


@dataclass(frozen=True, slots=True)
class ApplyFailure:
    """A single remote change that could not be applied."""

    action: ApplyAction
    target: str
    message: str


@dataclass(frozen=True, slots=True)
class SyncSuccess:
    owner: str
    repo: str
    additions: list[Label]
    updates: list[Label]
    removals: list[Label]
    config: RepositoryManifest
    siblings: SiblingSyncReport | None = None
    apply_failures: list[ApplyFailure] = field(default_factory=list)

    status: Literal["success"] = "success"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class SyncFailure:
    owner: str
    repo: str
    message: str
    config: RepositoryManifest

    status: Literal["failure"] = "failure"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


SyncReport = SyncSuccess | SyncFailure


@dataclass(frozen=True, slots=True)
class SyncRunReport:
    dry_run: bool
    syncs: list[SyncReport] = field(default_factory=list)
    config_errors: list[ConfigError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.config_errors and all(
            isinstance(s, SyncSuccess) and not s.apply_failures for s in self.syncs
        )
