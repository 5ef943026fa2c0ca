"""Sibling label propagation.

A manifest label can declare "siblings": labels that should also be present on
an issue whenever the label itself is. Given an issue's labels and the
trigger -> siblings mapping, this module works out which labels to add.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from label_sync.labels import Label

from .report import IssueRef, SiblingIssueReport

SiblingsConfig = Mapping[str, Sequence[str]]


def sibling_labels(
    issue_labels: Iterable[Label],
    siblings_config: SiblingsConfig,
    catalog: Sequence[Label] = (),
    *,
    skip_present: bool = True,
) -> list[Label]:
    """Return the sibling labels to add to an issue.

    Sibling names are resolved against `catalog` (normally the hydrated
    manifest); names missing from it become bare labels. The result keeps
    first-seen order and holds each name at most once.

    Args:
        skip_present: Leave out labels the issue already carries. Pass False
            when the siblings go to an issue in another repository.
    """

    present = [label.name for label in issue_labels]
    by_name: dict[str, Label] = {}
    for label in catalog:
        by_name.setdefault(label.name, label)

    siblings: list[Label] = []
    seen: set[str] = set()
    for trigger in present:
        for name in siblings_config.get(trigger, ()):
            if name in seen or (skip_present and name in present):
                continue
            seen.add(name)
            siblings.append(by_name.get(name, Label(name=name, color="")))
    return siblings


def plan_siblings(
    issues: Iterable[IssueRef],
    siblings_config: SiblingsConfig,
    catalog: Sequence[Label] = (),
    *,
    skip_present: bool = True,
) -> list[SiblingIssueReport]:
    return [
        SiblingIssueReport(
            issue=issue,
            siblings=sibling_labels(
                issue.labels, siblings_config, catalog, skip_present=skip_present
            ),
        )
        for issue in issues
    ]
