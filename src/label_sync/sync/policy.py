from __future__ import annotations

from dataclasses import dataclass, field

from label_sync.labels import Label

from .diff import LabelDiff


@dataclass(frozen=True, slots=True)
class SyncPlan:
    """Label changes authorized for one repository.

    The plan always reflects what *would* happen; dry-run only decides whether
    it is executed.
    """

    to_add: list[Label] = field(default_factory=list)
    to_update: list[Label] = field(default_factory=list)
    to_remove: list[Label] = field(default_factory=list)


def plan(label_diff: LabelDiff, *, strict: bool, dry_run: bool) -> SyncPlan:
    """Policy: (diff, strictness) -> authorized changes.

    Additions and updates are always permitted. Removals only happen in strict
    mode, so an incomplete manifest never deletes labels by accident.
    """

    _ = dry_run
    return SyncPlan(
        to_add=list(label_diff.add),
        to_update=list(label_diff.update),
        to_remove=list(label_diff.remove) if strict is True else [],
    )


def should_apply(*, dry_run: bool) -> bool:
    return not dry_run
