"""Compute the difference between a repository's current and desired labels."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from label_sync.labels import Label, equals, same_definition


@dataclass(frozen=True, slots=True)
class LabelDiff:
    add: list[Label] = field(default_factory=list)
    update: list[Label] = field(default_factory=list)
    remove: list[Label] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.add or self.update or self.remove)


def _find(label: Label, candidates: Sequence[Label]) -> Label | None:
    # First match wins when names are duplicated.
    for candidate in candidates:
        if same_definition(label, candidate):
            return candidate
    return None


def diff(current: Sequence[Label], desired: Sequence[Label]) -> LabelDiff:
    """Diff `current` labels against `desired` ones.

    - desired labels missing from current are added
    - desired labels whose current counterpart differs in any field are updated
      (the desired version is reported)
    - current labels missing from desired are removed

    Comparison is exact and case-sensitive; colors are not normalized.
    """

    add: list[Label] = []
    update: list[Label] = []
    remove: list[Label] = []

    for label in desired:
        existing = _find(label, current)
        if existing is None:
            add.append(label)
        elif not equals(label, existing):
            update.append(label)

    for label in current:
        if _find(label, desired) is None:
            remove.append(label)

    return LabelDiff(add=add, update=update, remove=remove)
