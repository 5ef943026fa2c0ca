"""Label reconciliation.

- `diff`: current vs desired labels -> add/update/remove
- `policy`: which of those changes may be applied
- `siblings`: labels to mirror onto issues carrying trigger labels
- `report`: per-repository results
- `runner`: fetch/diff/plan/apply across many repositories
"""

from .diff import LabelDiff, diff
from .policy import SyncPlan, plan, should_apply
from .report import ConfigError, SyncFailure, SyncReport, SyncRunReport, SyncSuccess
from .siblings import plan_siblings, sibling_labels

__all__ = [
    "ConfigError",
    "LabelDiff",
    "SyncFailure",
    "SyncPlan",
    "SyncReport",
    "SyncRunReport",
    "SyncSuccess",
    "diff",
    "plan",
    "plan_siblings",
    "should_apply",
    "sibling_labels",
]
