#!/usr/bin/env python3
"""Programmatic label diff example.

This demonstrates using the reconciliation components directly:

* hydrate a manifest
* fetch the current labels of a repository
* print what a strict or non-strict sync would change (nothing is applied)

The token is read from `.env` / the environment like the CLI does.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from label_sync.config import LabelSyncSettings
from label_sync.github.client import GitHubClient
from label_sync.labels import hydrate
from label_sync.logging import configure_logging
from label_sync.sync import diff, plan

MANIFEST = {
    "bug": {"color": "d73a4a", "description": "Something isn't working"},
    "enhancement": {"color": "a2eeef", "description": "New feature or request"},
    "needs-triage": "fbca04",
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview a label sync (programmatic example).")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument("--strict", action="store_true", help="Also plan label removals")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = LabelSyncSettings()
    configure_logging(settings.log_level)

    github = GitHubClient(
        token=settings.github_token,
        repository=args.repo,
        base_url=settings.github_base_url,
    )
    try:
        current = github.list_labels()
    finally:
        github.close()

    sync_plan = plan(diff(current, hydrate(MANIFEST)), strict=args.strict, dry_run=True)

    for label in sync_plan.to_add:
        print(f"+ {label.name} ({label.color})")
    for label in sync_plan.to_update:
        print(f"~ {label.name} ({label.color})")
    for label in sync_plan.to_remove:
        print(f"- {label.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
