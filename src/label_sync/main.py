"""CLI entrypoint for label-sync."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from label_sync import __version__
from label_sync.config import LabelSyncSettings
from label_sync.logging import configure_logging
from label_sync.manifest import ConfigFileError, load_config
from label_sync.sync.reporter import render_run_report
from label_sync.sync.runner import LabelSyncRunner, SyncOptions, default_client_factory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="label-sync",
        description="Synchronize GitHub labels with a declarative configuration file",
    )
    parser.add_argument("--version", action="version", version=f"label-sync {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser(
        "sync",
        help="Sync labels of every configured repository",
    )
    sync.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to the label configuration file (defaults to LABEL_SYNC_CONFIG or labels.json)",
    )
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Report changes without applying them, regardless of the current branch",
    )

    validate = subparsers.add_parser(
        "validate",
        help="Validate the configuration file without contacting GitHub",
    )
    validate.add_argument(
        "-c",
        "--config",
        default="labels.json",
        help="Path to the label configuration file",
    )

    return parser


def _validate(config_path: Path) -> int:
    configure_logging("WARNING")
    try:
        loaded = load_config(config_path)
    except ConfigFileError as e:
        print(str(e), file=sys.stderr)
        return 2

    for name in loaded.repositories:
        print(f"ok: {name}")
    for error in loaded.errors:
        print(f"invalid: {error.message}")
    return 0 if not loaded.errors else 4


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "validate":
        return _validate(Path(args.config))

    try:
        settings = LabelSyncSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Missing GitHub configuration (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "sync":
            config_path = Path(args.config) if args.config else settings.config_path
            try:
                loaded = load_config(config_path)
            except ConfigFileError as e:
                logger.error(str(e), extra={"path": str(config_path)})
                print(str(e), file=sys.stderr)
                return 2

            dry_run = args.dry_run or settings.is_dry_run(loaded.publish.branch)
            runner = LabelSyncRunner(
                client_factory=default_client_factory(
                    token=settings.github_token, base_url=settings.github_base_url
                ),
                options=SyncOptions(dry_run=dry_run, max_workers=settings.max_workers),
            )
            report = runner.run(loaded)
            print(render_run_report(report))

            # Exit codes are designed to be CI-friendly.
            return 0 if report.ok else 4

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
