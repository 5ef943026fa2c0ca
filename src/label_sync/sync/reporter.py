"""Human-readable terminal reports."""

from __future__ import annotations

from label_sync.labels import Label

from .report import SiblingSyncReport, SyncReport, SyncRunReport, SyncSuccess


def _names(labels: list[Label]) -> str:
    return ", ".join(label.name for label in labels)


def render_siblings(report: SiblingSyncReport) -> str:
    lines = [f"Siblings in {report.repository} (dry run: {str(report.dry_run).lower()})"]
    changed = report.changed_issues
    if not changed:
        lines.append("  No sibling labels to add.")
    for item in changed:
        lines.append(f"  - {item.issue.title} (#{item.issue.number})")
        lines.append(f"    Added {_names(item.siblings)}.")
    return "\n".join(lines)


def render_repository(report: SyncReport) -> str:
    if isinstance(report, SyncSuccess):
        return _render_success(report)
    return "\n".join([f"[failed] {report.full_name}", f"  {report.message}"])


def _render_success(report: SyncSuccess) -> str:
    lines = [f"[ok] {report.full_name} (strict: {str(report.config.strict).lower()})"]
    if not (report.additions or report.updates or report.removals):
        lines.append("  Labels are up to date.")
    if report.additions:
        lines.append(f"  Added: {_names(report.additions)}")
    if report.updates:
        lines.append(f"  Updated: {_names(report.updates)}")
    if report.removals:
        lines.append(f"  Removed: {_names(report.removals)}")
    for failure in report.apply_failures:
        lines.append(f"  ! {failure.action} {failure.target}: {failure.message}")
    if report.siblings is not None:
        lines.append(render_siblings(report.siblings))
    return "\n".join(lines)


def render_run_report(report: SyncRunReport) -> str:
    """Render a full sync run for the terminal."""

    sections = [
        "Label Sync Report",
        "This is an autogenerated report for your project.",
        f"(dry run: {str(report.dry_run).lower()})",
        "",
    ]
    sections.extend(render_repository(sync) for sync in report.syncs)
    sections.append("")

    if not report.config_errors:
        sections.append("Synced all repositories with no problems!")
    else:
        sections.append("Check the configuration of these projects:")
        sections.extend(f"  {error.message}" for error in report.config_errors)
    return "\n".join(sections)
