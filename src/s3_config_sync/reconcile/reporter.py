"""Diff report formatting.

- ``format_value`` -- render one configuration value for display.
- ``format_diff_report`` -- human-readable ``[ADDED]``/``[REMOVED]``/
  ``[UPDATED]`` listing.
- ``report_to_json`` -- structured dict for ``--json`` output.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import DiffReport


def format_value(value: Any) -> str:
    """Strings are shown as-is; everything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str, ensure_ascii=False)


def format_diff_report(report: DiffReport, dry_run: bool = False) -> str:
    """Format a diff report as human-readable text.

    Groups are printed in the order added, removed, updated; each keeps
    the order of the report's lists.

    Args:
        report: The diff report.
        dry_run: Mark the header so readers know nothing was published.

    Returns:
        Multi-line formatted string.
    """
    header = "Configuration differences"
    if dry_run:
        header += " (DRY RUN)"
    lines: list[str] = [header]

    for entry in report.added:
        lines.append(f"[ADDED] {entry.key}: {format_value(entry.value)}")

    for entry in report.removed:
        lines.append(f"[REMOVED] {entry.key}: {format_value(entry.value)}")

    for entry in report.updated:
        lines.append(
            f"[UPDATED] {entry.key}: "
            f"{format_value(entry.old_value)} => {format_value(entry.new_value)}"
        )

    if not report.has_changes:
        lines.append("No changes")

    return "\n".join(lines)


def _json_safe(value: Any) -> Any:
    # Same fallback as format_value: anything json can't encode becomes str()
    return json.loads(json.dumps(value, default=str, ensure_ascii=False))


def report_to_json(report: DiffReport, dry_run: bool = False) -> dict:
    """Convert a diff report to a JSON-serializable dict.

    Values JSON cannot represent (bytes from YAML ``!!binary``, dates)
    are rendered the way ``format_value`` renders them.

    Returns:
        Dict with keys: dry_run, summary, added, removed, updated.
    """
    data = _json_safe(report.model_dump())
    return {
        "dry_run": dry_run,
        "summary": {
            "added": len(report.added),
            "removed": len(report.removed),
            "updated": len(report.updated),
        },
        **data,
    }
