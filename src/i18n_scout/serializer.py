"""Render a ScanReport as plain text or JSON."""

from __future__ import annotations

import json
import os

from i18n_scout.pipeline import ScanReport


def _display_path(path: str, base: str | None) -> str:
    if base is None:
        return path
    rel = os.path.relpath(path, base)
    return path if rel.startswith("..") else rel.replace(os.sep, "/")


def report_to_dict(report: ScanReport, base: str | None = None) -> dict:
    """Plain-data form of a report. Paths are shown relative to ``base`` when inside it."""
    return {
        "reachable_file_count": report.reachable_file_count,
        "reachable_files": [_display_path(p, base) for p in report.reachable_files],
        "error_files": [
            {"path": _display_path(p, base), "reason": report.failures.get(p, "")}
            for p in report.error_files
        ],
        "strings_found": list(report.strings_found),
        "unique_strings": sorted(report.unique_strings),
        "strings_by_file": {
            _display_path(p, base): strings
            for p, strings in report.strings_by_file.items()
            if strings
        },
        "unresolved": [
            {
                "specifier": r.specifier,
                "from_file": _display_path(r.from_file, base),
                "reason": r.reason,
            }
            for r in report.unresolved
        ],
    }


def report_to_json(report: ScanReport, base: str | None = None) -> str:
    return json.dumps(report_to_dict(report, base), indent=2, ensure_ascii=False)


def report_to_text(report: ScanReport, base: str | None = None, *, show_strings: bool = True) -> str:
    """Human-readable summary, one fact per line."""
    unique = sorted(report.unique_strings)
    lines = [f"Found {report.reachable_file_count} files"]

    lines.append(f"{len(report.error_files)} files failed to parse")
    for path in report.error_files:
        reason = report.failures.get(path)
        suffix = f" ({reason})" if reason else ""
        lines.append(f"  {_display_path(path, base)}{suffix}")

    if report.unresolved:
        lines.append(f"{len(report.unresolved)} imports could not be resolved")
        for r in report.unresolved:
            lines.append(f"  {r.specifier} <- {_display_path(r.from_file, base)}")

    lines.append(
        f"Found {len(report.strings_found)} strings out of which {len(unique)} are unique"
    )
    if show_strings:
        for s in unique:
            lines.append(f"  {json.dumps(s, ensure_ascii=False)}")
    return "\n".join(lines)
