from __future__ import annotations

from typing import Sequence

from .models import AuditReport, AuthorActivity

RULE = "=" * 40


def fmt_int(n: int) -> str:
    return f"{int(n):,}"


def section(title: str) -> list[str]:
    return [title, "-" * len(title)]


def render_header(folders: Sequence[str]) -> str:
    lines = [
        "Script Audit Tool - Git History Analysis",
        RULE,
        f"Analyzing folders: {','.join(folders)}",
        "",
    ]
    return "\n".join(lines)


def render_author(st: AuthorActivity) -> list[str]:
    return [
        st.author,
        f"  - Total Changes: {fmt_int(st.total)}",
        f"  - Change Types: Added: {fmt_int(st.added)}, Modified: {fmt_int(st.modified)}, Deleted: {fmt_int(st.deleted)}",
        f"  - Commits: {fmt_int(st.commits)}",
        "",
    ]


def render_report(report: AuditReport) -> str:
    lines: list[str] = []
    lines.append(RULE)
    lines.append("AUDIT SUMMARY")
    lines.append(RULE)
    lines.append("")
    lines.append(f"Total Changes Found: {fmt_int(report.total_changes)}")
    lines.append(f"Number of Unique Users: {fmt_int(report.unique_authors)}")
    lines.append("")

    lines.extend(section("USER ACTIVITY BREAKDOWN:"))
    for st in report.authors:
        if not st.author:
            continue
        lines.extend(render_author(st))
    if not report.authors:
        lines.append("(no changes)")
        lines.append("")

    lines.extend(section("CHANGE TYPE SUMMARY:"))
    for change_type, count in report.change_types.items():
        lines.append(f"{change_type}: {fmt_int(count)}")
    lines.append("")

    lines.extend(section("CHANGES BY FOLDER:"))
    for folder, count in report.folders.items():
        lines.append(f"{folder}: {fmt_int(count)} changes")
    lines.append("")

    lines.extend(section(f"RECENT CHANGES (Last {len(report.recent)}):"))
    for r in report.recent:
        lines.append(f"{r.date} | {r.author} | {r.change_type} | {r.file_path}")
    lines.append("")
    return "\n".join(lines)
