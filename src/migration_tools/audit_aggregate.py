from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from .models import CHANGE_TYPES, AuditReport, AuthorActivity, ChangeRecord


def author_activity(records: Sequence[ChangeRecord]) -> list[AuthorActivity]:
    by_author: dict[str, AuthorActivity] = {}
    commits_by_author: dict[str, set[str]] = defaultdict(set)
    for r in records:
        st = by_author.get(r.author)
        if st is None:
            st = AuthorActivity(author=r.author)
            by_author[r.author] = st
        st.total += 1
        if r.change_type == "Added":
            st.added += 1
        elif r.change_type == "Modified":
            st.modified += 1
        elif r.change_type == "Deleted":
            st.deleted += 1
        commits_by_author[r.author].add(r.commit)

    for author, st in by_author.items():
        st.commits = len(commits_by_author[author])
    return sorted(by_author.values(), key=lambda st: (-st.total, st.author))


def change_type_counts(records: Sequence[ChangeRecord]) -> dict[str, int]:
    counts: dict[str, int] = {t: 0 for t in CHANGE_TYPES}
    for r in records:
        counts[r.change_type] = counts.get(r.change_type, 0) + 1
    return counts


def folder_counts(records: Sequence[ChangeRecord]) -> dict[str, int]:
    counts: dict[str, int] = defaultdict(int)
    for r in records:
        counts[r.folder] += 1
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def recent_changes(records: Sequence[ChangeRecord], limit: int = 10) -> list[ChangeRecord]:
    # Stable sort: same-day records keep collection order.
    return sorted(records, key=lambda r: r.date, reverse=True)[: max(0, limit)]


def build_report(records: Sequence[ChangeRecord], recent_limit: int = 10) -> AuditReport:
    authors = author_activity(records)
    return AuditReport(
        total_changes=len(records),
        unique_authors=len(authors),
        authors=authors,
        change_types=change_type_counts(records),
        folders=folder_counts(records),
        recent=recent_changes(records, recent_limit),
    )
