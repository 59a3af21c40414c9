from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from .models import ChangeRecord

CSV_HEADER: list[str] = ["Folder", "Author", "Email", "Date", "ChangeType", "File", "Commit", "Message"]


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_changes_csv(path: Path, records: Iterable[ChangeRecord]) -> int:
    ensure_parent_dir(path)
    rows = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for r in records:
            writer.writerow(
                [
                    r.folder,
                    r.author,
                    r.email,
                    r.date,
                    r.change_type,
                    r.file_path,
                    r.commit,
                    r.message,
                ]
            )
            rows += 1
    return rows


def write_text_report(path: Path, text: str) -> None:
    ensure_parent_dir(path)
    path.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
