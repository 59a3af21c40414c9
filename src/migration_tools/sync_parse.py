from __future__ import annotations

import re
from typing import Iterable

from .models import DiffChangeEntry

NO_DIFFERENCES = "No differences found"

_BORDER_RE = re.compile(r"^\s*\+[-=+]+\+\s*$")
_HEADER_RE = re.compile(r"^\s*\|\s*Id\s*\|", re.IGNORECASE)
_ROW_RE = re.compile(r"^\s*\|([^|]*)\|([^|]*)\|([^|]*)\|([^|]*)\|([^|]*)\|\s*$")


def is_table_start(line: str) -> bool:
    return bool(_BORDER_RE.match(line) or _HEADER_RE.match(line))


def parse_row(line: str) -> DiffChangeEntry | None:
    m = _ROW_RE.match(line)
    if not m:
        return None
    change_id, change_type, object_type, schema, name = (g.strip() for g in m.groups())
    if not change_id or change_id.casefold() == "id":
        return None
    if change_id.startswith(NO_DIFFERENCES):
        return None
    return DiffChangeEntry(
        change_id=change_id,
        change_type=change_type,
        object_type=object_type,
        schema=schema,
        name=name,
    )


def iter_diff_entries(lines: Iterable[str]) -> Iterable[DiffChangeEntry]:
    """
    Yield one DiffChangeEntry per data row of a `flyway diff` table.

    Everything before the first border or header line is ignored. After it every line is a
    candidate row until the end of input; lines that are not five-cell rows yield nothing.
    """
    in_table = False
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not in_table:
            in_table = is_table_start(line)
            if not in_table:
                continue
        entry = parse_row(line)
        if entry is not None:
            yield entry


def parse_diff_output(text: str) -> list[DiffChangeEntry]:
    return list(iter_diff_entries(text.splitlines()))


def has_no_differences(text: str) -> bool:
    return NO_DIFFERENCES.casefold() in text.casefold()
