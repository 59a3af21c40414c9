from __future__ import annotations

import dataclasses
import re
from typing import Iterable, Sequence

from .errors import ConfigurationError, EmptyResultError
from .models import DiffChangeEntry

_OBJECT_RE = re.compile(r"^\[?([^\[\].\s][^\[\].]*?)\]?\.\[?([^\[\]]*[^\[\]\s])\]?$")
_SEPARATOR_RE = re.compile(r"[\s.]+")


@dataclasses.dataclass(frozen=True)
class ObjectName:
    schema: str
    name: str

    def __str__(self) -> str:
        return f"{self.schema}.{self.name}"


@dataclasses.dataclass
class Selection:
    entries: list[DiffChangeEntry]
    unmatched: list[ObjectName]


def parse_object_name(value: str) -> ObjectName:
    s = (value or "").strip()
    m = _OBJECT_RE.match(s)
    if not m:
        raise ConfigurationError(f"Invalid object name {value!r}: expected Schema.ObjectName (e.g. Operation.Products)")
    return ObjectName(schema=m.group(1).strip(), name=m.group(2).strip())


def parse_object_names(values: Iterable[str]) -> list[ObjectName]:
    out: list[ObjectName] = []
    for v in values:
        for part in str(v).split(","):
            if part.strip():
                out.append(parse_object_name(part))
    return out


def select_changes(
    entries: Sequence[DiffChangeEntry],
    objects: Sequence[ObjectName],
    *,
    select_all: bool,
) -> Selection:
    if not entries:
        if select_all:
            raise EmptyResultError("No changes found.", benign=True)
        wanted = ", ".join(str(o) for o in objects)
        raise EmptyResultError(f"No changes found for the requested objects: {wanted}", benign=False)
    if select_all:
        return Selection(entries=list(entries), unmatched=[])

    selected: list[DiffChangeEntry] = []
    unmatched: list[ObjectName] = []
    for obj in objects:
        matches = [e for e in entries if e.schema == obj.schema and e.name == obj.name]
        if not matches:
            unmatched.append(obj)
            continue
        for e in matches:
            if e not in selected:
                selected.append(e)

    if not selected:
        wanted = ", ".join(str(o) for o in objects)
        raise EmptyResultError(f"None of the requested objects have changes: {wanted}", benign=False)
    return Selection(entries=selected, unmatched=unmatched)


def reselect(entries: Sequence[DiffChangeEntry], previous: Sequence[DiffChangeEntry]) -> list[DiffChangeEntry]:
    """Pick entries of a later diff that refer to the same objects as `previous`."""
    wanted = {(e.schema, e.name) for e in previous}
    return [e for e in entries if (e.schema, e.name) in wanted]


def join_change_ids(entries: Iterable[DiffChangeEntry]) -> str:
    return ",".join(e.change_id for e in entries)


def _safe(part: str) -> str:
    return _SEPARATOR_RE.sub("_", part.strip())


def synthesize_description(entries: Iterable[DiffChangeEntry], branch: str, user: str) -> str:
    parts: list[str] = []
    if branch.strip():
        parts.append(branch)
    for e in entries:
        parts.append(f"{e.change_type}_{e.schema}_{e.name}")
    if user.strip():
        parts.append(user)
    return "_".join(_safe(p) for p in parts if _safe(p))
