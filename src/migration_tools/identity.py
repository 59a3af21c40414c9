from __future__ import annotations

import dataclasses
import re
from typing import Callable, Iterable, Sequence

from .models import ChangeRecord

# (a, b) -> True when both identities denote the same person.
IdentityRule = Callable[[str, str], bool]

_EMAIL_NAME_RE = re.compile(r"^([a-z]+)\.([a-z]+)@", re.IGNORECASE)


def normalize_name(name: str) -> str:
    return name.strip().casefold()


def collapse_identity(identity: str) -> str:
    return "".join(identity.split()).casefold()


def has_whitespace(identity: str) -> bool:
    return any(ch.isspace() for ch in identity.strip())


def email_name_parts(identity: str) -> tuple[str, str] | None:
    """
    Split a `firstname.lastname@domain` identity into (firstname, lastname), case-folded.
    Returns None for anything else.
    """
    m = _EMAIL_NAME_RE.match(identity.strip())
    if not m:
        return None
    return m.group(1).casefold(), m.group(2).casefold()


def same_collapsed_name(a: str, b: str) -> bool:
    ca = collapse_identity(a)
    return bool(ca) and ca == collapse_identity(b)


def _email_matches_name(email_side: str, name_side: str) -> bool:
    parts = email_name_parts(email_side)
    if parts is None:
        return False
    tokens = name_side.split()
    if len(tokens) < 2:
        return False
    first, last = parts
    return normalize_name(tokens[0]) == first and normalize_name(tokens[-1]) == last


def email_matches_display_name(a: str, b: str) -> bool:
    return _email_matches_name(a, b) or _email_matches_name(b, a)


DEFAULT_RULES: tuple[IdentityRule, ...] = (same_collapsed_name, email_matches_display_name)


def identities_match(a: str, b: str, rules: Sequence[IdentityRule] = DEFAULT_RULES) -> bool:
    return any(rule(a, b) for rule in rules)


@dataclasses.dataclass
class IdentityGroups:
    """Union-find over raw identities."""

    parent: dict[str, str] = dataclasses.field(default_factory=dict)

    def add(self, identity: str) -> None:
        self.parent.setdefault(identity, identity)

    def find(self, identity: str) -> str:
        self.add(identity)
        root = identity
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[identity] != root:
            self.parent[identity], identity = root, self.parent[identity]
        return root

    def union(self, a: str, b: str) -> None:
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return
        # Keep roots deterministic regardless of pairing order.
        if rb < ra:
            ra, rb = rb, ra
        self.parent[rb] = ra

    def groups(self) -> list[list[str]]:
        by_root: dict[str, list[str]] = {}
        for identity in self.parent:
            by_root.setdefault(self.find(identity), []).append(identity)
        return [sorted(members) for _root, members in sorted(by_root.items())]


def preferred_identity(members: Iterable[str]) -> str:
    pool = sorted(set(members))
    if not pool:
        return ""
    formatted = [m for m in pool if has_whitespace(m)]
    if formatted:
        pool = [m for m in formatted if "@" not in m] or formatted
    return pool[0]


def build_canonical_map(identities: Iterable[str], rules: Sequence[IdentityRule] = DEFAULT_RULES) -> dict[str, str]:
    distinct = sorted(set(identities))
    groups = IdentityGroups()
    for identity in distinct:
        groups.add(identity)
    for i, a in enumerate(distinct):
        for b in distinct[i + 1 :]:
            if identities_match(a, b, rules):
                groups.union(a, b)

    author_map: dict[str, str] = {}
    for members in groups.groups():
        chosen = preferred_identity(members)
        for m in members:
            author_map[m] = chosen
    return author_map


def canonicalize_records(records: Iterable[ChangeRecord], author_map: dict[str, str]) -> list[ChangeRecord]:
    out: list[ChangeRecord] = []
    for r in records:
        mapped = author_map.get(r.author, r.author)
        out.append(r if mapped == r.author else dataclasses.replace(r, author=mapped))
    return out


def normalize_records(
    records: Sequence[ChangeRecord],
    rules: Sequence[IdentityRule] = DEFAULT_RULES,
) -> tuple[list[ChangeRecord], dict[str, str]]:
    author_map = build_canonical_map((r.author for r in records), rules)
    return canonicalize_records(records, author_map), author_map
