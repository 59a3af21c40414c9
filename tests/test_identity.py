from __future__ import annotations

from migration_tools.identity import (
    IdentityGroups,
    build_canonical_map,
    canonicalize_records,
    collapse_identity,
    email_matches_display_name,
    normalize_records,
    preferred_identity,
    same_collapsed_name,
)
from migration_tools.models import ChangeRecord


def _rec(author: str, commit: str = "c1", change_type: str = "Added") -> ChangeRecord:
    return ChangeRecord(
        folder="Scripts",
        author=author,
        email=f"{author.replace(' ', '').lower()}@example.com",
        date="2025-01-01",
        change_type=change_type,
        file_path="Scripts/a.sql",
        commit=commit,
        message="msg",
    )


def test_collapse_identity_ignores_case_and_whitespace() -> None:
    assert collapse_identity("John  Smith") == "johnsmith"
    assert collapse_identity(" JOHN\tsmith ") == "johnsmith"
    assert same_collapsed_name("John Smith", "johnsmith") is True
    assert same_collapsed_name("John Smith", "Jane Smith") is False


def test_case_and_whitespace_variants_share_one_canonical_value() -> None:
    variants = ["John Smith", "john smith", "JOHN  SMITH", "johnsmith", "JohnSmith"]
    m = build_canonical_map(variants)
    assert len(set(m.values())) == 1
    canonical = m["johnsmith"]
    assert canonical in variants
    assert " " in canonical


def test_email_rule_requires_first_and_last_token_equality() -> None:
    assert email_matches_display_name("john.smith@co.com", "John Smith") is True
    assert email_matches_display_name("John Smith", "john.smith@co.com") is True
    assert email_matches_display_name("John Q Smith", "John.Smith@co.com") is True
    assert email_matches_display_name("jsmith@co.com", "John Smith") is False
    assert email_matches_display_name("john.smith@co.com", "John") is False
    assert email_matches_display_name("john.smith@co.com", "Jane Smith") is False


def test_email_and_display_name_collapse_to_display_name() -> None:
    m = build_canonical_map(["John Smith", "john.smith@co.com", "jsmith@co.com"])
    assert m["john.smith@co.com"] == "John Smith"
    assert m["John Smith"] == "John Smith"
    assert m["jsmith@co.com"] == "jsmith@co.com"


def test_groups_are_transitive() -> None:
    # "johnsmith" matches "John Smith" (rule 1), "John Smith" matches the email (rule 2),
    # "johnsmith" and the email never match directly.
    m = build_canonical_map(["johnsmith", "John Smith", "john.smith@co.com"])
    assert m["johnsmith"] == m["john.smith@co.com"] == "John Smith"


def test_canonical_map_is_idempotent() -> None:
    identities = ["John Smith", "john.smith@co.com", "johnsmith", "Jane Doe", "jane.doe@x.org", "solo"]
    m = build_canonical_map(identities)
    for identity in identities:
        assert m[m[identity]] == m[identity]


def test_preferred_identity_order() -> None:
    assert preferred_identity(["johnsmith", "John Smith"]) == "John Smith"
    assert preferred_identity(["John Smith <john@x>", "John Smith"]) == "John Smith"
    # Formatted name containing "@" still wins over a bare token.
    assert preferred_identity(["john.smith@co.com", "John Smith @home"]) == "John Smith @home"
    assert preferred_identity(["zed", "alpha"]) == "alpha"


def test_identity_groups_union_find() -> None:
    g = IdentityGroups()
    g.union("b", "c")
    g.union("a", "b")
    g.add("d")
    assert g.find("c") == g.find("a")
    assert g.find("d") == "d"
    assert g.groups() == [["a", "b", "c"], ["d"]]


def test_custom_rule_set_is_pluggable() -> None:
    def same_initial(a: str, b: str) -> bool:
        return a[:1].lower() == b[:1].lower()

    m = build_canonical_map(["alice", "Adam West", "bob"], rules=[same_initial])
    assert m["alice"] == "Adam West"
    assert m["bob"] == "bob"


def test_canonicalize_records_only_rewrites_author() -> None:
    records = [_rec("john.smith@co.com", commit="c1"), _rec("John Smith", commit="c2")]
    out, author_map = normalize_records(records)
    assert [r.author for r in out] == ["John Smith", "John Smith"]
    assert out[0].email == records[0].email
    assert out[0].date == records[0].date
    assert out[0].file_path == records[0].file_path
    assert author_map["john.smith@co.com"] == "John Smith"

    unknown = canonicalize_records([_rec("Someone Else")], author_map)
    assert unknown[0].author == "Someone Else"
