from __future__ import annotations

import pytest

from migration_tools.errors import ConfigurationError, EmptyResultError
from migration_tools.models import DiffChangeEntry
from migration_tools.sync_select import (
    ObjectName,
    join_change_ids,
    parse_object_name,
    parse_object_names,
    reselect,
    select_changes,
    synthesize_description,
)

ENTRIES = [
    DiffChangeEntry("id-1", "Edit", "Table", "Operation", "Products"),
    DiffChangeEntry("id-2", "Add", "Table", "Sales", "Customers"),
]


def test_parse_object_names() -> None:
    assert parse_object_name("Operation.Products") == ObjectName("Operation", "Products")
    assert parse_object_name(" [dbo].[MissionDetail] ") == ObjectName("dbo", "MissionDetail")
    assert parse_object_names(["Operation.Products,Sales.Customers", "dbo.X"]) == [
        ObjectName("Operation", "Products"),
        ObjectName("Sales", "Customers"),
        ObjectName("dbo", "X"),
    ]
    assert str(ObjectName("Sales", "Customers")) == "Sales.Customers"


@pytest.mark.parametrize("bad", ["Products", ".Products", "Operation.", "", "  "])
def test_parse_object_name_rejects_malformed(bad: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_object_name(bad)


def test_select_single_object() -> None:
    sel = select_changes(ENTRIES, [ObjectName("Operation", "Products")], select_all=False)
    assert [e.change_id for e in sel.entries] == ["id-1"]
    assert sel.unmatched == []


def test_select_reports_unmatched_but_continues() -> None:
    sel = select_changes(
        ENTRIES,
        [ObjectName("Missing", "Thing"), ObjectName("Sales", "Customers")],
        select_all=False,
    )
    assert [e.change_id for e in sel.entries] == ["id-2"]
    assert sel.unmatched == [ObjectName("Missing", "Thing")]


def test_select_match_is_exact() -> None:
    with pytest.raises(EmptyResultError) as exc:
        select_changes(ENTRIES, [ObjectName("operation", "products")], select_all=False)
    assert exc.value.benign is False


def test_select_all_and_empty_diff() -> None:
    assert select_changes(ENTRIES, [], select_all=True).entries == ENTRIES
    with pytest.raises(EmptyResultError) as exc:
        select_changes([], [], select_all=True)
    assert exc.value.benign is True


def test_select_objects_from_empty_diff_is_a_failure() -> None:
    with pytest.raises(EmptyResultError) as exc:
        select_changes([], [ObjectName("Operation", "Products")], select_all=False)
    assert exc.value.benign is False
    assert "Operation.Products" in str(exc.value)


def test_reselect_matches_by_object() -> None:
    later = [
        DiffChangeEntry("new-9", "Edit", "Table", "Operation", "Products"),
        DiffChangeEntry("new-8", "Add", "View", "dbo", "Other"),
    ]
    assert [e.change_id for e in reselect(later, ENTRIES[:1])] == ["new-9"]


def test_join_change_ids() -> None:
    assert join_change_ids(ENTRIES) == "id-1,id-2"


def test_synthesize_description() -> None:
    entries = [
        DiffChangeEntry("a", "Edit", "Stored Procedure", "Logistics", "AddMaintenanceLog"),
        DiffChangeEntry("b", "Edit", "Table", "dbo", "MissionDetail"),
    ]
    assert (
        synthesize_description(entries, "main", "turimbar1")
        == "main_Edit_Logistics_AddMaintenanceLog_Edit_dbo_MissionDetail_turimbar1"
    )
    assert synthesize_description(entries[:1], "release 1.2", "John Q. Smith") == (
        "release_1_2_Edit_Logistics_AddMaintenanceLog_John_Q_Smith"
    )
    assert synthesize_description(entries[:1], "", "") == "Edit_Logistics_AddMaintenanceLog"
