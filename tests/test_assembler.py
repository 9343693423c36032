"""Tests for the dataset assembler."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from diabreport.reports.assembler import assemble, window_bounds
from diabreport.reports.types import ReportType


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


JAN_START = date(2024, 1, 1)
JAN_END = date(2024, 1, 31)


@pytest.fixture
def january_users() -> list[dict]:
    """Four users created in January 2024, two of them admins."""
    return [
        {"id": "a1", "name": "Admin Um", "role": "admin", "createdAt": _utc(2024, 1, 3, 12)},
        {"id": "u1", "name": "Ana", "role": "user", "createdAt": _utc(2024, 1, 5, 12)},
        {"id": "a2", "name": "Admin Dois", "role": "admin", "createdAt": _utc(2024, 1, 20, 12)},
        {"id": "u2", "name": "Bruno", "role": "user", "createdAt": _utc(2024, 1, 25, 12)},
    ]


class TestWindowBounds:

    def test_widened_to_whole_days(self):
        lower, upper = window_bounds(JAN_START, JAN_END)
        assert lower == _utc(2024, 1, 1, 0, 0, 0)
        assert upper == datetime(2024, 1, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)


class TestAssemble:

    def test_admins_excluded_from_users_report(self, january_users):
        dataset = assemble(ReportType.USERS, january_users, JAN_START, JAN_END)
        assert [row.id for row in dataset.rows] == ["u2", "u1"]
        assert all("Admin" not in row.values["nome"] for row in dataset.rows)

    def test_role_only_applies_to_users(self):
        foods = [{"id": "f1", "name": "Arroz", "role": "admin"}]
        dataset = assemble(ReportType.FOODS, foods, JAN_START, JAN_END)
        assert dataset.row_count == 1

    def test_sorted_newest_first(self):
        records = [
            {"id": "old", "name": "A", "createdAt": _utc(2024, 1, 2)},
            {"id": "new", "name": "B", "createdAt": _utc(2024, 1, 30)},
            {"id": "mid", "name": "C", "createdAt": _utc(2024, 1, 15)},
        ]
        dataset = assemble(ReportType.FOODS, records, JAN_START, JAN_END)
        assert [row.id for row in dataset.rows] == ["new", "mid", "old"]

    def test_descending_property_holds(self):
        records = [
            {"id": f"f{i}", "name": str(i), "createdAt": _utc(2024, 1, 1 + (i * 7) % 28)}
            for i in range(20)
        ]
        records.append({"id": "undated", "name": "sem data"})
        rows = assemble(ReportType.FOODS, records, JAN_START, JAN_END).rows
        stamps = [row.created_at for row in rows]
        assert stamps[-1] is None
        dated = stamps[:-1]
        assert all(a >= b for a, b in zip(dated, dated[1:]))

    def test_undated_records_sort_last(self):
        records = [
            {"id": "x", "name": "Sem data"},
            {"id": "y", "name": "Com data", "createdAt": _utc(2024, 1, 10)},
        ]
        dataset = assemble(ReportType.COMPLICATIONS, records, JAN_START, JAN_END)
        assert [row.id for row in dataset.rows] == ["y", "x"]

    def test_ties_keep_fetch_order(self):
        same = _utc(2024, 1, 10, 9)
        records = [{"id": f"m{i}", "genericName": str(i), "createdAt": same} for i in range(5)]
        dataset = assemble(ReportType.MEDICATIONS, records, JAN_START, JAN_END)
        assert [row.id for row in dataset.rows] == ["m0", "m1", "m2", "m3", "m4"]

    def test_duplicates_dropped(self):
        records = [
            {"id": "f1", "name": "Primeiro", "createdAt": _utc(2024, 1, 10)},
            {"id": "f1", "name": "Repetido", "createdAt": _utc(2024, 1, 11)},
        ]
        dataset = assemble(ReportType.FOODS, records, JAN_START, JAN_END)
        assert dataset.row_count == 1
        assert dataset.rows[0].values["nome"] == "Primeiro"

    def test_synthetic_ids(self):
        records = [{"name": "A"}, {"name": "B"}]
        dataset = assemble(ReportType.FOODS, records, JAN_START, JAN_END)
        assert sorted(row.id for row in dataset.rows) == ["foods-0", "foods-1"]

    def test_records_outside_window_dropped(self):
        records = [
            {"id": "in", "name": "Dentro", "createdAt": _utc(2024, 1, 31, 23, 59, 59)},
            {"id": "out", "name": "Fora", "createdAt": _utc(2024, 2, 1, 0, 0, 0)},
        ]
        dataset = assemble(ReportType.FOODS, records, JAN_START, JAN_END)
        assert [row.id for row in dataset.rows] == ["in"]

    def test_empty_input(self):
        dataset = assemble(ReportType.FOODS, [], JAN_START, JAN_END)
        assert dataset.is_empty
        assert dataset.columns == ReportType.FOODS.columns

    def test_dataset_carries_window_and_run_time(self):
        run = _utc(2024, 2, 1, 15)
        dataset = assemble(ReportType.FOODS, [], JAN_START, JAN_END, generated_at=run)
        assert dataset.window_start == JAN_START
        assert dataset.window_end == JAN_END
        assert dataset.generated_at == run

    def test_public_records_hide_timestamp(self, january_users):
        dataset = assemble(ReportType.USERS, january_users, JAN_START, JAN_END)
        for record in dataset.to_records():
            assert "createdAt" not in record
            assert "created_at" not in record
            assert list(record)[1:] == list(ReportType.USERS.columns)

    def test_input_is_not_mutated(self, january_users):
        snapshot = [dict(r) for r in january_users]
        assemble(ReportType.USERS, january_users, JAN_START, JAN_END)
        assert january_users == snapshot
