"""Tests for query filters and the in-memory and JSON record sources."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone

import pytest

from diabreport.reports.types import ReportType
from diabreport.sources import Filter, InMemoryRecordSource, JsonFileRecordSource, report_filters


@pytest.fixture
def users():
    return [
        {"id": "u1", "role": "user", "name": "Ana", "createdAt": "2024-01-10T12:00:00Z"},
        {"id": "a1", "role": "admin", "name": "Root", "createdAt": "2024-01-11T12:00:00Z"},
        {"id": "u2", "role": "user", "name": "Bia", "createdAt": "2024-02-02T12:00:00Z"},
        {"id": "u3", "role": "user", "name": "Caio"},
    ]


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestFilter:

    def test_equality(self):
        flt = Filter(field="role", op="==", value="user")
        assert flt.matches({"role": "user"})
        assert not flt.matches({"role": "admin"})

    def test_missing_field_never_matches(self):
        assert not Filter(field="role", op="==", value="user").matches({})
        assert not Filter(field="createdAt", op=">=", value=datetime(2024, 1, 1, tzinfo=timezone.utc)).matches({})

    def test_created_at_compares_timestamps(self):
        lower = Filter(field="createdAt", op=">=", value=datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert lower.matches({"createdAt": "2024-01-01T00:00:00Z"})
        assert not lower.matches({"createdAt": "2023-12-31T23:59:59Z"})

    def test_unparseable_timestamp(self):
        flt = Filter(field="createdAt", op="<=", value=datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert not flt.matches({"createdAt": "amanhã"})

    def test_incomparable_values(self):
        assert not Filter(field="weight", op=">=", value=10).matches({"weight": "heavy"})

    def test_rejects_unknown_operator(self):
        with pytest.raises(ValueError):
            Filter(field="role", op="!=", value="user")


class TestReportFilters:

    def test_users_get_role_filter(self):
        filters = report_filters(ReportType.USERS, date(2024, 1, 1), date(2024, 1, 31))
        assert [(f.field, f.op) for f in filters] == [
            ("role", "=="), ("createdAt", ">="), ("createdAt", "<="),
        ]
        assert filters[0].value == "user"

    def test_window_bounds(self):
        filters = report_filters(ReportType.FOODS, date(2024, 1, 1), date(2024, 1, 31))
        assert len(filters) == 2
        assert filters[0].value == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert filters[1].value == datetime(2024, 1, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


class TestInMemoryRecordSource:

    def test_fetch_applies_filters(self, users):
        source = InMemoryRecordSource({"users": users})
        records = source.fetch_records("users", report_filters(ReportType.USERS, date(2024, 1, 1), date(2024, 1, 31)))
        assert [r["id"] for r in records] == ["u1"]

    def test_unknown_collection_is_empty(self):
        assert InMemoryRecordSource().fetch_records("foods", []) == []

    def test_records_are_copied(self, users):
        source = InMemoryRecordSource({"users": users})
        users[0]["name"] = "Changed"
        assert source.fetch_records("users", [])[0]["name"] == "Ana"

    def test_add_records(self):
        source = InMemoryRecordSource()
        source.add_records("foods", [{"name": "Arroz"}])
        source.add_records("foods", [{"name": "Feijão"}])
        assert [r["name"] for r in source.fetch_records("foods", [])] == ["Arroz", "Feijão"]
        assert source.is_available()


class TestJsonFileRecordSource:

    def test_loads_lazily(self, tmp_path, users):
        path = tmp_path / "store.json"
        source = JsonFileRecordSource(path)
        assert not source.is_available()
        path.write_text(json.dumps({"users": users}), encoding="utf-8")
        assert source.is_available()
        assert len(source.fetch_records("users", [])) == 4

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonFileRecordSource(tmp_path / "absent.json").fetch_records("users", [])

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonFileRecordSource(path).fetch_records("users", [])

    def test_non_list_collections_ignored(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"meta": {"version": 1}, "foods": [{"name": "Arroz"}]}), encoding="utf-8")
        source = JsonFileRecordSource(path)
        assert source.fetch_records("meta", []) == []
        assert source.fetch_records("foods", []) == [{"name": "Arroz"}]
