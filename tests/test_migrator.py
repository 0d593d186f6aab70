"""Tests for the migration orchestrator and adapters.

Source and target are in-memory fakes that record every call, so batch
counts and ordering can be asserted without a database server.
"""

import json
from decimal import Decimal
from typing import Any

import pytest

from orbit.errors import DependencyGraphError, MigrationAbortedError
from orbit.migration.migrator import Migrator, batched
from orbit.migration.source import SourceDatabase
from orbit.migration.target import TargetDatabase, to_target_value
from orbit.models.domain import ColumnInfo, TableSchema


def id_table(name: str, *extra: ColumnInfo) -> TableSchema:
    return TableSchema(
        name=name,
        columns=[ColumnInfo("id", "integer", False, f"nextval('{name}_id_seq'::regclass)"), *extra],
        primary_key=["id"],
    )


class FakeSource(SourceDatabase):
    """Source backed by dicts of schemas and rows."""

    def __init__(self, tables: dict[str, tuple[TableSchema, list[dict[str, Any]]]]):
        self.tables = tables
        self.fail_on: set[str] = set()
        self.reachable = True

    def ping(self) -> None:
        if not self.reachable:
            raise ConnectionError("connection refused")

    def describe_table(self, name: str) -> TableSchema:
        if name not in self.tables:
            return TableSchema(name=name, columns=[])
        return self.tables[name][0]

    def fetch_rows(self, schema: TableSchema) -> list[dict[str, Any]]:
        if schema.name in self.fail_on:
            raise RuntimeError(f"read failed for {schema.name}")
        return [dict(row) for row in self.tables[schema.name][1]]


class FakeTarget(TargetDatabase):
    """Target that keeps tables as lists of rows and logs every statement."""

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.auto_increment: dict[str, int] = {}
        self.inserts: list[tuple[str, int]] = []
        self.created: list[str] = []
        self.reachable = True

    def ping(self) -> None:
        if not self.reachable:
            raise ConnectionError("access denied")

    def recreate_table(self, schema: TableSchema) -> None:
        self.created.append(schema.name)
        self.tables[schema.name] = []
        self.auto_increment.pop(schema.name, None)

    def insert_batch(self, name: str, columns: list[str], rows: list[dict[str, Any]]) -> None:
        self.inserts.append((name, len(rows)))
        self.tables[name].extend({c: to_target_value(row.get(c)) for c in columns} for row in rows)

    def max_value(self, name: str, column_name: str) -> Any:
        values = [row[column_name] for row in self.tables[name]]
        return max(values) if values else None

    def set_auto_increment(self, name: str, value: int) -> None:
        self.auto_increment[name] = value


def users_rows(count: int) -> list[dict[str, Any]]:
    return [{"id": i, "username": f"user{i}"} for i in range(1, count + 1)]


@pytest.fixture
def source():
    return FakeSource(
        {
            "users": (id_table("users", ColumnInfo("username", "text", False)), users_rows(250)),
            "courses": (id_table("courses", ColumnInfo("name", "text", False)), []),
            "leads": (
                id_table("leads", ColumnInfo("consultant_id", "integer")),
                [{"id": 7, "consultant_id": 1}, {"id": 3, "consultant_id": None}],
            ),
        }
    )


@pytest.fixture
def target():
    return FakeTarget()


class TestBatching:
    def test_batched_sizes(self):
        assert [len(b) for b in batched(users_rows(250), 100)] == [100, 100, 50]

    def test_batched_empty(self):
        assert list(batched([], 100)) == []

    def test_invalid_batch_size(self, source, target):
        with pytest.raises(ValueError):
            Migrator(source, target, batch_size=0)


class TestMigrator:
    def test_insert_count_is_ceil_rows_over_batch(self, source, target):
        report = Migrator(source, target).run(["users"])
        assert [n for name, n in target.inserts if name == "users"] == [100, 100, 50]
        assert report.tables[0].batches == 3
        assert report.tables[0].rows == 250

    def test_rows_copied_once(self, source, target):
        Migrator(source, target).run(["users"])
        ids = [row["id"] for row in target.tables["users"]]
        assert sorted(ids) == list(range(1, 251))
        assert len(set(ids)) == len(ids)

    def test_rerun_is_idempotent(self, source, target):
        Migrator(source, target).run(["users"])
        first = list(target.tables["users"])
        Migrator(source, target).run(["users"])
        assert target.tables["users"] == first

    def test_empty_table_created_without_inserts(self, source, target):
        report = Migrator(source, target).run(["courses"])
        assert target.created == ["courses"]
        assert target.inserts == []
        assert report.tables[0].ok
        assert report.tables[0].auto_increment is None

    def test_auto_increment_past_max_key(self, source, target):
        Migrator(source, target).run(["users", "leads"])
        assert target.auto_increment == {"users": 251, "leads": 8}

    def test_tables_follow_dependency_order(self, source, target):
        Migrator(source, target).run(["leads", "courses", "users"])
        assert target.created == ["users", "courses", "leads"]

    def test_failure_in_one_table_does_not_stop_the_run(self, source, target):
        source.fail_on = {"users"}
        report = Migrator(source, target).run(["users", "courses", "leads"])
        assert [t.table for t in report.failed] == ["users"]
        assert "read failed" in report.failed[0].error
        assert len(target.tables["leads"]) == 2
        assert report.total_rows == 2
        assert not report.ok

    def test_missing_source_table_is_a_table_error(self, source, target):
        report = Migrator(source, target).run(["users", "campaigns"])
        assert report.tables[0].ok
        assert not report.tables[1].ok
        assert "campaigns" not in target.created

    def test_unreachable_source_aborts(self, source, target):
        source.reachable = False
        with pytest.raises(MigrationAbortedError):
            Migrator(source, target).run()
        assert target.created == []

    def test_unreachable_target_aborts(self, source, target):
        target.reachable = False
        with pytest.raises(MigrationAbortedError):
            Migrator(source, target).run()

    def test_unknown_table_rejected(self, source, target):
        with pytest.raises(DependencyGraphError):
            Migrator(source, target).run(["not_a_table"])

    def test_dry_run_touches_nothing(self, source, caplog):
        caplog.set_level("INFO")
        report = Migrator(source, None, dry_run=True).run(["users"])
        assert report.dry_run
        assert report.total_rows == 0
        assert "CREATE TABLE `users`" in caplog.text

    def test_target_required_without_dry_run(self, source):
        with pytest.raises(ValueError):
            Migrator(source, None)


class TestTargetValues:
    def test_structured_values_serialized_as_json(self):
        assert json.loads(to_target_value({"a": [1, 2]})) == {"a": [1, 2]}
        assert to_target_value(["x", "y"]) == '["x", "y"]'

    def test_primitives_pass_through(self):
        assert to_target_value(5) == 5
        assert to_target_value(None) is None
        assert to_target_value(Decimal("1.50")) == Decimal("1.50")

    def test_bytes_from_memoryview(self):
        assert to_target_value(memoryview(b"abc")) == b"abc"
