from __future__ import annotations

import pytest

from hbasecheck.core.checks import (
    CATALOG_TABLE_STEPS,
    USER_TABLE_STEPS,
    check_regions,
    check_tables,
    run_steps,
)
from hbasecheck.core.errors import (
    HBaseCallError,
    NoTablesError,
    Operation,
    RegionsUnavailableError,
)
from hbasecheck.core.report import render_message
from hbasecheck.core.results import Bucket, CheckResults
from hbasecheck.core.status import Status
from hbasecheck.core.tables import Region


def _regions(*servers: str | None) -> list[Region]:
    return [Region(name=f"r{i}", server_name=s) for i, s in enumerate(servers)]


class _Cluster:
    """In-memory stand-in for the HBase Thrift adapter."""

    def __init__(
        self,
        tables: dict[str, dict],
        *,
        listing: list[str] | None = None,
        fail: dict[str, Operation] | None = None,
    ):
        self.tables = tables
        self.listing = (
            listing
            if listing is not None
            else ["-ROOT-", ".META.", *[t for t in tables if not t.startswith(("-", "."))]]
        )
        self.fail = fail or {}
        self.calls: list[str] = []

    def _state(self, table: str) -> dict:
        return self.tables.get(table, {})

    def _maybe_fail(self, table: str, operation: Operation) -> None:
        if self.fail.get(table) is operation:
            raise HBaseCallError(
                operation,
                endpoint="hbase:9090",
                cause=OSError("timed out"),
                table=table,
            )

    def list_table_names(self) -> list[str]:
        self.calls.append("list")
        return list(self.listing)

    def is_table_enabled(self, table: str) -> bool:
        self.calls.append(f"enabled:{table}")
        self._maybe_fail(table, Operation.IS_ENABLED)
        return self._state(table).get("enabled", True)

    def column_descriptors(self, table: str) -> dict:
        self.calls.append(f"columns:{table}")
        self._maybe_fail(table, Operation.COLUMNS)
        return self._state(table).get("columns", {"cf": {}})

    def table_regions(self, table: str):
        self.calls.append(f"regions:{table}")
        self._maybe_fail(table, Operation.REGIONS)
        return self._state(table).get("regions", _regions("rs1"))


def test_all_healthy_tables_are_ok():
    cluster = _Cluster(
        {
            "orders": {"regions": _regions("rs1", "rs2", "rs1")},
            "users": {"regions": _regions("rs2")},
        }
    )

    results = check_tables(cluster, ["orders", "users"])

    assert results.status is Status.OK
    assert results.tables_in(Bucket.OK) == ["-ROOT-", ".META.", "orders", "users"]
    assert results.region_counts == {"orders": 3, "users": 1}
    assert results.details["orders"].regionservers == ["rs1", "rs2"]


def test_catalog_tables_are_checked_first_without_regions():
    cluster = _Cluster({"orders": {}})

    check_tables(cluster, ["orders"])

    assert cluster.calls == [
        "list",
        "enabled:-ROOT-",
        "columns:-ROOT-",
        "enabled:.META.",
        "columns:.META.",
        "enabled:orders",
        "columns:orders",
        "regions:orders",
    ]


def test_missing_table_is_not_found_and_not_queried():
    cluster = _Cluster({"orders": {}})

    results = check_tables(cluster, ["audit", "orders"])

    assert results.status is Status.CRITICAL
    assert results.tables_in(Bucket.NOT_FOUND) == ["audit"]
    assert not any(call.endswith(":audit") for call in cluster.calls)
    for bucket in Bucket:
        if bucket is not Bucket.NOT_FOUND:
            assert "audit" not in results.tables_in(bucket)
    assert "audit" not in results.region_counts
    assert "table not found: 'audit'" in render_message(results)


def test_disabled_table_raises_critical_and_stops():
    cluster = _Cluster({"users": {"enabled": False}})

    results = check_tables(cluster, ["users"])

    assert results.status is Status.CRITICAL
    assert results.tables_in(Bucket.DISABLED) == ["users"]
    assert "users" not in results.tables_in(Bucket.OK)
    assert "users" not in results.region_counts
    assert "columns:users" not in cluster.calls
    assert "table disabled: 'users'" in render_message(results)


def test_unassigned_regions_do_not_raise_status():
    cluster = _Cluster(
        {
            "orders": {"regions": _regions("rs1", "rs2", "rs3")},
            "shipments": {"regions": _regions("rs1", None)},
        }
    )

    results = check_tables(cluster, ["orders", "shipments"])
    message = render_message(results)

    assert results.status is Status.OK
    assert "table with unassigned regions: 'shipments'" in message
    assert message.endswith("| 'orders regions'=3 'shipments regions'=2")
    assert results.details["shipments"].unassigned_regions == ["r1"]


@pytest.mark.parametrize(
    ("state", "bucket"),
    [
        ({"columns": {}}, Bucket.NO_COLUMNS),
        ({"regions": []}, Bucket.NO_REGIONS),
        ({"regions": _regions(None, "")}, Bucket.NO_REGIONSERVERS),
    ],
)
def test_bucketed_failures_do_not_raise_status(state: dict, bucket: Bucket):
    cluster = _Cluster({"t1": state})

    results = check_tables(cluster, ["t1"])

    assert results.status is Status.OK
    assert results.tables_in(bucket) == ["t1"]
    assert "t1" not in results.tables_in(Bucket.OK)
    assert results.details["t1"].outcome is bucket


def test_no_regions_table_has_no_region_metric():
    cluster = _Cluster({"t1": {"regions": []}})

    results = check_tables(cluster, ["t1"])

    assert results.region_counts == {}


def test_no_regionservers_is_not_also_reported_as_unassigned():
    cluster = _Cluster(
        {
            "dead": {"regions": _regions(None, None)},
            "partial": {"regions": _regions("rs1", None)},
        }
    )

    results = check_tables(cluster, ["dead", "partial"])
    aggregated = results.aggregated()

    assert aggregated[Bucket.NO_REGIONSERVERS] == ["dead"]
    assert aggregated[Bucket.UNASSIGNED_REGIONS] == ["partial"]
    assert "table with unassigned regions: 'partial'" in render_message(results)


def test_duplicate_tables_are_checked_once():
    cluster = _Cluster({"a": {}, "b": {}})

    results = check_tables(cluster, ["a", "a", "b"])

    assert cluster.calls.count("enabled:a") == 1
    assert results.tables_in(Bucket.OK).count("a") == 1


def test_catalog_tables_in_input_are_not_checked_twice():
    cluster = _Cluster({"a": {}})

    results = check_tables(cluster, ["-ROOT-", "a"])

    assert cluster.calls.count("enabled:-ROOT-") == 1
    assert results.tables_in(Bucket.OK) == ["-ROOT-", ".META.", "a"]


def test_disabled_catalog_table_is_critical():
    cluster = _Cluster({".META.": {"enabled": False}, "a": {}})

    results = check_tables(cluster, ["a"])

    assert results.status is Status.CRITICAL
    assert results.tables_in(Bucket.DISABLED) == [".META."]


def test_repeated_runs_are_identical():
    cluster = _Cluster(
        {"a": {"regions": _regions("rs1", None)}, "b": {"enabled": False}}
    )

    first = check_tables(cluster, ["a", "b", "c"])
    second = check_tables(cluster, ["a", "b", "c"])

    assert first.status is second.status
    assert render_message(first) == render_message(second)


def test_empty_cluster_listing_is_fatal():
    cluster = _Cluster({}, listing=[])

    with pytest.raises(NoTablesError, match="no tables found in HBase"):
        check_tables(cluster, ["a"])


@pytest.mark.parametrize(
    "operation", [Operation.IS_ENABLED, Operation.COLUMNS, Operation.REGIONS]
)
def test_rpc_failures_abort_the_run(operation: Operation):
    cluster = _Cluster({"a": {}, "b": {}}, fail={"a": operation})

    with pytest.raises(HBaseCallError) as excinfo:
        check_tables(cluster, ["a", "b"])

    assert excinfo.value.operation is operation
    assert excinfo.value.table == "a"
    assert excinfo.value.status is Status.CRITICAL
    assert not any(call.endswith(":b") for call in cluster.calls)


def test_missing_region_list_is_unknown():
    cluster = _Cluster({"a": {"regions": None}})

    with pytest.raises(RegionsUnavailableError) as excinfo:
        check_tables(cluster, ["a"])

    assert excinfo.value.status is Status.UNKNOWN
    assert str(excinfo.value) == "failed to get regions for table 'a'"


def test_run_steps_stops_at_first_failure():
    cluster = _Cluster({"a": {"columns": {}}})
    results = CheckResults()

    outcome = run_steps(cluster, "a", USER_TABLE_STEPS, results)

    assert outcome is Bucket.NO_COLUMNS
    assert cluster.calls == ["enabled:a", "columns:a"]


def test_catalog_steps_skip_regions():
    assert [s.name for s in CATALOG_TABLE_STEPS] == ["enabled", "columns"]
    assert [s.name for s in USER_TABLE_STEPS] == ["enabled", "columns", "regions"]


def test_check_regions_records_count_before_regionserver_check():
    cluster = _Cluster({"a": {"regions": _regions(None, None, None)}})
    results = CheckResults()

    assert check_regions(cluster, "a", results) is Bucket.NO_REGIONSERVERS
    assert results.region_counts == {"a": 3}
