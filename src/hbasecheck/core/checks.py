"""Per-table health checks.

Each table goes through an ordered sequence of named check steps. A step
returns the bucket the table failed into, or None when it passed; the runner
stops at the first failing step. Tables that pass every step are ok.

Catalog tables skip the regions step, because the Thrift API does not report
region placement for them.

RPC failures are not handled here: the adapter raises `HBaseCallError`,
which ends the whole run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Collection, Iterable, Mapping, Optional, Protocol

from hbasecheck.core.errors import NoTablesError, RegionsUnavailableError
from hbasecheck.core.results import Bucket, CheckResults
from hbasecheck.core.tables import CATALOG_TABLES, Region, is_catalog_table


class HBaseTablesAdapter(Protocol):
    """Interface for querying table state from an HBase cluster."""

    def list_table_names(self) -> list[str]:
        """Return the names of all tables in the cluster."""
        ...

    def is_table_enabled(self, table: str) -> bool:
        """Return True if the table is enabled."""
        ...

    def column_descriptors(self, table: str) -> Mapping[str, Any]:
        """Return column family name -> descriptor."""
        ...

    def table_regions(self, table: str) -> list[Region] | None:
        """Return the table's regions, or None if the server gave no answer."""
        ...


StepFn = Callable[[HBaseTablesAdapter, str, CheckResults], Optional[Bucket]]


@dataclass(frozen=True)
class CheckStep:
    """A named step in a table's check sequence."""

    name: str
    run: StepFn


def check_enabled(
    adapter: HBaseTablesAdapter, table: str, results: CheckResults
) -> Bucket | None:
    """Fail into DISABLED if the table is not enabled."""
    enabled = adapter.is_table_enabled(table)
    results.detail(table).enabled = enabled
    return None if enabled else Bucket.DISABLED


def check_columns(
    adapter: HBaseTablesAdapter, table: str, results: CheckResults
) -> Bucket | None:
    """Fail into NO_COLUMNS if the table has no column families."""
    columns = adapter.column_descriptors(table)
    results.detail(table).column_families = sorted(columns or {})
    return None if columns else Bucket.NO_COLUMNS


def check_regions(
    adapter: HBaseTablesAdapter, table: str, results: CheckResults
) -> Bucket | None:
    """
    Check that the table has regions and that they are served.

    - No regions: fails into NO_REGIONS.
    - No region assigned to a regionserver: fails into NO_REGIONSERVERS.
    - Some regions unassigned: noted under UNASSIGNED_REGIONS, still passes.

    The region count is recorded for metrics as soon as regions exist.

    Raises:
        RegionsUnavailableError: If the server returned no region list.
    """
    regions = adapter.table_regions(table)
    if regions is None:
        raise RegionsUnavailableError(table)
    if not regions:
        return Bucket.NO_REGIONS

    detail = results.detail(table)
    results.region_counts[table] = len(regions)
    detail.region_count = len(regions)

    assigned = [r for r in regions if r.assigned]
    detail.regionservers = list(dict.fromkeys(r.server_name for r in assigned))
    detail.unassigned_regions = [r.name for r in regions if not r.assigned]

    if detail.unassigned_regions:
        results.classify(Bucket.UNASSIGNED_REGIONS, table)
    if not assigned:
        return Bucket.NO_REGIONSERVERS
    return None


USER_TABLE_STEPS: tuple[CheckStep, ...] = (
    CheckStep("enabled", check_enabled),
    CheckStep("columns", check_columns),
    CheckStep("regions", check_regions),
)

CATALOG_TABLE_STEPS: tuple[CheckStep, ...] = USER_TABLE_STEPS[:2]


def run_steps(
    adapter: HBaseTablesAdapter,
    table: str,
    steps: Iterable[CheckStep],
    results: CheckResults,
) -> Bucket:
    """Run steps in order, stopping at the first failure, and classify the table."""
    for step in steps:
        failed = step.run(adapter, table, results)
        if failed is not None:
            results.classify(failed, table)
            results.detail(table).outcome = failed
            return failed

    results.classify(Bucket.OK, table)
    results.detail(table).outcome = Bucket.OK
    return Bucket.OK


def check_table(
    adapter: HBaseTablesAdapter,
    table: str,
    existing: Collection[str],
    results: CheckResults,
) -> Bucket:
    """
    Check a single table against a snapshot of the cluster's table names.

    Missing tables are classified NOT_FOUND without any further RPC.
    """
    if is_catalog_table(table):
        return run_steps(adapter, table, CATALOG_TABLE_STEPS, results)

    if table not in existing:
        results.classify(Bucket.NOT_FOUND, table)
        results.detail(table).outcome = Bucket.NOT_FOUND
        return Bucket.NOT_FOUND

    return run_steps(adapter, table, USER_TABLE_STEPS, results)


def check_tables(adapter: HBaseTablesAdapter, tables: Iterable[str]) -> CheckResults:
    """
    Check the catalog tables and then each user table, in order.

    Duplicate and catalog entries in `tables` are skipped.

    Returns:
        The accumulated results for the whole run.

    Raises:
        NoTablesError: If the cluster reports no tables.
        HBaseCallError: If any Thrift call fails.
        RegionsUnavailableError: If a table's regions cannot be read.
    """
    results = CheckResults()

    existing = adapter.list_table_names()
    if not existing:
        raise NoTablesError()
    results.cluster_tables = list(existing)
    snapshot = set(existing)

    for table in CATALOG_TABLES:
        check_table(adapter, table, snapshot, results)

    for table in dict.fromkeys(tables):
        if is_catalog_table(table):
            continue
        check_table(adapter, table, snapshot, results)

    return results
