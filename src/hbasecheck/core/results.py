"""Accumulated outcome of a probe run.

A single `CheckResults` value is created per run and passed explicitly
through every check. It holds the classification buckets, the region counts
used for metrics, the overall status and per-table detail for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hbasecheck.core.status import Status, worst


class Bucket(str, Enum):
    """
    Classification of a checked table.

    The value is the condition text used in the summary line, and the
    declaration order is the order clauses are rendered in.
    """

    NOT_FOUND = "not found"
    DISABLED = "disabled"
    NO_COLUMNS = "with no columns"
    NO_REGIONS = "with no regions"
    NO_REGIONSERVERS = "with no regionservers"
    UNASSIGNED_REGIONS = "with unassigned regions"
    OK = "ok"


# Buckets that raise the overall status as soon as a table lands in them.
_RAISES = {
    Bucket.NOT_FOUND: Status.CRITICAL,
    Bucket.DISABLED: Status.CRITICAL,
}


@dataclass
class TableDetail:
    """What was learned about one table while checking it."""

    table: str
    enabled: bool | None = None
    column_families: list[str] = field(default_factory=list)
    region_count: int | None = None
    regionservers: list[str] = field(default_factory=list)
    unassigned_regions: list[str] = field(default_factory=list)
    outcome: Bucket | None = None


def _empty_buckets() -> dict[Bucket, list[str]]:
    return {bucket: [] for bucket in Bucket}


@dataclass
class CheckResults:
    """Buckets, region counts and overall status for one run."""

    status: Status = Status.OK
    buckets: dict[Bucket, list[str]] = field(default_factory=_empty_buckets)
    region_counts: dict[str, int] = field(default_factory=dict)
    details: dict[str, TableDetail] = field(default_factory=dict)
    cluster_tables: list[str] = field(default_factory=list)

    def raise_status(self, status: Status) -> None:
        """Raise the overall status; it never goes down."""
        self.status = worst(self.status, status)

    def classify(self, bucket: Bucket, table: str) -> None:
        """Add a table to a bucket once, raising the status where required."""
        members = self.buckets[bucket]
        if table not in members:
            members.append(table)
        if bucket in _RAISES:
            self.raise_status(_RAISES[bucket])

    def detail(self, table: str) -> TableDetail:
        """Return the detail record for a table, creating it on first use."""
        if table not in self.details:
            self.details[table] = TableDetail(table=table)
        return self.details[table]

    def tables_in(self, bucket: Bucket) -> list[str]:
        """Members of a bucket in the order they were added."""
        return list(self.buckets[bucket])

    def aggregated(self) -> dict[Bucket, list[str]]:
        """
        Return the buckets as reported.

        A table with no regionservers at all is reported only there, never
        also as merely having some unassigned regions.
        """
        out = {bucket: list(members) for bucket, members in self.buckets.items()}
        without_servers = set(out[Bucket.NO_REGIONSERVERS])
        out[Bucket.UNASSIGNED_REGIONS] = [
            t for t in out[Bucket.UNASSIGNED_REGIONS] if t not in without_servers
        ]
        return out
