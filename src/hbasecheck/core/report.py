"""Rendering of the one-line probe summary.

The line has the shape::

    CRITICAL: table not found: 'audit', tables ok: '-ROOT-,.META.,orders' | 'orders regions'=3

Problem clauses come first in fixed bucket order, followed by the ok clause
and the region count metrics.
"""

from __future__ import annotations

from hbasecheck.core.results import Bucket, CheckResults
from hbasecheck.core.status import Status


def _clause(bucket: Bucket, tables: list[str]) -> str:
    plural = "s" if len(tables) > 1 else ""
    return f"table{plural} {bucket.value}: '{','.join(tables)}'"


def render_metrics(results: CheckResults) -> str:
    """Render `'<table> regions'=<count>` pairs sorted by table name."""
    return " ".join(
        f"'{table} regions'={count}"
        for table, count in sorted(results.region_counts.items())
    )


def render_message(results: CheckResults) -> str:
    """
    Render the summary message including the metrics suffix.

    Empty problem buckets are left out. The ok clause is always present,
    even when no table is ok.
    """
    buckets = results.aggregated()
    clauses = [
        _clause(bucket, buckets[bucket])
        for bucket in Bucket
        if bucket is not Bucket.OK and buckets[bucket]
    ]
    clauses.append(_clause(Bucket.OK, buckets[Bucket.OK]))

    message = ", ".join(clauses) + " |"
    metrics = render_metrics(results)
    if metrics:
        message += f" {metrics}"
    return message


def status_line(status: Status, message: str) -> str:
    """Return the final `<STATUS>: <message>` line."""
    return f"{status.value}: {message}"
