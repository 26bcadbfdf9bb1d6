"""Probe context management for the CLI."""

from dataclasses import dataclass

from hbasecheck.core.adapters.hbasethrift import HBaseThriftAdapter


@dataclass
class ProbeContext:
    """Validated settings for one probe run plus the Thrift adapter."""

    host: str
    port: int
    tables: list[str]
    timeout: int
    adapter: HBaseThriftAdapter


def build_probe_context(
    host: str, port: int, tables: list[str], timeout: int
) -> ProbeContext:
    """Build the probe context; the adapter is created but not yet connected.

    Args:
        host: Validated Thrift server host.
        port: Validated Thrift server port.
        tables: Validated, de-duplicated user tables.
        timeout: Deadline in seconds, also used as the socket timeout.

    Returns:
        ProbeContext: Settings and an unopened adapter.
    """
    adapter = HBaseThriftAdapter(host, port, timeout_seconds=timeout)
    return ProbeContext(
        host=host, port=port, tables=tables, timeout=timeout, adapter=adapter
    )
