from __future__ import annotations

import happybase
from thriftpy2.thrift import TException

from hbasecheck.core.endpoint import DEFAULT_PORT, format_endpoint
from hbasecheck.core.errors import HBaseCallError, Operation
from hbasecheck.core.tables import Region

# Raised by the Thrift transport/protocol layers or as server-side exceptions.
_THRIFT_ERRORS = (TException, OSError)


def _text(value: bytes | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class HBaseThriftAdapter:
    """Adapter around the HBase Thrift gateway (via happybase)."""

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        timeout_seconds: int | None = None,
        connection: happybase.Connection | None = None,
    ) -> None:
        """
        Create an adapter for the Thrift server at host:port.

        No connection is made until `open()` is called. The socket timeout is
        given to happybase in milliseconds.
        """
        self.host = host
        self.port = port
        self.endpoint = format_endpoint(host, port)
        timeout_ms = timeout_seconds * 1000 if timeout_seconds else None
        self.connection = connection or happybase.Connection(
            host=host,
            port=port,
            timeout=timeout_ms,
            autoconnect=False,
            transport="buffered",
            protocol="binary",
        )

    def _call_error(
        self, operation: Operation, exc: BaseException, table: str | None = None
    ) -> HBaseCallError:
        return HBaseCallError(operation, endpoint=self.endpoint, cause=exc, table=table)

    def open(self) -> None:
        """Open the Thrift transport."""
        try:
            self.connection.open()
        except _THRIFT_ERRORS as exc:
            raise self._call_error(Operation.CONNECT, exc) from exc

    def close(self) -> None:
        """Close the Thrift transport."""
        self.connection.close()

    def list_table_names(self) -> list[str]:
        """Return the names of all tables known to the cluster."""
        try:
            names = self.connection.tables()
        except _THRIFT_ERRORS as exc:
            raise self._call_error(Operation.LIST_TABLES, exc) from exc
        return [_text(n) or "" for n in names]

    def is_table_enabled(self, table: str) -> bool:
        """Return True if the table is enabled."""
        try:
            return bool(self.connection.is_table_enabled(table))
        except _THRIFT_ERRORS as exc:
            raise self._call_error(Operation.IS_ENABLED, exc, table) from exc

    def column_descriptors(self, table: str) -> dict[str, dict]:
        """Return column family name -> descriptor for the table."""
        try:
            families = self.connection.table(table).families()
        except _THRIFT_ERRORS as exc:
            raise self._call_error(Operation.COLUMNS, exc, table) from exc
        return {_text(name) or "": dict(desc) for name, desc in (families or {}).items()}

    def table_regions(self, table: str) -> list[Region] | None:
        """
        Return the regions of a table.

        Returns None when the server answered without a region list, which is
        distinct from a table that has no regions (an empty list).
        """
        # happybase's Table.regions() folds None into [], so go to the client.
        try:
            raw = self.connection.client.getTableRegions(
                self.connection.table(table).name
            )
        except _THRIFT_ERRORS as exc:
            raise self._call_error(Operation.REGIONS, exc, table) from exc
        if raw is None:
            return None
        return [
            Region(
                name=_text(getattr(r, "name", None)) or "",
                server_name=_text(getattr(r, "serverName", None)),
            )
            for r in raw
        ]
