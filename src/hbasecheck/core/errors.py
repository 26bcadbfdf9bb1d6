"""Fatal probe errors.

Every error here aborts the whole run. Each one carries the status the probe
must exit with, so the CLI can render it without inspecting message text.
"""

from __future__ import annotations

from enum import Enum

from hbasecheck.core.status import Status


class ProbeError(RuntimeError):
    """Base class for errors that end a probe run immediately."""

    status: Status = Status.CRITICAL

    def __init__(self, message: str, *, status: Status | None = None) -> None:
        super().__init__(message)
        if status is not None:
            self.status = status

    @property
    def message(self) -> str:
        return str(self)


class Operation(str, Enum):
    """HBase Thrift operations the probe performs, with their failure prefix."""

    CONNECT = "failed to open Thrift transport"
    LIST_TABLES = "failed to get tables from HBase"
    IS_ENABLED = "failed to get table state (enabled/disabled)"
    COLUMNS = "failed to get Column descriptors"
    REGIONS = "failed to get regions"


class HBaseCallError(ProbeError):
    """
    An HBase Thrift call failed (as opposed to returning an empty result).

    Attributes:
        operation: Which call failed.
        table: Table the call was made for, if any.
        endpoint: `host:port` of the Thrift server.
        cause: The underlying transport or server exception.
    """

    def __init__(
        self,
        operation: Operation,
        *,
        endpoint: str,
        cause: BaseException,
        table: str | None = None,
    ) -> None:
        self.operation = operation
        self.table = table
        self.endpoint = endpoint
        self.cause = cause
        super().__init__(f"{self._prefix()}: {type(cause).__name__}: {cause}")

    def _prefix(self) -> str:
        if self.table is not None:
            return f"{self.operation.value} for table '{self.table}'"
        if self.operation is Operation.CONNECT:
            return f"{self.operation.value} to {self.endpoint}"
        return self.operation.value


class NoTablesError(ProbeError):
    """The cluster reported no tables at all."""

    def __init__(self) -> None:
        super().__init__("no tables found in HBase")


class RegionsUnavailableError(ProbeError):
    """The regions call returned without a usable result."""

    status = Status.UNKNOWN

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"failed to get regions for table '{table}'")


class ProbeTimeout(ProbeError):
    """The global deadline expired before the run finished."""

    status = Status.UNKNOWN

    def __init__(self, seconds: int) -> None:
        self.seconds = seconds
        super().__init__(f"self timed out after {seconds} seconds")
