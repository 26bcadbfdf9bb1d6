"""Monitoring status levels and the monotonic severity reducer.

The four levels follow the usual monitoring plugin convention, where the exit
code of the process encodes the severity of the check result.
"""

from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    """
    Result level of a check run.

    Values:
        OK: Everything checked is healthy.
        WARNING: Degraded, but not failing.
        CRITICAL: At least one check failed.
        UNKNOWN: The state could not be determined.
    """

    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def exit_code(self) -> int:
        """Process exit code for this status."""
        return _EXIT_CODES[self]


_EXIT_CODES = {
    Status.OK: 0,
    Status.WARNING: 1,
    Status.CRITICAL: 2,
    Status.UNKNOWN: 3,
}

# UNKNOWN sits outside the OK < WARNING < CRITICAL order and is never
# produced by the reducer.
_SEVERITY_ORDER = {
    Status.OK: 0,
    Status.WARNING: 1,
    Status.CRITICAL: 2,
}


def worst(current: Status, candidate: Status) -> Status:
    """
    Return the more severe of two statuses.

    Only OK, WARNING and CRITICAL are ordered. UNKNOWN is reserved for fatal
    exits and is rejected here.
    """
    if current not in _SEVERITY_ORDER or candidate not in _SEVERITY_ORDER:
        raise ValueError("UNKNOWN cannot be combined with other statuses")
    if _SEVERITY_ORDER[candidate] > _SEVERITY_ORDER[current]:
        return candidate
    return current
