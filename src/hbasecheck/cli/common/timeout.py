"""Global deadline for a probe run."""

from __future__ import annotations

import signal
from contextlib import contextmanager
from typing import Iterator

from hbasecheck.core.errors import ProbeTimeout

MAX_TIMEOUT = 3600


def validate_timeout(value: int | str | None) -> int:
    """Validate the timeout option (1..MAX_TIMEOUT seconds)."""
    try:
        seconds = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid timeout '{value}' given") from exc
    if not 1 <= seconds <= MAX_TIMEOUT:
        raise ValueError(
            f"invalid timeout '{value}' given, must be between 1 and {MAX_TIMEOUT}"
        )
    return seconds


@contextmanager
def deadline(seconds: int) -> Iterator[None]:
    """
    Raise ProbeTimeout in the main thread if the block runs past `seconds`.

    Uses SIGALRM, so only one deadline can be active at a time.
    """

    def _expired(signum, frame):
        raise ProbeTimeout(seconds)

    previous = signal.signal(signal.SIGALRM, _expired)
    signal.alarm(seconds)
    try:
        yield
    finally:
        signal.alarm(0)
        signal.signal(signal.SIGALRM, previous)
