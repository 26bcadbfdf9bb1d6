import pytest

from hbasecheck.core.status import Status, worst


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (Status.OK, 0),
        (Status.WARNING, 1),
        (Status.CRITICAL, 2),
        (Status.UNKNOWN, 3),
    ],
)
def test_exit_codes(status: Status, code: int):
    assert status.exit_code == code


def test_worst_only_goes_up():
    assert worst(Status.OK, Status.CRITICAL) is Status.CRITICAL
    assert worst(Status.CRITICAL, Status.OK) is Status.CRITICAL
    assert worst(Status.WARNING, Status.OK) is Status.WARNING
    assert worst(Status.OK, Status.OK) is Status.OK


def test_worst_rejects_unknown():
    with pytest.raises(ValueError, match="UNKNOWN"):
        worst(Status.OK, Status.UNKNOWN)
